"""Scorekeeper configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from scoring.logic.enums import OkaRule, TiePolicy, UmaRule
from shared.dal.models import SEATS_PER_TABLE
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource

DEFAULT_POOL_TOTAL = 100000  # 4 players x 25000 starting points


class ScorekeeperSettings(BaseSettings):
    model_config = {"env_prefix": "SCORE_"}

    database_path: str = Field(default="backend/storage.db", min_length=1)
    log_dir: str = "backend/logs/scorekeeper"  # empty string disables file logging
    pool_total: int = Field(default=DEFAULT_POOL_TOTAL, ge=1)
    default_players: list[str] = ["A", "B", "C", "D"]
    default_uma: UmaRule = UmaRule.WANTSU
    default_oka: OkaRule = OkaRule.OKA_20
    default_tie: TiePolicy = TiePolicy.SPLIT

    @field_validator("default_players", mode="before")
    @classmethod
    def validate_default_players(cls, v: str | list[str]) -> list[str]:
        players = parse_string_list(v)
        if len(players) != SEATS_PER_TABLE:
            raise ValueError(f"default_players must name exactly {SEATS_PER_TABLE} players (got {len(players)})")
        return players

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
