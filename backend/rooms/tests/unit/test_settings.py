"""Tests for ScorekeeperSettings environment handling."""

import pytest
from pydantic import ValidationError

from rooms.settings import DEFAULT_POOL_TOTAL, ScorekeeperSettings
from scoring.logic.enums import OkaRule, TiePolicy, UmaRule


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SCORE_DATABASE_PATH",
        "SCORE_LOG_DIR",
        "SCORE_POOL_TOTAL",
        "SCORE_DEFAULT_PLAYERS",
        "SCORE_DEFAULT_UMA",
        "SCORE_DEFAULT_OKA",
        "SCORE_DEFAULT_TIE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self):
        settings = ScorekeeperSettings()
        assert settings.database_path == "backend/storage.db"
        assert settings.pool_total == DEFAULT_POOL_TOTAL
        assert settings.default_players == ["A", "B", "C", "D"]
        assert settings.default_uma == UmaRule.WANTSU
        assert settings.default_oka == OkaRule.OKA_20
        assert settings.default_tie == TiePolicy.SPLIT


class TestEnvOverrides:
    def test_scalar_overrides(self, monkeypatch):
        monkeypatch.setenv("SCORE_DATABASE_PATH", "/tmp/scores.db")
        monkeypatch.setenv("SCORE_LOG_DIR", "")
        monkeypatch.setenv("SCORE_POOL_TOTAL", "120000")
        monkeypatch.setenv("SCORE_DEFAULT_UMA", "10-30")
        monkeypatch.setenv("SCORE_DEFAULT_OKA", "oka0")
        monkeypatch.setenv("SCORE_DEFAULT_TIE", "seat")

        settings = ScorekeeperSettings()
        assert settings.database_path == "/tmp/scores.db"
        assert settings.log_dir == ""
        assert settings.pool_total == 120000
        assert settings.default_uma == UmaRule.WANSURI
        assert settings.default_oka == OkaRule.OKA_0
        assert settings.default_tie == TiePolicy.SEAT

    def test_players_from_csv(self, monkeypatch):
        monkeypatch.setenv("SCORE_DEFAULT_PLAYERS", "Alice, Bob ,Carol,Dave")
        assert ScorekeeperSettings().default_players == ["Alice", "Bob", "Carol", "Dave"]

    def test_players_from_json(self, monkeypatch):
        monkeypatch.setenv("SCORE_DEFAULT_PLAYERS", '["Alice","Bob","Carol","Dave"]')
        assert ScorekeeperSettings().default_players == ["Alice", "Bob", "Carol", "Dave"]


class TestValidation:
    def test_rejects_three_players(self, monkeypatch):
        monkeypatch.setenv("SCORE_DEFAULT_PLAYERS", "Alice,Bob,Carol")
        with pytest.raises(ValidationError, match="exactly 4 players"):
            ScorekeeperSettings()

    def test_rejects_non_positive_pool(self, monkeypatch):
        monkeypatch.setenv("SCORE_POOL_TOTAL", "0")
        with pytest.raises(ValidationError, match="pool_total"):
            ScorekeeperSettings()

    def test_rejects_unknown_uma(self, monkeypatch):
        monkeypatch.setenv("SCORE_DEFAULT_UMA", "15-25")
        with pytest.raises(ValidationError, match="default_uma"):
            ScorekeeperSettings()

    def test_rejects_empty_database_path(self):
        with pytest.raises(ValidationError, match="database_path"):
            ScorekeeperSettings(database_path="")
