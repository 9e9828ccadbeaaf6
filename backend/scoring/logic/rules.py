"""Rule tables and the per-room rule configuration.

The lookup tables are built once at import time and exposed read-only.
A RuleConfig is resolved from rule identifiers when a room is loaded and is
never mutated afterwards.
"""

from __future__ import annotations

from fractions import Fraction
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, model_validator

from scoring.logic.enums import OkaRule, TiePolicy, UmaRule
from scoring.logic.exceptions import InvalidRuleConfigError
from scoring.logic.types import NUM_SLOTS

if TYPE_CHECKING:
    from collections.abc import Mapping

# Placement bonus per final position, 1st to 4th.
UMA_TABLES: Mapping[UmaRule, tuple[int, ...]] = MappingProxyType(
    {
        UmaRule.GOTTO: (10, 5, -5, -10),
        UmaRule.WANTSU: (20, 10, -10, -20),
        UmaRule.WANSURI: (30, 10, -10, -30),
    },
)


class OkaTable(BaseModel):
    """Returning score subtracted before conversion, and the top-place bonus it funds."""

    model_config = ConfigDict(frozen=True)

    base: int
    oka: int


OKA_TABLES: Mapping[OkaRule, OkaTable] = MappingProxyType(
    {
        OkaRule.OKA_20: OkaTable(base=30000, oka=20),
        OkaRule.OKA_0: OkaTable(base=25000, oka=0),
    },
)

# Fraction of the table fee carried by each final position, 1st to 4th.
FEE_SHARES_BY_POSITION: tuple[Fraction, ...] = (
    Fraction(0),
    Fraction(2, 6),
    Fraction(1, 6),
    Fraction(3, 6),
)

POINTS_DIVISOR = 1000  # raw score units per ranking point


class RuleConfig(BaseModel):
    """
    Scoring rules for one room.

    uma_bonuses are indexed by final position (1st to 4th). oka goes to the
    1st position only. base is subtracted from each raw score before it is
    divided into points.
    """

    model_config = ConfigDict(frozen=True)

    uma_bonuses: tuple[int, ...]
    oka: int
    base: int
    tie_policy: TiePolicy = TiePolicy.SPLIT

    @model_validator(mode="after")
    def _check_tables(self) -> RuleConfig:
        validate_rule_config(self)
        return self

    @classmethod
    def from_rules(cls, uma: UmaRule, oka: OkaRule, tie: TiePolicy) -> RuleConfig:
        """Build a configuration from the rule identifiers stored on a room."""
        oka_table = OKA_TABLES[oka]
        return cls(uma_bonuses=UMA_TABLES[uma], oka=oka_table.oka, base=oka_table.base, tie_policy=tie)

    def position_bonuses(self) -> tuple[int, ...]:
        """Uma plus oka for each final position, before any tie averaging."""
        return tuple(bonus + (self.oka if position == 0 else 0) for position, bonus in enumerate(self.uma_bonuses))


def validate_rule_config(config: RuleConfig) -> None:
    """Validate that a rule configuration is well formed.

    Raises InvalidRuleConfigError listing every problem found.
    """
    errors: list[str] = []

    if len(config.uma_bonuses) != NUM_SLOTS:
        errors.append(f"uma must have {NUM_SLOTS} entries (got {len(config.uma_bonuses)})")
    elif sum(config.uma_bonuses) != 0:
        errors.append(f"uma values must sum to zero (got {sum(config.uma_bonuses)})")

    if config.oka < 0:
        errors.append(f"oka must not be negative (got {config.oka})")

    if errors:
        raise InvalidRuleConfigError("; ".join(errors))
