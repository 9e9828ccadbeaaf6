"""
String enum definitions for scoring rule identifiers.

Values are persisted with each room, so they must stay stable.
"""

from enum import StrEnum


class UmaRule(StrEnum):
    """Placement bonus table, named by the 3rd/4th and 1st/2nd spreads."""

    GOTTO = "5-10"
    WANTSU = "10-20"
    WANSURI = "10-30"


class OkaRule(StrEnum):
    """Starting/returning score pair and the resulting top bonus."""

    OKA_20 = "oka20"  # 25000 start, 30000 return
    OKA_0 = "oka0"  # 25000 start, 25000 return


class TiePolicy(StrEnum):
    """How equal scores are resolved when ranking."""

    SPLIT = "split"  # tied players share the averaged position value
    SEAT = "seat"  # earlier seat wins the tie
