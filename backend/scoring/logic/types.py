"""
Slot-indexed value types shared by the scoring engine.

Every per-player quantity is a fixed 4-tuple indexed by seat (display order),
never by placement. Placement is derived on demand by the ranking primitive.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from scoring.logic.exceptions import InvalidSlotVectorError

NUM_SLOTS = 4

T = TypeVar("T")


class SlotIndex(IntEnum):
    """Seat index at the table, fixed for the whole session."""

    FIRST = 0
    SECOND = 1
    THIRD = 2
    FOURTH = 3


SLOTS: tuple[SlotIndex, ...] = tuple(SlotIndex)

Scores = tuple[int, int, int, int]
Points = tuple[float, float, float, float]
Ranks = tuple[int, int, int, int]


def ensure_slot_vector(values: Sequence[T], name: str) -> tuple[T, ...]:
    """Return values as a tuple, raising if it does not hold one entry per seat."""
    vector = tuple(values)
    if len(vector) != NUM_SLOTS:
        raise InvalidSlotVectorError(name=name, length=len(vector))
    return vector


@dataclass(frozen=True)
class Placement:
    """Where one seat landed in a ranking.

    position is the seat's index in the sorted order. positions lists every
    sorted index its tie group occupies (just (position,) when untied or
    when ties are broken by seat).
    """

    slot: SlotIndex
    rank: int
    position: int
    positions: tuple[int, ...]


class RoundPoints(BaseModel):
    """Converted points and ranks for one hand, indexed by seat."""

    model_config = ConfigDict(frozen=True)

    points: Points
    ranks: Ranks


class SessionSummary(BaseModel):
    """Everything derived from a room's hands: per-hand results and session standings."""

    model_config = ConfigDict(frozen=True)

    rounds: tuple[RoundPoints, ...] = ()
    totals: Points
    final_ranks: Ranks
    fee_shares: Points | None = None  # None when no table fee is charged
