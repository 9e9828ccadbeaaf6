"""View models combining stored records with their derived scores."""

from pydantic import BaseModel

from scoring.logic.types import Points, Ranks, RoundPoints
from shared.dal.models import HandRecord, Room


class HandRow(BaseModel, frozen=True):
    """One stored hand with its converted points."""

    hand: HandRecord
    result: RoundPoints
    pool_difference: int  # sum(scores) - pool total; nonzero means a likely typo


class RoomStandings(BaseModel, frozen=True):
    """Everything a room view shows: each hand, running totals, final ranks and fee split."""

    room: Room
    hands: tuple[HandRow, ...]
    totals: Points
    final_ranks: Ranks
    fee_shares: Points | None = None  # None when the room charges no table fee


class HandPreview(BaseModel, frozen=True):
    """A hand scored under a room's rules, with its raw total checked against the pool."""

    result: RoundPoints
    total: int
    pool_difference: int
