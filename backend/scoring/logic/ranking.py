"""
Ranked grouping of per-seat values under a tie policy.

This is the single sort-then-group primitive behind every ranking in the
engine: round placements, uma/oka bonuses, final session ranks and table-fee
shares all go through rank_slots() or distribute_by_position().
"""

from __future__ import annotations

from fractions import Fraction
from itertools import groupby
from typing import TYPE_CHECKING

from scoring.logic.enums import TiePolicy
from scoring.logic.types import SLOTS, Placement, SlotIndex, ensure_slot_vector

if TYPE_CHECKING:
    from collections.abc import Sequence
    from numbers import Real


def _sorted_slots(vector: tuple[Real, ...]) -> list[SlotIndex]:
    """Seats ordered by value descending; equal values keep seat order."""
    return sorted(SLOTS, key=lambda slot: (-vector[slot], slot))


def rank_slots(values: Sequence[Real], tie_policy: TiePolicy) -> tuple[Placement, ...]:
    """
    Rank the four seats by value.

    Return one Placement per seat, indexed by seat.

    SEAT: every seat gets a distinct rank equal to its sorted position + 1.
    SPLIT: seats with equal values share the rank of the best position their
    group occupies, and each placement lists all positions of its group.
    """
    vector = ensure_slot_vector(values, "values")
    order = _sorted_slots(vector)
    placements: dict[SlotIndex, Placement] = {}

    if tie_policy == TiePolicy.SEAT:
        for position, slot in enumerate(order):
            placements[slot] = Placement(slot=slot, rank=position + 1, position=position, positions=(position,))
        return tuple(placements[slot] for slot in SLOTS)

    start = 0
    for _, group in groupby(order, key=lambda slot: vector[slot]):
        members = list(group)
        positions = tuple(range(start, start + len(members)))
        for offset, slot in enumerate(members):
            placements[slot] = Placement(slot=slot, rank=start + 1, position=start + offset, positions=positions)
        start += len(members)
    return tuple(placements[slot] for slot in SLOTS)


def distribute_by_position(
    values: Sequence[Real],
    tie_policy: TiePolicy,
    per_position: Sequence[Real],
) -> tuple[Fraction, ...]:
    """
    Assign a per-position quantity to each seat according to its placement.

    Each seat receives the mean of per_position over the positions its group
    occupies. Under SEAT that is always the seat's own position, so nothing
    is averaged. Arithmetic is exact; callers convert at the boundary.
    """
    return spread_over_placements(rank_slots(values, tie_policy), per_position)


def spread_over_placements(
    placements: Sequence[Placement],
    per_position: Sequence[Real],
) -> tuple[Fraction, ...]:
    """Like distribute_by_position, for placements already computed by rank_slots()."""
    table = ensure_slot_vector(per_position, "per_position")
    shares: list[Fraction] = []
    for placement in placements:
        total = sum((Fraction(table[position]) for position in placement.positions), Fraction(0))
        shares.append(total / len(placement.positions))
    return tuple(shares)
