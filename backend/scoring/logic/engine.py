"""
Scoring calculation for a four-player session.

Converts raw hand scores into uma/oka-adjusted ranking points, accumulates
them across a session, and derives final ranks and table-fee shares.
All functions are pure; exact rational arithmetic is used internally and
results are returned as floats indexed by seat.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from scoring.logic.ranking import distribute_by_position, rank_slots, spread_over_placements
from scoring.logic.rules import FEE_SHARES_BY_POSITION, POINTS_DIVISOR
from scoring.logic.types import NUM_SLOTS, RoundPoints, SessionSummary, ensure_slot_vector

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from numbers import Real

    from scoring.logic.enums import TiePolicy
    from scoring.logic.rules import RuleConfig
    from scoring.logic.types import Points, Ranks


def _as_floats(values: Iterable[Fraction]) -> Points:
    return tuple(float(v) for v in values)  # type: ignore[return-value]


def _round_points_exact(config: RuleConfig, scores: Sequence[Real]) -> tuple[tuple[Fraction, ...], Ranks]:
    """Exact per-seat points and ranks for one hand."""
    vector = ensure_slot_vector(scores, "scores")
    placements = rank_slots(vector, config.tie_policy)
    bonuses = spread_over_placements(placements, config.position_bonuses())
    points = tuple(
        (Fraction(raw) - config.base) / POINTS_DIVISOR + bonus for raw, bonus in zip(vector, bonuses, strict=True)
    )
    ranks: Ranks = tuple(p.rank for p in placements)  # type: ignore[assignment]
    return points, ranks


def _session_totals_exact(config: RuleConfig, rounds: Iterable[Sequence[Real]]) -> tuple[Fraction, ...]:
    totals = [Fraction(0)] * NUM_SLOTS
    for scores in rounds:
        points, _ = _round_points_exact(config, scores)
        totals = [total + point for total, point in zip(totals, points, strict=True)]
    return tuple(totals)


def convert_round(config: RuleConfig, scores: Sequence[Real]) -> RoundPoints:
    """
    Convert one hand's raw scores into ranking points.

    points[seat] = (raw - base) / 1000 + bonus, where bonus is the uma for the
    seat's position plus oka for 1st. Under SPLIT, tied seats receive the
    average bonus of the positions they occupy and share the group's best rank.

    Example (uma 10-20, oka 20, base 30000):
        [40000, 30000, 20000, 10000] -> points [50, 10, -20, -40], ranks [1, 2, 3, 4]
    """
    points, ranks = _round_points_exact(config, scores)
    return RoundPoints(points=_as_floats(points), ranks=ranks)


def session_totals(config: RuleConfig, rounds: Iterable[Sequence[Real]]) -> Points:
    """Sum each seat's converted points over all hands. Hand order does not matter."""
    return _as_floats(_session_totals_exact(config, rounds))


def final_ranks(totals: Sequence[Real], tie_policy: TiePolicy) -> Ranks:
    """Rank seats by cumulative total. SPLIT ties share the group's best rank."""
    return tuple(p.rank for p in rank_slots(totals, tie_policy))  # type: ignore[return-value]


def fee_shares(totals: Sequence[Real], tie_policy: TiePolicy, fee_amount: int) -> Points:
    """
    Split a table fee by final position.

    Positions 1st to 4th carry 0, 2/6, 1/6 and 3/6 of the fee. Under SPLIT,
    tied seats pay the average share of their positions; under SEAT each seat
    pays exactly its position's share. Shares always add up to fee_amount.
    """
    shares = distribute_by_position(totals, tie_policy, FEE_SHARES_BY_POSITION)
    return _as_floats(fee_amount * share for share in shares)


def summarize_session(
    config: RuleConfig,
    rounds: Iterable[Sequence[Real]],
    fee_amount: int | None = None,
) -> SessionSummary:
    """
    Compute per-hand results and session standings in one pass.

    Final ranks and fee shares are derived from the exact totals, so seats
    whose totals are mathematically equal are always treated as tied.
    Pass fee_amount=None when no table fee is charged.
    """
    round_results: list[RoundPoints] = []
    totals = [Fraction(0)] * NUM_SLOTS
    for scores in rounds:
        points, ranks = _round_points_exact(config, scores)
        round_results.append(RoundPoints(points=_as_floats(points), ranks=ranks))
        totals = [total + point for total, point in zip(totals, points, strict=True)]

    placements = rank_slots(totals, config.tie_policy)
    shares = None
    if fee_amount is not None:
        shares = _as_floats(
            fee_amount * share for share in spread_over_placements(placements, FEE_SHARES_BY_POSITION)
        )

    return SessionSummary(
        rounds=tuple(round_results),
        totals=_as_floats(totals),
        final_ranks=tuple(p.rank for p in placements),
        fee_shares=shares,
    )
