"""Parsing of user-entered scores and fees.

These checks belong to the caller of the scoring engine: the engine itself
accepts any four numbers and never looks at the pool total.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rooms.exceptions import InvalidHandError
from shared.dal.models import SEATS_PER_TABLE

if TYPE_CHECKING:
    from collections.abc import Sequence

_SCORE_RE = re.compile(r"-?[0-9]+")
_POSITIVE_INT_RE = re.compile(r"[1-9][0-9]*")


def parse_score(text: str) -> int | None:
    """Parse an optionally negative integer score. Return None for blank or invalid input."""
    stripped = text.strip()
    if not _SCORE_RE.fullmatch(stripped):
        return None
    return int(stripped)


def parse_positive_int(text: str) -> int | None:
    """Parse a strictly positive integer with no sign or leading zeros."""
    stripped = text.strip()
    if not _POSITIVE_INT_RE.fullmatch(stripped):
        return None
    return int(stripped)


def parse_scores(texts: Sequence[str]) -> tuple[int, ...]:
    """Parse one score per seat, naming the first seat whose entry is invalid."""
    if len(texts) != SEATS_PER_TABLE:
        raise InvalidHandError(f"expected {SEATS_PER_TABLE} scores, got {len(texts)}")
    scores: list[int] = []
    for seat, text in enumerate(texts):
        score = parse_score(text)
        if score is None:
            raise InvalidHandError(f"seat {seat + 1}: {text!r} is not a whole number")
        scores.append(score)
    return tuple(scores)


def pool_difference(scores: Sequence[int], pool_total: int) -> int:
    """How far the scores are from the expected pool total (0 when they match)."""
    return sum(scores) - pool_total
