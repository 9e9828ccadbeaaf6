"""Typed exceptions for scoring engine contract violations.

The engine has no runtime failure modes of its own. These are raised only
when a caller hands it malformed input, so the caller can fail fast instead
of getting silently truncated or padded results.
"""


class ScoringError(Exception):
    """Base exception for scoring engine contract violations."""


class InvalidRuleConfigError(ScoringError):
    """Rule configuration is malformed (uma length or sum, negative oka)."""


class InvalidSlotVectorError(ScoringError):
    """A per-slot input does not hold exactly one value per seat.

    Attributes:
        name: Name of the offending argument.
        length: Number of values actually supplied.

    """

    def __init__(self, *, name: str, length: int) -> None:
        self.name = name
        self.length = length
        super().__init__(f"{name} must have one value per seat (got {length})")
