"""Aggregate Calculator - overall score and recommendation flag.

The overall score is the arithmetic mean of the skill ratings rounded half
away from zero (ratings are never negative, so this is plain half-up).
The recommendation flag is derived from the recommendation text alone; the
two signals may disagree and callers must show both.

This module is imported by the assessment model itself, so it depends on
nothing else in the package.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class AggregateScore:
    """Values derived from a set of ratings."""

    overall_score: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate(ratings: Mapping[str, float]) -> AggregateScore:
    """Compute the overall score from normalized ratings.

    Args:
        ratings: Skill key to score in [0, 10]

    Returns:
        AggregateScore; an empty mapping scores 0
    """
    values = list(ratings.values())
    if not values:
        return AggregateScore(overall_score=0)
    return AggregateScore(overall_score=round_half_up(sum(values) / len(values)))


def is_recommended(recommendation: str | None) -> bool:
    """True iff the recommendation text contains "yes" (any case)."""
    return "yes" in (recommendation or "").lower()
