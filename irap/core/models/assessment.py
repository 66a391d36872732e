"""Canonical assessment models produced from AI feedback payloads (Pydantic only)."""

import math
from typing import Any

from pydantic import ConfigDict, Field, computed_field, field_validator

from ..feedback.aggregate import aggregate, is_recommended
from .base import IRAPBaseModel
from .enums import SKILL_KEYS, FeedbackIssue, SkillKey

DEFAULT_RECOMMENDATION = "Recommendation"
DEFAULT_RECOMMENDATION_MESSAGE = "No recommendation message provided"

RATING_MIN = 0.0
RATING_MAX = 10.0


def coerce_rating(value: Any) -> float:
    """Coerce a source rating to a float in [0, 10]; anything unusable is 0."""
    if isinstance(value, bool) or value is None:
        return RATING_MIN
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return RATING_MIN
    if not isinstance(value, (int, float)):
        return RATING_MIN
    number = float(value)
    if not math.isfinite(number):
        return RATING_MIN
    return min(max(number, RATING_MIN), RATING_MAX)


# =============================================================================
# Pydantic Schemas
# =============================================================================


class ParsedFeedback(IRAPBaseModel):
    """Result of parsing a raw feedback value.

    ``data`` is always a mapping; ``issue`` records why it fell back to the
    empty default, if it did.
    """

    data: dict[str, Any] = Field(default_factory=dict, description="Structured feedback")
    issue: FeedbackIssue | None = Field(None, description="Parse failure, if any")

    @property
    def ok(self) -> bool:
        return self.issue is None


class CanonicalAssessment(IRAPBaseModel):
    """Fixed-shape assessment every consumer renders and exports."""

    # Summary lines arrive already cleaned; list items are kept verbatim
    model_config = ConfigDict(frozen=True, validate_assignment=False, str_strip_whitespace=False)

    ratings: dict[str, float] = Field(
        default_factory=lambda: dict.fromkeys(SKILL_KEYS, RATING_MIN),
        description="Exactly the six skill keys, in order, each in [0, 10]",
    )
    summary_lines: list[str] = Field(default_factory=list, description="Summary lines")
    recommendation: str = Field(DEFAULT_RECOMMENDATION, description="Recommendation label")
    recommendation_message: str = Field(
        DEFAULT_RECOMMENDATION_MESSAGE, description="Recommendation message"
    )

    @field_validator("ratings", mode="before")
    @classmethod
    def _complete_ratings(cls, value: Any) -> dict[str, float]:
        source = value if isinstance(value, dict) else {}
        return {key: coerce_rating(source.get(key)) for key in SKILL_KEYS}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overall_score(self) -> int:
        return aggregate(self.ratings).overall_score

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_recommendation(self) -> bool:
        """Whether the label came from the feedback rather than the default."""
        return self.recommendation != DEFAULT_RECOMMENDATION

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_recommended(self) -> bool:
        return is_recommended(self.recommendation)

    @property
    def summary_text(self) -> str:
        return "\n".join(self.summary_lines)

    def rating(self, skill: SkillKey | str) -> float:
        return self.ratings[SkillKey(skill).value]
