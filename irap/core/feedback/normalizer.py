"""Schema Normalizer - maps historical feedback key variants onto one schema.

Feedback was produced by several generations of prompts, so the same field
turns up under different spellings, casings and spacings. Each canonical
field has an ordered alias tuple below. Resolution tries the exact aliases
in priority order, then the same aliases compared case-, space-,
underscore- and hyphen-insensitively. ``None`` and blank strings count as
missing and fall through to the next alias.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.assessment import CanonicalAssessment, ParsedFeedback, coerce_rating
from ..models.enums import SkillKey, SummarySplitPolicy
from .parser import parse_feedback

RATING_CONTAINER_ALIASES: tuple[str, ...] = ("rating", "ratings")

RATING_ALIASES: dict[str, tuple[str, ...]] = {
    SkillKey.TECHNICAL_SKILLS.value: ("TechnicalSkills", "Technical Skills"),
    SkillKey.COMMUNICATION.value: ("Communication",),
    SkillKey.PROBLEM_SOLVING.value: ("ProblemSolving", "Problem Solving"),
    SkillKey.EXPERIENCE.value: ("Experience",),
    SkillKey.BEHAVIORAL.value: ("Behavioral",),
    SkillKey.ANALYSIS.value: ("Analysis",),
}

SUMMARY_ALIASES: tuple[str, ...] = ("summary", "summery")
RECOMMENDATION_ALIASES: tuple[str, ...] = ("Recommendation",)
RECOMMENDATION_MESSAGE_ALIASES: tuple[str, ...] = (
    "RecommendationMessage",
    "recommendationMessage",
    "Recommendation Message",
)

_FOLD_PATTERN = re.compile(r"[\s_\-]+")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def fold_key(key: str) -> str:
    """Equivalence-class form of a key: lowercase, no spacing."""
    return _FOLD_PATTERN.sub("", key).lower()


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve(source: Mapping[str, Any], aliases: Sequence[str]) -> Any:
    """Return the first present value for ``aliases``, or None.

    Args:
        source: Parsed feedback (or nested) mapping
        aliases: Accepted keys in priority order

    Returns:
        The resolved value, or None when no alias is present
    """
    for alias in aliases:
        value = source.get(alias)
        if not _is_missing(value):
            return value

    folded: dict[str, Any] = {}
    for key, value in source.items():
        if isinstance(key, str) and not _is_missing(value):
            folded.setdefault(fold_key(key), value)
    for alias in aliases:
        if fold_key(alias) in folded:
            return folded[fold_key(alias)]
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def split_summary(
    value: Any, policy: SummarySplitPolicy | str = SummarySplitPolicy.SENTENCE
) -> list[str]:
    """Turn a summary value into display lines.

    A list is passed through minus blank or non-text entries. A string is
    split after ``.``, ``!`` or ``?`` followed by whitespace (sentence
    policy) or on line breaks (newline policy); lines are stripped and
    blanks dropped.
    """
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item.strip()]
    if not isinstance(value, str):
        return []

    if SummarySplitPolicy(policy) is SummarySplitPolicy.NEWLINE:
        parts = value.splitlines()
    else:
        parts = _SENTENCE_BOUNDARY.split(value)
    return [part.strip() for part in parts if part.strip()]


def normalize_ratings(feedback: Mapping[str, Any]) -> dict[str, float]:
    """All six skill ratings, in order, defaulting to 0."""
    container = resolve(feedback, RATING_CONTAINER_ALIASES)
    if not isinstance(container, Mapping):
        container = {}
    return {
        skill: coerce_rating(resolve(container, aliases))
        for skill, aliases in RATING_ALIASES.items()
    }


def normalize(
    parsed: ParsedFeedback | Mapping[str, Any],
    split_policy: SummarySplitPolicy | str = SummarySplitPolicy.SENTENCE,
) -> CanonicalAssessment:
    """Build the canonical assessment from parsed feedback.

    Args:
        parsed: Parser result or an already-structured mapping
        split_policy: Summary splitting policy for this deployment

    Returns:
        CanonicalAssessment; missing fields take their documented defaults
    """
    feedback = parsed.data if isinstance(parsed, ParsedFeedback) else parsed
    if not isinstance(feedback, Mapping):
        feedback = {}

    fields: dict[str, Any] = {
        "ratings": normalize_ratings(feedback),
        "summary_lines": split_summary(resolve(feedback, SUMMARY_ALIASES), split_policy),
    }

    recommendation = _as_text(resolve(feedback, RECOMMENDATION_ALIASES))
    if recommendation is not None:
        fields["recommendation"] = recommendation

    message = _as_text(resolve(feedback, RECOMMENDATION_MESSAGE_ALIASES))
    if message is not None:
        fields["recommendation_message"] = message

    return CanonicalAssessment(**fields)


def assess(
    raw: Any, split_policy: SummarySplitPolicy | str = SummarySplitPolicy.SENTENCE
) -> CanonicalAssessment:
    """Parse and normalize a raw feedback value in one step."""
    return normalize(parse_feedback(raw), split_policy)
