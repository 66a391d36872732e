"""IRAP data models for interviews, candidates, assessments and exports."""

from .assessment import (
    DEFAULT_RECOMMENDATION,
    DEFAULT_RECOMMENDATION_MESSAGE,
    CanonicalAssessment,
    ParsedFeedback,
    coerce_rating,
)
from .base import IRAPBaseModel, SnapshotModel, parse_timestamp
from .candidate import (
    UNNAMED_CANDIDATE,
    CandidateAssets,
    CandidateReportRow,
    RawCandidateRecord,
)
from .enums import (
    SKILL_KEYS,
    ExportFormat,
    FeedbackIssue,
    SkillKey,
    SummarySplitPolicy,
)
from .export import ExportPayload
from .interview import InterviewDetail

__all__ = [
    # Base
    "IRAPBaseModel",
    "SnapshotModel",
    "parse_timestamp",
    # Enums
    "SkillKey",
    "SKILL_KEYS",
    "FeedbackIssue",
    "SummarySplitPolicy",
    "ExportFormat",
    # Assessment
    "ParsedFeedback",
    "CanonicalAssessment",
    "coerce_rating",
    "DEFAULT_RECOMMENDATION",
    "DEFAULT_RECOMMENDATION_MESSAGE",
    # Candidate
    "RawCandidateRecord",
    "CandidateReportRow",
    "CandidateAssets",
    "UNNAMED_CANDIDATE",
    # Interview
    "InterviewDetail",
    # Export
    "ExportPayload",
]
