"""Candidate record models: raw store snapshots and export rows (Pydantic only)."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .assessment import CanonicalAssessment
from .base import IRAPBaseModel, SnapshotModel, parse_timestamp

UNNAMED_CANDIDATE = "Unnamed Candidate"


# =============================================================================
# Pydantic Schemas
# =============================================================================


class RawCandidateRecord(SnapshotModel):
    """One interview result row as retrieved from storage.

    ``conversation_transcript`` is opaque here: it may be a mapping or JSON
    text and carries the AI feedback under ``feedback``.
    """

    id: str | None = Field(None, description="Store record identifier")
    email: str | None = Field(None, description="Candidate email")
    full_name: str | None = Field(
        None,
        validation_alias=AliasChoices("fullname", "fullName", "full_name"),
        description="Full name (historical key variants)",
    )
    name: str | None = Field(None, description="Fallback display name")
    conversation_transcript: Any = Field(
        None,
        validation_alias=AliasChoices("conversationTranscript", "conversation_transcript"),
        description="Transcript payload containing feedback",
    )
    recommendations: str | None = Field(None, description="Free-text recommendations")
    completed_at: datetime | None = Field(
        None,
        validation_alias=AliasChoices("completedAt", "completed_at"),
        description="Interview completion time",
    )
    interview_id: str | None = Field(
        None,
        validation_alias=AliasChoices("interviewId", "interview_id"),
        description="Owning interview",
    )

    @field_validator("completed_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    @field_validator("id", "email", "full_name", "name", "recommendations", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def display_name(self) -> str:
        return self.full_name or self.name or self.email or UNNAMED_CANDIDATE


class CandidateReportRow(IRAPBaseModel):
    """A canonical assessment joined with identity and metadata; the unit of export."""

    name: str = Field(UNNAMED_CANDIDATE, description="Display name")
    email: str | None = Field(None, description="Candidate email")
    record_id: str | None = Field(None, description="Store record identifier")
    interview_id: str | None = Field(None, description="Owning interview")
    completed_at: datetime | None = Field(None, description="Interview completion time")
    recommendations: str | None = Field(None, description="Free-text recommendations")
    transcript: dict[str, Any] | None = Field(None, description="Parsed transcript payload")
    assessment: CanonicalAssessment = Field(
        default_factory=CanonicalAssessment, description="Normalized assessment"
    )

    @property
    def export_recommendation(self) -> str:
        """Recommendation label, falling back to the record's free text."""
        if not self.assessment.has_recommendation and self.recommendations:
            return self.recommendations
        return self.assessment.recommendation


class CandidateAssets(IRAPBaseModel):
    """Supplementary per-candidate files, keyed by email in the store."""

    email: str | None = Field(None, description="Lookup key")
    cv_file_path: str | None = Field(None, description="Stored CV reference")
    picture: str | None = Field(None, description="Profile image reference")

    @property
    def cv_available(self) -> bool:
        return bool(self.cv_file_path)

    @property
    def picture_available(self) -> bool:
        return bool(self.picture)
