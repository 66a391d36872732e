"""Interview snapshot model (Pydantic only)."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from .base import SnapshotModel, parse_timestamp
from .candidate import RawCandidateRecord


class InterviewDetail(SnapshotModel):
    """An interview with its candidate results, as retrieved from storage.

    ``type`` and ``question_list`` are kept raw; the feedback parser turns
    them into display values.
    """

    interview_id: str = Field(
        ...,
        validation_alias=AliasChoices("interview_id", "interviewId"),
        description="Interview identifier",
    )
    job_position: str | None = Field(
        None, validation_alias=AliasChoices("jobPosition", "job_position")
    )
    job_description: str | None = Field(
        None, validation_alias=AliasChoices("jobDescription", "job_description")
    )
    user_email: str | None = Field(
        None,
        validation_alias=AliasChoices("userEmail", "user_email"),
        description="Recruiter who scheduled the interview",
    )
    duration: str | None = Field(None, description="Interview duration label")
    created_at: datetime | None = Field(None, description="Creation time")
    type: Any = Field(None, description="Interview type(s), list or JSON text")
    question_list: Any = Field(
        None,
        validation_alias=AliasChoices("questionList", "question_list"),
        description="Generated questions, list or JSON text",
    )
    interview_results: list[RawCandidateRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("interview_results", "interviewResults"),
        description="Candidate results, oldest first",
    )

    @field_validator("created_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> datetime | None:
        return parse_timestamp(value)

    @field_validator("interview_results", mode="before")
    @classmethod
    def _results_list(cls, value: Any) -> list:
        return value if isinstance(value, list) else []
