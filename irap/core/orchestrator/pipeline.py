"""ReportPipeline - chains parsing, normalization, deduplication and export."""

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import Field

from ..config.settings import ReportSettings
from ..feedback.normalizer import normalize
from ..feedback.parser import feedback_from_transcript, parse_transcript
from ..models.base import IRAPBaseModel
from ..models.candidate import CandidateAssets, CandidateReportRow, RawCandidateRecord
from ..models.enums import ExportFormat
from ..models.export import ExportPayload
from ..models.interview import InterviewDetail
from ..reporting.dedupe import dedupe
from ..reporting.exceptions import InterviewNotFound
from ..reporting.exporter import ReportExporter
from ..storage.object_store import ObjectStore
from ...observability.logger import get_logger

logger = get_logger(__name__)


class CandidateReport(IRAPBaseModel):
    """Everything the single-candidate view renders."""

    row: CandidateReportRow = Field(..., description="Assessed candidate")
    assets: CandidateAssets = Field(default_factory=CandidateAssets, description="CV and picture")


class ReportPipeline:
    """Turns stored interview results into assessments and report files.

    The single-candidate view runs parse -> normalize -> aggregate; list and
    export views add deduplication and, for exports, serialization.
    """

    def __init__(self, store: ObjectStore, settings: ReportSettings | None = None):
        self.store = store
        self.settings = settings or ReportSettings()
        self.exporter = ReportExporter(self.settings.export)

    # ------------------------------------------------------------------
    # Assessment
    # ------------------------------------------------------------------
    def assess_record(self, record: RawCandidateRecord) -> CandidateReportRow:
        """Build the report row for one raw record. Never raises on bad feedback."""
        transcript = parse_transcript(record)
        feedback = feedback_from_transcript(transcript.data)
        if not feedback.ok:
            logger.info(
                "feedback_defaulted",
                record_id=record.id,
                interview_id=record.interview_id,
                issue=feedback.issue,
            )

        return CandidateReportRow(
            name=record.display_name,
            email=record.email,
            record_id=record.id,
            interview_id=record.interview_id,
            completed_at=record.completed_at,
            recommendations=record.recommendations,
            transcript=transcript.data if transcript.ok and transcript.data else None,
            assessment=normalize(feedback, self.settings.feedback.summary_split),
        )

    def build_rows(self, records: Iterable[RawCandidateRecord]) -> list[CandidateReportRow]:
        return [self.assess_record(record) for record in records]

    # ------------------------------------------------------------------
    # Store-backed views
    # ------------------------------------------------------------------
    def scheduled_interviews(self, owner: str | None = None) -> list[InterviewDetail]:
        """Stored interviews, newest first, optionally only those scheduled by ``owner``.

        Interviews without a creation time are listed last.
        """
        wanted = owner.strip().lower() if owner else None
        interviews = []
        for interview_id in self.store.list_interview_ids():
            interview = self.store.load_interview(interview_id)
            if interview is None:
                continue
            if wanted and (interview.user_email or "").strip().lower() != wanted:
                continue
            interviews.append(interview)
        return sorted(
            interviews,
            key=lambda i: i.created_at.timestamp() if i.created_at else float("-inf"),
            reverse=True,
        )

    def _interview(self, interview_id: str) -> InterviewDetail:
        interview = self.store.load_interview(interview_id)
        if interview is None:
            raise InterviewNotFound(interview_id)
        return interview

    def candidate_rows(self, interview_id: str, deduplicate: bool = True) -> list[CandidateReportRow]:
        """Assessed rows for an interview, one per candidate unless ``deduplicate`` is off."""
        rows = self.build_rows(self._interview(interview_id).interview_results)
        return dedupe(rows) if deduplicate else rows

    def candidate_report(self, interview_id: str, key: str) -> CandidateReport | None:
        """Single-candidate view by email or record id."""
        self._interview(interview_id)
        record = self.store.load_candidate_record(interview_id, key)
        if record is None:
            return None
        with structlog.contextvars.bound_contextvars(interview_id=interview_id):
            return CandidateReport(
                row=self.assess_record(record),
                assets=self.store.lookup_candidate_assets(record.email),
            )

    def download_cv(self, report: CandidateReport, directory: str | Path | None = None) -> Path | None:
        """Deliver the candidate's CV; None when it is not available."""
        return self.store.save_candidate_cv(
            report.assets, report.row.name, directory or self.settings.storage.export_dir
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def export_rows(
        self,
        rows: Iterable[CandidateReportRow],
        export_format: ExportFormat | str,
        *,
        detail: bool = False,
        context: str | None = None,
    ) -> ExportPayload:
        """Deduplicate and serialize rows.

        Raises:
            NoDataToExport: nothing to export
            ExportSerializationFailure: a row cannot be encoded
        """
        return self.exporter.export(dedupe(rows), export_format, detail=detail, context=context)

    def export_interview(
        self, interview_id: str, export_format: ExportFormat | str, *, detail: bool = False
    ) -> ExportPayload:
        interview = self._interview(interview_id)
        with structlog.contextvars.bound_contextvars(interview_id=interview_id):
            logger.info(
                "export_started",
                format=ExportFormat(export_format).value,
                results=len(interview.interview_results),
            )
            rows = self.build_rows(interview.interview_results)
            return self.export_rows(
                rows, export_format, detail=detail, context=interview.job_position or None
            )

    def deliver(self, payload: ExportPayload, directory: str | Path | None = None) -> Path:
        """Write a payload to the export directory."""
        return self.store.save_export(payload, directory or self.settings.storage.export_dir)
