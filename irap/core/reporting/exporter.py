"""Report Exporter - renders candidate rows as CSV or spreadsheet files.

Both formats share one fixed column set. The spreadsheet can additionally
carry the completion time and the raw transcript when a full interview
export is requested. Payloads are built entirely in memory; a caller either
gets a complete file or an exception, never a partial file.
"""

import csv
import io
import json
import re
from collections.abc import Callable, Iterable
from typing import Any

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.utils.exceptions import IllegalCharacterError

from ..config.settings import ExportSettings
from ..models.candidate import CandidateReportRow
from ..models.enums import ExportFormat, SkillKey
from ..models.export import ExportPayload
from ...observability.logger import get_logger
from .exceptions import ExportSerializationFailure, NoDataToExport

logger = get_logger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
SPREADSHEET_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Excel limits sheet titles to 31 characters and forbids these
_SHEET_TITLE_MAX = 31
_SHEET_TITLE_FORBIDDEN = re.compile(r"[\[\]:*?/\\]")

Getter = Callable[[CandidateReportRow], Any]


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def _skill_getter(skill: SkillKey) -> Getter:
    return lambda row: _number(row.assessment.rating(skill))


CONDENSED_COLUMNS: list[tuple[str, Getter]] = [
    ("Name", lambda row: row.name),
    ("Email", lambda row: row.email or ""),
    ("Score", lambda row: row.assessment.overall_score),
    *[(skill.value, _skill_getter(skill)) for skill in SkillKey],
    ("Recommendation", lambda row: row.export_recommendation),
    ("RecommendationMessage", lambda row: row.assessment.recommendation_message),
    ("Summary", lambda row: row.assessment.summary_text),
]

COMPLETED_AT_HEADER = "Completed At"
TRANSCRIPT_HEADER = "Transcript"


def export_headers(export_format: ExportFormat | str, detail: bool = False) -> list[str]:
    """Header row for a format; CSV exports are always condensed."""
    headers = [header for header, _ in CONDENSED_COLUMNS]
    if detail and ExportFormat(export_format) is ExportFormat.SPREADSHEET:
        headers += [COMPLETED_AT_HEADER, TRANSCRIPT_HEADER]
    return headers


def _store_formulas_as_text(cells: Iterable[Cell]) -> None:
    """Write text starting with "=" as a literal string, never a formula."""
    for cell in cells:
        if cell.data_type == "f":
            cell.data_type = "s"


def sheet_title(name: str) -> str:
    """Make a name acceptable as a spreadsheet title."""
    title = _SHEET_TITLE_FORBIDDEN.sub("-", name).strip()[:_SHEET_TITLE_MAX]
    return title or "Results"


class ReportExporter:
    """Serialize report rows into downloadable files."""

    def __init__(self, settings: ExportSettings | None = None):
        self.settings = settings or ExportSettings()

    def export(
        self,
        rows: Iterable[CandidateReportRow],
        export_format: ExportFormat | str,
        *,
        detail: bool = False,
        context: str | None = None,
    ) -> ExportPayload:
        """Render rows in the requested format.

        Args:
            rows: Normalized, deduplicated report rows
            export_format: CSV or spreadsheet
            detail: Add Completed At and Transcript columns (spreadsheet only)
            context: Report context, used as sheet name and in messages

        Returns:
            ExportPayload holding the complete file

        Raises:
            NoDataToExport: rows is empty
            ExportSerializationFailure: a row cannot be encoded
        """
        rows = list(rows)
        export_format = ExportFormat(export_format)
        if not rows:
            logger.info("export_skipped_no_data", format=export_format.value, context=context)
            raise NoDataToExport(context)

        if export_format is ExportFormat.CSV:
            content = self._to_csv(rows)
            filename, media_type = self.settings.csv_filename, CSV_MEDIA_TYPE
        else:
            content = self._to_spreadsheet(rows, detail, context)
            filename, media_type = self.settings.spreadsheet_filename, SPREADSHEET_MEDIA_TYPE

        logger.info(
            "export_completed",
            format=export_format.value,
            rows=len(rows),
            size_bytes=len(content),
            detail=detail,
            context=context,
        )
        return ExportPayload(
            filename=filename,
            content=content,
            media_type=media_type,
            export_format=export_format,
            row_count=len(rows),
        )

    # ------------------------------------------------------------------
    # Cell values
    # ------------------------------------------------------------------
    def _cells(self, row: CandidateReportRow, index: int, detail: bool) -> list[Any]:
        cells = [getter(row) for _, getter in CONDENSED_COLUMNS]
        if detail:
            completed = row.completed_at.strftime(self.settings.datetime_format) if row.completed_at else ""
            cells += [completed, self._transcript_json(row, index)]
        return cells

    def _transcript_json(self, row: CandidateReportRow, index: int) -> str:
        if row.transcript is None:
            return ""
        try:
            return json.dumps(row.transcript, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise ExportSerializationFailure(ExportFormat.SPREADSHEET.value, index, str(e)) from e

    # ------------------------------------------------------------------
    # Formats
    # ------------------------------------------------------------------
    def _to_csv(self, rows: list[CandidateReportRow]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(export_headers(ExportFormat.CSV))
        for index, row in enumerate(rows):
            try:
                writer.writerow(self._cells(row, index, detail=False))
            except csv.Error as e:
                raise ExportSerializationFailure(ExportFormat.CSV.value, index, str(e)) from e
        return buffer.getvalue().encode("utf-8")

    def _to_spreadsheet(
        self, rows: list[CandidateReportRow], detail: bool, context: str | None
    ) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_title(context or self.settings.sheet_name)
        sheet.append(export_headers(ExportFormat.SPREADSHEET, detail))

        for index, row in enumerate(rows):
            try:
                sheet.append(self._cells(row, index, detail))
            except (IllegalCharacterError, ValueError, TypeError) as e:
                raise ExportSerializationFailure(
                    ExportFormat.SPREADSHEET.value, index, str(e)
                ) from e
            _store_formulas_as_text(sheet[sheet.max_row])

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()
