"""Conditions the report exporter signals to its caller."""


class ReportError(Exception):
    """Base class for reporting conditions."""


class InterviewNotFound(ReportError, LookupError):
    """The requested interview is not in the store."""

    def __init__(self, interview_id: str):
        self.interview_id = interview_id
        super().__init__(f"Interview not found: {interview_id}")


class NoDataToExport(ReportError):
    """Export was requested for zero candidate rows.

    A soft condition: callers show a neutral notice instead of a file.
    """

    def __init__(self, context: str | None = None):
        self.context = context
        message = "No candidate data to export"
        if context:
            message = f"{message} for {context}"
        super().__init__(message)


class ExportSerializationFailure(ReportError):
    """A row could not be encoded in the requested format."""

    def __init__(self, export_format: str, row_index: int | None, reason: str):
        self.export_format = export_format
        self.row_index = row_index
        self.reason = reason
        where = f" (row {row_index})" if row_index is not None else ""
        super().__init__(f"Cannot encode {export_format} export{where}: {reason}")
