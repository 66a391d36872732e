"""Deduplication and export of candidate report rows."""

from .dedupe import dedupe, identity_key
from .exceptions import (
    ExportSerializationFailure,
    InterviewNotFound,
    NoDataToExport,
    ReportError,
)
from .exporter import ReportExporter, export_headers

__all__ = [
    "dedupe",
    "identity_key",
    "ReportExporter",
    "export_headers",
    "ReportError",
    "InterviewNotFound",
    "NoDataToExport",
    "ExportSerializationFailure",
]
