"""Typed view over the merged configuration dictionary."""

from typing import Any

from pydantic import Field

from ..models.base import IRAPBaseModel
from ..models.enums import SummarySplitPolicy


class StorageSettings(IRAPBaseModel):
    """Where interview snapshots are read from and exports are written to."""

    object_store_dir: str = Field("data/store", description="Object store root")
    export_dir: str = Field("data/exports", description="Default export directory")


class FeedbackSettings(IRAPBaseModel):
    """Feedback normalization options."""

    summary_split: SummarySplitPolicy = Field(
        SummarySplitPolicy.SENTENCE, description="How summary text is split into lines"
    )


class ExportSettings(IRAPBaseModel):
    """Report export options."""

    sheet_name: str = Field("Results", min_length=1, description="Spreadsheet sheet name")
    csv_filename: str = Field("candidates.csv", description="Suggested CSV filename")
    spreadsheet_filename: str = Field(
        "interview_results.xlsx", description="Suggested spreadsheet filename"
    )
    datetime_format: str = Field("%Y-%m-%d %H:%M", description="Completed-At format")


class LoggingSettings(IRAPBaseModel):
    """Logging options passed to setup_logging()."""

    level: str = Field("INFO", description="Log level")
    format: str = Field("json", description="json or console")
    file: str | None = Field(None, description="Optional log file")


class ReportSettings(IRAPBaseModel):
    """Root settings object."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    feedback: FeedbackSettings = Field(default_factory=FeedbackSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ReportSettings":
        """Build settings from a merged config dict, ignoring unknown sections."""
        known = {key: config[key] for key in cls.model_fields if isinstance(config.get(key), dict)}
        return cls.model_validate(known)
