"""Configuration loading and typed settings."""

from .loader import ConfigLoader, get_config_loader, load_config
from .settings import (
    ExportSettings,
    FeedbackSettings,
    LoggingSettings,
    ReportSettings,
    StorageSettings,
)


def load_settings(overrides: dict | None = None) -> ReportSettings:
    """Load the config hierarchy and return the typed settings view."""
    return ReportSettings.from_config(load_config(overrides))


__all__ = [
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "load_settings",
    "ReportSettings",
    "StorageSettings",
    "FeedbackSettings",
    "ExportSettings",
    "LoggingSettings",
]
