"""Base Pydantic schemas and helpers for IRAP models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Pydantic Base Classes
# =============================================================================


class IRAPBaseModel(BaseModel):
    """Base Pydantic model for all schemas with common configuration."""

    model_config = ConfigDict(
        # Allow ORM model conversion
        from_attributes=True,
        # Validate on assignment
        validate_assignment=True,
        # Use enum values instead of enum members
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class SnapshotModel(IRAPBaseModel):
    """Read-only snapshot of data owned by the external store.

    Accepts the store's camelCase field names as well as snake_case and
    ignores columns the pipeline does not use.
    """

    model_config = ConfigDict(
        frozen=True,
        validate_assignment=False,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


# =============================================================================
# Utility Functions
# =============================================================================


def parse_timestamp(value: object) -> datetime | None:
    """Parse a store timestamp (ISO text, with or without ``Z``).

    Returns None for anything that is not a recognizable timestamp.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
