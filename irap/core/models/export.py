"""Export payload model (Pydantic only)."""

from pydantic import ConfigDict, Field

from .base import IRAPBaseModel
from .enums import ExportFormat


class ExportPayload(IRAPBaseModel):
    """A complete, ready-to-deliver report file."""

    model_config = ConfigDict(str_strip_whitespace=False)

    filename: str = Field(..., min_length=1, description="Suggested filename")
    content: bytes = Field(..., description="Encoded file body")
    media_type: str = Field(..., description="MIME type")
    export_format: ExportFormat = Field(..., description="Format of the body")
    row_count: int = Field(..., ge=1, description="Number of candidate rows")
