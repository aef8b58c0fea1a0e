"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeResponseSchema(BaseModel):
    """Cutting report with the flat cut list."""

    project_id: str | None = Field(default=None, description="Project identifier")
    material_sheets: dict[str, dict[str, Any]] = Field(
        ..., description="Per-material metrics, placements and offcuts"
    )
    cut_list: list[dict[str, Any]] = Field(
        ..., description="Every placement in packing order"
    )
    total_sheets: int = Field(..., description="Sheets used across all materials")
    total_pieces: int = Field(..., description="Pieces placed across all materials")


class ExportFormatsSchema(BaseModel):
    """Available export formats."""

    formats: list[str]


class ErrorResponseSchema(BaseModel):
    """Error response body."""

    error: str
    error_type: str
    details: Any = None
