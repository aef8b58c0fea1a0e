"""Pydantic schemas for the REST API."""

from cutplan.web.schemas.requests import OptimizeRequest, PieceSchema
from cutplan.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    OptimizeResponseSchema,
)

__all__ = [
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "OptimizeRequest",
    "OptimizeResponseSchema",
    "PieceSchema",
]
