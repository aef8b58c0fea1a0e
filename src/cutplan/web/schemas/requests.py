"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from cutplan.domain.value_objects import PieceRequirement


class PieceSchema(BaseModel):
    """One piece list row.

    Dimensions and quantity are passed through loosely typed; malformed
    values fall back to safe minimums during expansion, as for CSV input.
    """

    piece_id: str = Field(..., min_length=1, description="Piece type identifier")
    material_id: str = Field(..., min_length=1, description="Sheet material identifier")
    w_mm: int | float | str = Field(..., description="Piece width in millimetres")
    h_mm: int | float | str = Field(..., description="Piece height in millimetres")
    qty: int | float | str = Field(default=1, description="Number of units")
    rotate: bool = Field(default=False, description="Whether the piece may be rotated")
    banding: str = Field(default="-", description="Edge banding code")
    notes: str = Field(default="", description="Free-text note")

    def to_requirement(self) -> PieceRequirement:
        return PieceRequirement(
            piece_id=self.piece_id,
            material_id=self.material_id,
            width_mm=self.w_mm,
            height_mm=self.h_mm,
            quantity=self.qty,
            rotatable=self.rotate,
            banding=self.banding or "-",
            note=self.notes,
        )


class OptimizeRequest(BaseModel):
    """Request for optimizing a piece list."""

    pieces: list[PieceSchema] = Field(..., description="Piece list rows")
    config: dict[str, Any] = Field(
        default_factory=dict, description="Cutting configuration JSON"
    )
    catalog: dict[str, Any] | None = Field(
        default=None, description="Optional pricing catalog with per-material sheet sizes"
    )
    project_id: str | None = Field(default=None, description="Project identifier")
