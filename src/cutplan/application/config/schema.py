"""Pydantic models for the cutting configuration and the pricing catalog.

Cutting configuration (``config.json``)::

    {
      "default_sheet_mm": [1220, 2440],
      "saw_kerf_mm": 4,
      "min_offcut_mm": [100, 100],
      "materials": {"MDF18": {"rotate": true, "grain": "none"}}
    }

Pricing catalog (``paneles.tableros.json``); only ``sheet_mm`` is read::

    {"items": {"MDF18": {"sheet_mm": [1830, 2750], "price": 41.5}}}
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cutplan.domain.value_objects import GrainDirection


def _check_positive_pair(value: tuple[int, int], name: str) -> tuple[int, int]:
    if value[0] <= 0 or value[1] <= 0:
        raise ValueError(f"{name} dimensions must be positive")
    return value


class MaterialCuttingSchema(BaseModel):
    """Per-material cutting policy.

    Attributes:
        rotate: Whether pieces of this material may be rotated.
        grain: Grain direction of the material's sheets.
    """

    model_config = ConfigDict(extra="forbid")

    rotate: bool = Field(default=True, description="Allow 90 degree rotation")
    grain: GrainDirection = Field(
        default=GrainDirection.NONE, description="Sheet grain direction"
    )


class CuttingConfiguration(BaseModel):
    """Root model of the cutting configuration file.

    Attributes:
        default_sheet_mm: Sheet (width, height) for materials without a
            catalog sheet size.
        saw_kerf_mm: Saw blade kerf.
        min_offcut_mm: Minimum (width, height) of a reusable offcut.
        materials: Per-material cutting policies.
    """

    model_config = ConfigDict(extra="forbid")

    default_sheet_mm: tuple[int, int] = Field(
        default=(1220, 2440), description="Default sheet width and height in mm"
    )
    saw_kerf_mm: float = Field(
        default=4.0, ge=0, le=20, description="Saw kerf width in mm"
    )
    min_offcut_mm: tuple[int, int] = Field(
        default=(100, 100), description="Minimum offcut width and height in mm"
    )
    materials: dict[str, MaterialCuttingSchema] = Field(
        default_factory=dict, description="Per-material cutting policies"
    )

    @field_validator("default_sheet_mm")
    @classmethod
    def validate_sheet(cls, v: tuple[int, int]) -> tuple[int, int]:
        return _check_positive_pair(v, "Sheet")

    @field_validator("min_offcut_mm")
    @classmethod
    def validate_min_offcut(cls, v: tuple[int, int]) -> tuple[int, int]:
        if v[0] < 0 or v[1] < 0:
            raise ValueError("Minimum offcut dimensions must be non-negative")
        return v


class CatalogItemSchema(BaseModel):
    """A pricing catalog entry; fields other than ``sheet_mm`` are ignored."""

    model_config = ConfigDict(extra="ignore")

    sheet_mm: tuple[int, int] | None = None

    @field_validator("sheet_mm")
    @classmethod
    def validate_sheet(cls, v: tuple[int, int] | None) -> tuple[int, int] | None:
        if v is None:
            return v
        return _check_positive_pair(v, "Catalog sheet")


class PricingCatalog(BaseModel):
    """Panel pricing catalog, used here only for per-material sheet sizes."""

    model_config = ConfigDict(extra="ignore")

    items: dict[str, CatalogItemSchema] = Field(default_factory=dict)
