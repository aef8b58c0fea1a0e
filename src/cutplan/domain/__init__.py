"""Domain layer - pieces, placements and sheet policies."""

from .services import expand_pieces, group_by_material
from .value_objects import (
    CuttingSettings,
    GrainDirection,
    MaterialPolicy,
    Offcut,
    PieceInstance,
    PieceRequirement,
    Placement,
    SheetSize,
)

__all__ = [
    "CuttingSettings",
    "GrainDirection",
    "MaterialPolicy",
    "Offcut",
    "PieceInstance",
    "PieceRequirement",
    "Placement",
    "SheetSize",
    "expand_pieces",
    "group_by_material",
]
