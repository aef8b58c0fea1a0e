"""Domain services for preparing pieces before packing."""

from .material_grouper import group_by_material
from .piece_expander import expand_pieces

__all__ = [
    "expand_pieces",
    "group_by_material",
]
