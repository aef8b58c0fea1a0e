"""Value objects for the cutting plan domain.

Immutable data types shared by the expander, grouper, packer and the
report. Lengths are millimetres throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GrainDirection(str, Enum):
    """Grain direction of a sheet material.

    Attributes:
        NONE: No visible grain (MDF, melamine, most boards).
        LENGTH: Grain runs along the sheet height.
        WIDTH: Grain runs along the sheet width.
    """

    NONE = "none"
    LENGTH = "length"
    WIDTH = "width"


@dataclass(frozen=True)
class SheetSize:
    """Stock sheet dimensions in millimetres."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Sheet dimensions must be positive")

    @property
    def area_m2(self) -> float:
        """Sheet area in square metres."""
        return self.width * self.height / 1e6


@dataclass(frozen=True)
class MaterialPolicy:
    """Per-material cutting policy.

    Attributes:
        rotate: Whether pieces of this material may be turned 90 degrees.
        grain: Grain direction of the material's sheets.
    """

    rotate: bool = True
    grain: GrainDirection = GrainDirection.NONE


@dataclass(frozen=True)
class PieceRequirement:
    """A row of the piece list: one piece type with a quantity.

    Fields come straight from an external loader and are not validated
    here. Dimension and quantity values may be strings or malformed; the
    piece expander decides what to make of them.

    Attributes:
        piece_id: Identifier of the piece type (shared by all its units).
        material_id: Sheet material the piece is cut from.
        width_mm: Piece width.
        height_mm: Piece height.
        quantity: Number of units required.
        rotatable: Whether the piece itself tolerates rotation.
        banding: Edge banding code ("-" when none).
        note: Free-text note.
    """

    piece_id: str
    material_id: str
    width_mm: int | str
    height_mm: int | str
    quantity: int | str = 1
    rotatable: bool = False
    banding: str = "-"
    note: str = ""


@dataclass(frozen=True)
class PieceInstance:
    """One physical unit to be cut, derived from a PieceRequirement."""

    id: str
    material_id: str
    width: int
    height: int
    can_rotate: bool = False
    banding: str = "-"
    note: str = ""

    @property
    def max_dimension(self) -> int:
        return max(self.width, self.height)

    @property
    def area(self) -> int:
        """Nominal area in square millimetres."""
        return self.width * self.height


@dataclass(frozen=True)
class Placement:
    """A piece instance placed on a sheet.

    ``width`` and ``height`` are the piece's nominal dimensions. The
    footprint on the sheet is given by ``placed_width`` and
    ``placed_height``, which are swapped when the piece is rotated.

    Attributes:
        piece_id: Identifier of the placed piece.
        material_id: Material of the sheet.
        sheet_index: 1-based index of the sheet within its material.
        x: Left edge of the footprint.
        y: Top edge of the footprint (shelves grow downwards from y=0).
        width: Nominal piece width.
        height: Nominal piece height.
        rotated: True if the piece is turned 90 degrees.
        banding: Edge banding code carried through for labels.
    """

    piece_id: str
    material_id: str
    sheet_index: int
    x: float
    y: float
    width: int
    height: int
    rotated: bool = False
    banding: str = "-"

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.sheet_index < 1:
            raise ValueError("Sheet index must be at least 1")

    @property
    def placed_width(self) -> int:
        """Width of the footprint (accounts for rotation)."""
        return self.height if self.rotated else self.width

    @property
    def placed_height(self) -> int:
        """Height of the footprint (accounts for rotation)."""
        return self.width if self.rotated else self.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.placed_height

    def overlaps(self, other: Placement) -> bool:
        """Axis-aligned overlap test against another placement on the same sheet."""
        if self.sheet_index != other.sheet_index:
            return False
        return (
            self.x < other.right_edge
            and other.x < self.right_edge
            and self.y < other.bottom_edge
            and other.y < self.bottom_edge
        )


@dataclass(frozen=True)
class Offcut:
    """A reusable leftover rectangle on a sheet."""

    sheet_index: int
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Offcut dimensions must be positive")

    def overlaps(self, placement: Placement) -> bool:
        if placement.sheet_index != self.sheet_index:
            return False
        return (
            self.x < placement.right_edge
            and placement.x < self.x + self.width
            and self.y < placement.bottom_edge
            and placement.y < self.y + self.height
        )


@dataclass(frozen=True)
class CuttingSettings:
    """Resolved cutting configuration for one optimizer run.

    Attributes:
        default_sheet: Sheet size used when a material has no override.
        kerf: Saw blade kerf in millimetres.
        min_offcut: Minimum (width, height) for a leftover to count as offcut.
        materials: Per-material policies; missing materials use the default.
        sheet_overrides: Per-material sheet sizes (from the pricing catalog).
    """

    default_sheet: SheetSize = field(default_factory=lambda: SheetSize(1220, 2440))
    kerf: float = 4.0
    min_offcut: tuple[int, int] = (100, 100)
    materials: dict[str, MaterialPolicy] = field(default_factory=dict)
    sheet_overrides: dict[str, SheetSize] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.min_offcut[0] < 0 or self.min_offcut[1] < 0:
            raise ValueError("Minimum offcut size must be non-negative")

    def sheet_for(self, material_id: str) -> SheetSize:
        """Sheet size for a material, falling back to the default."""
        return self.sheet_overrides.get(material_id, self.default_sheet)

    def policy_for(self, material_id: str) -> MaterialPolicy:
        return self.materials.get(material_id, MaterialPolicy())

    def rotation_policy(self) -> dict[str, bool]:
        """Material id to rotation permission, for the piece expander."""
        return {material_id: p.rotate for material_id, p in self.materials.items()}
