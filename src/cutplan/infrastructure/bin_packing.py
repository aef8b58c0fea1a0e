"""Shelf/guillotine sheet packing for one material.

Pieces are laid left-to-right on horizontal shelves; shelves are stacked
from the top of the sheet down. Every cut is a straight line across the
remaining stock, which is what a panel saw can actually do.

The search is first-fit in creation order with no backtracking:

1. existing shelves on existing sheets, oldest first;
2. a new shelf on the earliest sheet with enough headroom;
3. a new sheet.

The identity orientation is always tried before the rotated one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

from cutplan.domain.value_objects import Offcut, PieceInstance, Placement

logger = logging.getLogger(__name__)


class PieceTooLargeError(ValueError):
    """A piece does not fit the sheet in any permitted orientation.

    This is fatal for the whole run: no cutting plan exists until the
    piece list or the sheet size is corrected.

    Attributes:
        code: Stable error code for logs and API clients.
        piece_id: Identifier of the offending piece.
        material_id: Material the piece was being packed into.
        width: Piece width.
        height: Piece height.
        sheet_width: Sheet width.
        sheet_height: Sheet height.
    """

    code = "E-CUT-001"

    def __init__(
        self,
        piece_id: str,
        material_id: str,
        width: int,
        height: int,
        sheet_width: int,
        sheet_height: int,
    ) -> None:
        self.piece_id = piece_id
        self.material_id = material_id
        self.width = width
        self.height = height
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        super().__init__(
            f"{self.code} Piece too large: {piece_id} ({width}x{height}) "
            f"exceeds {material_id} sheet ({sheet_width}x{sheet_height})"
        )


@dataclass(frozen=True)
class PackingConfig:
    """Sheet and saw settings for packing one material.

    Attributes:
        sheet_width: Sheet width in mm.
        sheet_height: Sheet height in mm.
        kerf: Saw blade kerf in mm, added after every placed piece.
    """

    sheet_width: int = 1220
    sheet_height: int = 2440
    kerf: float = 4.0

    def __post_init__(self) -> None:
        if self.sheet_width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.sheet_height <= 0:
            raise ValueError("Sheet height must be positive")
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")


class Orientation(NamedTuple):
    """A candidate footprint for a piece."""

    width: int
    height: int
    rotated: bool


@dataclass
class Shelf:
    """A horizontal band of a sheet where pieces are placed left to right.

    The height is fixed by the piece that opens the shelf; later pieces
    must be no taller, so it is also the tallest piece on the shelf.

    Attributes:
        y: Top of the shelf.
        height: Shelf height.
        current_x: X position for the next piece.
        remaining_width: Width left for more pieces (kerf included).
    """

    y: float
    height: int
    current_x: float = 0.0
    remaining_width: float = 0.0

    def fits(self, orientation: Orientation, kerf: float) -> bool:
        return (
            self.height >= orientation.height
            and self.remaining_width >= orientation.width + kerf
        )


@dataclass
class Sheet:
    """A stock sheet being filled by one material's packing run.

    Attributes:
        index: 1-based sheet number within the material.
        shelves: Shelves in creation order.
        placements: Placements in the order they were made.
        offcuts: Reusable leftovers, filled in after packing.
        vertical_cursor: Y position where the next shelf would open.
    """

    index: int
    shelves: list[Shelf] = field(default_factory=list)
    placements: list[Placement] = field(default_factory=list)
    offcuts: list[Offcut] = field(default_factory=list)
    vertical_cursor: float = 0.0

    def headroom(self, sheet_height: int) -> float:
        """Height still available for new shelves."""
        return sheet_height - self.vertical_cursor


@dataclass
class PackedMaterial:
    """Result of packing one material.

    Attributes:
        material_id: The packed material.
        config: Sheet and kerf settings used.
        sheets: Sheets in creation order.
        placements: All placements in packing order.
        pieces: The instances that were packed, in input order.
    """

    material_id: str
    config: PackingConfig
    sheets: list[Sheet]
    placements: list[Placement]
    pieces: list[PieceInstance]


class ShelfPacker:
    """Single-pass shelf packer with the guillotine cut constraint.

    Attributes:
        config: Sheet size and kerf for the material being packed.
    """

    def __init__(self, config: PackingConfig) -> None:
        self.config = config

    def pack(
        self,
        material_id: str,
        pieces: Sequence[PieceInstance],
    ) -> PackedMaterial:
        """Pack all pieces of one material onto as few sheets as the heuristic finds.

        Args:
            material_id: Material being packed; stamped on every placement.
            pieces: Piece instances of this material, in input order.

        Returns:
            PackedMaterial with sheets and placements.

        Raises:
            PieceTooLargeError: If a piece fits the sheet in no permitted
                orientation.
        """
        sheets: list[Sheet] = []
        placements: list[Placement] = []

        ordered = self._sort_largest_first(pieces)
        logger.debug("Packing %d pieces of %s", len(ordered), material_id)

        for piece in ordered:
            orientations = self._orientations(piece)
            if not orientations:
                raise PieceTooLargeError(
                    piece_id=piece.id,
                    material_id=material_id,
                    width=piece.width,
                    height=piece.height,
                    sheet_width=self.config.sheet_width,
                    sheet_height=self.config.sheet_height,
                )

            placement = (
                self._place_on_existing_shelf(piece, material_id, sheets, orientations)
                or self._place_on_new_shelf(piece, material_id, sheets, orientations)
                or self._place_on_new_sheet(piece, material_id, sheets, orientations)
            )
            placements.append(placement)

        for sheet in sheets:
            logger.debug(
                "%s sheet %d: %d pieces on %d shelves",
                material_id,
                sheet.index,
                len(sheet.placements),
                len(sheet.shelves),
            )

        return PackedMaterial(
            material_id=material_id,
            config=self.config,
            sheets=sheets,
            placements=placements,
            pieces=list(pieces),
        )

    def _sort_largest_first(
        self, pieces: Sequence[PieceInstance]
    ) -> list[PieceInstance]:
        """Sort by largest dimension, descending. Ties keep input order."""
        return sorted(pieces, key=lambda p: p.max_dimension, reverse=True)

    def _orientations(self, piece: PieceInstance) -> list[Orientation]:
        """Candidate orientations that fit the physical sheet, identity first."""
        candidates = [Orientation(piece.width, piece.height, False)]
        if piece.can_rotate:
            candidates.append(Orientation(piece.height, piece.width, True))

        return [
            o
            for o in candidates
            if o.width <= self.config.sheet_width
            and o.height <= self.config.sheet_height
        ]

    def _place_on_existing_shelf(
        self,
        piece: PieceInstance,
        material_id: str,
        sheets: list[Sheet],
        orientations: list[Orientation],
    ) -> Placement | None:
        kerf = self.config.kerf
        for orientation in orientations:
            for sheet in sheets:
                for shelf in sheet.shelves:
                    if shelf.fits(orientation, kerf):
                        return self._place(piece, material_id, sheet, shelf, orientation)
        return None

    def _place_on_new_shelf(
        self,
        piece: PieceInstance,
        material_id: str,
        sheets: list[Sheet],
        orientations: list[Orientation],
    ) -> Placement | None:
        kerf = self.config.kerf
        for orientation in orientations:
            for sheet in sheets:
                if sheet.headroom(self.config.sheet_height) >= orientation.height + kerf:
                    shelf = self._open_shelf(sheet, orientation)
                    return self._place(piece, material_id, sheet, shelf, orientation)
        return None

    def _place_on_new_sheet(
        self,
        piece: PieceInstance,
        material_id: str,
        sheets: list[Sheet],
        orientations: list[Orientation],
    ) -> Placement:
        sheet = Sheet(index=len(sheets) + 1)
        sheets.append(sheet)
        logger.debug("Opened %s sheet %d for '%s'", material_id, sheet.index, piece.id)

        orientation = orientations[0]
        shelf = self._open_shelf(sheet, orientation)
        return self._place(piece, material_id, sheet, shelf, orientation)

    def _open_shelf(self, sheet: Sheet, orientation: Orientation) -> Shelf:
        shelf = Shelf(
            y=sheet.vertical_cursor,
            height=orientation.height,
            current_x=0.0,
            remaining_width=float(self.config.sheet_width),
        )
        sheet.shelves.append(shelf)
        sheet.vertical_cursor += orientation.height + self.config.kerf
        return shelf

    def _place(
        self,
        piece: PieceInstance,
        material_id: str,
        sheet: Sheet,
        shelf: Shelf,
        orientation: Orientation,
    ) -> Placement:
        """Record a placement at the shelf cursor and advance the cursor."""
        placement = Placement(
            piece_id=piece.id,
            material_id=material_id,
            sheet_index=sheet.index,
            x=shelf.current_x,
            y=shelf.y,
            width=piece.width,
            height=piece.height,
            rotated=orientation.rotated,
            banding=piece.banding,
        )

        advance = orientation.width + self.config.kerf
        shelf.current_x += advance
        shelf.remaining_width -= advance
        sheet.placements.append(placement)

        if orientation.rotated:
            logger.debug(
                "Piece '%s' placed rotated at (%s, %s) on sheet %d",
                piece.id,
                placement.x,
                placement.y,
                sheet.index,
            )

        return placement
