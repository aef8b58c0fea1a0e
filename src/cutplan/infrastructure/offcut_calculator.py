"""Identification of reusable leftover strips on packed sheets."""

from __future__ import annotations

import logging
from typing import Sequence

from cutplan.domain.value_objects import Offcut
from cutplan.infrastructure.bin_packing import Sheet

logger = logging.getLogger(__name__)


class OffcutCalculator:
    """Finds salvageable leftovers once a sheet's placements are final.

    At most two strips per sheet are reported: the full-height strip to
    the right of the used extent, and the strip below the used extent
    (as wide as the used extent). Gaps between shelves and other
    fragmented remainders are not reported.

    Attributes:
        sheet_width: Sheet width in mm.
        sheet_height: Sheet height in mm.
        min_offcut: Minimum (width, height) a strip needs to be kept.
    """

    def __init__(
        self,
        sheet_width: int,
        sheet_height: int,
        min_offcut: tuple[int, int],
    ) -> None:
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self.min_offcut = min_offcut

    def calculate(self, sheet: Sheet) -> list[Offcut]:
        """Compute the offcuts of one sheet.

        Args:
            sheet: A sheet whose placements are final.

        Returns:
            Zero, one or two offcuts, right strip first.
        """
        if not sheet.placements:
            return []

        max_x = max(p.right_edge for p in sheet.placements)
        max_y = max(p.bottom_edge for p in sheet.placements)

        candidates = [
            (max_x, 0.0, self.sheet_width - max_x, float(self.sheet_height)),
            (0.0, max_y, max_x, self.sheet_height - max_y),
        ]

        min_w, min_h = self.min_offcut
        offcuts: list[Offcut] = []
        for x, y, width, height in candidates:
            if width <= 0 or height <= 0:
                continue
            if width >= min_w and height >= min_h:
                offcuts.append(
                    Offcut(sheet_index=sheet.index, x=x, y=y, width=width, height=height)
                )
            else:
                logger.debug(
                    "Sheet %d: leftover %sx%s at (%s, %s) below minimum %sx%s",
                    sheet.index,
                    width,
                    height,
                    x,
                    y,
                    min_w,
                    min_h,
                )

        return offcuts

    def calculate_all(self, sheets: Sequence[Sheet]) -> list[Offcut]:
        """Fill ``offcuts`` on every sheet and return them all in sheet order."""
        all_offcuts: list[Offcut] = []
        for sheet in sheets:
            sheet.offcuts = self.calculate(sheet)
            all_offcuts.extend(sheet.offcuts)
        return all_offcuts
