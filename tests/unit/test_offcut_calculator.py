"""Unit tests for OffcutCalculator."""

from __future__ import annotations

import pytest

from cutplan.domain.value_objects import Offcut, PieceInstance, Placement
from cutplan.infrastructure.bin_packing import PackingConfig, Sheet, ShelfPacker
from cutplan.infrastructure.offcut_calculator import OffcutCalculator


@pytest.fixture
def calculator() -> OffcutCalculator:
    """Calculator for 1220x2440 sheets with a 100x100 minimum."""
    return OffcutCalculator(sheet_width=1220, sheet_height=2440, min_offcut=(100, 100))


def _sheet(*placements: tuple[float, float, int, int]) -> Sheet:
    sheet = Sheet(index=1)
    for n, (x, y, w, h) in enumerate(placements):
        sheet.placements.append(
            Placement(
                piece_id=f"P{n}",
                material_id="MDF18",
                sheet_index=1,
                x=x,
                y=y,
                width=w,
                height=h,
            )
        )
    return sheet


class TestOffcutCalculator:
    """Tests for right and bottom strip detection."""

    def test_right_and_bottom_strips(self, calculator: OffcutCalculator) -> None:
        """A 600x800 piece leaves a full-height right strip and a bottom strip."""
        offcuts = calculator.calculate(_sheet((0, 0, 600, 800)))

        assert offcuts == [
            Offcut(sheet_index=1, x=600, y=0, width=620, height=2440),
            Offcut(sheet_index=1, x=0, y=800, width=600, height=1640),
        ]

    def test_narrow_right_strip_is_dropped(self, calculator: OffcutCalculator) -> None:
        """A 50 mm right strip is below the 100 mm minimum."""
        offcuts = calculator.calculate(_sheet((0, 0, 1170, 500)))

        assert len(offcuts) == 1
        assert offcuts[0].x == 0
        assert offcuts[0].y == 500
        assert (offcuts[0].width, offcuts[0].height) == (1170, 1940)

    def test_short_bottom_strip_is_dropped(self, calculator: OffcutCalculator) -> None:
        offcuts = calculator.calculate(_sheet((0, 0, 1000, 2400)))

        assert offcuts == [Offcut(sheet_index=1, x=1000, y=0, width=220, height=2440)]

    def test_both_dimensions_must_meet_minimum(self) -> None:
        """A strip must satisfy the minimum width and the minimum height."""
        calculator = OffcutCalculator(1220, 2440, min_offcut=(300, 100))

        offcuts = calculator.calculate(_sheet((0, 0, 1000, 500)))

        assert [(o.x, o.y) for o in offcuts] == [(0, 500)]

    def test_full_sheet_has_no_offcuts(self, calculator: OffcutCalculator) -> None:
        assert calculator.calculate(_sheet((0, 0, 1220, 2440))) == []

    def test_empty_sheet_has_no_offcuts(self, calculator: OffcutCalculator) -> None:
        assert calculator.calculate(Sheet(index=1)) == []

    def test_extent_uses_rotated_footprint(self, calculator: OffcutCalculator) -> None:
        """A rotated piece occupies its swapped dimensions."""
        sheet = Sheet(index=1)
        sheet.placements.append(
            Placement(
                piece_id="R",
                material_id="MDF18",
                sheet_index=1,
                x=0,
                y=0,
                width=800,
                height=300,
                rotated=True,
            )
        )

        offcuts = calculator.calculate(sheet)

        assert offcuts[0].x == 300
        assert offcuts[1].y == 800

    def test_extent_spans_all_shelves(self, calculator: OffcutCalculator) -> None:
        sheet = _sheet((0, 0, 900, 400), (904, 0, 200, 300), (0, 404, 500, 300))

        offcuts = calculator.calculate(sheet)

        assert offcuts[0].x == 1104
        assert offcuts[0].width == 116
        assert offcuts[1].y == 704

    def test_calculate_all_fills_sheets(self, calculator: OffcutCalculator) -> None:
        pieces = [
            PieceInstance(id="A", material_id="MDF18", width=1000, height=1500)
            for _ in range(2)
        ]
        packed = ShelfPacker(PackingConfig()).pack("MDF18", pieces)

        offcuts = calculator.calculate_all(packed.sheets)

        assert len(offcuts) == 4
        assert [o.sheet_index for o in offcuts] == [1, 1, 2, 2]
        assert all(sheet.offcuts for sheet in packed.sheets)

    def test_offcuts_never_overlap_placements(self, calculator: OffcutCalculator) -> None:
        pieces = [
            PieceInstance(id=f"P{n}", material_id="MDF18", width=150 + n * 37, height=120 + n * 23)
            for n in range(20)
        ]
        packed = ShelfPacker(PackingConfig()).pack("MDF18", pieces)

        calculator.calculate_all(packed.sheets)

        for sheet in packed.sheets:
            for offcut in sheet.offcuts:
                for placement in sheet.placements:
                    assert not offcut.overlaps(placement)
