"""Usage and waste metrics and the cutting report.

Values are kept at full precision; only ``to_dict`` rounds, so repeated
runs serialize identically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from cutplan.domain.value_objects import GrainDirection, Offcut, Placement
from cutplan.infrastructure.bin_packing import PackedMaterial

logger = logging.getLogger(__name__)

AREA_DECIMALS = 4
PCT_DECIMALS = 3
COORD_DECIMALS = 3


def _number(value: float) -> int | float:
    """Emit integral values as ints so reports read ``304`` rather than ``304.0``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def placement_to_dict(placement: Placement) -> dict[str, Any]:
    return {
        "piece_id": placement.piece_id,
        "material_id": placement.material_id,
        "sheet_index": placement.sheet_index,
        "x": _number(round(placement.x, COORD_DECIMALS)),
        "y": _number(round(placement.y, COORD_DECIMALS)),
        "w": placement.width,
        "h": placement.height,
        "rotated": placement.rotated,
        "banding": placement.banding,
    }


def offcut_to_dict(offcut: Offcut) -> dict[str, Any]:
    return {
        "sheet_index": offcut.sheet_index,
        "x": _number(round(offcut.x, COORD_DECIMALS)),
        "y": _number(round(offcut.y, COORD_DECIMALS)),
        "w": _number(round(offcut.width, COORD_DECIMALS)),
        "h": _number(round(offcut.height, COORD_DECIMALS)),
    }


@dataclass(frozen=True)
class MaterialSheetsReport:
    """Sheet usage for one material.

    Attributes:
        material_id: The material.
        sheet_mm: Sheet (width, height) used for this material.
        kerf_mm: Kerf used.
        sheets_used: Number of sheets.
        sheet_area_m2: Area of one sheet.
        pieces_area_m2: Nominal area of all pieces.
        waste_area_m2: Purchased area not covered by pieces.
        waste_pct: waste_area_m2 as a fraction of purchased area.
        placements: Placements sheet by sheet.
        offcuts: Offcuts sheet by sheet.
        grain: Grain direction of the material, for diagrams only.
    """

    material_id: str
    sheet_mm: tuple[int, int]
    kerf_mm: float
    sheets_used: int
    sheet_area_m2: float
    pieces_area_m2: float
    waste_area_m2: float
    waste_pct: float
    placements: tuple[Placement, ...] = ()
    offcuts: tuple[Offcut, ...] = ()
    grain: GrainDirection = GrainDirection.NONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize with fixed rounding."""
        return {
            "sheet_mm": list(self.sheet_mm),
            "kerf_mm": _number(self.kerf_mm),
            "sheets_used": self.sheets_used,
            "sheet_area_m2": round(self.sheet_area_m2, AREA_DECIMALS),
            "pieces_area_m2": round(self.pieces_area_m2, AREA_DECIMALS),
            "waste_area_m2": round(self.waste_area_m2, AREA_DECIMALS),
            "waste_pct": round(self.waste_pct, PCT_DECIMALS),
            "placements": [placement_to_dict(p) for p in self.placements],
            "offcuts": [offcut_to_dict(o) for o in self.offcuts],
        }


@dataclass(frozen=True)
class CuttingReport:
    """Cutting plan for all materials of a project.

    Attributes:
        materials: Material id to its report, in packing order.
        cut_list: Every placement in packing order, across materials.
        project_id: Optional project identifier for exported files.
    """

    materials: dict[str, MaterialSheetsReport] = field(default_factory=dict)
    cut_list: tuple[Placement, ...] = ()
    project_id: str | None = None

    @property
    def total_sheets(self) -> int:
        return sum(r.sheets_used for r in self.materials.values())

    @property
    def total_pieces(self) -> int:
        return len(self.cut_list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.project_id is not None:
            data["project_id"] = self.project_id
        data["material_sheets"] = {
            material_id: report.to_dict()
            for material_id, report in self.materials.items()
        }
        return data

    def cut_list_rows(self) -> list[dict[str, Any]]:
        """The flat cut list as one dict per placement."""
        return [placement_to_dict(p) for p in self.cut_list]


class MetricsReporter:
    """Builds per-material metrics and assembles the final report."""

    def build(
        self,
        packed: PackedMaterial,
        grain: GrainDirection = GrainDirection.NONE,
    ) -> MaterialSheetsReport:
        """Compute metrics for one packed material.

        Offcuts are taken from the sheets, so the offcut calculator must
        have run first. Offcuts do not reduce the waste figures.

        Args:
            packed: Packing result with offcuts filled in.
            grain: Grain direction of the material.

        Returns:
            MaterialSheetsReport at full precision.
        """
        config = packed.config
        sheets_used = len(packed.sheets)
        sheet_area_m2 = config.sheet_width * config.sheet_height / 1e6
        pieces_area_m2 = sum(p.area for p in packed.pieces) / 1e6

        total_area_m2 = sheets_used * sheet_area_m2
        waste_area_m2 = total_area_m2 - pieces_area_m2
        waste_pct = waste_area_m2 / total_area_m2 if total_area_m2 else 0.0

        placements: list[Placement] = []
        offcuts: list[Offcut] = []
        for sheet in packed.sheets:
            placements.extend(sheet.placements)
            offcuts.extend(sheet.offcuts)

        logger.info(
            "Cut Optimizer: %d sheets used | waste %.1f%% | material %s",
            sheets_used,
            waste_pct * 100,
            packed.material_id,
        )

        return MaterialSheetsReport(
            material_id=packed.material_id,
            sheet_mm=(config.sheet_width, config.sheet_height),
            kerf_mm=config.kerf,
            sheets_used=sheets_used,
            sheet_area_m2=sheet_area_m2,
            pieces_area_m2=pieces_area_m2,
            waste_area_m2=waste_area_m2,
            waste_pct=waste_pct,
            placements=tuple(placements),
            offcuts=tuple(offcuts),
            grain=grain,
        )

    def assemble(
        self,
        packed_materials: Sequence[PackedMaterial],
        project_id: str | None = None,
        grains: Mapping[str, GrainDirection] | None = None,
    ) -> CuttingReport:
        """Assemble the report from every packed material."""
        grains = grains or {}
        materials: dict[str, MaterialSheetsReport] = {}
        cut_list: list[Placement] = []

        for packed in packed_materials:
            materials[packed.material_id] = self.build(
                packed, grains.get(packed.material_id, GrainDirection.NONE)
            )
            cut_list.extend(packed.placements)

        return CuttingReport(
            materials=materials,
            cut_list=tuple(cut_list),
            project_id=project_id,
        )
