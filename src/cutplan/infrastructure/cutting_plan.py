"""Cutting plan pipeline across all materials of a piece list."""

from __future__ import annotations

import logging
from typing import Sequence

from cutplan.domain.services import expand_pieces, group_by_material
from cutplan.domain.value_objects import (
    CuttingSettings,
    PieceInstance,
    PieceRequirement,
)
from cutplan.infrastructure.bin_packing import PackedMaterial, PackingConfig, ShelfPacker
from cutplan.infrastructure.metrics_reporter import CuttingReport, MetricsReporter
from cutplan.infrastructure.offcut_calculator import OffcutCalculator

logger = logging.getLogger(__name__)


class CuttingPlanService:
    """Coordinates packing across material groups.

    Pieces are expanded, grouped by material and each group is packed on
    its own sheets. Every material is packed before the report is built,
    so a piece that fits nowhere aborts the run with nothing produced.

    Attributes:
        settings: Resolved cutting settings (sheet sizes, kerf, policies).
        reporter: Metrics reporter assembling the final report.
    """

    def __init__(self, settings: CuttingSettings) -> None:
        self.settings = settings
        self.reporter = MetricsReporter()

    def optimize(
        self,
        requirements: Sequence[PieceRequirement],
        project_id: str | None = None,
    ) -> CuttingReport:
        """Produce the cutting plan for a piece list.

        Args:
            requirements: Piece list rows.
            project_id: Optional project identifier stamped on the report.

        Returns:
            CuttingReport keyed by material id.

        Raises:
            PieceTooLargeError: If any piece fits its sheet in no permitted
                orientation. No partial report is returned.
        """
        instances = expand_pieces(requirements, self.settings.rotation_policy())
        groups = group_by_material(instances)

        logger.info(
            "Optimizing %d pieces across %d materials",
            len(instances),
            len(groups),
        )

        packed_materials: list[PackedMaterial] = []
        for material_id, pieces in groups.items():
            packed_materials.append(self.pack_material(material_id, pieces))

        grains = {
            material_id: self.settings.policy_for(material_id).grain
            for material_id in groups
        }
        return self.reporter.assemble(
            packed_materials, project_id=project_id, grains=grains
        )

    def pack_material(
        self, material_id: str, pieces: Sequence[PieceInstance]
    ) -> PackedMaterial:
        """Pack one material group and compute its offcuts."""
        sheet = self.settings.sheet_for(material_id)
        config = PackingConfig(
            sheet_width=sheet.width,
            sheet_height=sheet.height,
            kerf=self.settings.kerf,
        )

        packed = ShelfPacker(config).pack(material_id, pieces)
        OffcutCalculator(
            sheet_width=sheet.width,
            sheet_height=sheet.height,
            min_offcut=self.settings.min_offcut,
        ).calculate_all(packed.sheets)

        logger.debug(
            "Material %s: %d pieces -> %d sheets (%dx%d)",
            material_id,
            len(pieces),
            len(packed.sheets),
            sheet.width,
            sheet.height,
        )
        return packed
