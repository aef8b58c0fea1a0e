"""End-to-end tests for the cutting plan pipeline.

These tests run piece lists through expansion, grouping, packing, offcut
detection, reporting and export using real files.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from cutplan.application import (
    BatchOptimizeCommand,
    OptimizeCutsCommand,
    load_settings,
)
from cutplan.domain.value_objects import CuttingSettings, PieceRequirement
from cutplan.infrastructure.bin_packing import PieceTooLargeError
from cutplan.infrastructure.cutting_plan import CuttingPlanService


pytestmark = pytest.mark.integration


# =============================================================================
# Service
# =============================================================================


class TestCuttingPlanService:
    """Tests for CuttingPlanService across materials."""

    def test_sixteen_panels_on_one_sheet(
        self, default_settings: CuttingSettings, sixteen_small_panels: list[PieceRequirement]
    ) -> None:
        report = CuttingPlanService(default_settings).optimize(sixteen_small_panels)

        material = report.materials["MDF18"]
        assert material.sheets_used == 1
        assert material.waste_pct == pytest.approx((2.9768 - 0.96) / 2.9768)
        assert len(material.placements) == 16
        assert [(o.x, o.y, o.width, o.height) for o in material.offcuts] == [
            (0, 812, 1212, 1628)
        ]

    def test_oversize_piece_aborts_all_materials(self, default_settings: CuttingSettings) -> None:
        """A failing material stops the run even when others packed fine."""
        requirements = [
            PieceRequirement("OK", "OAK19", 500, 500, 3),
            PieceRequirement("BIG", "MDF18", 1300, 500, 1, rotatable=False),
        ]

        with pytest.raises(PieceTooLargeError) as exc_info:
            CuttingPlanService(default_settings).optimize(requirements)

        assert exc_info.value.material_id == "MDF18"

    def test_material_policy_blocks_rotation(self, config_file: Path) -> None:
        """OAK19 forbids rotation even for pieces flagged rotatable."""
        settings = load_settings(config_file)
        requirements = [PieceRequirement("DOOR", "OAK19", 1300, 500, 1, rotatable=True)]

        with pytest.raises(PieceTooLargeError):
            CuttingPlanService(settings).optimize(requirements)

    def test_materials_never_share_sheets(self, default_settings: CuttingSettings) -> None:
        requirements = [
            PieceRequirement("A", "MDF18", 200, 200, 1),
            PieceRequirement("B", "OAK19", 200, 200, 1),
        ]

        report = CuttingPlanService(default_settings).optimize(requirements)

        assert report.materials["MDF18"].sheets_used == 1
        assert report.materials["OAK19"].sheets_used == 1
        assert report.total_sheets == 2

    def test_grain_from_policy(self, config_file: Path) -> None:
        settings = load_settings(config_file)
        requirements = [PieceRequirement("DOOR", "OAK19", 396, 716, 1)]

        report = CuttingPlanService(settings).optimize(requirements)

        assert report.materials["OAK19"].grain.value == "length"

    def test_empty_piece_list(self, default_settings: CuttingSettings) -> None:
        report = CuttingPlanService(default_settings).optimize([])

        assert report.materials == {}
        assert report.cut_list == ()


# =============================================================================
# Commands
# =============================================================================


class TestOptimizeCutsCommand:
    """Tests for reading, optimizing and exporting one piece list."""

    def test_execute_with_exports(
        self, pieces_csv: Path, config_file: Path, tmp_path: Path
    ) -> None:
        command = OptimizeCutsCommand(load_settings(config_file))
        out = tmp_path / "out"

        result = command.execute(pieces_csv, out, formats=["json", "csv"], project_name="den")

        assert set(result.files) == {"json", "csv"}
        data = json.loads(result.files["json"].read_text(encoding="utf-8"))
        assert list(data["material_sheets"]) == ["MDF18", "OAK19"]

        with result.files["csv"].open(encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == result.report.total_pieces == 7
        assert {r["material_id"] for r in rows} == {"MDF18", "OAK19"}
        assert all(r["rotated"] in ("true", "false") for r in rows)

    def test_cut_list_matches_report(self, pieces_csv: Path, config_file: Path) -> None:
        result = OptimizeCutsCommand(load_settings(config_file)).execute(pieces_csv)

        per_material = [p for m in result.report.materials.values() for p in m.placements]
        assert sorted(per_material, key=id) == sorted(result.report.cut_list, key=id)
        assert result.files == {}

    def test_banding_carried_to_placements(self, pieces_csv: Path, config_file: Path) -> None:
        result = OptimizeCutsCommand(load_settings(config_file)).execute(pieces_csv)

        bandings = {p.piece_id: p.banding for p in result.report.cut_list}
        assert bandings == {"SIDE": "L1", "SHELF": "-", "DOOR": "L4"}


class TestBatchOptimizeCommand:
    """Tests for batch processing of project directories."""

    def test_batch_outputs(self, config_file: Path, tmp_path: Path) -> None:
        projects = tmp_path / "projects"
        for name in ("beta", "alpha"):
            (projects / name).mkdir(parents=True)
            (projects / name / "pieces.csv").write_text(
                "piece_id,material_id,w_mm,h_mm,qty,rotate\n"
                f"{name.upper()},MDF18,700,400,3,true\n",
                encoding="utf-8",
            )
        reports = tmp_path / "reports"

        results = BatchOptimizeCommand(load_settings(config_file)).execute(projects, reports)

        assert list(results) == ["alpha", "beta"]
        data = json.loads((reports / "cuts-alpha.json").read_text(encoding="utf-8"))
        assert data["project_id"] == "alpha"
        assert (projects / "beta" / "cutlist.csv").read_text(encoding="utf-8").startswith(
            "piece_id,material_id,sheet_index"
        )
        assert "Cut Layout - beta - MDF18" in (reports / "cuts-beta.svg").read_text(
            encoding="utf-8"
        )
