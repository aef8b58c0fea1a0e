"""Application commands orchestrating a full optimizer run.

Reading inputs and writing outputs happen here, outside the optimizer.
Outputs are written only after every material has been packed, so a
failed run leaves no files behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from cutplan.application.config import (
    config_to_settings,
    load_catalog,
    load_config,
)
from cutplan.domain.value_objects import CuttingSettings, PieceRequirement
from cutplan.infrastructure.cutting_plan import CuttingPlanService
from cutplan.infrastructure.exporters import (
    CutListCsvExporter,
    ExportManager,
    JsonReportExporter,
    SvgExporter,
)
from cutplan.infrastructure.metrics_reporter import CuttingReport
from cutplan.infrastructure.piece_list_reader import read_piece_list

logger = logging.getLogger(__name__)

PIECES_FILENAME = "pieces.csv"
CUT_LIST_FILENAME = "cutlist.csv"


@dataclass
class OptimizeResult:
    """Outcome of an optimizer run.

    Attributes:
        report: The cutting report.
        files: Format name to written path (empty if nothing was exported).
    """

    report: CuttingReport
    files: dict[str, Path] = field(default_factory=dict)


def load_settings(config_path: Path, catalog_path: Path | None = None) -> CuttingSettings:
    """Load configuration and catalog into CuttingSettings.

    Raises:
        ConfigError: If either file is invalid.
    """
    return config_to_settings(load_config(config_path), load_catalog(catalog_path))


class OptimizeCutsCommand:
    """Optimizes one piece list and exports the result.

    Attributes:
        settings: Cutting settings used for every run of this command.
    """

    def __init__(self, settings: CuttingSettings) -> None:
        self.settings = settings
        self.service = CuttingPlanService(settings)

    def optimize(
        self,
        requirements: Sequence[PieceRequirement],
        project_id: str | None = None,
    ) -> CuttingReport:
        return self.service.optimize(requirements, project_id=project_id)

    def execute(
        self,
        pieces_path: Path,
        output_dir: Path | None = None,
        formats: Sequence[str] = (),
        project_name: str = "cutplan",
    ) -> OptimizeResult:
        """Read a piece list, optimize it and export the report.

        Args:
            pieces_path: Piece list CSV.
            output_dir: Directory for exported files.
            formats: Export formats; nothing is written when empty.
            project_name: Project id for the report and file names.

        Returns:
            OptimizeResult with the report and exported files.

        Raises:
            PieceListError: If the piece list cannot be read.
            PieceTooLargeError: If a piece fits no sheet.
            KeyError: If a format is unknown.
        """
        requirements = read_piece_list(pieces_path)
        report = self.optimize(requirements, project_id=project_name)

        files: dict[str, Path] = {}
        if formats:
            manager = ExportManager(output_dir or Path("."))
            files = manager.export_all(list(formats), report, project_name)

        return OptimizeResult(report=report, files=files)


class BatchOptimizeCommand:
    """Optimizes every project under a projects directory.

    A project is a sub-directory holding ``pieces.csv``. Each project gets
    ``cutlist.csv`` in its own directory and ``cuts-{project}.json`` and
    ``cuts-{project}.svg`` in the reports directory. Every project is
    optimized before anything is written, so a fatal error in any project
    leaves no files behind.
    """

    def __init__(self, settings: CuttingSettings) -> None:
        self.command = OptimizeCutsCommand(settings)

    @staticmethod
    def discover(projects_dir: Path) -> list[Path]:
        """Project directories in name order."""
        return sorted(
            p for p in projects_dir.iterdir()
            if p.is_dir() and (p / PIECES_FILENAME).exists()
        )

    def execute(self, projects_dir: Path, reports_dir: Path) -> dict[str, OptimizeResult]:
        reports: list[tuple[Path, CuttingReport]] = []
        for project_dir in self.discover(projects_dir):
            logger.info("Processing project: %s", project_dir.name)
            requirements = read_piece_list(project_dir / PIECES_FILENAME)
            reports.append(
                (project_dir, self.command.optimize(requirements, project_id=project_dir.name))
            )

        results: dict[str, OptimizeResult] = {}
        if reports:
            reports_dir.mkdir(parents=True, exist_ok=True)

        for project_dir, report in reports:
            project_id = project_dir.name
            files = {
                "csv": project_dir / CUT_LIST_FILENAME,
                "json": reports_dir / f"cuts-{project_id}.json",
                "svg": reports_dir / f"cuts-{project_id}.svg",
            }
            CutListCsvExporter().export(report, files["csv"])
            JsonReportExporter().export(report, files["json"])
            SvgExporter().export(report, files["svg"])

            results[project_id] = OptimizeResult(report=report, files=files)

        return results
