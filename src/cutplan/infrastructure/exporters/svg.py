"""SVG exporter wrapping CutDiagramRenderer."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import ExporterRegistry
from cutplan.infrastructure.metrics_reporter import CuttingReport


@ExporterRegistry.register("svg")
class SvgExporter:
    """Writes all materials' cut layouts into one SVG file."""

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.4,
        show_labels: bool = True,
        show_dimensions: bool = False,
        show_grain: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_labels=show_labels,
            show_dimensions=show_dimensions,
            show_grain=show_grain,
        )

    def export(self, report: CuttingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8")

    def export_string(self, report: CuttingReport) -> str:
        return self.renderer.render_report(report)
