"""JSON exporter for the cutting report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import ClassVar

from cutplan.infrastructure.exporters.base import ExporterRegistry
from cutplan.infrastructure.metrics_reporter import CuttingReport


@ExporterRegistry.register("json")
class JsonReportExporter:
    """Writes the per-material report consumed by cost and BOM tools.

    Attributes:
        indent: JSON indentation.
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, report: CuttingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8")

    def export_string(self, report: CuttingReport) -> str:
        return json.dumps(report.to_dict(), indent=self.indent)
