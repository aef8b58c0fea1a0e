"""CSV cut list exporter for production and CNC consumption.

One row per placement, in packing order::

    piece_id,material_id,sheet_index,x_mm,y_mm,w_mm,h_mm,rotated,banding
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import ClassVar

from cutplan.infrastructure.exporters.base import ExporterRegistry
from cutplan.infrastructure.metrics_reporter import CuttingReport

CUT_LIST_HEADER: tuple[str, ...] = (
    "piece_id",
    "material_id",
    "sheet_index",
    "x_mm",
    "y_mm",
    "w_mm",
    "h_mm",
    "rotated",
    "banding",
)


@ExporterRegistry.register("csv")
class CutListCsvExporter:
    """Writes the flat cut list."""

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def export(self, report: CuttingReport, path: Path) -> None:
        path.write_text(self.export_string(report), encoding="utf-8", newline="")

    def export_string(self, report: CuttingReport) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CUT_LIST_HEADER)

        for row in report.cut_list_rows():
            writer.writerow(
                [
                    row["piece_id"],
                    row["material_id"],
                    row["sheet_index"],
                    row["x"],
                    row["y"],
                    row["w"],
                    row["h"],
                    "true" if row["rotated"] else "false",
                    row["banding"],
                ]
            )

        return output.getvalue()
