"""Exporter framework for cutting reports.

Registered exporters:
- csv: flat cut list, one row per placement
- json: per-material report with metrics, placements and offcuts
- svg: cut layout diagrams

Usage:
    from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    manager = ExportManager(output_dir=Path("./reports"))
    files = manager.export_all(["json", "csv"], report, project_name="kitchen")
"""

from cutplan.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from cutplan.infrastructure.exporters.cut_list_csv import (
    CUT_LIST_HEADER,
    CutListCsvExporter,
)
from cutplan.infrastructure.exporters.json_report import JsonReportExporter
from cutplan.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "CUT_LIST_HEADER",
    "CutListCsvExporter",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonReportExporter",
    "SvgExporter",
]
