"""Infrastructure layer - packing, reporting, readers and exporters."""

from .bin_packing import (
    PackedMaterial,
    PackingConfig,
    PieceTooLargeError,
    Sheet,
    Shelf,
    ShelfPacker,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .cutting_plan import CuttingPlanService
from .formatters import CutListFormatter, SummaryFormatter
from .metrics_reporter import CuttingReport, MaterialSheetsReport, MetricsReporter
from .offcut_calculator import OffcutCalculator
from .piece_list_reader import PieceListError, parse_piece_list, read_piece_list

__all__ = [
    "CutDiagramRenderer",
    "CutListFormatter",
    "CuttingPlanService",
    "CuttingReport",
    "MaterialSheetsReport",
    "MetricsReporter",
    "OffcutCalculator",
    "PackedMaterial",
    "PackingConfig",
    "PieceListError",
    "PieceTooLargeError",
    "Sheet",
    "Shelf",
    "ShelfPacker",
    "SummaryFormatter",
    "parse_piece_list",
    "read_piece_list",
]
