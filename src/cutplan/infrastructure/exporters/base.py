"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cutplan.infrastructure.metrics_reporter import CuttingReport


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for cutting report exporters.

    Attributes:
        format_name: Registered name of the format (e.g. "json", "csv").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, report: CuttingReport, path: Path) -> None:
        """Write the report to a file."""
        ...

    def export_string(self, report: CuttingReport) -> str:
        """Render the report as a string."""
        ...


class ExporterRegistry:
    """Registry of exporter classes by format name.

    Exporters register themselves with the decorator::

        @ExporterRegistry.register("csv")
        class CutListCsvExporter:
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator registering an exporter class under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning("Overwriting existing exporter for format '%s'", format_name)
            cls._exporters[format_name] = exporter_class
            logger.debug("Registered exporter '%s': %s", format_name, exporter_class.__name__)
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up an exporter class.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes a cutting report in several formats to one directory.

    Files are named ``{project_name}_{format}.{ext}``.

    Attributes:
        output_dir: Directory for exported files; created on demand.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        report: CuttingReport,
        project_name: str = "cutplan",
    ) -> dict[str, Path]:
        """Export the report to each format.

        Returns:
            Format name to written path.

        Raises:
            KeyError: If a format is not registered.
            OSError: If a file cannot be written.
        """
        # Resolve every exporter before touching the disk
        exporter_classes = {name: ExporterRegistry.get(name) for name in formats}
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, Path] = {}
        for format_name, exporter_class in exporter_classes.items():
            exporter = exporter_class()
            filepath = self.output_dir / f"{project_name}_{format_name}.{exporter.file_extension}"

            logger.info("Exporting to %s: %s", format_name, filepath)
            exporter.export(report, filepath)
            results[format_name] = filepath

        return results

    def export_single(
        self,
        format_name: str,
        report: CuttingReport,
        project_name: str = "cutplan",
    ) -> Path:
        return self.export_all([format_name], report, project_name)[format_name]
