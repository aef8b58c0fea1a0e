"""Typer CLI for sheet cutting optimization."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cutplan.application import (
    BatchOptimizeCommand,
    OptimizeCutsCommand,
    load_settings,
)
from cutplan.application.config import ConfigError
from cutplan.cli.commands import display_config_error, validate_command
from cutplan.domain.value_objects import CuttingSettings
from cutplan.infrastructure import (
    CutListFormatter,
    PieceListError,
    PieceTooLargeError,
    SummaryFormatter,
)
from cutplan.infrastructure.exporters import ExporterRegistry


app = typer.Typer(
    name="cutplan",
    help="Pack rectangular pieces onto stock sheets and report waste.",
)

# Register validate command
app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _parse_formats(formats_str: str) -> list[str]:
    """Parse a comma-separated format list or "all".

    Exits with code 1 when a format is not registered.
    """
    if formats_str.strip().lower() == "all":
        return ExporterRegistry.available_formats()

    formats = [f.strip().lower() for f in formats_str.split(",") if f.strip()]
    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    return formats


def _load_settings_or_exit(config_file: Path, catalog_file: Path | None) -> CuttingSettings:
    try:
        return load_settings(config_file, catalog_file)
    except ConfigError as e:
        display_config_error(e)
        raise typer.Exit(code=1)


@app.command()
def optimize(
    pieces_file: Annotated[
        Path,
        typer.Argument(help="Piece list CSV (piece_id,material_id,w_mm,h_mm,qty,rotate,...)"),
    ],
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON cutting configuration"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="Pricing catalog with per-material sheet sizes"),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", "-p", help="Project name for the report and file names"),
    ] = "cutplan",
    output_formats: Annotated[
        str | None,
        typer.Option("--formats", "-f", help="Comma-separated export formats (json,csv,svg) or 'all'"),
    ] = None,
    show_cut_list: Annotated[
        bool,
        typer.Option("--cut-list", help="Print the full cut list table"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Optimize a piece list onto stock sheets.

    Example:
        cutplan optimize pieces.csv -c config.json --catalog pricing.json -f all -o reports
    """
    _configure_logging(verbose)

    formats = _parse_formats(output_formats) if output_formats else []
    settings = _load_settings_or_exit(config_file, catalog_file)

    command = OptimizeCutsCommand(settings)
    try:
        result = command.execute(
            pieces_file,
            output_dir=output_dir,
            formats=formats,
            project_name=project_name,
        )
    except PieceListError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except PieceTooLargeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error writing output: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(SummaryFormatter().format(result.report))

    if show_cut_list:
        typer.echo()
        typer.echo(CutListFormatter().format(result.report))

    if result.files:
        typer.echo()
        typer.echo("Exported files:")
        for format_name, path in result.files.items():
            typer.echo(f"  {format_name}: {path}")


@app.command()
def batch(
    projects_dir: Annotated[
        Path,
        typer.Argument(help="Directory whose sub-directories each hold a pieces.csv"),
    ],
    config_file: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to JSON cutting configuration"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="Pricing catalog with per-material sheet sizes"),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for JSON reports and SVG layouts"),
    ] = Path("reports"),
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Optimize every project under a directory.

    Each project gets cutlist.csv in its own directory and
    cuts-{project}.json / cuts-{project}.svg in the output directory.
    """
    _configure_logging(verbose)

    if not projects_dir.is_dir():
        typer.echo(f"Error: Projects directory not found: {projects_dir}", err=True)
        raise typer.Exit(code=1)

    settings = _load_settings_or_exit(config_file, catalog_file)

    command = BatchOptimizeCommand(settings)
    try:
        results = command.execute(projects_dir, output_dir)
    except PieceListError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except PieceTooLargeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error writing output: {e}", err=True)
        raise typer.Exit(code=1)

    if not results:
        typer.echo(f"No projects with pieces.csv found in {projects_dir}")
        return

    summary = SummaryFormatter()
    for project_id, result in results.items():
        typer.echo(f"[{project_id}]")
        typer.echo(summary.format(result.report))
        for path in result.files.values():
            typer.echo(f"  wrote {path}")


if __name__ == "__main__":
    app()
