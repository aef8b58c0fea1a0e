"""Validate command for checking cutting configuration files.

This module provides the `validate` command that loads a JSON cutting
configuration (and optionally a pricing catalog) and reports schema errors.
"""

from pathlib import Path
from typing import Annotated

import typer

from cutplan.application.config import (
    ConfigError,
    config_to_settings,
    load_catalog,
    load_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON cutting configuration to validate"),
    ],
    catalog_file: Annotated[
        Path | None,
        typer.Option("--catalog", help="Optional pricing catalog to validate alongside"),
    ] = None,
) -> None:
    """Validate a cutting configuration file.

    Checks the configuration file for:
    - JSON syntax errors
    - Schema errors (unknown fields, negative kerf, bad sheet sizes)

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        cutplan validate config.json --catalog pricing.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
        catalog = load_catalog(catalog_file)
    except ConfigError as e:
        display_config_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    settings = config_to_settings(config, catalog)
    typer.echo(
        f"Default sheet: {settings.default_sheet.width:g}x{settings.default_sheet.height:g} mm"
    )
    typer.echo(f"Saw kerf: {settings.kerf:g} mm")
    for material_id, policy in settings.materials.items():
        sheet = settings.sheet_for(material_id)
        typer.echo(
            f"  {material_id}: {sheet.width:g}x{sheet.height:g} mm, "
            f"rotate={'yes' if policy.rotate else 'no'}, grain={policy.grain.value}"
        )
    typer.echo()
    typer.echo("Validation passed. Configuration is valid.")


def display_config_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)
