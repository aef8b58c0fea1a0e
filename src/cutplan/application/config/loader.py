"""Loading of the cutting configuration and the pricing catalog.

File system errors, JSON syntax errors and Pydantic validation errors are
all reported as ConfigError with a category and details.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cutplan.application.config.schema import CuttingConfiguration, PricingCatalog

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised for configuration and catalog errors.

    Attributes:
        message: The primary error message.
        error_type: Category: file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Path to the offending file, if any.
        details: Extra details (JSON line/column, validation errors).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a dotted path.

    Examples:
        >>> _format_json_path(("materials", "MDF18", "rotate"))
        'materials.MDF18.rotate'
        >>> _format_json_path(("default_sheet_mm", 0))
        'default_sheet_mm[0]'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int) and parts:
            parts[-1] = f"{parts[-1]}[{segment}]"
        elif isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _validation_error(
    error: PydanticValidationError, path: Path | None = None
) -> ConfigError:
    details = [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]

    lines = ["Configuration validation failed:"]
    for detail in details:
        if detail["value"] is not None:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {detail['value']!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")

    return ConfigError(
        message="\n".join(lines),
        error_type="validation",
        path=path,
        details=details,
    )


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise _validation_error(e, path) from e


def load_config(path: Path) -> CuttingConfiguration:
    """Load and validate a cutting configuration file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A validated CuttingConfiguration.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or
            fails validation.
    """
    return _validate(CuttingConfiguration, _read_json(path), path)


def load_config_from_dict(data: dict[str, Any]) -> CuttingConfiguration:
    """Validate a cutting configuration given as a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(CuttingConfiguration, data)


def load_catalog(path: Path | None) -> PricingCatalog:
    """Load the pricing catalog, or an empty one if there is no file.

    A missing catalog is not an error: every material then uses the
    default sheet size. A catalog that exists but is broken is.

    Raises:
        ConfigError: If the file exists but cannot be parsed or validated.
    """
    if path is None or not path.exists():
        if path is not None:
            logger.info("Pricing catalog %s not found, using default sheet sizes", path)
        return PricingCatalog()
    return _validate(PricingCatalog, _read_json(path), path)


def load_catalog_from_dict(data: dict[str, Any] | None) -> PricingCatalog:
    """Validate a pricing catalog given as a dictionary."""
    if not data:
        return PricingCatalog()
    return _validate(PricingCatalog, data)
