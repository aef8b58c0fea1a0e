"""CSV piece list reader.

Expected header::

    piece_id,material_id,w_mm,h_mm,qty,rotate,banding,notes

Only the first four columns are required. Values are passed through as
text; the piece expander copes with malformed quantities and dimensions.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from cutplan.domain.value_objects import PieceRequirement

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = ("piece_id", "material_id", "w_mm", "h_mm")


class PieceListError(Exception):
    """Raised when a piece list cannot be read.

    Attributes:
        message: Human-readable error message.
        path: Path of the piece list, if read from a file.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def parse_piece_list(content: str, path: Path | None = None) -> list[PieceRequirement]:
    """Parse piece list CSV text.

    Args:
        content: CSV text including the header row.
        path: Source path, used in error messages only.

    Returns:
        Piece requirements in file order.

    Raises:
        PieceListError: If the header lacks a required column.
    """
    # Spreadsheet exports often prefix the header with a byte order mark
    reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff").strip()))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    missing = [col for col in REQUIRED_COLUMNS if col not in fieldnames]
    if missing:
        source = f" in {path}" if path else ""
        raise PieceListError(
            f"Missing required columns{source}: {', '.join(missing)}", path=path
        )

    requirements: list[PieceRequirement] = []
    for raw in reader:
        # Surplus cells land under a None key; they are ignored
        row = {k.strip(): (v or "").strip() for k, v in raw.items() if k is not None}
        if not any(row.values()):
            continue
        requirements.append(
            PieceRequirement(
                piece_id=row["piece_id"],
                material_id=row["material_id"],
                width_mm=row["w_mm"],
                height_mm=row["h_mm"],
                quantity=row.get("qty", ""),
                rotatable=_parse_bool(row.get("rotate")),
                banding=row.get("banding") or "-",
                note=row.get("notes", ""),
            )
        )

    logger.debug("Read %d piece rows%s", len(requirements), f" from {path}" if path else "")
    return requirements


def read_piece_list(path: Path) -> list[PieceRequirement]:
    """Read a piece list CSV file.

    Raises:
        PieceListError: If the file is missing, unreadable or malformed.
    """
    if not path.exists():
        raise PieceListError(f"Piece list not found: {path}", path=path)

    try:
        content = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise PieceListError(f"Error reading piece list: {path}: {e}", path=path) from e

    return parse_piece_list(content, path=path)
