"""Expansion of piece requirements into individual piece instances."""

from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

from cutplan.domain.value_objects import PieceInstance, PieceRequirement

logger = logging.getLogger(__name__)

# Smallest value a malformed quantity or dimension falls back to
SAFE_MINIMUM = 1


def _coerce_positive_int(value: object) -> int | None:
    """Parse a positive integer, or None if the value is unusable.

    Accepts ints, integral floats and numeric strings such as ``"300"`` or
    ``" 300.0 "``. Fractions are truncated, like an integer parse would.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    # "inf", "nan" and "1e999" parse as floats but have no integer value
    if not math.isfinite(number) or number < 1:
        return None
    return int(number)


def expand_pieces(
    requirements: Sequence[PieceRequirement],
    rotation_policy: Mapping[str, bool] | None = None,
) -> list[PieceInstance]:
    """Expand requirements into one PieceInstance per unit of quantity.

    Row order is preserved, and units of the same requirement stay
    adjacent. A row is never rejected: a malformed quantity becomes 1 and a
    malformed dimension becomes 1 mm, with a warning.

    Args:
        requirements: Piece list rows in input order.
        rotation_policy: Material id to whether the material allows
            rotation. Materials not listed allow it.

    Returns:
        Flat list of piece instances.
    """
    policy = rotation_policy or {}
    instances: list[PieceInstance] = []

    for row in requirements:
        quantity = _coerce_positive_int(row.quantity)
        if quantity is None:
            logger.warning(
                "Piece '%s': invalid quantity %r, using %d",
                row.piece_id,
                row.quantity,
                SAFE_MINIMUM,
            )
            quantity = SAFE_MINIMUM

        width = _coerce_positive_int(row.width_mm)
        height = _coerce_positive_int(row.height_mm)
        if width is None or height is None:
            logger.warning(
                "Piece '%s': invalid dimensions %r x %r, falling back to %d mm",
                row.piece_id,
                row.width_mm,
                row.height_mm,
                SAFE_MINIMUM,
            )
            width = width or SAFE_MINIMUM
            height = height or SAFE_MINIMUM

        can_rotate = bool(row.rotatable) and policy.get(row.material_id, True)

        for _ in range(quantity):
            instances.append(
                PieceInstance(
                    id=row.piece_id,
                    material_id=row.material_id,
                    width=width,
                    height=height,
                    can_rotate=can_rotate,
                    banding=row.banding or "-",
                    note=row.note or "",
                )
            )

    logger.debug("Expanded %d rows into %d pieces", len(requirements), len(instances))
    return instances
