"""Partitioning of piece instances into per-material packing problems."""

from __future__ import annotations

from typing import Sequence

from cutplan.domain.value_objects import PieceInstance


def group_by_material(
    instances: Sequence[PieceInstance],
) -> dict[str, list[PieceInstance]]:
    """Group piece instances by material id.

    Materials never share a sheet, so each group is packed on its own.
    Groups appear in first-seen order and keep the instance order.

    Args:
        instances: Expanded piece instances.

    Returns:
        Dictionary mapping material id to its instances.
    """
    groups: dict[str, list[PieceInstance]] = {}

    for instance in instances:
        if instance.material_id not in groups:
            groups[instance.material_id] = []
        groups[instance.material_id].append(instance)

    return groups
