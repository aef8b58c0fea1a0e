"""Conversion of configuration schemas into domain cutting settings."""

from __future__ import annotations

from cutplan.application.config.schema import CuttingConfiguration, PricingCatalog
from cutplan.domain.value_objects import CuttingSettings, MaterialPolicy, SheetSize


def config_to_settings(
    config: CuttingConfiguration,
    catalog: PricingCatalog | None = None,
) -> CuttingSettings:
    """Build CuttingSettings from a configuration and an optional catalog.

    Catalog entries with a ``sheet_mm`` override the default sheet size for
    their material; entries without one are skipped.

    Args:
        config: Validated cutting configuration.
        catalog: Pricing catalog with per-material sheet sizes.

    Returns:
        CuttingSettings for the optimizer.
    """
    materials = {
        material_id: MaterialPolicy(rotate=schema.rotate, grain=schema.grain)
        for material_id, schema in config.materials.items()
    }

    overrides: dict[str, SheetSize] = {}
    if catalog is not None:
        for material_id, item in catalog.items.items():
            if item.sheet_mm is not None:
                overrides[material_id] = SheetSize(*item.sheet_mm)

    return CuttingSettings(
        default_sheet=SheetSize(*config.default_sheet_mm),
        kerf=config.saw_kerf_mm,
        min_offcut=config.min_offcut_mm,
        materials=materials,
        sheet_overrides=overrides,
    )
