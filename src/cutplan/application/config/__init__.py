"""Configuration loading and conversion for the cutting optimizer."""

from cutplan.application.config.adapter import config_to_settings
from cutplan.application.config.loader import (
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
    load_config,
    load_config_from_dict,
)
from cutplan.application.config.schema import (
    CatalogItemSchema,
    CuttingConfiguration,
    MaterialCuttingSchema,
    PricingCatalog,
)

__all__ = [
    "CatalogItemSchema",
    "ConfigError",
    "CuttingConfiguration",
    "MaterialCuttingSchema",
    "PricingCatalog",
    "config_to_settings",
    "load_catalog",
    "load_catalog_from_dict",
    "load_config",
    "load_config_from_dict",
]
