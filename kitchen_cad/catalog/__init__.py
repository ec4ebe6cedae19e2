"""Equipment catalog — load, validate, resolve, and serialize catalog/equipment/*.json."""

from .models import (
    CATEGORIES, UtilitySpecs, EquipmentTemplate, Catalog,
    ValidationError, CatalogResult,
)
from .loader import load_catalog, build_catalog, get_template, CATALOG_DIR
from .resolver import resolve_template, parse_dimensions, resolve_dimensions
from .serialization import catalog_to_dict, template_to_dict

__all__ = [
    # Models
    "CATEGORIES", "UtilitySpecs", "EquipmentTemplate", "Catalog",
    "ValidationError", "CatalogResult",
    # Loader
    "load_catalog", "build_catalog", "get_template", "CATALOG_DIR",
    # Resolver
    "resolve_template", "parse_dimensions", "resolve_dimensions",
    # Serialization
    "catalog_to_dict", "template_to_dict",
]
