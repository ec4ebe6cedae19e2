"""Catalog serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from .models import CatalogResult, EquipmentTemplate


def catalog_to_dict(result: CatalogResult) -> dict:
    """Serialize a CatalogResult to a JSON-safe dict for the web API."""
    return {
        "ok": result.ok,
        "template_count": len(result.catalog),
        "categories": {
            category: [template_to_dict(t) for t in templates]
            for category, templates in result.catalog.categories
        },
        "errors": [{"source": e.source, "field": e.field, "message": e.message}
                   for e in result.errors],
    }


def template_to_dict(t: EquipmentTemplate) -> dict:
    """Serialize an EquipmentTemplate to a JSON-safe dict."""
    return {
        "name": t.name,
        "category": t.category,
        "width": t.width,
        "height": t.height,
        "style_tag": t.style_tag,
        "default_specs": {
            "power": t.default_specs.power,
            "water": t.default_specs.water,
        },
    }
