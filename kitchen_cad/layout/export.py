"""Blueprint export — snapshot of the canvas, items and MEP totals.

The document is write-only for now, but every field needed to rebuild
the model is present and unambiguous::

    {
      "kitchenDims": {"length": 20, "width": 30},
      "items": [{"id", "name", "category", "x", "y", "width", "height",
                 "rotation", "specs": {"power", "water"}, "color"}, ...],
      "mepStats": {"totalPower": 12.5, "waterPoints": 3}
    }

Selection and drag state are not part of the document.
"""

from __future__ import annotations

import json
import re

from kitchen_cad.catalog.models import UtilitySpecs

from .mep import MepStats, compute_mep_stats
from .model import SpatialModel
from .models import CanvasBounds, PlacedItem


def item_to_dict(item: PlacedItem) -> dict:
    """Serialize a PlacedItem to a JSON-safe dict."""
    return {
        "id": item.id,
        "name": item.name,
        "category": item.category,
        "x": item.x,
        "y": item.y,
        "width": item.width,
        "height": item.height,
        "rotation": item.rotation,
        "specs": {
            "power": item.specs.power,
            "water": item.specs.water,
        },
        "color": item.color,
    }


def parse_placed_item(data: dict) -> PlacedItem:
    """Parse an item dict (as written by ``item_to_dict``) back into a PlacedItem."""
    specs = data.get("specs") or {}
    return PlacedItem(
        id=data["id"],
        name=data["name"],
        category=data["category"],
        x=int(data["x"]),
        y=int(data["y"]),
        width=int(data["width"]),
        height=int(data["height"]),
        rotation=int(data.get("rotation", 0)),
        specs=UtilitySpecs(
            power=str(specs.get("power", "None")),
            water=str(specs.get("water", "None")),
        ),
        color=data.get("color", ""),
    )


def bounds_to_dict(bounds: CanvasBounds) -> dict:
    return {"length": bounds.length, "width": bounds.width}


def mep_to_dict(stats: MepStats) -> dict:
    return {
        "totalPower": round(stats.total_power, 2),
        "waterPoints": stats.water_points,
    }


def blueprint_to_dict(model: SpatialModel) -> dict:
    """Serialize the live model to the blueprint document."""
    items = model.items
    return {
        "kitchenDims": bounds_to_dict(model.bounds),
        "items": [item_to_dict(it) for it in items],
        "mepStats": mep_to_dict(compute_mep_stats(items)),
    }


def blueprint_to_json(model: SpatialModel) -> str:
    return json.dumps(blueprint_to_dict(model), indent=2, ensure_ascii=False)


def blueprint_filename(cuisine: str = "") -> str:
    """Download name, e.g. ``kitchen_layout_north_indian.json``."""
    slug = re.sub(r"[^a-z0-9]+", "_", cuisine.lower()).strip("_")
    return f"kitchen_layout_{slug or 'untitled'}.json"
