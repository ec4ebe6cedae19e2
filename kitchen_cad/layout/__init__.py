"""Layout — the kitchen grid and everything that edits or summarises it.

Submodules:
  models        CanvasBounds and PlacedItem dataclasses.
  geometry      Clamping, containment and overlap helpers.
  model         SpatialModel: bounds + ordered items + selection.
  interaction   InteractionController: pointer-driven drag/rotate/delete.
  mep           Power and water totals for the current items.
  export        Blueprint document serialization.
"""

from .models import CanvasBounds, PlacedItem, VALID_ROTATIONS
from .geometry import clamp, clamp_position, clamp_item, item_inside_bounds, overlapping_pairs
from .model import SpatialModel
from .interaction import InteractionController, Idle, Dragging
from .mep import MepStats, compute_mep_stats, parse_power_kw
from .export import (
    blueprint_to_dict, blueprint_to_json, blueprint_filename,
    item_to_dict, parse_placed_item,
)

__all__ = [
    # Models
    "CanvasBounds", "PlacedItem", "VALID_ROTATIONS",
    # Geometry
    "clamp", "clamp_position", "clamp_item", "item_inside_bounds", "overlapping_pairs",
    # Model / interaction
    "SpatialModel", "InteractionController", "Idle", "Dragging",
    # MEP
    "MepStats", "compute_mep_stats", "parse_power_kw",
    # Export
    "blueprint_to_dict", "blueprint_to_json", "blueprint_filename",
    "item_to_dict", "parse_placed_item",
]
