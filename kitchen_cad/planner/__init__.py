"""Planner — converts generated kitchen zones into placed equipment.

Submodules:
  models        ZoneSpec / EquipmentRequest input and LayoutPlan output.
  anchors       Zone keyword table and canvas anchor points.
  parsing       Raw generator JSON → ZoneSpecs.
  engine        Scatter placement around the anchors.
"""

from .models import EquipmentRequest, ZoneSpec, LayoutPlan
from .anchors import Anchor, ZONE_KEYWORDS, region_for_zone, anchor_points, build_anchors
from .parsing import parse_layout_response
from .engine import plan_layout, scatter_offset

__all__ = [
    # Models
    "EquipmentRequest", "ZoneSpec", "LayoutPlan",
    # Anchors
    "Anchor", "ZONE_KEYWORDS", "region_for_zone", "anchor_points", "build_anchors",
    # Parsing / engine
    "parse_layout_response", "plan_layout", "scatter_offset",
]
