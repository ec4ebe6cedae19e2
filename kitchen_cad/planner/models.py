"""Planner input/output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from kitchen_cad.layout.models import PlacedItem


# ── Input (the generator's response) ───────────────────────────────


@dataclass
class EquipmentRequest:
    """One ``required_equipment`` entry of a zone."""

    name: str
    power_rating: str | None = None     # e.g. "5kW, 3-Phase"
    water_connection: str | None = None # e.g. "Inlet + Drain"
    dimensions: str | None = None       # e.g. "3x4"


@dataclass
class ZoneSpec:
    name: str                           # e.g. "Hot Line", "Wash Area"
    required_equipment: list[EquipmentRequest] = field(default_factory=list)
    description: str = ""
    placement_hint: str = ""


# ── Output ─────────────────────────────────────────────────────────


@dataclass
class LayoutPlan:
    """Result of one planning pass."""

    items: list[PlacedItem]
    unresolved: list[str] = field(default_factory=list)   # names that fell back to hint/default
    skipped_zones: int = 0                                # zones without a name
