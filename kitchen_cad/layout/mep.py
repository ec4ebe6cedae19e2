"""MEP (mechanical/electrical/plumbing) summary of the current layout.

Recomputed from scratch on every change; kitchens hold well under a
hundred items, so there is nothing worth caching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from kitchen_cad.config import LAYOUT_RULES

from .models import PlacedItem


# Leading number the way JavaScript's parseFloat reads it.
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class MepStats:
    total_power: float = 0.0    # kW
    water_points: int = 0


def _has_requirement(value: str | None) -> bool:
    return bool(value) and value != LAYOUT_RULES.no_requirement


def parse_power_kw(power: str) -> float:
    """Leading numeric value of a power spec, e.g. ``"3kW Gas"`` → 3.0.

    Specs with no leading number (``"Standard"``, ``"Gas"``) count as
    ``LAYOUT_RULES.fallback_power_kw``; so does a literal zero.
    """
    m = _LEADING_FLOAT.match(power)
    if m:
        value = float(m.group(1))
        if value:
            return value
    return LAYOUT_RULES.fallback_power_kw


def compute_mep_stats(items: Iterable[PlacedItem]) -> MepStats:
    total_power = 0.0
    water_points = 0
    for item in items:
        if _has_requirement(item.specs.power):
            total_power += parse_power_kw(item.specs.power)
        if _has_requirement(item.specs.water):
            water_points += 1
    return MepStats(total_power=total_power, water_points=water_points)
