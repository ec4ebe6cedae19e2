"""Zone-name keywords → anchor points on the canvas.

Each functional area of a kitchen gets a fixed reference point derived
from the canvas size: cold storage top-left, prep top-right, the hot
line bottom-left, the dish pit bottom-right and the pass in the middle.
A zone is mapped by the first keyword (in table order) that occurs in
its name; zones matching nothing go to prep.
"""

from __future__ import annotations

from dataclasses import dataclass

from kitchen_cad.layout.models import CanvasBounds


@dataclass(frozen=True)
class Anchor:
    key: str                # region id; offset counters are kept per key
    x: int
    y: int
    category: str
    style_tag: str


# Priority order matters: the first keyword found in the zone name wins.
ZONE_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("Storage", "cold"),
    ("Cold", "cold"),
    ("Prep", "prep"),
    ("Cook", "cook"),
    ("Hot", "cook"),
    ("Dish", "wash"),
    ("Wash", "wash"),
    ("Scullery", "wash"),
    ("Service", "service"),
    ("Pass", "service"),
)

DEFAULT_REGION = "prep"

_REGION_CATEGORY = {
    "cold": ("refrigeration", "bg-blue-100 border-blue-300"),
    "prep": ("prep", "bg-emerald-100 border-emerald-300"),
    "cook": ("cooking", "bg-red-100 border-red-300"),
    "wash": ("washing", "bg-cyan-100 border-cyan-300"),
    "service": ("service", "bg-amber-100 border-amber-300"),
}


def region_for_zone(zone_name: str) -> str:
    """Region key of the first keyword contained in *zone_name*."""
    for keyword, region in ZONE_KEYWORDS:
        if keyword in zone_name:
            return region
    return DEFAULT_REGION


def anchor_points(bounds: CanvasBounds) -> dict[str, tuple[int, int]]:
    """Top-left start point of every region for the given canvas."""
    half_l = bounds.length // 2
    half_w = bounds.width // 2
    points = {
        "cold": (1, 1),
        "prep": (half_l + 1, 1),
        "cook": (1, half_w + 1),
        "wash": (bounds.length - 6, bounds.width - 6),
        "service": (half_l - 3, half_w),
    }
    # Tiny canvases push the derived points negative.
    return {k: (max(0, x), max(0, y)) for k, (x, y) in points.items()}


def build_anchors(bounds: CanvasBounds) -> dict[str, Anchor]:
    points = anchor_points(bounds)
    return {
        key: Anchor(
            key=key,
            x=x,
            y=y,
            category=_REGION_CATEGORY[key][0],
            style_tag=_REGION_CATEGORY[key][1],
        )
        for key, (x, y) in points.items()
    }
