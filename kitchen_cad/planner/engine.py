"""Zone layout planner — turns generated zones into concrete placements.

Each zone is mapped to an anchor region (see ``anchors``); its equipment
is scattered around the anchor on a 3-column grid with 4-unit spacing.
A single offset counter per anchor is shared by every zone mapping to
that anchor, so two "storage" zones continue each other's grid instead
of stacking on the same cell.  Counters live only for one call.

This is a best-effort scatter, not a packing solver: regions can
intersect on small canvases and the resulting overlap is accepted.
"""

from __future__ import annotations

import logging

from kitchen_cad.catalog.models import Catalog, UtilitySpecs
from kitchen_cad.catalog.resolver import resolve_dimensions
from kitchen_cad.config import LAYOUT_RULES
from kitchen_cad.core.errors import NothingGeneratedError
from kitchen_cad.layout.geometry import clamp_position, overlapping_pairs
from kitchen_cad.layout.models import CanvasBounds, PlacedItem

from .anchors import build_anchors, region_for_zone
from .models import LayoutPlan, ZoneSpec


log = logging.getLogger("kitchen_cad.planner")


def scatter_offset(offset: int) -> tuple[int, int]:
    """Grid-unit displacement of the *offset*-th item around an anchor."""
    cols = LAYOUT_RULES.scatter_columns
    step = LAYOUT_RULES.scatter_spacing
    return (offset % cols) * step, (offset // cols) * step


def plan_layout(
    zones: list[ZoneSpec],
    bounds: CanvasBounds,
    catalog: Catalog,
    *,
    run_id: str = "1",
) -> LayoutPlan:
    """Place every zone's equipment on a ``bounds``-sized canvas.

    Parameters
    ----------
    zones : list[ZoneSpec]
        Parsed generator output, in the order given.
    bounds : CanvasBounds
        Current canvas; anchors are derived from it.
    catalog : Catalog
        Template source for footprints, default styles.
    run_id : str
        Folded into item ids (``ai_<run_id>_<n>``).

    Returns
    -------
    LayoutPlan
        The new items, in zone then equipment order.

    Raises
    ------
    NothingGeneratedError
        If no zone yields a single item.
    """
    anchors = build_anchors(bounds)
    offsets: dict[str, int] = {}
    items: list[PlacedItem] = []
    unresolved: list[str] = []
    skipped = 0

    for zone in zones:
        if not zone.name:
            skipped += 1
            continue

        anchor = anchors[region_for_zone(zone.name)]
        offset = offsets.get(anchor.key, 0)

        for eq in zone.required_equipment:
            width, height, tpl = resolve_dimensions(catalog, eq.name, eq.dimensions)
            if tpl is None:
                unresolved.append(eq.name)

            dx, dy = scatter_offset(offset)
            offset += 1
            x, y = clamp_position(anchor.x + dx, anchor.y + dy, width, height, bounds)

            items.append(PlacedItem(
                id=f"ai_{run_id}_{len(items)}",
                name=eq.name,
                category=anchor.category,
                x=x,
                y=y,
                width=width,
                height=height,
                rotation=0,
                specs=UtilitySpecs(
                    power=eq.power_rating or LAYOUT_RULES.default_power,
                    water=eq.water_connection or LAYOUT_RULES.no_requirement,
                ),
                color=tpl.style_tag if tpl is not None else anchor.style_tag,
            ))

        offsets[anchor.key] = offset
        log.debug("Zone %r → %s anchor (%d, %d), offset now %d",
                  zone.name, anchor.key, anchor.x, anchor.y, offset)

    if not items:
        raise NothingGeneratedError(zone_count=len(zones))

    if unresolved:
        log.warning("%d equipment name(s) not in catalog, used hint/default size: %s",
                    len(unresolved), ", ".join(unresolved))
    overlaps = overlapping_pairs(items)
    if overlaps:
        log.info("Planned layout has %d overlapping pair(s)", len(overlaps))
    log.info("Planned %d items from %d zones on a %dx%d canvas",
             len(items), len(zones) - skipped, bounds.length, bounds.width)

    return LayoutPlan(items=items, unresolved=unresolved, skipped_zones=skipped)
