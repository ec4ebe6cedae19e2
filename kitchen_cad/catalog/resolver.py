"""Free-text equipment name → catalog template resolution.

The AI layout generator names equipment loosely ("Reach-in Freezer",
"Combi Oven XL", "3 Compartment Sink"), so templates are matched with a
bidirectional, case-insensitive substring test:

    template.name contains query  OR  query contains template.name

The catalog is walked in canonical order (categories in enumeration
order, templates in list order) and the first hit wins.  The result is
a pure function of ``(catalog, name)``.
"""

from __future__ import annotations

import logging
import re

from kitchen_cad.config import LAYOUT_RULES

from .models import Catalog, EquipmentTemplate


log = logging.getLogger("kitchen_cad.catalog.resolver")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def resolve_template(catalog: Catalog, name: str) -> EquipmentTemplate | None:
    """Return the first template whose name matches *name*, or None.

    An empty query never matches (the empty string is a substring of
    every template name).
    """
    query = (name or "").strip().lower()
    if not query:
        return None
    for tpl in catalog.iter_templates():
        tpl_name = tpl.name.lower()
        if query in tpl_name or tpl_name in query:
            return tpl
    return None


def _parse_extent(text: str) -> int | None:
    m = _LEADING_INT.match(text)
    if not m:
        return None
    value = int(m.group(1))
    return value if value > 0 else None


def parse_dimensions(hint: str | None) -> tuple[int, int]:
    """Parse a ``"<w>x<h>"`` hint into ``(width, height)`` grid units.

    Anything other than exactly one ``x`` separating two positive
    integers yields the 3×3 default.  Each half is read like
    ``parseInt``: leading whitespace and trailing units are ignored, so
    ``"4ft x 3ft"`` gives ``(4, 3)``.
    """
    default = (LAYOUT_RULES.default_item_width, LAYOUT_RULES.default_item_height)
    if not hint:
        return default
    parts = hint.lower().split("x")
    if len(parts) != 2:
        return default
    w = _parse_extent(parts[0])
    h = _parse_extent(parts[1])
    if w is None or h is None:
        return default
    return (w, h)


def resolve_dimensions(
    catalog: Catalog,
    name: str,
    hint: str | None = None,
) -> tuple[int, int, EquipmentTemplate | None]:
    """Resolve ``(width, height, template)`` for a piece of equipment.

    A catalog match always wins over the hint; the hint is only parsed
    when nothing matches.
    """
    tpl = resolve_template(catalog, name)
    if tpl is not None:
        return tpl.width, tpl.height, tpl
    w, h = parse_dimensions(hint)
    log.debug("No catalog template for %r — using %dx%d (hint=%r)", name, w, h, hint)
    return w, h, None
