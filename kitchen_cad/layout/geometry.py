"""Grid geometry helpers — clamping, containment and overlap checks."""

from __future__ import annotations

from shapely.geometry import box as shapely_box

from .models import CanvasBounds, PlacedItem


def clamp(value: int, lo: int, hi: int) -> int:
    """Constrain *value* to ``[lo, hi]``; *lo* wins when the range is empty."""
    return max(lo, min(value, hi))


def clamp_position(
    x: int, y: int,
    width: int, height: int,
    bounds: CanvasBounds,
) -> tuple[int, int]:
    """Nearest top-left that keeps a ``width`` × ``height`` box on the canvas.

    A box larger than the canvas along an axis is pinned to 0 on that
    axis; items are never resized to fit.
    """
    return (
        clamp(x, 0, bounds.length - width),
        clamp(y, 0, bounds.width - height),
    )


def clamp_item(item: PlacedItem, bounds: CanvasBounds) -> PlacedItem:
    x, y = clamp_position(item.x, item.y, item.width, item.height, bounds)
    if (x, y) == (item.x, item.y):
        return item
    return item.moved(x, y)


def item_box(item: PlacedItem):
    """Shapely box covering the item's footprint."""
    return shapely_box(item.x, item.y, item.x + item.width, item.y + item.height)


def item_inside_bounds(item: PlacedItem, bounds: CanvasBounds) -> bool:
    """True if the item's footprint lies fully on the canvas."""
    canvas = shapely_box(0, 0, bounds.length, bounds.width)
    return canvas.covers(item_box(item))


def overlapping_pairs(items: list[PlacedItem] | tuple[PlacedItem, ...]) -> list[tuple[str, str]]:
    """Ids of item pairs whose footprints share a positive area.

    Overlap is allowed on the grid; this is reporting only.
    """
    boxes = [(it.id, item_box(it)) for it in items]
    pairs: list[tuple[str, str]] = []
    for i, (id_a, a) in enumerate(boxes):
        for id_b, b in boxes[i + 1:]:
            if a.intersection(b).area > 0:
                pairs.append((id_a, id_b))
    return pairs
