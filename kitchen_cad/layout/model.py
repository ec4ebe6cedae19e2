"""Spatial model — canvas bounds plus the ordered list of placed items.

Every mutation leaves each item fully on the canvas.  Out-of-range
positions are clamped, never rejected, and operations on an unknown id
are silent no-ops so a UI that is briefly out of sync can't break the
model.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable

from kitchen_cad.catalog.models import CATEGORIES, EquipmentTemplate, UtilitySpecs

from .geometry import clamp_item
from .models import VALID_ROTATIONS, CanvasBounds, PlacedItem


log = logging.getLogger("kitchen_cad.layout")

Listener = Callable[["SpatialModel"], None]

# Fields ``update`` is allowed to merge.  ``id`` is immutable.
_UPDATABLE = {"name", "category", "x", "y", "width", "height", "rotation", "specs", "color"}


class SpatialModel:
    def __init__(self, bounds: CanvasBounds | None = None) -> None:
        self._bounds = bounds or CanvasBounds()
        self._items: list[PlacedItem] = []
        self._selected_id: str | None = None
        self._listeners: list[Listener] = []
        self._manual_seq = 0

    # ── Read access ────────────────────────────────────────────────

    @property
    def bounds(self) -> CanvasBounds:
        return self._bounds

    @property
    def items(self) -> tuple[PlacedItem, ...]:
        return tuple(self._items)

    def get(self, item_id: str) -> PlacedItem | None:
        for it in self._items:
            if it.id == item_id:
                return it
        return None

    def __contains__(self, item_id: object) -> bool:
        return any(it.id == item_id for it in self._items)

    def __len__(self) -> int:
        return len(self._items)

    # ── Selection ──────────────────────────────────────────────────
    # The selection is a lookup key only; it never keeps an item alive.

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> PlacedItem | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def select(self, item_id: str | None) -> None:
        if item_id is not None and item_id not in self:
            return
        self._selected_id = item_id

    def clear_selection(self) -> None:
        self._selected_id = None

    # ── Change notification ────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every mutation. Returns an unsubscribe hook."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ── Mutations ──────────────────────────────────────────────────

    def new_manual_id(self) -> str:
        self._manual_seq += 1
        return f"manual_{self._manual_seq}"

    def add(self, item: PlacedItem) -> PlacedItem:
        """Append *item*.  Callers clamp first; the model re-clamps anyway."""
        item = clamp_item(item, self._bounds)
        self._items.append(item)
        self._changed()
        return item

    def add_template(self, template: EquipmentTemplate) -> PlacedItem:
        """Instantiate a catalog template near the canvas centre and select it."""
        item = PlacedItem(
            id=self.new_manual_id(),
            name=template.name,
            category=template.category,
            x=self._bounds.length // 2 - 1,
            y=self._bounds.width // 2 - 1,
            width=template.width,
            height=template.height,
            rotation=0,
            specs=template.default_specs,
            color=template.style_tag,
        )
        item = self.add(item)
        self._selected_id = item.id
        return item

    def remove(self, item_id: str) -> None:
        before = len(self._items)
        self._items = [it for it in self._items if it.id != item_id]
        if self._selected_id == item_id:
            self._selected_id = None
        if len(self._items) != before:
            self._changed()

    def update(self, item_id: str, **fields) -> PlacedItem | None:
        """Merge *fields* into the item, then re-clamp its position.

        Unknown field names, categories and rotations are ignored.
        ``specs`` may be given as a
        ``UtilitySpecs`` or as a partial ``{"power": ..., "water": ...}``
        dict merged over the current specs.
        """
        for i, it in enumerate(self._items):
            if it.id != item_id:
                continue
            changes = {k: v for k, v in fields.items() if k in _UPDATABLE}
            if changes.get("category", it.category) not in CATEGORIES:
                log.warning("update %s: ignoring unknown category %r", item_id, changes.pop("category"))
            if changes.get("rotation", it.rotation) not in VALID_ROTATIONS:
                log.warning("update %s: ignoring rotation %r", item_id, changes.pop("rotation"))
            specs = changes.get("specs")
            if isinstance(specs, dict):
                changes["specs"] = UtilitySpecs(
                    power=str(specs.get("power", it.specs.power)),
                    water=str(specs.get("water", it.specs.water)),
                )
            updated = clamp_item(replace(it, **changes), self._bounds)
            self._items[i] = updated
            self._changed()
            return updated
        return None

    def rotate(self, item_id: str) -> PlacedItem | None:
        """Quarter-turn the item in place (extents swap), then re-clamp."""
        for i, it in enumerate(self._items):
            if it.id == item_id:
                updated = clamp_item(it.rotated(), self._bounds)
                self._items[i] = updated
                self._changed()
                return updated
        return None

    def set_bounds(self, bounds: CanvasBounds) -> None:
        """Change the canvas and pull every item back inside it.

        Items keep their extents; only positions move.
        """
        self._bounds = bounds
        self._items = [clamp_item(it, bounds) for it in self._items]
        log.info("Canvas resized to %dx%d; %d items re-clamped",
                 bounds.length, bounds.width, len(self._items))
        self._changed()

    def replace_all(self, items: Iterable[PlacedItem]) -> None:
        """Swap the whole item list in one step (auto-layout results)."""
        new_items = [clamp_item(it, self._bounds) for it in items]
        self._items = new_items
        self._selected_id = None
        self._changed()
