"""Pointer-driven editing of the spatial model.

The controller is a two-state machine::

    Idle ──pointer_down(item)──▶ Dragging(item_id, offset) ──pointer_up──▶ Idle

Pointer coordinates are canvas-space pixels with zoom already divided
out, so zoom and pan never reach the model.  During a drag the grab
point is preserved: the offset between the pointer and the item's
top-left corner is recorded on pointer-down and subtracted on every
move before snapping to the grid.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from kitchen_cad.config import LAYOUT_RULES

from .geometry import clamp_position
from .model import SpatialModel


log = logging.getLogger("kitchen_cad.layout.interaction")


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    item_id: str
    offset_x: float     # pointer minus item top-left, in pixels
    offset_y: float


DragState = Idle | Dragging

IDLE = Idle()


def _round_half_up(value: float) -> int:
    """``Math.round`` semantics: halves round towards +infinity."""
    return int(math.floor(value + 0.5))


class InteractionController:
    def __init__(self, model: SpatialModel, grid_unit_px: float = LAYOUT_RULES.grid_unit_px) -> None:
        if grid_unit_px <= 0:
            raise ValueError("grid_unit_px must be > 0")
        self.model = model
        self.grid_unit_px = grid_unit_px
        self.state: DragState = IDLE

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    # ── Pointer events ─────────────────────────────────────────────

    def pointer_down(self, item_id: str, pointer_x: float, pointer_y: float) -> None:
        item = self.model.get(item_id)
        if item is None:
            self.state = IDLE
            return
        self.model.select(item_id)
        self.state = Dragging(
            item_id=item_id,
            offset_x=pointer_x - item.x * self.grid_unit_px,
            offset_y=pointer_y - item.y * self.grid_unit_px,
        )

    def pointer_move(self, pointer_x: float, pointer_y: float) -> None:
        state = self.state
        if not isinstance(state, Dragging):
            return
        item = self.model.get(state.item_id)
        if item is None:
            # Dragged item was removed under us.
            self.state = IDLE
            return

        gx = _round_half_up((pointer_x - state.offset_x) / self.grid_unit_px)
        gy = _round_half_up((pointer_y - state.offset_y) / self.grid_unit_px)
        x, y = clamp_position(gx, gy, item.width, item.height, self.model.bounds)
        if (x, y) != (item.x, item.y):
            self.model.update(item.id, x=x, y=y)

    def pointer_up(self) -> None:
        self.state = IDLE

    def background_click(self) -> None:
        """Click on empty canvas: drop the selection."""
        self.state = IDLE
        self.model.clear_selection()

    # ── Commands ───────────────────────────────────────────────────

    def rotate(self, item_id: str) -> None:
        self.model.rotate(item_id)

    def delete(self, item_id: str) -> None:
        if isinstance(self.state, Dragging) and self.state.item_id == item_id:
            self.state = IDLE
        self.model.remove(item_id)
        if self.model.selected_id == item_id:
            self.model.clear_selection()

    def rotate_selected(self) -> None:
        if self.model.selected_id is not None:
            self.rotate(self.model.selected_id)

    def delete_selected(self) -> None:
        selected = self.model.selected_id
        if selected is not None:
            self.delete(selected)
