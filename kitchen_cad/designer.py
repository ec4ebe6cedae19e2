"""Kitchen designer — the operations the surrounding UI triggers.

One ``KitchenDesigner`` owns a spatial model, the pointer controller
that edits it, and (optionally) the auto-layout service that can
replace it.  The MEP summary is kept current through a model listener.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kitchen_cad.catalog.loader import get_template
from kitchen_cad.catalog.models import Catalog, EquipmentTemplate
from kitchen_cad.core.auto_layout import AutoLayoutService
from kitchen_cad.layout.export import blueprint_filename, blueprint_to_dict
from kitchen_cad.layout.interaction import InteractionController
from kitchen_cad.layout.mep import MepStats, compute_mep_stats
from kitchen_cad.layout.model import SpatialModel
from kitchen_cad.layout.models import CanvasBounds, PlacedItem
from kitchen_cad.llm.client import AutoLayoutRequest
from kitchen_cad.planner.models import LayoutPlan
from kitchen_cad.session import Session


log = logging.getLogger("kitchen_cad.designer")


class KitchenDesigner:
    def __init__(
        self,
        catalog: Catalog,
        *,
        bounds: CanvasBounds | None = None,
        auto_layout: AutoLayoutService | None = None,
    ) -> None:
        self.catalog = catalog
        self.model = SpatialModel(bounds)
        self.controller = InteractionController(self.model)
        self.auto_layout = auto_layout
        self.cuisine = ""
        self._mep = compute_mep_stats(self.model.items)
        self.model.subscribe(self._on_change)

    def _on_change(self, model: SpatialModel) -> None:
        self._mep = compute_mep_stats(model.items)

    @property
    def mep_stats(self) -> MepStats:
        return self._mep

    # ── Canvas ─────────────────────────────────────────────────────

    def set_bounds(self, length: int, width: int) -> CanvasBounds:
        bounds = CanvasBounds(length=length, width=width)
        self.model.set_bounds(bounds)
        return bounds

    # ── Items ──────────────────────────────────────────────────────

    def add_catalog_item(self, template: EquipmentTemplate | str) -> PlacedItem | None:
        """Drop a catalog template near the canvas centre and select it.

        *template* may be a template or its exact name; an unknown name
        is a no-op.
        """
        if isinstance(template, str):
            found = get_template(self.catalog, template)
            if found is None:
                log.warning("add_catalog_item: unknown template %r", template)
                return None
            template = found
        return self.model.add_template(template)

    def update_item(self, item_id: str, **fields) -> PlacedItem | None:
        return self.model.update(item_id, **fields)

    def select(self, item_id: str | None) -> None:
        self.model.select(item_id)

    def rotate_selected(self) -> None:
        self.controller.rotate_selected()

    def delete_selected(self) -> None:
        self.controller.delete_selected()

    # ── Drag ───────────────────────────────────────────────────────

    def begin_drag(self, item_id: str, pointer_x: float, pointer_y: float) -> None:
        self.controller.pointer_down(item_id, pointer_x, pointer_y)

    def update_drag(self, pointer_x: float, pointer_y: float) -> None:
        self.controller.pointer_move(pointer_x, pointer_y)

    def end_drag(self) -> None:
        self.controller.pointer_up()

    # ── Auto-layout ────────────────────────────────────────────────

    async def run_auto_layout(self, request: AutoLayoutRequest) -> LayoutPlan:
        if self.auto_layout is None:
            raise RuntimeError("No auto-layout service configured")
        plan = await self.auto_layout.run(request, self.model)
        self.cuisine = request.cuisine
        return plan

    # ── Export ─────────────────────────────────────────────────────

    def export_blueprint(self) -> dict:
        return blueprint_to_dict(self.model)

    def export_filename(self) -> str:
        return blueprint_filename(self.cuisine)

    def save_blueprint(self, session: Session) -> Path:
        """Write the current blueprint into *session*'s folder."""
        path = session.write_artifact(self.export_filename(), self.export_blueprint())
        log.info("Saved blueprint (%d items) to %s", len(self.model), path)
        return path
