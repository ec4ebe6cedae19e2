"""
FastAPI web server — JSON endpoints that drive one kitchen designer.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from kitchen_cad import config
from kitchen_cad.catalog.loader import load_catalog
from kitchen_cad.catalog.models import CatalogResult
from kitchen_cad.catalog.serialization import catalog_to_dict
from kitchen_cad.core.auto_layout import AutoLayoutService
from kitchen_cad.core.credits import InMemoryCreditLedger
from kitchen_cad.core.errors import (
    AutoLayoutError, AutoLayoutFailedError, AutoLayoutInProgressError,
    AutoLayoutValidationError, InsufficientCreditsError, NothingGeneratedError,
)
from kitchen_cad.designer import KitchenDesigner
from kitchen_cad.layout.export import bounds_to_dict, item_to_dict, mep_to_dict
from kitchen_cad.llm.client import AutoLayoutRequest, LayoutGenerator, get_client
from kitchen_cad.llm.prompts import DEFAULT_KITCHEN_TYPE
from kitchen_cad.session import Session, create_session, list_sessions


log = logging.getLogger("kitchen_cad.server")


# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Kitchen CAD")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Designer state (persists across requests) ──────────────────────

_catalog_result: CatalogResult | None = None
_designer: KitchenDesigner | None = None
_credits: InMemoryCreditLedger | None = None
_session: Session | None = None
_sessions_dir: Path | None = None
_generator: LayoutGenerator | None = None


def init_state(
    generator: LayoutGenerator | None = None,
    credits: int = config.STARTING_CREDITS,
    sessions_dir: Path | None = None,
) -> KitchenDesigner:
    """(Re)build the designer; tests pass their own generator here.

    A reset also starts a new session folder on the next save.
    """
    global _catalog_result, _designer, _credits, _session, _sessions_dir, _generator
    _session = None
    _sessions_dir = sessions_dir
    _generator = generator
    if _catalog_result is None:
        _catalog_result = load_catalog()
        for err in _catalog_result.errors:
            log.warning("Catalog: %s", err)
    catalog = _catalog_result.catalog
    _credits = InMemoryCreditLedger(balance=credits)
    service = AutoLayoutService(generator or get_client(catalog), catalog, _credits)
    _designer = KitchenDesigner(catalog, auto_layout=service)
    return _designer


def _get_designer() -> KitchenDesigner:
    return _designer if _designer is not None else init_state()


def _layout_payload(d: KitchenDesigner) -> dict:
    return {
        "kitchenDims": bounds_to_dict(d.model.bounds),
        "items": [item_to_dict(it) for it in d.model.items],
        "selectedId": d.model.selected_id,
        "dragging": d.controller.is_dragging,
        "mepStats": mep_to_dict(d.mep_stats),
        "credits": _credits.balance if _credits is not None else None,
    }


# ── Models ─────────────────────────────────────────────────────────

class BoundsRequest(BaseModel):
    length: int = Field(gt=0)
    width: int = Field(gt=0)


class AddItemRequest(BaseModel):
    name: str


class SpecsUpdate(BaseModel):
    power: str | None = None
    water: str | None = None


class ItemUpdateRequest(BaseModel):
    name: str | None = None
    x: int | None = None
    y: int | None = None
    width: int | None = None
    height: int | None = None
    specs: SpecsUpdate | None = None


class PointerRequest(BaseModel):
    x: float
    y: float


class DragBeginRequest(PointerRequest):
    id: str


class AutoLayoutBody(BaseModel):
    cuisine: str
    kitchen_type: str = DEFAULT_KITCHEN_TYPE
    optimization_hint: str = "Optimize for efficiency"
    reference_sketch_b64: str | None = None


# ── Routes ─────────────────────────────────────────────────────────
# Every route is async so model writes all run on the event-loop thread,
# the same thread auto-layout commits its result from.

@app.post("/api/reset")
async def reset_designer():
    init_state(generator=_generator, sessions_dir=_sessions_dir)
    return _layout_payload(_get_designer())


@app.get("/api/catalog")
async def get_catalog():
    _get_designer()
    return catalog_to_dict(_catalog_result)


@app.get("/api/layout")
async def get_layout():
    return _layout_payload(_get_designer())


@app.post("/api/bounds")
async def set_bounds(req: BoundsRequest):
    d = _get_designer()
    d.set_bounds(req.length, req.width)
    return _layout_payload(d)


@app.post("/api/items")
async def add_item(req: AddItemRequest):
    d = _get_designer()
    item = d.add_catalog_item(req.name)
    if item is None:
        raise HTTPException(404, f"No catalog template named '{req.name}'.")
    return _layout_payload(d)


@app.patch("/api/items/{item_id}")
async def update_item(item_id: str, req: ItemUpdateRequest):
    d = _get_designer()
    fields = req.model_dump(exclude_none=True)
    d.update_item(item_id, **fields)
    return _layout_payload(d)


@app.post("/api/items/{item_id}/select")
async def select_item(item_id: str):
    d = _get_designer()
    d.select(item_id)
    return _layout_payload(d)


@app.post("/api/items/{item_id}/rotate")
async def rotate_item(item_id: str):
    d = _get_designer()
    d.controller.rotate(item_id)
    return _layout_payload(d)


@app.delete("/api/items/{item_id}")
async def delete_item(item_id: str):
    d = _get_designer()
    d.controller.delete(item_id)
    return _layout_payload(d)


@app.post("/api/drag/begin")
async def drag_begin(req: DragBeginRequest):
    d = _get_designer()
    d.begin_drag(req.id, req.x, req.y)
    return _layout_payload(d)


@app.post("/api/drag/move")
async def drag_move(req: PointerRequest):
    d = _get_designer()
    d.update_drag(req.x, req.y)
    return _layout_payload(d)


@app.post("/api/drag/end")
async def drag_end():
    d = _get_designer()
    d.end_drag()
    return _layout_payload(d)


@app.post("/api/auto_layout")
async def auto_layout(req: AutoLayoutBody):
    d = _get_designer()

    sketch = None
    if req.reference_sketch_b64:
        data = req.reference_sketch_b64
        if data.startswith("data:") and "," in data:
            data = data.split(",", 1)[1]
        try:
            sketch = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(400, "reference_sketch_b64 is not valid base64.")

    bounds = d.model.bounds
    request = AutoLayoutRequest(
        cuisine=req.cuisine,
        kitchen_type=req.kitchen_type,
        area_sq_ft=float(bounds.area),
        optimization_hint=req.optimization_hint,
        reference_sketch=sketch,
    )
    try:
        plan = await d.run_auto_layout(request)
    except AutoLayoutError as exc:
        raise HTTPException(_status_for(exc), str(exc))

    payload = _layout_payload(d)
    payload["unresolved"] = plan.unresolved
    return payload


@app.get("/api/export")
async def export_blueprint():
    d = _get_designer()
    return Response(
        content=json.dumps(d.export_blueprint(), indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{d.export_filename()}"'},
    )


@app.post("/api/save")
async def save_blueprint():
    global _session
    d = _get_designer()
    if _session is None:
        _session = create_session(f"{d.cuisine or 'Untitled'} kitchen", sessions_dir=_sessions_dir)
    path = d.save_blueprint(_session)
    return {"session_id": _session.id, "file": path.name, "artifacts": _session.list_artifacts()}


@app.get("/api/sessions")
async def get_sessions():
    return {"sessions": list_sessions(sessions_dir=_sessions_dir)}


def _status_for(exc: AutoLayoutError) -> int:
    if isinstance(exc, AutoLayoutValidationError):
        return 400
    if isinstance(exc, InsufficientCreditsError):
        return 402
    if isinstance(exc, AutoLayoutInProgressError):
        return 409
    if isinstance(exc, NothingGeneratedError):
        return 422
    if isinstance(exc, AutoLayoutFailedError):
        return 502
    return 500


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("kitchen_cad.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
