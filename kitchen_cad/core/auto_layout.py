"""Auto-layout service — generate zones with the LLM, plan, replace atomically.

Sequence of one run:

  1. refuse if another run is in flight (single-flight guard)
  2. validate the request locally
  3. deduct credits (synchronously, before any network traffic)
  4. await the generator in a worker thread (with timeout)
  5. parse the response and plan placements on the *current* canvas
  6. swap the model's items in one step

The model is only touched in step 6.  Any failure before that leaves it
exactly as it was.
"""

from __future__ import annotations

import asyncio
import logging

from kitchen_cad import config
from kitchen_cad.catalog.models import Catalog
from kitchen_cad.config import LAYOUT_RULES
from kitchen_cad.layout.model import SpatialModel
from kitchen_cad.llm.client import AutoLayoutRequest, LayoutGenerator
from kitchen_cad.planner.engine import plan_layout
from kitchen_cad.planner.models import LayoutPlan
from kitchen_cad.planner.parsing import parse_layout_response

from .credits import CreditLedger
from .errors import (
    AutoLayoutFailedError, AutoLayoutInProgressError, AutoLayoutValidationError,
    InsufficientCreditsError, LayoutResponseError,
)


log = logging.getLogger("kitchen_cad.auto_layout")


def validate_request(request: AutoLayoutRequest) -> None:
    if not request.cuisine or not request.cuisine.strip():
        raise AutoLayoutValidationError("cuisine", "Please specify a cuisine type.")
    if request.area_sq_ft <= 0:
        raise AutoLayoutValidationError("area_sq_ft", "Area must be > 0.")


class AutoLayoutService:
    def __init__(
        self,
        generator: LayoutGenerator,
        catalog: Catalog,
        credits: CreditLedger,
        *,
        cost: int = LAYOUT_RULES.layout_credit_cost,
        timeout_s: float | None = config.AUTO_LAYOUT_TIMEOUT_S,
    ) -> None:
        self.generator = generator
        self.catalog = catalog
        self.credits = credits
        self.cost = cost
        self.timeout_s = timeout_s
        self._in_flight = False
        self._runs = 0

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def run(self, request: AutoLayoutRequest, model: SpatialModel) -> LayoutPlan:
        """Generate a layout and replace *model*'s items with it.

        Raises
        ------
        AutoLayoutInProgressError
            Another run has not finished yet.
        AutoLayoutValidationError
            Missing cuisine or non-positive area.
        InsufficientCreditsError
            The ledger refused the deduction; nothing was sent.
        AutoLayoutFailedError
            Transport error, timeout, or unusable response.
        NothingGeneratedError
            The response parsed but contained no equipment.
        """
        if self._in_flight:
            raise AutoLayoutInProgressError()
        validate_request(request)
        if not self.credits.deduct(self.cost):
            raise InsufficientCreditsError(self.cost)

        self._in_flight = True
        self._runs += 1
        run_id = str(self._runs)
        try:
            log.info("Auto-layout run %s: %s / %s, %.0f sq ft%s",
                     run_id, request.cuisine, request.kitchen_type, request.area_sq_ft,
                     " (with sketch)" if request.reference_sketch else "")
            raw = await self._generate(request)
            try:
                zones = parse_layout_response(raw)
            except LayoutResponseError as exc:
                raise AutoLayoutFailedError(str(exc)) from exc

            plan = plan_layout(zones, model.bounds, self.catalog, run_id=run_id)
            model.replace_all(plan.items)
            log.info("Auto-layout run %s replaced layout with %d items", run_id, len(plan.items))
            return plan
        finally:
            self._in_flight = False

    async def _generate(self, request: AutoLayoutRequest) -> dict:
        call = asyncio.to_thread(self.generator.generate_layout, request)
        try:
            if self.timeout_s:
                return await asyncio.wait_for(call, timeout=self.timeout_s)
            return await call
        except asyncio.TimeoutError as exc:
            raise AutoLayoutFailedError(
                f"generator timed out after {self.timeout_s:.0f} s") from exc
        except Exception as exc:
            log.warning("Layout generation failed: %s", exc, exc_info=True)
            raise AutoLayoutFailedError(str(exc) or type(exc).__name__) from exc
