"""Tests for the auto-layout service: credits, single flight, atomic replace."""

from __future__ import annotations

import asyncio
import threading
import time
import unittest

from kitchen_cad.core.auto_layout import AutoLayoutService
from kitchen_cad.core.credits import InMemoryCreditLedger
from kitchen_cad.core.errors import (
    AutoLayoutFailedError, AutoLayoutInProgressError, AutoLayoutValidationError,
    InsufficientCreditsError, NothingGeneratedError,
)
from kitchen_cad.designer import KitchenDesigner
from kitchen_cad.layout.geometry import item_inside_bounds
from kitchen_cad.layout.model import SpatialModel
from kitchen_cad.layout.models import CanvasBounds
from kitchen_cad.llm.client import AutoLayoutRequest
from tests.kitchen_fixture import HOT_AND_COLD_RESPONSE, make_catalog, make_item


def _request(cuisine: str = "Burger", area: float = 600) -> AutoLayoutRequest:
    return AutoLayoutRequest(cuisine=cuisine, kitchen_type="Commercial Closed Kitchen",
                             area_sq_ft=area)


class StaticGenerator:
    def __init__(self, response):
        self.response = response
        self.calls = 0

    def generate_layout(self, request):
        self.calls += 1
        return self.response


class FailingGenerator:
    def __init__(self):
        self.calls = 0

    def generate_layout(self, request):
        self.calls += 1
        raise ConnectionError("connection reset")


class BlockingGenerator:
    """Blocks in its worker thread until ``release`` is set."""

    def __init__(self, response):
        self.response = response
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def generate_layout(self, request):
        self.calls += 1
        self.started.set()
        self.release.wait(timeout=5)
        return self.response


class SlowGenerator:
    def generate_layout(self, request):
        time.sleep(0.5)
        return HOT_AND_COLD_RESPONSE


class TestAutoLayoutService(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.catalog = make_catalog()
        self.model = SpatialModel()
        self.model.add(make_item("manual_1", x=5, y=5))
        self.credits = InMemoryCreditLedger(balance=1000)

    def _service(self, generator, **kw) -> AutoLayoutService:
        return AutoLayoutService(generator, self.catalog, self.credits, **kw)

    def _assert_untouched(self):
        self.assertEqual([it.id for it in self.model.items], ["manual_1"])

    async def test_success_replaces_layout(self):
        self.model.select("manual_1")
        gen = StaticGenerator(HOT_AND_COLD_RESPONSE)
        plan = await self._service(gen).run(_request(), self.model)

        self.assertEqual([it.id for it in self.model.items], ["ai_1_0", "ai_1_1", "ai_1_2"])
        self.assertEqual(list(self.model.items), plan.items)
        self.assertIsNone(self.model.selected_id)
        self.assertEqual(self.credits.balance, 900)
        self.assertEqual(gen.calls, 1)

    async def test_run_ids_keep_generated_ids_unique(self):
        service = self._service(StaticGenerator(HOT_AND_COLD_RESPONSE))
        await service.run(_request(), self.model)
        await service.run(_request(), self.model)
        self.assertEqual(self.model.items[0].id, "ai_2_0")
        self.assertEqual(self.credits.balance, 800)

    async def test_missing_cuisine(self):
        gen = StaticGenerator(HOT_AND_COLD_RESPONSE)
        with self.assertRaises(AutoLayoutValidationError) as ctx:
            await self._service(gen).run(_request(cuisine="  "), self.model)
        self.assertEqual(ctx.exception.field, "cuisine")
        self.assertEqual(gen.calls, 0)
        self.assertEqual(self.credits.balance, 1000)
        self._assert_untouched()

    async def test_non_positive_area(self):
        with self.assertRaises(AutoLayoutValidationError):
            await self._service(StaticGenerator({})).run(_request(area=0), self.model)
        self.assertEqual(self.credits.balance, 1000)

    async def test_insufficient_credits(self):
        self.credits.balance = 99
        gen = StaticGenerator(HOT_AND_COLD_RESPONSE)
        with self.assertRaises(InsufficientCreditsError) as ctx:
            await self._service(gen).run(_request(), self.model)
        self.assertEqual(ctx.exception.required, 100)
        self.assertEqual(gen.calls, 0)
        self.assertEqual(self.credits.balance, 99)
        self._assert_untouched()

    async def test_transport_failure_leaves_model(self):
        service = self._service(FailingGenerator())
        with self.assertRaises(AutoLayoutFailedError) as ctx:
            await service.run(_request(), self.model)
        self.assertIn("connection reset", str(ctx.exception))
        self._assert_untouched()
        # Credits are spent once the request is dispatched.
        self.assertEqual(self.credits.balance, 900)
        self.assertFalse(service.in_flight)

    async def test_malformed_response(self):
        with self.assertRaises(AutoLayoutFailedError):
            await self._service(StaticGenerator({"zones": "Hot Line"})).run(_request(), self.model)
        self._assert_untouched()

    async def test_nothing_generated(self):
        response = {"zones": [{"name": "Hot Line", "required_equipment": []}]}
        with self.assertRaises(NothingGeneratedError):
            await self._service(StaticGenerator(response)).run(_request(), self.model)
        self._assert_untouched()

    async def test_timeout(self):
        service = self._service(SlowGenerator(), timeout_s=0.05)
        with self.assertRaises(AutoLayoutFailedError) as ctx:
            await service.run(_request(), self.model)
        self.assertIn("timed out", str(ctx.exception))
        self._assert_untouched()
        self.assertFalse(service.in_flight)

    async def test_single_flight(self):
        gen = BlockingGenerator(HOT_AND_COLD_RESPONSE)
        service = self._service(gen)
        first = asyncio.create_task(service.run(_request(), self.model))
        await asyncio.to_thread(gen.started.wait, 5)
        self.assertTrue(service.in_flight)

        with self.assertRaises(AutoLayoutInProgressError):
            await service.run(_request(), self.model)
        self.assertEqual(self.credits.balance, 900)

        gen.release.set()
        plan = await first
        self.assertEqual(len(plan.items), 3)
        self.assertEqual(gen.calls, 1)
        self.assertFalse(service.in_flight)

    async def test_plans_on_canvas_current_at_completion(self):
        gen = BlockingGenerator(HOT_AND_COLD_RESPONSE)
        task = asyncio.create_task(self._service(gen).run(_request(), self.model))
        await asyncio.to_thread(gen.started.wait, 5)
        self.model.set_bounds(CanvasBounds(8, 8))
        gen.release.set()
        await task
        for it in self.model.items:
            self.assertTrue(item_inside_bounds(it, CanvasBounds(8, 8)), it)
        # cook anchor on 8x8 is (1, 5)
        self.assertEqual((self.model.items[1].x, self.model.items[1].y), (1, 5))


class TestDesignerAutoLayout(unittest.IsolatedAsyncioTestCase):

    async def test_cuisine_names_export(self):
        catalog = make_catalog()
        credits = InMemoryCreditLedger(balance=100)
        service = AutoLayoutService(StaticGenerator(HOT_AND_COLD_RESPONSE), catalog, credits)
        designer = KitchenDesigner(catalog, auto_layout=service)

        await designer.run_auto_layout(_request(cuisine="Smash Burger"))
        self.assertEqual(designer.export_filename(), "kitchen_layout_smash_burger.json")
        self.assertEqual(len(designer.export_blueprint()["items"]), 3)
        self.assertGreater(designer.mep_stats.total_power, 0)

    async def test_failed_run_keeps_cuisine(self):
        catalog = make_catalog()
        service = AutoLayoutService(FailingGenerator(), catalog, InMemoryCreditLedger(100))
        designer = KitchenDesigner(catalog, auto_layout=service)
        with self.assertRaises(AutoLayoutFailedError):
            await designer.run_auto_layout(_request(cuisine="Thai"))
        self.assertEqual(designer.cuisine, "")


class TestCreditLedger(unittest.TestCase):

    def test_deduct_and_refuse(self):
        ledger = InMemoryCreditLedger(balance=150)
        self.assertTrue(ledger.deduct(100))
        self.assertFalse(ledger.deduct(100))
        self.assertEqual(ledger.balance, 50)
        ledger.top_up(50)
        self.assertTrue(ledger.deduct(100))

    def test_negative_amount(self):
        with self.assertRaises(ValueError):
            InMemoryCreditLedger(10).deduct(-1)


if __name__ == "__main__":
    unittest.main()
