"""Tests for prompt building and the layout generator clients (no network)."""

from __future__ import annotations

import unittest
from unittest import mock

from kitchen_cad import config
from kitchen_cad.llm import client as llm_client
from kitchen_cad.llm.client import (
    AutoLayoutRequest, GeminiClient, MockLayoutClient, OpenAICompatibleClient,
    _extract_json, get_client,
)
from kitchen_cad.llm.prompts import build_system_prompt, build_user_prompt
from kitchen_cad.planner import parse_layout_response, plan_layout
from kitchen_cad.layout.models import CanvasBounds
from tests.kitchen_fixture import make_catalog


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def _names(response: dict, zone: str) -> list[str]:
    for z in response["zones"]:
        if z["name"] == zone:
            return [e["name"] for e in z["required_equipment"]]
    return []


class TestPrompts(unittest.TestCase):

    def test_system_prompt_lists_catalog(self):
        prompt = build_system_prompt(make_catalog())
        self.assertIn("4-Burner Range", prompt)
        self.assertIn('"zones"', prompt)

    def test_system_prompt_without_catalog(self):
        self.assertNotIn("Prefer these equipment names", build_system_prompt())

    def test_user_prompt(self):
        text = build_user_prompt("Thai", "Cloud Kitchen", 450, "Optimize for speed")
        self.assertIn("Cloud Kitchen for Thai cuisine", text)
        self.assertIn("450 sq ft", text)
        self.assertNotIn("sketch", text)

    def test_user_prompt_defaults_kitchen_type(self):
        text = build_user_prompt("Thai", "", 450, "x", has_sketch=True)
        self.assertIn("Commercial Closed Kitchen", text)
        self.assertIn("sketch", text)


class TestExtractJson(unittest.TestCase):

    def test_fenced(self):
        self.assertEqual(_extract_json('```json\n{"zones": []}\n```'), {"zones": []})

    def test_no_json(self):
        with self.assertRaises(ValueError):
            _extract_json("Sorry, I can't help with that.")


class TestMockLayoutClient(unittest.TestCase):

    def test_burger_gets_grill(self):
        resp = MockLayoutClient().generate_layout(
            AutoLayoutRequest("Burger", "Commercial Closed Kitchen", 600))
        self.assertIn("Grill / Plancha", _names(resp, "Hot Line"))
        self.assertNotIn("Deep Fryer", _names(resp, "Hot Line"))
        self.assertNotIn("Walk-in Fridge", _names(resp, "Cold Storage"))

    def test_large_fried_chicken_kitchen(self):
        resp = MockLayoutClient().generate_layout(
            AutoLayoutRequest("Fried Chicken", "QSR", 900))
        self.assertIn("Deep Fryer", _names(resp, "Hot Line"))
        self.assertEqual(_names(resp, "Cold Storage")[0], "Walk-in Fridge")

    def test_output_plans_cleanly(self):
        catalog = make_catalog()
        resp = MockLayoutClient().generate_layout(
            AutoLayoutRequest("Burger", "Commercial Closed Kitchen", 600))
        plan = plan_layout(parse_layout_response(resp), CanvasBounds(), catalog)
        self.assertEqual(plan.unresolved, [])
        self.assertEqual(len(plan.items), 10)


class TestOpenAICompatibleClient(unittest.TestCase):

    def _client(self, catalog=None):
        return OpenAICompatibleClient(base_url="https://llm.example/v1", api_key="k",
                                      model="m", catalog=catalog)

    def _response(self, content: str):
        r = mock.Mock()
        r.json.return_value = {"choices": [{"message": {"content": content}}]}
        r.raise_for_status.return_value = None
        return r

    def test_posts_chat_completion(self):
        with mock.patch.object(llm_client.requests, "post",
                               return_value=self._response('{"zones": []}')) as post:
            out = self._client(make_catalog()).generate_layout(
                AutoLayoutRequest("Thai", "Cloud Kitchen", 300))
        self.assertEqual(out, {"zones": []})
        url = post.call_args.args[0]
        payload = post.call_args.kwargs["json"]
        self.assertEqual(url, "https://llm.example/v1/chat/completions")
        self.assertEqual(payload["model"], "m")
        self.assertEqual(payload["response_format"], {"type": "json_object"})
        self.assertIn("Deep Fryer", payload["messages"][0]["content"])
        self.assertIsInstance(payload["messages"][1]["content"], str)

    def test_sketch_sent_as_data_url(self):
        with mock.patch.object(llm_client.requests, "post",
                               return_value=self._response('{"zones": []}')) as post:
            self._client().generate_layout(
                AutoLayoutRequest("Thai", "Cloud Kitchen", 300, reference_sketch=PNG_BYTES))
        content = post.call_args.kwargs["json"]["messages"][1]["content"]
        self.assertEqual(content[0]["type"], "text")
        self.assertTrue(content[1]["image_url"]["url"].startswith("data:image/png;base64,"))

    def test_missing_config(self):
        with self.assertRaises(RuntimeError):
            OpenAICompatibleClient(base_url="", api_key="", model="").generate_layout(
                AutoLayoutRequest("Thai", "Cloud Kitchen", 300))


class TestGetClient(unittest.TestCase):

    def test_mock_provider(self):
        self.assertIsInstance(get_client(provider="mock"), MockLayoutClient)

    def test_falls_back_without_credentials(self):
        with mock.patch.object(config, "GEMINI_API_KEY", ""), \
                mock.patch.object(config, "LLM_API_KEY", ""):
            self.assertIsInstance(get_client(provider="gemini"), MockLayoutClient)
            self.assertIsInstance(get_client(provider="openai"), MockLayoutClient)

    def test_gemini_with_key(self):
        catalog = make_catalog()
        with mock.patch.object(config, "GEMINI_API_KEY", "secret"):
            gen = get_client(catalog, provider="Gemini")
        self.assertIsInstance(gen, GeminiClient)
        self.assertIs(gen.catalog, catalog)

    def test_gemini_requires_key(self):
        with self.assertRaises(RuntimeError):
            GeminiClient(api_key="").generate_layout(
                AutoLayoutRequest("Thai", "Cloud Kitchen", 300))


if __name__ == "__main__":
    unittest.main()
