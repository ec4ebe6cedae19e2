from __future__ import annotations

import base64
import json
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

import requests

from kitchen_cad import config
from kitchen_cad.catalog.models import Catalog

from .prompts import build_system_prompt, build_user_prompt


log = logging.getLogger("kitchen_cad.llm")


@dataclass
class AutoLayoutRequest:
    cuisine: str
    kitchen_type: str
    area_sq_ft: float
    optimization_hint: str = "Optimize for efficiency"
    reference_sketch: bytes | None = None   # PNG / JPEG / WebP bytes


class LayoutGenerator(Protocol):
    def generate_layout(self, request: AutoLayoutRequest) -> dict:
        ...


def _extract_json(content: str) -> dict:
    match = re.search(r"\{.*\}", content, flags=re.DOTALL)
    if not match:
        raise ValueError("Model did not return JSON.")
    return json.loads(match.group(0))


def _sniff_mime(data: bytes) -> str:
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


@dataclass
class MockLayoutClient:
    """Offline fallback: a tiny heuristic generator that returns a zones dict."""

    def generate_layout(self, request: AutoLayoutRequest) -> dict:
        text = f"{request.cuisine} {request.kitchen_type}".lower()
        cooking = [{"name": "4-Burner Range"}, {"name": "Convection Oven"}]
        if any(k in text for k in ("burger", "grill", "bbq", "steak")):
            cooking.append({"name": "Grill / Plancha"})
        if any(k in text for k in ("fried", "chicken", "fast food", "qsr")):
            cooking.append({"name": "Deep Fryer"})

        zones = [
            {"name": "Cold Storage", "required_equipment": [
                {"name": "Reach-in Freezer"}, {"name": "Undercounter Fridge"}]},
            {"name": "Prep Area", "required_equipment": [
                {"name": "SS Work Table", "power_rating": "None"}, {"name": "Prep Counter"}]},
            {"name": "Hot Line", "required_equipment": cooking},
            {"name": "Dish Wash", "required_equipment": [
                {"name": "3-Compartment Sink", "power_rating": "None",
                 "water_connection": "Hot/Cold Inlet"},
                {"name": "Hand Sink", "power_rating": "None", "water_connection": "Cold Inlet"}]},
            {"name": "Service Pass", "required_equipment": [
                {"name": "Pass Window", "power_rating": "None"}]},
        ]
        if request.area_sq_ft >= 800:
            zones[0]["required_equipment"].insert(
                0, {"name": "Walk-in Fridge", "power_rating": "1.5kW", "water_connection": "Drain"})
        return {"title": f"{request.cuisine} {request.kitchen_type}".strip(), "zones": zones}


@dataclass
class OpenAICompatibleClient:
    """Client for OpenAI-compatible chat endpoints.

    Configure environment variables:
      - LLM_BASE_URL (e.g. https://api.openai.com/v1)
      - LLM_API_KEY
      - LLM_MODEL
    """
    base_url: str = config.LLM_BASE_URL
    api_key: str = config.LLM_API_KEY
    model: str = config.LLM_MODEL
    catalog: Catalog | None = None
    timeout_s: float = 60.0

    def generate_layout(self, request: AutoLayoutRequest) -> dict:
        if not (self.base_url and self.api_key and self.model):
            raise RuntimeError("LLM_BASE_URL, LLM_API_KEY, and LLM_MODEL must be set.")

        user_text = build_user_prompt(
            request.cuisine, request.kitchen_type, request.area_sq_ft,
            request.optimization_hint, has_sketch=request.reference_sketch is not None,
        )
        user_content: str | list = user_text
        if request.reference_sketch is not None:
            encoded = base64.b64encode(request.reference_sketch).decode("ascii")
            mime = _sniff_mime(request.reference_sketch)
            user_content = [
                {"type": "text", "text": user_text},
                {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{encoded}"}},
            ]

        url = f"{self.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(self.catalog)},
                {"role": "user", "content": user_content},
            ],
            "temperature": 0.2,
            "response_format": {"type": "json_object"},
        }
        r = requests.post(url, headers=headers, json=payload, timeout=self.timeout_s)
        r.raise_for_status()
        data = r.json()
        content = data["choices"][0]["message"]["content"]
        return _extract_json(content)


@dataclass
class GeminiClient:
    """Client for Google AI Studio Gemini models.

    Configure environment variables:
      - GEMINI_API_KEY
      - GEMINI_MODEL (optional, default: gemini-flash-latest)
    """

    api_key: str = config.GEMINI_API_KEY
    model: str = config.GEMINI_MODEL
    catalog: Catalog | None = None
    max_retries: int = 3
    base_delay_s: float = 2.0
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def generate_layout(self, request: AutoLayoutRequest) -> dict:
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY must be set.")

        import google.generativeai as genai
        from google.api_core.exceptions import ResourceExhausted

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(
            self.model,
            system_instruction=build_system_prompt(self.catalog),
            generation_config={"response_mime_type": "application/json"},
        )

        parts: list = [build_user_prompt(
            request.cuisine, request.kitchen_type, request.area_sq_ft,
            request.optimization_hint, has_sketch=request.reference_sketch is not None,
        )]
        if request.reference_sketch is not None:
            parts.append({
                "mime_type": _sniff_mime(request.reference_sketch),
                "data": request.reference_sketch,
            })

        for attempt in range(self.max_retries + 1):
            try:
                response = model.generate_content(parts)
                return _extract_json(response.text or "")
            except ResourceExhausted:
                if attempt == self.max_retries:
                    raise
                # Exponential backoff: 2, 4, 8 seconds
                delay = self.base_delay_s * (2 ** attempt)
                log.warning("Gemini rate limit hit. Retrying in %.0f s (attempt %d/%d)",
                            delay, attempt + 1, self.max_retries)
                self.sleep(delay)

        raise RuntimeError("Max retries exceeded")


def get_client(catalog: Catalog | None = None, provider: str | None = None) -> LayoutGenerator:
    """Pick a generator from ``LLM_PROVIDER`` (gemini | openai | mock).

    Falls back to the mock generator when the chosen provider has no
    credentials configured.
    """
    provider = (provider or config.LLM_PROVIDER).lower()
    if provider == "gemini" and config.GEMINI_API_KEY:
        return GeminiClient(catalog=catalog)
    if provider == "openai" and config.LLM_API_KEY:
        return OpenAICompatibleClient(catalog=catalog)
    if provider != "mock":
        log.warning("No credentials for LLM provider %r — using offline mock generator", provider)
    return MockLayoutClient()
