"""Kitchen layout generation clients and prompt construction."""

from .client import (
    AutoLayoutRequest, LayoutGenerator,
    GeminiClient, OpenAICompatibleClient, MockLayoutClient, get_client,
)
from .prompts import build_system_prompt, build_user_prompt

__all__ = [
    "AutoLayoutRequest", "LayoutGenerator",
    "GeminiClient", "OpenAICompatibleClient", "MockLayoutClient", "get_client",
    "build_system_prompt", "build_user_prompt",
]
