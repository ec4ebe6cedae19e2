"""Shared configuration for the kitchen layout engine.

Environment-driven settings (API keys, provider choice, output folders)
are read once at import time, after an optional ``.env`` file at the
repository root has been folded into ``os.environ``.

The geometric and economic constants used by the planner, the
interaction controller and the auto-layout service live in a single
frozen ``LayoutRules`` instance so every stage derives its numbers from
the same source of truth.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parent.parent


# ── .env loader ────────────────────────────────────────────────────

def _load_env(root: Path = ROOT) -> None:
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()


# ── Environment settings ───────────────────────────────────────────

LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "gemini")      # gemini | openai | mock

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-flash-latest")

LLM_BASE_URL = os.environ.get("LLM_BASE_URL", "").rstrip("/")
LLM_API_KEY = os.environ.get("LLM_API_KEY", "")
LLM_MODEL = os.environ.get("LLM_MODEL", "")

SESSIONS_DIR = Path(
    os.environ.get("KITCHEN_CAD_SESSIONS_DIR", str(ROOT / "outputs" / "sessions"))
)

AUTO_LAYOUT_TIMEOUT_S = float(os.environ.get("AUTO_LAYOUT_TIMEOUT_S", "90"))

STARTING_CREDITS = int(os.environ.get("KITCHEN_CAD_CREDITS", "1000"))


# ── Layout rules ───────────────────────────────────────────────────

@dataclass(frozen=True)
class LayoutRules:
    """Constants of the kitchen grid.

    All extents are in grid units (1 unit = 1 foot) unless the name
    says otherwise.
    """

    grid_unit_px: float = 40.0
    """Canvas pixels per grid unit at 100 % zoom."""

    default_length: int = 20
    default_width: int = 30

    default_item_width: int = 3
    default_item_height: int = 3
    """Fallback footprint when neither the catalog nor a hint helps."""

    scatter_columns: int = 3
    scatter_spacing: int = 4
    """Auto-layout spreads a zone's items on a 3-column, 4-unit grid."""

    fallback_power_kw: float = 1.5
    """Contribution of a power spec whose number can't be parsed."""

    default_power: str = "Standard"
    no_requirement: str = "None"

    layout_credit_cost: int = 100


# Module-level singleton — importable everywhere.
LAYOUT_RULES = LayoutRules()
