"""Kitchen CAD — equipment layout engine for commercial kitchens.

Packages:
  catalog   Equipment templates and free-text name resolution.
  layout    Canvas model, pointer interaction, MEP totals, blueprint export.
  planner   Generated zones → scattered placements around zone anchors.
  llm       Layout generators (Gemini, OpenAI-compatible, offline mock).
  core      Auto-layout service, credit ledger, error types.
  web       FastAPI server.
"""

__version__ = "0.1.0"
