"""
Prompts for the kitchen layout generator.
"""

from __future__ import annotations

from kitchen_cad.catalog.models import Catalog


DEFAULT_KITCHEN_TYPE = "Commercial Closed Kitchen"


def build_system_prompt(catalog: Catalog | None = None) -> str:
    """System prompt; lists catalog names so the model reuses them verbatim."""
    catalog_lines = ""
    if catalog is not None and len(catalog):
        names = "\n".join(
            f"  • {category}: " + ", ".join(t.name for t in templates)
            for category, templates in catalog.categories
            if templates
        )
        catalog_lines = f"""
Prefer these equipment names when they fit (they have known footprints):
{names}
"""

    return f"""\
You are a commercial kitchen design consultant. Given a cuisine, a
kitchen type and a floor area, you break the kitchen into functional
zones and list the equipment each zone needs.

Name zones after their function so they can be placed on the floor:
use words such as "Cold Storage", "Prep", "Hot Line" / "Cooking",
"Dish Wash" / "Scullery", and "Service Pass".
{catalog_lines}
Respond with JSON only, in exactly this shape:

{{
  "title": "string",
  "zones": [
    {{
      "name": "string",
      "description": "string",
      "placement_hint": "string",
      "required_equipment": [
        {{
          "name": "string",
          "power_rating": "e.g. 5kW 3-Phase, or None",
          "water_connection": "e.g. Inlet/Drain, or None",
          "dimensions": "<width>x<depth> in feet, e.g. 3x3"
        }}
      ]
    }}
  ],
  "summary": "string"
}}
"""


def build_user_prompt(
    cuisine: str,
    kitchen_type: str,
    area_sq_ft: float,
    optimization_hint: str,
    has_sketch: bool = False,
) -> str:
    sketch_note = (
        "\nA reference sketch of the existing floor plan is attached; "
        "respect its walls and openings when choosing zones."
        if has_sketch else ""
    )
    return (
        f"Design a {kitchen_type or DEFAULT_KITCHEN_TYPE} for {cuisine} cuisine.\n"
        f"Total floor area: {area_sq_ft:g} sq ft.\n"
        f"Goal: {optimization_hint}."
        f"{sketch_note}"
    )
