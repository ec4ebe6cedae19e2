"""Generator response parsing — convert the raw zones JSON into ZoneSpecs.

Format::

    {"zones": [{"name": "Hot Line",
                "required_equipment": [{"name": "4-Burner Range",
                                        "power_rating": "3kW Gas",
                                        "water_connection": "None",
                                        "dimensions": "3x3"}]}]}

Model output is loose, so parsing is forgiving below the top level:
non-object zones are dropped, bare strings in ``required_equipment``
are taken as names, and numeric ratings are turned into strings.
"""

from __future__ import annotations

from kitchen_cad.core.errors import LayoutResponseError

from .models import EquipmentRequest, ZoneSpec


UNNAMED_EQUIPMENT = "Unnamed Equipment"


def _opt_str(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_equipment(data) -> EquipmentRequest | None:
    if isinstance(data, str):
        name = data.strip()
        return EquipmentRequest(name=name) if name else None
    if not isinstance(data, dict):
        return None
    return EquipmentRequest(
        name=_opt_str(data.get("name")) or UNNAMED_EQUIPMENT,
        power_rating=_opt_str(data.get("power_rating")),
        water_connection=_opt_str(data.get("water_connection")),
        dimensions=_opt_str(data.get("dimensions")),
    )


def _parse_zone(data: dict) -> ZoneSpec:
    raw_equipment = data.get("required_equipment") or []
    if not isinstance(raw_equipment, list):
        raw_equipment = []
    equipment = [eq for eq in (_parse_equipment(e) for e in raw_equipment) if eq is not None]
    return ZoneSpec(
        name=str(data.get("name") or "").strip(),
        required_equipment=equipment,
        description=str(data.get("description") or ""),
        placement_hint=str(data.get("placement_hint") or ""),
    )


def parse_layout_response(data) -> list[ZoneSpec]:
    """Parse a generator response dict into a list of ZoneSpecs.

    Raises LayoutResponseError if the top level is not an object or
    ``zones`` is present but not a list.
    """
    if not isinstance(data, dict):
        raise LayoutResponseError(
            f"Expected a JSON object with 'zones', got {type(data).__name__}")
    zones = data.get("zones")
    if zones is None:
        return []
    if not isinstance(zones, list):
        raise LayoutResponseError(
            f"'zones' must be a list, got {type(zones).__name__}")
    return [_parse_zone(z) for z in zones if isinstance(z, dict)]
