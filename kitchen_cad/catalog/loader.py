"""Catalog loader — reads catalog/equipment/*.json files, parses and validates them."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import (
    CATEGORIES, Catalog, CatalogResult, EquipmentTemplate, UtilitySpecs,
    ValidationError,
)


log = logging.getLogger("kitchen_cad.catalog")

CATALOG_DIR = Path(__file__).resolve().parent / "equipment"


# ── Validation ─────────────────────────────────────────────────────

def _validate_template(tpl: EquipmentTemplate, source: str) -> list[ValidationError]:
    errs: list[ValidationError] = []
    where = f"{source}:{tpl.name}"

    if not tpl.name.strip():
        errs.append(ValidationError(source, "name", "Must not be empty"))
    if tpl.width <= 0:
        errs.append(ValidationError(where, "width", "Must be > 0"))
    if tpl.height <= 0:
        errs.append(ValidationError(where, "height", "Must be > 0"))
    if tpl.category not in CATEGORIES:
        errs.append(ValidationError(where, "category",
                                    f"Unknown category '{tpl.category}'"))
    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_specs(data: dict | None) -> UtilitySpecs:
    if not data:
        return UtilitySpecs()
    return UtilitySpecs(
        power=str(data.get("power", "None")),
        water=str(data.get("water", "None")),
    )


def _parse_template(data: dict, category: str) -> EquipmentTemplate:
    return EquipmentTemplate(
        name=data["name"],
        category=category,
        width=int(data["width"]),
        height=int(data["height"]),
        style_tag=data.get("style_tag", ""),
        default_specs=_parse_specs(data.get("default_specs")),
    )


def _ordered_files(d: Path) -> list[Path]:
    """Known categories first in canonical order, then any extras by name."""
    by_stem = {p.stem: p for p in d.glob("*.json")}
    ordered = [by_stem.pop(cat) for cat in CATEGORIES if cat in by_stem]
    ordered.extend(by_stem[stem] for stem in sorted(by_stem))
    return ordered


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(catalog_dir: Path | None = None) -> CatalogResult:
    """Load all catalog/equipment/*.json files, parse and validate.

    Files are read in canonical category order so the resulting
    ``Catalog`` iterates exactly the way the resolver expects.
    Files that fail to parse are skipped (error recorded).  Templates
    with validation issues are dropped: an item must never be created
    with a zero or negative footprint.
    """
    d = catalog_dir or CATALOG_DIR
    categories: list[tuple[str, tuple[EquipmentTemplate, ...]]] = []
    errors: list[ValidationError] = []

    json_files = _ordered_files(d)
    if not json_files:
        errors.append(ValidationError("_catalog", "files", f"No .json files found in {d}"))
        return CatalogResult(catalog=Catalog(), errors=errors)

    seen_names: dict[str, str] = {}
    for path in json_files:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            errors.append(ValidationError(path.stem, "json", f"Parse error: {exc}"))
            continue
        except OSError as exc:
            errors.append(ValidationError(path.stem, "file", f"Read error: {exc}"))
            continue

        category = raw.get("category", path.stem) if isinstance(raw, dict) else path.stem
        entries = raw.get("templates") if isinstance(raw, dict) else None
        if not isinstance(entries, list):
            errors.append(ValidationError(path.stem, "templates", "Missing template list"))
            continue

        templates: list[EquipmentTemplate] = []
        for i, entry in enumerate(entries):
            try:
                tpl = _parse_template(entry, category)
            except (KeyError, TypeError, ValueError) as exc:
                errors.append(ValidationError(
                    path.stem, f"templates[{i}]", f"Missing/invalid field: {exc}"))
                continue

            tpl_errors = _validate_template(tpl, path.stem)
            if tpl_errors:
                errors.extend(tpl_errors)
                continue

            key = tpl.name.lower()
            if key in seen_names:
                errors.append(ValidationError(
                    path.stem, tpl.name,
                    f"Duplicate template name (already in '{seen_names[key]}')"))
            else:
                seen_names[key] = path.stem
            templates.append(tpl)

        categories.append((category, tuple(templates)))

    catalog = Catalog(categories=tuple(categories))
    log.info("Loaded %d equipment templates in %d categories (%d errors)",
             len(catalog), len(categories), len(errors))
    return CatalogResult(catalog=catalog, errors=errors)


def build_catalog(data: dict[str, list[dict]]) -> Catalog:
    """Build a Catalog from an in-memory ``{category: [template, ...]}`` mapping.

    Dict insertion order is ignored in favour of canonical category
    order; unknown categories follow, in the order given.
    """
    ordered = [c for c in CATEGORIES if c in data]
    ordered.extend(c for c in data if c not in CATEGORIES)
    return Catalog(categories=tuple(
        (cat, tuple(_parse_template(t, cat) for t in data[cat]))
        for cat in ordered
    ))


def get_template(catalog: Catalog | CatalogResult, name: str) -> EquipmentTemplate | None:
    """Look up a template by exact (case-insensitive) name. Returns None if not found."""
    cat = catalog.catalog if isinstance(catalog, CatalogResult) else catalog
    key = name.lower()
    for tpl in cat.iter_templates():
        if tpl.name.lower() == key:
            return tpl
    return None
