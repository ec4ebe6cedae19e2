"""Tests for the equipment catalog: loading, validation and name resolution."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from kitchen_cad.catalog import (
    CATEGORIES,
    load_catalog,
    get_template,
    resolve_template,
    resolve_dimensions,
    parse_dimensions,
    catalog_to_dict,
)
from tests.kitchen_fixture import make_catalog, make_tiny_catalog


class TestCatalogLoader(unittest.TestCase):

    def test_shipped_catalog_loads_cleanly(self):
        result = load_catalog()
        self.assertTrue(result.ok, [str(e) for e in result.errors])
        self.assertEqual(len(result.catalog), 15)

    def test_categories_in_canonical_order(self):
        cats = make_catalog().category_names()
        self.assertEqual(cats, ["cooking", "refrigeration", "prep", "washing", "service"])
        self.assertEqual(cats, [c for c in CATEGORIES if c in cats])

    def test_templates_keep_file_order(self):
        names = [t.name for t in make_catalog().templates_in("cooking")]
        self.assertEqual(names, ["4-Burner Range", "Convection Oven", "Grill / Plancha", "Deep Fryer"])

    def test_template_fields(self):
        tpl = get_template(make_catalog(), "walk-in fridge")
        self.assertIsNotNone(tpl)
        self.assertEqual((tpl.width, tpl.height), (6, 5))
        self.assertEqual(tpl.category, "refrigeration")
        self.assertEqual(tpl.default_specs.water, "Drain")

    def test_bad_files_are_reported_not_raised(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            (d / "cooking.json").write_text(json.dumps({
                "category": "cooking",
                "templates": [
                    {"name": "Range", "width": 3, "height": 3},
                    {"name": "Flat Thing", "width": 0, "height": 3},
                    {"name": "No Height", "width": 2},
                ],
            }), encoding="utf-8")
            (d / "prep.json").write_text("{not json", encoding="utf-8")
            (d / "washing.json").write_text(json.dumps({"category": "washing"}), encoding="utf-8")

            result = load_catalog(d)

        self.assertFalse(result.ok)
        self.assertEqual([t.name for t in result.catalog.iter_templates()], ["Range"])
        fields = {(e.source, e.field) for e in result.errors}
        self.assertIn(("prep", "json"), fields)
        self.assertIn(("washing", "templates"), fields)
        self.assertIn(("cooking:Flat Thing", "width"), fields)
        self.assertIn(("cooking", "templates[2]"), fields)

    def test_empty_dir(self):
        with tempfile.TemporaryDirectory() as tmp:
            result = load_catalog(Path(tmp))
        self.assertFalse(result.ok)
        self.assertEqual(len(result.catalog), 0)

    def test_catalog_to_dict(self):
        d = catalog_to_dict(load_catalog())
        self.assertTrue(d["ok"])
        self.assertEqual(d["template_count"], 15)
        self.assertEqual(list(d["categories"])[0], "cooking")
        first = d["categories"]["cooking"][0]
        self.assertEqual(first["default_specs"], {"power": "3kW Gas", "water": "None"})


class TestResolveTemplate(unittest.TestCase):

    def setUp(self):
        self.catalog = make_catalog()

    def test_exact_name(self):
        self.assertEqual(resolve_template(self.catalog, "Reach-in Freezer").name, "Reach-in Freezer")

    def test_case_insensitive(self):
        self.assertEqual(resolve_template(self.catalog, "DEEP FRYER").name, "Deep Fryer")

    def test_query_contains_template_name(self):
        tpl = resolve_template(self.catalog, "Double Deep Fryer (gas)")
        self.assertEqual(tpl.name, "Deep Fryer")

    def test_template_name_contains_query(self):
        tpl = resolve_template(self.catalog, "Plancha")
        self.assertEqual(tpl.name, "Grill / Plancha")

    def test_no_match(self):
        self.assertIsNone(resolve_template(self.catalog, "Ice Cream Machine"))

    def test_empty_query_never_matches(self):
        self.assertIsNone(resolve_template(self.catalog, ""))
        self.assertIsNone(resolve_template(self.catalog, "   "))

    def test_first_match_in_canonical_order(self):
        tiny = make_tiny_catalog()
        # "Oven" (cooking) is met before "Combi Oven" and before prep's "Table",
        # even though prep was listed first in the source mapping.
        self.assertEqual(resolve_template(tiny, "Combi Oven XL").name, "Oven")
        self.assertEqual(resolve_template(tiny, "Table Oven").name, "Oven")
        self.assertEqual(resolve_template(tiny, "Chiller").name, "Oven Chiller")
        self.assertEqual(resolve_template(tiny, "Work Table").name, "Table")

    def test_deterministic(self):
        first = resolve_template(self.catalog, "Sink")
        self.assertEqual(first.name, "3-Compartment Sink")
        for _ in range(5):
            self.assertIs(resolve_template(self.catalog, "Sink"), first)


class TestParseDimensions(unittest.TestCase):

    def test_simple(self):
        self.assertEqual(parse_dimensions("4x3"), (4, 3))

    def test_uppercase_and_spaces(self):
        self.assertEqual(parse_dimensions(" 5 X 2 "), (5, 2))

    def test_trailing_units(self):
        self.assertEqual(parse_dimensions("4ft x 3ft"), (4, 3))

    def test_garbage(self):
        self.assertEqual(parse_dimensions("garbage"), (3, 3))

    def test_wrong_number_of_parts(self):
        self.assertEqual(parse_dimensions("4x3x2"), (3, 3))
        self.assertEqual(parse_dimensions("4"), (3, 3))

    def test_one_half_unparseable(self):
        self.assertEqual(parse_dimensions("4xabc"), (3, 3))

    def test_non_positive(self):
        self.assertEqual(parse_dimensions("0x4"), (3, 3))
        self.assertEqual(parse_dimensions("-2x4"), (3, 3))

    def test_missing(self):
        self.assertEqual(parse_dimensions(None), (3, 3))
        self.assertEqual(parse_dimensions(""), (3, 3))


class TestResolveDimensions(unittest.TestCase):

    def setUp(self):
        self.catalog = make_catalog()

    def test_catalog_wins_over_hint(self):
        w, h, tpl = resolve_dimensions(self.catalog, "Grill / Plancha", "9x9")
        self.assertEqual((w, h), (3, 2))
        self.assertEqual(tpl.name, "Grill / Plancha")

    def test_hint_used_when_unmatched(self):
        w, h, tpl = resolve_dimensions(self.catalog, "Tandoor", "4x4")
        self.assertEqual((w, h), (4, 4))
        self.assertIsNone(tpl)

    def test_default_when_nothing_helps(self):
        self.assertEqual(resolve_dimensions(self.catalog, "Tandoor"), (3, 3, None))


if __name__ == "__main__":
    unittest.main()
