"""Catalog dataclasses — typed representations of catalog/equipment/*.json entries."""

from __future__ import annotations

from dataclasses import dataclass, field


# Canonical category order.  The resolver walks the catalog in this
# order, so it decides which template wins when several names match.
CATEGORIES: tuple[str, ...] = (
    "cooking",
    "refrigeration",
    "prep",
    "washing",
    "service",
    "furniture",
)


@dataclass(frozen=True)
class UtilitySpecs:
    power: str = "None"                 # e.g. "3kW Gas", "None"
    water: str = "None"                 # e.g. "Inlet/Drain", "None"


@dataclass(frozen=True)
class EquipmentTemplate:
    name: str
    category: str
    width: int                          # grid units
    height: int                         # grid units
    style_tag: str = ""                 # presentation only
    default_specs: UtilitySpecs = field(default_factory=UtilitySpecs)


@dataclass(frozen=True)
class Catalog:
    """Immutable catalog: category -> ordered templates.

    ``categories`` holds ``(category, templates)`` pairs already in
    canonical order; ``iter_templates`` flattens them in that order.
    """

    categories: tuple[tuple[str, tuple[EquipmentTemplate, ...]], ...] = ()

    def iter_templates(self):
        for _category, templates in self.categories:
            yield from templates

    def templates_in(self, category: str) -> tuple[EquipmentTemplate, ...]:
        for cat, templates in self.categories:
            if cat == category:
                return templates
        return ()

    def category_names(self) -> list[str]:
        return [cat for cat, _ in self.categories]

    def __len__(self) -> int:
        return sum(len(t) for _, t in self.categories)


@dataclass
class ValidationError:
    source: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.field}: {self.message}"


@dataclass
class CatalogResult:
    """Result of loading the catalog — templates + any validation errors."""
    catalog: Catalog
    errors: list[ValidationError]

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0
