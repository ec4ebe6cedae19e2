"""Layout dataclasses — canvas bounds and placed equipment."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from kitchen_cad.catalog.models import CATEGORIES, UtilitySpecs
from kitchen_cad.config import LAYOUT_RULES


VALID_ROTATIONS = (0, 90, 180, 270)


@dataclass(frozen=True)
class CanvasBounds:
    """Kitchen footprint in grid units (1 unit = 1 foot)."""

    length: int = LAYOUT_RULES.default_length     # x extent
    width: int = LAYOUT_RULES.default_width       # y extent

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", max(1, int(self.length)))
        object.__setattr__(self, "width", max(1, int(self.width)))

    @property
    def area(self) -> int:
        return self.length * self.width


@dataclass(frozen=True)
class PlacedItem:
    """A piece of equipment on the grid.

    ``x``/``y`` is the top-left corner; ``width`` runs along the canvas
    length and ``height`` along the canvas width.
    """

    id: str
    name: str
    category: str                       # one of CATEGORIES
    x: int
    y: int
    width: int
    height: int
    rotation: int = 0                   # 0, 90, 180, 270
    specs: UtilitySpecs = field(default_factory=UtilitySpecs)
    color: str = ""                     # presentation only

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category '{self.category}'")
        if self.rotation not in VALID_ROTATIONS:
            raise ValueError(f"Rotation must be one of {VALID_ROTATIONS}, got {self.rotation}")
        object.__setattr__(self, "width", max(1, int(self.width)))
        object.__setattr__(self, "height", max(1, int(self.height)))
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))

    def rotated(self) -> PlacedItem:
        """Quarter turn: swap the extents and advance the rotation."""
        return replace(
            self,
            width=self.height,
            height=self.width,
            rotation=(self.rotation + 90) % 360,
        )

    def moved(self, x: int, y: int) -> PlacedItem:
        return replace(self, x=x, y=y)
