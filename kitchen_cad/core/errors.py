"""Exception types for the kitchen layout engine."""

from __future__ import annotations


class KitchenCadError(Exception):
    """Base class for all kitchen_cad errors."""


class LayoutResponseError(KitchenCadError):
    """The generator's response does not have the expected zones shape."""


class AutoLayoutError(KitchenCadError):
    """Base class for failures of an auto-layout run.

    Whatever the subclass, the model is left exactly as it was before
    the run started.
    """


class AutoLayoutValidationError(AutoLayoutError):
    """The request was rejected locally before anything was sent."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid auto-layout request ({field}): {reason}")


class InsufficientCreditsError(AutoLayoutError):
    def __init__(self, required: int) -> None:
        self.required = required
        super().__init__(f"Insufficient credits: auto-layout costs {required}")


class AutoLayoutInProgressError(AutoLayoutError):
    def __init__(self) -> None:
        super().__init__("An auto-layout request is already in flight")


class AutoLayoutFailedError(AutoLayoutError):
    """Transport, timeout or response-parsing failure."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Auto-layout failed: {reason}")


class NothingGeneratedError(AutoLayoutError):
    """The generator answered, but no zone carried any equipment."""

    def __init__(self, zone_count: int = 0) -> None:
        self.zone_count = zone_count
        super().__init__(
            f"Generator returned no equipment items across {zone_count} zone(s). "
            f"Try different requirements."
        )
