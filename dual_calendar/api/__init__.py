"""Server-side helpers exposed by the dual calendar package."""

from . import classifier, converter, grid, labels, navigation, preferences, systems, view

__all__ = [
    "classifier",
    "converter",
    "grid",
    "labels",
    "navigation",
    "preferences",
    "systems",
    "view",
]
