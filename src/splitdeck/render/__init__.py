"""Layout geometry and preview rendering."""

from .geometry import compute_geometry
from .renderer import LayoutRenderer
from .types import Divider, Geometry, PaneRect

__all__ = [
    "compute_geometry",
    "LayoutRenderer",
    "Geometry",
    "PaneRect",
    "Divider",
]
