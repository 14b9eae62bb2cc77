"""Layout presets

Ready-made pane arrangements offered when creating a terminal group. Every
preset builds a fresh tree of vacant leaves; sessions are placed into it
later with fill_empty_leaf.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from .types import Direction, LayoutNode, leaf, split

H = Direction.HORIZONTAL
V = Direction.VERTICAL


@dataclass(frozen=True)
class LayoutPreset:
    """A named layout template.

    Attributes:
        preset_id: Stable identifier used by the API
        name: Display name
        pane_count: Number of panes in the layout
        icon_grid: Rows x cols sketch for the miniature icon; equal letters
            mark one pane spanning several cells
        factory: Builds a fresh tree with vacant leaves
    """

    preset_id: str
    name: str
    pane_count: int
    icon_grid: tuple[tuple[str, ...], ...]
    factory: Callable[[], LayoutNode] = field(repr=False)

    def create_layout(self) -> LayoutNode:
        return self.factory()

    def to_dict(self) -> dict:
        return {
            "id": self.preset_id,
            "name": self.name,
            "pane_count": self.pane_count,
            "icon_grid": [list(row) for row in self.icon_grid],
        }


LAYOUT_PRESETS: list[LayoutPreset] = [
    LayoutPreset(
        preset_id="side-by-side",
        name="Side by Side",
        pane_count=2,
        icon_grid=(("a", "b"),),
        factory=lambda: split(H, leaf(), leaf()),
    ),
    LayoutPreset(
        preset_id="stacked",
        name="Stacked",
        pane_count=2,
        icon_grid=(("a",), ("b",)),
        factory=lambda: split(V, leaf(), leaf()),
    ),
    LayoutPreset(
        preset_id="three-columns",
        name="Three Columns",
        pane_count=3,
        icon_grid=(("a", "b", "c"),),
        factory=lambda: split(H, leaf(), split(H, leaf(), leaf()), 1 / 3),
    ),
    LayoutPreset(
        preset_id="three-rows",
        name="Three Rows",
        pane_count=3,
        icon_grid=(("a",), ("b",), ("c",)),
        factory=lambda: split(V, leaf(), split(V, leaf(), leaf()), 1 / 3),
    ),
    LayoutPreset(
        preset_id="grid-2x2",
        name="2x2 Grid",
        pane_count=4,
        icon_grid=(("a", "b"), ("c", "d")),
        factory=lambda: split(
            H,
            split(V, leaf(), leaf()),
            split(V, leaf(), leaf()),
        ),
    ),
    LayoutPreset(
        preset_id="main-right",
        name="Main + 2 Right",
        pane_count=3,
        icon_grid=(("a", "b"), ("a", "c")),
        factory=lambda: split(H, leaf(), split(V, leaf(), leaf()), 0.6),
    ),
    LayoutPreset(
        preset_id="main-bottom",
        name="Main + 2 Bottom",
        pane_count=3,
        icon_grid=(("a", "a"), ("b", "c")),
        factory=lambda: split(V, leaf(), split(H, leaf(), leaf()), 0.6),
    ),
]

_PRESETS_BY_ID = {preset.preset_id: preset for preset in LAYOUT_PRESETS}


def get_preset(preset_id: str) -> LayoutPreset | None:
    """Look up a preset by ID."""
    return _PRESETS_BY_ID.get(preset_id)
