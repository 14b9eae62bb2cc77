"""Layout tree to pane geometry.

Walks a layout tree and allocates space: a Split gives its first child
`ratio` of the available extent along its direction and the second child the
rest; a Leaf becomes one PaneRect. The tree itself is never modified.
"""

from splitdeck.layout import Direction, LayoutNode, Leaf

from .types import Divider, Geometry, PaneRect


def _divide(extent: float, ratio: float, integral: bool) -> float:
    """Size of the first child along the split axis."""
    if not integral:
        return extent * ratio
    if extent < 2:
        return extent
    return min(max(int(round(extent * ratio)), 1), extent - 1)


def compute_geometry(
    layout: LayoutNode,
    width: float,
    height: float,
    integral: bool = False,
) -> Geometry:
    """Compute pane rectangles and dividers for a layout tree.

    Args:
        layout: Tree to lay out
        width: Available width
        height: Available height
        integral: Snap sizes to whole cells (for character grids); each side
            of a split keeps at least one cell while the extent allows it

    Returns:
        Geometry with panes in the same order as get_session_ids
    """
    geometry = Geometry(width=width, height=height)
    _walk(layout, [], 0, 0, width, height, integral, geometry)
    return geometry


def _walk(
    node: LayoutNode,
    path: list[int],
    x: float,
    y: float,
    width: float,
    height: float,
    integral: bool,
    geometry: Geometry,
) -> None:
    if isinstance(node, Leaf):
        geometry.panes.append(PaneRect(node.session_id, path, x, y, width, height))
        return

    first, second = node.children
    if node.direction is Direction.HORIZONTAL:
        first_width = _divide(width, node.ratio, integral)
        geometry.dividers.append(
            Divider(path, node.direction, x + first_width, y, height, x, width)
        )
        _walk(first, path + [0], x, y, first_width, height, integral, geometry)
        _walk(second, path + [1], x + first_width, y, width - first_width, height, integral, geometry)
    else:
        first_height = _divide(height, node.ratio, integral)
        geometry.dividers.append(
            Divider(path, node.direction, y + first_height, x, width, y, height)
        )
        _walk(first, path + [0], x, y, width, first_height, integral, geometry)
        _walk(second, path + [1], x, y + first_height, width, height - first_height, integral, geometry)
