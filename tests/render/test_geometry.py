"""Tests for render/geometry.py"""

import pytest

from splitdeck.layout import Direction, Leaf, Split, get_session_ids
from splitdeck.render import compute_geometry


class TestComputeGeometry:
    """Tests for compute_geometry."""

    def test_single_leaf_fills_area(self):
        geometry = compute_geometry(Leaf("s1"), 100, 50)

        assert len(geometry.panes) == 1
        pane = geometry.panes[0]
        assert (pane.x, pane.y, pane.width, pane.height) == (0, 0, 100, 50)
        assert pane.path == []
        assert geometry.dividers == []

    def test_horizontal_split_uses_ratio(self):
        tree = Split(Direction.HORIZONTAL, 0.25, (Leaf("a"), Leaf("b")))

        geometry = compute_geometry(tree, 200, 100)

        a, b = geometry.panes
        assert (a.x, a.width, a.height) == (0, 50, 100)
        assert (b.x, b.width, b.height) == (50, 150, 100)
        assert a.path == [0] and b.path == [1]

        divider = geometry.dividers[0]
        assert divider.path == []
        assert divider.position == 50
        assert divider.length == 100

    def test_vertical_split(self):
        tree = Split(Direction.VERTICAL, 0.5, (Leaf("top"), Leaf(None)))

        geometry = compute_geometry(tree, 80, 40)

        top, bottom = geometry.panes
        assert (top.y, top.height) == (0, 20)
        assert (bottom.y, bottom.height, bottom.session_id) == (20, 20, None)

    def test_pane_order_matches_session_order(self, nested):
        geometry = compute_geometry(nested, 1, 1)
        assert [p.session_id for p in geometry.panes] == get_session_ids(nested)

    def test_nested_paths(self, nested):
        geometry = compute_geometry(nested, 100, 100)

        assert [p.path for p in geometry.panes] == [[0], [1, 0], [1, 1]]
        assert [d.path for d in geometry.dividers] == [[], [1]]

    def test_areas_sum_to_total(self, nested):
        geometry = compute_geometry(nested, 120, 80)
        total = sum(p.width * p.height for p in geometry.panes)
        assert total == pytest.approx(120 * 80)

    def test_integral_keeps_one_cell(self):
        tree = Split(Direction.HORIZONTAL, 0.01, (Leaf("a"), Leaf("b")))

        geometry = compute_geometry(tree, 10, 5, integral=True)

        a, b = geometry.panes
        assert a.width == 1
        assert b.width == 9

    def test_integral_rounds(self):
        tree = Split(Direction.VERTICAL, 1 / 3, (Leaf("a"), Leaf("b")))

        geometry = compute_geometry(tree, 10, 10, integral=True)

        assert [p.height for p in geometry.panes] == [3, 7]

    def test_divider_ratio_at(self, nested):
        geometry = compute_geometry(nested, 200, 100)
        inner = geometry.dividers[1]

        # inner vertical split spans y in [0, 100)
        assert inner.ratio_at(25) == pytest.approx(0.25)

    def test_pane_for(self, pair):
        geometry = compute_geometry(pair, 10, 10)
        assert geometry.pane_for("s2").x == 5
        assert geometry.pane_for("ghost") is None

    def test_to_dict(self, pair):
        data = compute_geometry(pair, 10, 10).to_dict()

        assert data["panes"][0]["session_id"] == "s1"
        assert data["dividers"][0]["direction"] == "horizontal"
