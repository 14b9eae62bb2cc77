"""Layout 树操作测试"""

import pytest

from splitdeck.layout import (
    Direction,
    FillResult,
    Leaf,
    Split,
    clamp_ratio,
    clear_session_ids,
    close_pane,
    count_leaves,
    fill_empty_leaf,
    get_node,
    get_session_ids,
    has_empty_leaf,
    node_from_dict,
    node_to_dict,
    rebalance_layout,
    split_pane,
    swap_panes,
    update_ratio,
)

H = Direction.HORIZONTAL
V = Direction.VERTICAL


class TestSplitPane:
    """split_pane 测试"""

    def test_splits_leaf_into_split(self):
        """叶子分割为 Split，原叶子在前"""
        result = split_pane(Leaf("s1"), "s1", "horizontal", "s2")

        assert isinstance(result, Split)
        assert result.direction is H
        assert result.ratio == 0.5
        assert result.children == (Leaf("s1"), Leaf("s2"))

    def test_missing_target_is_noop(self):
        """目标不存在时返回原树"""
        tree = Leaf("s1")
        assert split_pane(tree, "s99", V, "s2") is tree

    def test_missing_target_in_split_tree(self, nested):
        assert split_pane(nested, "nope", V, "s9") is nested

    def test_recurses_into_second_child(self, pair):
        result = split_pane(pair, "s2", V, "s3")

        assert result.children[0] is pair.children[0]
        assert result.children[1] == Split(V, 0.5, (Leaf("s2"), Leaf("s3")))
        assert result.ratio == pair.ratio

    def test_untouched_subtrees_are_reused(self, nested):
        """未涉及的子树按引用复用"""
        result = split_pane(nested, "s3", H, "s4")

        assert result.children[0] is nested.children[0]
        assert result.children[1].children[0] is nested.children[1].children[0]

    def test_input_not_mutated(self, pair):
        before = node_to_dict(pair)
        split_pane(pair, "s1", V, "s3")
        assert node_to_dict(pair) == before

    def test_vacant_new_leaf(self):
        """new_session_id 为 None 时预留空位"""
        result = split_pane(Leaf("s1"), "s1", V, None)
        assert result.children[1] == Leaf(None)
        assert has_empty_leaf(result)

    def test_vacant_leaf_never_matches(self):
        tree = Leaf(None)
        assert split_pane(tree, None, H, "s2") is tree

    def test_order_after_split(self, nested):
        result = split_pane(nested, "s1", H, "s4")
        assert get_session_ids(result) == ["s1", "s4", "s2", "s3"]


class TestClosePane:
    """close_pane 测试"""

    def test_closing_only_leaf_returns_none(self):
        assert close_pane(Leaf("s1"), "s1") is None

    def test_close_first_promotes_sibling(self, pair):
        assert close_pane(pair, "s1") == Leaf("s2")

    def test_close_second_promotes_sibling(self, pair):
        assert close_pane(pair, "s2") == Leaf("s1")

    def test_missing_target_is_noop(self, pair):
        assert close_pane(pair, "s99") is pair

    def test_missing_target_on_leaf(self):
        tree = Leaf("s1")
        assert close_pane(tree, "s2") is tree

    def test_nested_close_collapses_inner_split(self, nested):
        """关闭内层叶子，内层 Split 被兄弟替换，外层保留"""
        result = close_pane(nested, "s2")

        assert result == Split(H, 0.4, (Leaf("s1"), Leaf("s3")))

    def test_promotes_whole_subtree(self, nested):
        """关闭外层叶子，提升整个兄弟子树"""
        result = close_pane(nested, "s1")
        assert result is nested.children[1]

    def test_no_single_child_split_left(self, nested):
        result = close_pane(close_pane(nested, "s2"), "s3")
        assert result == Leaf("s1")

    def test_split_then_close_restores_occupants(self, nested):
        """split 与 close 对占用者集合互逆"""
        result = close_pane(split_pane(nested, "s2", H, "new"), "new")
        assert get_session_ids(result) == get_session_ids(nested)

    def test_end_to_end(self):
        tree = split_pane(Leaf("s1"), "s1", "horizontal", "s2")
        assert tree == Split(H, 0.5, (Leaf("s1"), Leaf("s2")))
        assert close_pane(tree, "s1") == Leaf("s2")


class TestFillEmptyLeaf:
    """fill_empty_leaf 测试"""

    def test_fills_empty_root(self):
        layout, filled = fill_empty_leaf(Leaf(None), "s1")
        assert filled is True
        assert layout == Leaf("s1")

    def test_occupied_leaf_not_filled(self):
        tree = Leaf("existing")
        result = fill_empty_leaf(tree, "s1")
        assert result == FillResult(tree, False)
        assert result.layout is tree

    def test_fills_first_empty_leaf_only(self):
        tree = Split(H, 0.5, (Leaf(None), Split(V, 0.5, (Leaf(None), Leaf("s1")))))

        result = fill_empty_leaf(tree, "s2")

        assert result.filled is True
        assert get_session_ids(result.layout) == ["s2", "s1"]
        assert has_empty_leaf(result.layout)

    def test_second_call_fills_next(self):
        tree = Split(H, 0.5, (Leaf(None), Leaf(None)))
        first = fill_empty_leaf(tree, "a").layout
        second = fill_empty_leaf(first, "b").layout
        assert get_session_ids(second) == ["a", "b"]
        assert not has_empty_leaf(second)

    def test_no_vacancy_returns_original(self, nested):
        result = fill_empty_leaf(nested, "s9")
        assert result.filled is False
        assert result.layout is nested

    def test_preserves_shape_and_ratio(self):
        tree = Split(V, 0.3, (Leaf("s1"), Leaf(None)))
        layout, _ = fill_empty_leaf(tree, "s2")
        assert layout == Split(V, 0.3, (Leaf("s1"), Leaf("s2")))


class TestHasEmptyLeaf:
    """has_empty_leaf 测试"""

    def test_empty_leaf(self):
        assert has_empty_leaf(Leaf(None)) is True

    def test_occupied_leaf(self):
        assert has_empty_leaf(Leaf("s1")) is False

    def test_deep_vacancy(self):
        tree = Split(H, 0.5, (Leaf("s1"), Split(V, 0.5, (Leaf("s2"), Leaf(None)))))
        assert has_empty_leaf(tree) is True

    def test_fully_occupied_tree(self, nested):
        assert has_empty_leaf(nested) is False


class TestGetSessionIds:
    """get_session_ids 测试"""

    def test_pair_order(self, pair):
        assert get_session_ids(pair) == ["s1", "s2"]

    def test_skips_vacant(self):
        tree = Split(H, 0.5, (Leaf(None), Leaf("s1")))
        assert get_session_ids(tree) == ["s1"]

    def test_depth_first_order(self, nested):
        assert get_session_ids(nested) == ["s1", "s2", "s3"]

    def test_vacant_only(self):
        assert get_session_ids(Leaf(None)) == []


class TestSwapPanes:
    """swap_panes 测试"""

    def test_swaps_pair(self, pair):
        result = swap_panes(pair, "s1", "s2")

        assert get_session_ids(result) == ["s2", "s1"]
        assert result.direction is pair.direction
        assert result.ratio == pair.ratio

    def test_swaps_across_subtrees(self, nested):
        result = swap_panes(nested, "s1", "s3")

        assert get_session_ids(result) == ["s3", "s2", "s1"]
        assert result.ratio == 0.4
        assert result.children[1].ratio == 0.7
        assert result.children[1].direction is V

    def test_same_id_is_noop(self, pair):
        assert swap_panes(pair, "s1", "s1") is pair

    def test_neither_present_is_noop(self, pair):
        assert swap_panes(pair, "x", "y") is pair

    def test_one_side_missing_relabels_present_leaf(self, pair):
        """只存在一方时，该叶子改为另一方的 id"""
        result = swap_panes(pair, "s1", "ghost")
        assert get_session_ids(result) == ["ghost", "s2"]


class TestUpdateRatio:
    """update_ratio 测试"""

    def test_empty_path_updates_root(self, pair):
        result = update_ratio(pair, [], 0.3)
        assert result.ratio == 0.3
        assert result.children == pair.children

    def test_nested_path(self, nested):
        result = update_ratio(nested, [1], 0.25)

        assert result.ratio == 0.4
        assert result.children[1].ratio == 0.25
        assert result.children[0] is nested.children[0]

    def test_path_into_leaf_is_noop(self, nested):
        assert update_ratio(nested, [0], 0.2) is nested
        assert update_ratio(nested, [0, 1], 0.2) is nested

    def test_path_past_leaves_is_noop(self, nested):
        assert update_ratio(nested, [1, 0, 0], 0.2) is nested

    def test_invalid_index_is_noop(self, nested):
        assert update_ratio(nested, [2], 0.2) is nested
        assert update_ratio(nested, [-1], 0.2) is nested

    def test_leaf_root_is_noop(self):
        tree = Leaf("s1")
        assert update_ratio(tree, [], 0.2) is tree

    def test_no_clamping(self, pair):
        assert update_ratio(pair, [], 0.99).ratio == 0.99
        assert update_ratio(pair, [], 1.5).ratio == 1.5

    def test_input_not_mutated(self, pair):
        update_ratio(pair, [], 0.1)
        assert pair.ratio == 0.5


class TestHelpers:
    """辅助函数测试"""

    def test_get_node(self, nested):
        assert get_node(nested, []) is nested
        assert get_node(nested, [1, 0]) == Leaf("s2")
        assert get_node(nested, [0, 0]) is None
        assert get_node(nested, [3]) is None

    @pytest.mark.parametrize("value,expected", [(0.0, 0.15), (0.5, 0.5), (1.0, 0.85)])
    def test_clamp_ratio(self, value, expected):
        assert clamp_ratio(value) == expected

    def test_count_leaves(self, nested):
        assert count_leaves(nested) == 3
        assert count_leaves(Leaf(None)) == 1

    def test_clear_session_ids(self, nested):
        cleared = clear_session_ids(nested)

        assert get_session_ids(cleared) == []
        assert count_leaves(cleared) == 3
        assert cleared.ratio == 0.4
        assert cleared.children[1].ratio == 0.7

    def test_rebalance_same_direction_chain(self):
        tree = split_pane(split_pane(Leaf("a"), "a", H, "b"), "b", H, "c")

        result = rebalance_layout(tree)

        assert result.ratio == pytest.approx(1 / 3)
        assert result.children[1].ratio == pytest.approx(0.5)

    def test_rebalance_mixed_directions(self, nested):
        """不同方向的子树沿该方向只占一列"""
        result = rebalance_layout(nested)

        assert result.ratio == pytest.approx(0.5)
        assert result.children[1].ratio == pytest.approx(0.5)

    def test_rebalance_leaf(self):
        tree = Leaf("s1")
        assert rebalance_layout(tree) is tree

    def test_round_trip_through_dict(self, nested):
        assert node_from_dict(node_to_dict(nested)) == nested
