"""Layout 模块

pane 布局引擎：
- types: 数据类型（Leaf, Split, Direction, FillResult）与序列化
- tree: 纯函数操作（split/close/fill/swap/update_ratio 等）
- presets: 预设布局
"""

from .types import (
    Direction,
    FillResult,
    LayoutError,
    LayoutNode,
    Leaf,
    Split,
    leaf,
    node_from_dict,
    node_to_dict,
    split,
)
from .tree import (
    clamp_ratio,
    clear_session_ids,
    close_pane,
    count_leaves,
    fill_empty_leaf,
    get_node,
    get_session_ids,
    has_empty_leaf,
    iter_leaves,
    rebalance_layout,
    split_pane,
    swap_panes,
    update_ratio,
)
from .presets import LAYOUT_PRESETS, LayoutPreset, get_preset

__all__ = [
    # Types
    "Direction",
    "FillResult",
    "LayoutError",
    "LayoutNode",
    "Leaf",
    "Split",
    "leaf",
    "split",
    "node_to_dict",
    "node_from_dict",
    # Operations
    "split_pane",
    "close_pane",
    "fill_empty_leaf",
    "has_empty_leaf",
    "get_session_ids",
    "swap_panes",
    "update_ratio",
    # Helpers
    "get_node",
    "iter_leaves",
    "count_leaves",
    "clear_session_ids",
    "rebalance_layout",
    "clamp_ratio",
    # Presets
    "LAYOUT_PRESETS",
    "LayoutPreset",
    "get_preset",
]
