"""Layout 树操作

纯函数集合：输入一棵树，返回新树，不修改输入。
未改动的子树按引用复用，调用方可用 `is` 判断是否发生变化。

核心操作：
- split_pane: 将目标叶子替换为两子节点的 Split
- close_pane: 移除叶子并提升兄弟节点
- fill_empty_leaf / has_empty_leaf: 空位检测与填充
- get_session_ids / swap_panes: 遍历与交换占用者
- update_ratio: 按路径修改 Split 比例

辅助操作：
- get_node, iter_leaves, count_leaves
- clear_session_ids, rebalance_layout, clamp_ratio

找不到目标时一律返回原树（no-op），不抛异常。
遍历顺序统一为深度优先、先第一个子节点。
"""

from collections.abc import Iterator, Sequence

from ..config import DEFAULT_SPLIT_RATIO, MAX_RATIO, MIN_RATIO
from .types import Direction, FillResult, LayoutNode, Leaf, Split

Path = Sequence[int]


def split_pane(
    layout: LayoutNode,
    target_session_id: str,
    direction: Direction | str,
    new_session_id: str | None,
) -> LayoutNode:
    """分割目标 pane

    找到第一个 session_id == target_session_id 的叶子，替换为
    Split(direction, 0.5, (原叶子, Leaf(new_session_id)))。

    Args:
        layout: 当前树
        target_session_id: 要分割的 pane
        direction: 分割方向
        new_session_id: 新 pane 的 session，None 表示预留空位

    Returns:
        新树；目标不存在时返回原树
    """
    if isinstance(layout, Leaf):
        if layout.session_id is not None and layout.session_id == target_session_id:
            return Split(direction, DEFAULT_SPLIT_RATIO, (layout, Leaf(new_session_id)))
        return layout

    first, second = layout.children
    new_first = split_pane(first, target_session_id, direction, new_session_id)
    if new_first is not first:
        return layout.with_children(new_first, second)
    return layout.with_children(
        first, split_pane(second, target_session_id, direction, new_session_id)
    )


def close_pane(layout: LayoutNode, target_session_id: str) -> LayoutNode | None:
    """关闭目标 pane

    包含目标叶子的 Split 被其另一个子节点（兄弟）替换。

    Returns:
        新树；树仅为目标叶子时返回 None；目标不存在时返回原树
    """
    if isinstance(layout, Leaf):
        if layout.session_id is not None and layout.session_id == target_session_id:
            return None
        return layout

    first, second = layout.children

    new_first = close_pane(first, target_session_id)
    if new_first is None:
        return second
    if new_first is not first:
        return layout.with_children(new_first, second)

    new_second = close_pane(second, target_session_id)
    if new_second is None:
        return first
    return layout.with_children(first, new_second)


def fill_empty_leaf(layout: LayoutNode, new_session_id: str) -> FillResult:
    """填充第一个空位

    Returns:
        FillResult(layout, filled)；无空位时 layout 为原树、filled 为 False
    """
    if isinstance(layout, Leaf):
        if layout.is_vacant:
            return FillResult(Leaf(new_session_id), True)
        return FillResult(layout, False)

    first, second = layout.children

    left = fill_empty_leaf(first, new_session_id)
    if left.filled:
        return FillResult(layout.with_children(left.layout, second), True)

    right = fill_empty_leaf(second, new_session_id)
    if right.filled:
        return FillResult(layout.with_children(first, right.layout), True)

    return FillResult(layout, False)


def has_empty_leaf(layout: LayoutNode) -> bool:
    """树中是否存在空位"""
    return any(node.is_vacant for node in iter_leaves(layout))


def iter_leaves(layout: LayoutNode) -> Iterator[Leaf]:
    """按深度优先、先第一个子节点的顺序遍历叶子"""
    if isinstance(layout, Leaf):
        yield layout
        return
    yield from iter_leaves(layout.children[0])
    yield from iter_leaves(layout.children[1])


def get_session_ids(layout: LayoutNode) -> list[str]:
    """按视觉顺序（左→右、上→下）收集 session_id，跳过空位"""
    return [node.session_id for node in iter_leaves(layout) if node.session_id is not None]


def swap_panes(layout: LayoutNode, session_a: str, session_b: str) -> LayoutNode:
    """交换两个 pane 的占用者，形状/方向/比例不变

    只存在一方时，该叶子改为另一方的 id。
    """
    if session_a == session_b:
        return layout

    if isinstance(layout, Leaf):
        if layout.session_id == session_a:
            return Leaf(session_b)
        if layout.session_id == session_b:
            return Leaf(session_a)
        return layout

    first, second = layout.children
    return layout.with_children(
        swap_panes(first, session_a, session_b),
        swap_panes(second, session_a, session_b),
    )


def get_node(layout: LayoutNode, path: Path) -> LayoutNode | None:
    """按路径取节点

    Args:
        layout: 根节点
        path: 子节点下标序列（0 = 第一个，1 = 第二个），空路径为根

    Returns:
        路径指向的节点；路径无效时返回 None
    """
    node = layout
    for index in path:
        if isinstance(node, Leaf) or index not in (0, 1):
            return None
        node = node.children[index]
    return node


def update_ratio(layout: LayoutNode, path: Path, new_ratio: float) -> LayoutNode:
    """修改路径指向的 Split 的比例

    不做 clamp，范围由调用方保证（见 clamp_ratio）。

    Returns:
        新树；路径未指向 Split 时返回原树
    """
    if not path:
        if isinstance(layout, Split):
            return layout.with_ratio(new_ratio)
        return layout

    if isinstance(layout, Leaf):
        return layout

    head, rest = path[0], path[1:]
    if head not in (0, 1):
        return layout

    first, second = layout.children
    if head == 0:
        return layout.with_children(update_ratio(first, rest, new_ratio), second)
    return layout.with_children(first, update_ratio(second, rest, new_ratio))


def clamp_ratio(ratio: float, low: float = MIN_RATIO, high: float = MAX_RATIO) -> float:
    """将拖拽得到的比例限制在 [low, high]"""
    return min(high, max(low, ratio))


def count_leaves(layout: LayoutNode) -> int:
    """叶子数量（含空位）"""
    return sum(1 for _ in iter_leaves(layout))


def clear_session_ids(layout: LayoutNode) -> LayoutNode:
    """保留形状与比例，清空所有叶子的 session_id

    session 是临时的，恢复持久化布局时只保留形状。
    """
    if isinstance(layout, Leaf):
        return layout if layout.is_vacant else Leaf()
    first, second = layout.children
    return layout.with_children(clear_session_ids(first), clear_session_ids(second))


def _weight(layout: LayoutNode, direction: Direction) -> int:
    """沿 direction 排列的 pane 数"""
    if isinstance(layout, Leaf):
        return 1
    first, second = layout.children
    if layout.direction is direction:
        return _weight(first, direction) + _weight(second, direction)
    return max(_weight(first, direction), _weight(second, direction))


def rebalance_layout(layout: LayoutNode) -> LayoutNode:
    """重新计算比例，使同方向上的 pane 平分空间

    例如 Split(h, Leaf, Split(h, Leaf, Leaf)) 的根比例变为 1/3。
    """
    if isinstance(layout, Leaf):
        return layout

    first = rebalance_layout(layout.children[0])
    second = rebalance_layout(layout.children[1])
    rebalanced = layout.with_children(first, second)

    first_weight = _weight(first, layout.direction)
    second_weight = _weight(second, layout.direction)
    ratio = first_weight / (first_weight + second_weight)
    if ratio == rebalanced.ratio:
        return rebalanced
    return rebalanced.with_ratio(ratio)
