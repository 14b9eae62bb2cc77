"""Layout 数据类型定义

包含：
- Direction: 分割方向
- Leaf: 叶子节点（一个 pane，可为空位）
- Split: 分割节点（方向 + 比例 + 恰好两个子节点）
- LayoutNode: Leaf | Split
- FillResult: fill_empty_leaf 的返回值
- node_to_dict / node_from_dict: 与普通 dict 互转（用于 JSON 持久化）

所有节点不可变（frozen dataclass，children 为 tuple），
操作函数总是返回新树，未改动的子树按引用复用。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Union

from ..config import DEFAULT_SPLIT_RATIO


class LayoutError(ValueError):
    """Malformed layout tree (bad serialized data or invalid Split)."""


class Direction(Enum):
    """分割方向

    - HORIZONTAL: 子节点左右排列
    - VERTICAL: 子节点上下排列
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def flipped(self) -> "Direction":
        """另一个方向"""
        if self is Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


@dataclass(frozen=True)
class Leaf:
    """叶子节点

    Attributes:
        session_id: 占用该 pane 的 session，None 表示空位
    """
    session_id: str | None = None

    @property
    def is_vacant(self) -> bool:
        return self.session_id is None


@dataclass(frozen=True)
class Split:
    """分割节点

    Attributes:
        direction: 分割方向
        ratio: 第一个子节点占用空间的比例，期望在 (0, 1) 内
        children: 恰好两个子节点
    """
    direction: Direction
    ratio: float
    children: tuple["LayoutNode", "LayoutNode"]

    def __post_init__(self):
        if not isinstance(self.direction, Direction):
            try:
                object.__setattr__(self, "direction", Direction(self.direction))
            except ValueError as e:
                raise LayoutError(f"Unknown direction: {self.direction!r}") from e
        children = tuple(self.children)
        if len(children) != 2:
            raise LayoutError(f"Split needs exactly 2 children, got {len(children)}")
        object.__setattr__(self, "children", children)

    @property
    def first(self) -> "LayoutNode":
        return self.children[0]

    @property
    def second(self) -> "LayoutNode":
        return self.children[1]

    def with_children(self, first: "LayoutNode", second: "LayoutNode") -> "Split":
        """返回替换子节点后的新 Split；子节点未变时返回自身"""
        if first is self.children[0] and second is self.children[1]:
            return self
        return Split(self.direction, self.ratio, (first, second))

    def with_ratio(self, ratio: float) -> "Split":
        """返回替换比例后的新 Split"""
        return Split(self.direction, ratio, self.children)


LayoutNode = Union[Leaf, Split]


class FillResult(NamedTuple):
    """fill_empty_leaf 结果

    Attributes:
        layout: 填充后的树（未填充时为原树）
        filled: 是否找到并填充了空位
    """
    layout: LayoutNode
    filled: bool


def leaf(session_id: str | None = None) -> Leaf:
    """构造叶子节点"""
    return Leaf(session_id)


def split(
    direction: Direction | str,
    first: LayoutNode,
    second: LayoutNode,
    ratio: float = DEFAULT_SPLIT_RATIO,
) -> Split:
    """构造分割节点"""
    return Split(direction, ratio, (first, second))


def node_to_dict(node: LayoutNode) -> dict:
    """转换为可 JSON 序列化的字典"""
    if isinstance(node, Leaf):
        return {"type": "leaf", "session_id": node.session_id}
    return {
        "type": "split",
        "direction": node.direction.value,
        "ratio": node.ratio,
        "children": [node_to_dict(node.children[0]), node_to_dict(node.children[1])],
    }


def node_from_dict(data: Any) -> LayoutNode:
    """从字典恢复节点

    Raises:
        LayoutError: 数据结构不合法
    """
    if not isinstance(data, dict):
        raise LayoutError(f"Layout node must be a dict, got {type(data).__name__}")

    node_type = data.get("type")
    if node_type == "leaf":
        session_id = data.get("session_id")
        if session_id is not None and not isinstance(session_id, str):
            raise LayoutError(f"Leaf session_id must be a string or null: {session_id!r}")
        return Leaf(session_id)

    if node_type == "split":
        ratio = data.get("ratio")
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
            raise LayoutError(f"Split ratio must be a number: {ratio!r}")
        children = data.get("children")
        if not isinstance(children, (list, tuple)) or len(children) != 2:
            raise LayoutError("Split children must be a list of exactly 2 nodes")
        return Split(
            data.get("direction"),
            float(ratio),
            (node_from_dict(children[0]), node_from_dict(children[1])),
        )

    raise LayoutError(f"Unknown layout node type: {node_type!r}")
