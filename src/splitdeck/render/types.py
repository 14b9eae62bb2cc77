"""Render 数据类型

compute_geometry 的输出，供前端或文本预览使用。
"""

from dataclasses import dataclass, field

from splitdeck.layout import Direction


@dataclass
class PaneRect:
    """单个 pane 的矩形区域

    Attributes:
        session_id: 占用者，None 表示空位（渲染占位符）
        path: 从根到该叶子的路径
    """

    session_id: str | None
    path: list[int]
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "path": list(self.path),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }


@dataclass
class Divider:
    """Split 的分隔条

    拖拽时以 path 和新比例回调 WorkspaceStore.resize。

    Attributes:
        path: 对应 Split 的路径
        direction: Split 方向（horizontal 为竖直分隔条）
        position: 分隔条在分割轴上的坐标
        start: 分隔条在另一轴上的起点
        length: 分隔条长度
        origin: 该 Split 在分割轴上的起点
        span: 该 Split 在分割轴上的总长度
    """

    path: list[int]
    direction: Direction
    position: float
    start: float
    length: float
    origin: float
    span: float

    def ratio_at(self, position: float) -> float:
        """指针拖拽到 position 时的比例（未 clamp）"""
        if self.span <= 0:
            return 0.5
        return (position - self.origin) / self.span

    def to_dict(self) -> dict:
        return {
            "path": list(self.path),
            "direction": self.direction.value,
            "position": self.position,
            "start": self.start,
            "length": self.length,
            "origin": self.origin,
            "span": self.span,
        }


@dataclass
class Geometry:
    """整棵树的几何结果"""

    width: float
    height: float
    panes: list[PaneRect] = field(default_factory=list)
    dividers: list[Divider] = field(default_factory=list)

    def pane_for(self, session_id: str) -> PaneRect | None:
        for pane in self.panes:
            if pane.session_id == session_id:
                return pane
        return None

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "panes": [p.to_dict() for p in self.panes],
            "dividers": [d.to_dict() for d in self.dividers],
        }
