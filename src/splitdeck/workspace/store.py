"""WorkspaceStore - 工作区状态持有者

持有所有 layout 树：
- workspace 列表（有序）
- 每个 workspace 的 terminal group 列表（每个 group 对应一个 tab）
- 每个 group 一棵 layout 树
- 当前激活的 workspace / group

每个用户动作映射为一次 layout 纯函数调用，新树替换旧树。
session id 由本模块生成，拖拽比例由本模块 clamp。
"""

from dataclasses import asdict, dataclass
from typing import Any

from ..config import WORKSPACE_COLORS
from ..core.ids import make_group_id, make_session_id, make_workspace_id, short_id
from ..layout import (
    Direction,
    LayoutError,
    LayoutNode,
    Leaf,
    clamp_ratio,
    clear_session_ids,
    close_pane,
    fill_empty_leaf,
    get_preset,
    get_session_ids,
    node_from_dict,
    node_to_dict,
    rebalance_layout,
    split_pane,
    swap_panes,
    update_ratio,
)
from ..telemetry import format_session_log, get_logger, metrics

logger = get_logger(__name__)


class WorkspaceError(KeyError):
    """工作区操作错误基类"""


class UnknownWorkspaceError(WorkspaceError):
    """workspace 不存在"""


class UnknownGroupError(WorkspaceError):
    """terminal group 不存在"""


class UnknownPresetError(WorkspaceError):
    """预设布局不存在"""


class DuplicateSessionError(ValueError):
    """session_id 已在某个 group 中"""


@dataclass
class Workspace:
    """Workspace 信息"""

    workspace_id: str
    name: str
    color: str
    emoji: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


def _vacant() -> LayoutNode:
    return Leaf()


class WorkspaceStore:
    """工作区状态持有者

    Attributes:
        workspaces: workspace 列表（按显示顺序）
        active_workspace_id: 当前 workspace
    """

    def __init__(self):
        self._workspaces: list[Workspace] = []
        self._active_workspace_id: str | None = None
        self._groups: dict[str, list[str]] = {}  # workspace_id -> [group_id]
        self._active_group: dict[str, str] = {}  # workspace_id -> group_id
        self._layouts: dict[str, LayoutNode] = {}  # group_id -> tree

    # === Workspace ===

    @property
    def workspaces(self) -> list[Workspace]:
        return list(self._workspaces)

    @property
    def active_workspace_id(self) -> str | None:
        return self._active_workspace_id

    def get_workspace(self, workspace_id: str) -> Workspace:
        for workspace in self._workspaces:
            if workspace.workspace_id == workspace_id:
                return workspace
        raise UnknownWorkspaceError(workspace_id)

    def add_workspace(
        self,
        name: str,
        color: str | None = None,
        emoji: str | None = None,
        workspace_id: str | None = None,
    ) -> Workspace:
        """创建 workspace，附带一个空位 group，并设为激活

        Args:
            name: 显示名
            color: 颜色，默认按 WORKSPACE_COLORS 轮换
            emoji: 可选图标
            workspace_id: 指定 ID，默认自动生成

        Returns:
            新建的 Workspace
        """
        color = color or WORKSPACE_COLORS[len(self._workspaces) % len(WORKSPACE_COLORS)]
        workspace = Workspace(
            workspace_id=workspace_id or make_workspace_id(),
            name=name,
            color=color,
            emoji=emoji,
        )
        self._workspaces.append(workspace)
        self._groups[workspace.workspace_id] = []
        self._active_workspace_id = workspace.workspace_id
        self.add_terminal_group(workspace.workspace_id)

        logger.info(f"[Workspace] Added {workspace.name!r} ({short_id(workspace.workspace_id)})")
        return workspace

    def remove_workspace(self, workspace_id: str) -> None:
        """删除 workspace 及其所有 group 的布局"""
        workspace = self.get_workspace(workspace_id)
        self._workspaces.remove(workspace)

        for group_id in self._groups.pop(workspace_id, []):
            self._layouts.pop(group_id, None)
        self._active_group.pop(workspace_id, None)

        if self._active_workspace_id == workspace_id:
            self._active_workspace_id = (
                self._workspaces[-1].workspace_id if self._workspaces else None
            )

        self._update_gauges()
        logger.info(f"[Workspace] Removed {workspace.name!r} ({short_id(workspace_id)})")

    def rename_workspace(self, workspace_id: str, name: str) -> None:
        self.get_workspace(workspace_id).name = name

    def set_workspace_emoji(self, workspace_id: str, emoji: str | None) -> None:
        self.get_workspace(workspace_id).emoji = emoji

    def set_active_workspace(self, workspace_id: str) -> None:
        self.get_workspace(workspace_id)
        self._active_workspace_id = workspace_id

    def reorder_workspaces(self, from_id: str, to_id: str) -> bool:
        """将 from_id 移动到 to_id 的位置

        Returns:
            任一 ID 不存在时返回 False
        """
        ids = [w.workspace_id for w in self._workspaces]
        if from_id not in ids or to_id not in ids:
            return False
        moved = self._workspaces.pop(ids.index(from_id))
        self._workspaces.insert(ids.index(to_id), moved)
        return True

    # === Terminal group ===

    def groups(self, workspace_id: str) -> list[str]:
        """workspace 的 group 列表（按 tab 顺序）"""
        if workspace_id not in self._groups:
            raise UnknownWorkspaceError(workspace_id)
        return list(self._groups[workspace_id])

    def active_group(self, workspace_id: str) -> str | None:
        if workspace_id not in self._groups:
            raise UnknownWorkspaceError(workspace_id)
        return self._active_group.get(workspace_id)

    def set_active_group(self, workspace_id: str, group_id: str) -> None:
        if group_id not in self.groups(workspace_id):
            raise UnknownGroupError(group_id)
        self._active_group[workspace_id] = group_id

    def add_terminal_group(self, workspace_id: str, layout: LayoutNode | None = None) -> str:
        """新增 group（默认为单个空位）并设为激活

        Returns:
            新 group_id
        """
        if workspace_id not in self._groups:
            raise UnknownWorkspaceError(workspace_id)

        group_id = make_group_id()
        self._groups[workspace_id].append(group_id)
        self._active_group[workspace_id] = group_id
        self._layouts[group_id] = layout if layout is not None else _vacant()

        self._update_gauges()
        return group_id

    def remove_terminal_group(self, workspace_id: str, group_id: str) -> None:
        """删除 group；若为激活 group，激活最后一个剩余 group"""
        groups = self.groups(workspace_id)
        if group_id not in groups:
            raise UnknownGroupError(group_id)

        groups.remove(group_id)
        self._groups[workspace_id] = groups
        self._layouts.pop(group_id, None)

        if self._active_group.get(workspace_id) == group_id:
            if groups:
                self._active_group[workspace_id] = groups[-1]
            else:
                self._active_group.pop(workspace_id, None)

        self._update_gauges()

    def find_group(self, session_id: str) -> str | None:
        """查找 session 所在的 group"""
        for group_id, layout in self._layouts.items():
            if session_id in get_session_ids(layout):
                return group_id
        return None

    # === Layout ===

    def get_layout(self, group_id: str) -> LayoutNode:
        try:
            return self._layouts[group_id]
        except KeyError:
            raise UnknownGroupError(group_id) from None

    def set_layout(self, group_id: str, layout: LayoutNode) -> None:
        self.get_layout(group_id)
        self._layouts[group_id] = layout

    def apply_preset(self, workspace_id: str, preset_id: str) -> str:
        """以预设布局新建 group 并激活

        Returns:
            新 group_id
        """
        preset = get_preset(preset_id)
        if preset is None:
            raise UnknownPresetError(preset_id)
        group_id = self.add_terminal_group(workspace_id, preset.create_layout())
        logger.info(f"[Layout] Applied preset {preset_id} to group {short_id(group_id)}")
        return group_id

    def split_session(
        self,
        group_id: str,
        target_session_id: str,
        direction: Direction | str = Direction.HORIZONTAL,
        new_session_id: str | None = None,
    ) -> str | None:
        """分割 group 中的 pane，新 pane 放入新 session

        Returns:
            新 session_id；目标不在该 group 时返回 None

        Raises:
            DuplicateSessionError: new_session_id 已存在
        """
        layout = self.get_layout(group_id)
        if new_session_id is None:
            new_session_id = make_session_id()
        else:
            self._ensure_new_session(new_session_id)

        updated = split_pane(layout, target_session_id, direction, new_session_id)
        if updated is layout:
            self._noop("split", target_session_id)
            return None

        self._layouts[group_id] = rebalance_layout(updated)
        metrics.inc("layout.split")
        return new_session_id

    def place_session(
        self,
        workspace_id: str,
        session_id: str | None = None,
        split_target: str | None = None,
        direction: Direction | str = Direction.HORIZONTAL,
    ) -> tuple[str, str]:
        """为新 session 找位置

        优先级：
        1. 指定 split_target：分割激活 group 中的该 pane
        2. 激活 group 中有空位：填充第一个空位
        3. 否则新建 group

        Returns:
            (group_id, session_id)

        Raises:
            DuplicateSessionError: session_id 已存在
        """
        if session_id is None:
            session_id = make_session_id()
        else:
            self._ensure_new_session(session_id)

        group_id = self.active_group(workspace_id)
        if group_id is None:
            group_id = self.add_terminal_group(workspace_id)

        if split_target is not None:
            if self.split_session(group_id, split_target, direction, session_id):
                return group_id, session_id

        result = fill_empty_leaf(self.get_layout(group_id), session_id)
        if result.filled:
            self._layouts[group_id] = result.layout
            return group_id, session_id

        group_id = self.add_terminal_group(workspace_id, Leaf(session_id))
        return group_id, session_id

    def close_session(self, group_id: str, session_id: str) -> bool:
        """关闭 pane 并重新平衡；最后一个 pane 关闭后留下空位

        Returns:
            session 是否在该 group 中
        """
        layout = self.get_layout(group_id)
        updated = close_pane(layout, session_id)
        if updated is layout:
            self._noop("close", session_id)
            return False

        self._layouts[group_id] = rebalance_layout(updated) if updated is not None else _vacant()
        metrics.inc("layout.close")
        return True

    def swap_sessions(self, group_id: str, session_a: str, session_b: str) -> bool:
        """交换两个 pane

        Returns:
            两个 session 是否都在该 group 中（否则不做修改）
        """
        layout = self.get_layout(group_id)
        present = get_session_ids(layout)
        if session_a not in present or session_b not in present:
            self._noop("swap", session_a if session_a not in present else session_b)
            return False
        self._layouts[group_id] = swap_panes(layout, session_a, session_b)
        return True

    def resize(self, group_id: str, path: list[int], ratio: float) -> bool:
        """拖拽分隔条：clamp 后更新路径指向的 Split

        Returns:
            路径是否指向 Split
        """
        layout = self.get_layout(group_id)
        updated = update_ratio(layout, path, clamp_ratio(ratio))
        if updated is layout:
            # 比例未变化时也会走到这里
            return False
        self._layouts[group_id] = updated
        return True

    # === 序列化 ===

    def to_dict(self) -> dict:
        """转换为可序列化的字典"""
        return {
            "workspaces": [w.to_dict() for w in self._workspaces],
            "active_workspace_id": self._active_workspace_id,
            "terminal_groups": {k: list(v) for k, v in self._groups.items()},
            "active_terminal_group": dict(self._active_group),
            "layouts": {k: node_to_dict(v) for k, v in self._layouts.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], keep_sessions: bool = False) -> "WorkspaceStore":
        """从字典恢复

        session 是临时的，默认只恢复布局形状（所有叶子清为空位）。
        缺失或损坏的布局替换为单个空位；没有 group 的 workspace 补一个空 group。

        Args:
            data: to_dict() 的输出
            keep_sessions: 保留叶子中的 session_id
        """
        store = cls()
        saved_groups = data.get("terminal_groups") or {}
        saved_active = data.get("active_terminal_group") or {}
        saved_layouts = data.get("layouts") or {}

        for raw in data.get("workspaces") or []:
            if not isinstance(raw, dict) or not raw.get("workspace_id"):
                logger.warning(f"[Workspace] Skipping workspace without id: {raw!r}")
                continue
            workspace = Workspace(
                workspace_id=raw["workspace_id"],
                name=raw.get("name", ""),
                color=raw.get("color") or WORKSPACE_COLORS[0],
                emoji=raw.get("emoji"),
            )
            store._workspaces.append(workspace)
            ws_id = workspace.workspace_id

            groups = list(saved_groups.get(ws_id) or [])
            if not groups:
                groups = [make_group_id()]
            store._groups[ws_id] = groups

            active = saved_active.get(ws_id)
            store._active_group[ws_id] = active if active in groups else groups[0]

            for group_id in groups:
                store._layouts[group_id] = _restore_layout(
                    saved_layouts.get(group_id), keep_sessions
                )

        active_ws = data.get("active_workspace_id")
        if any(w.workspace_id == active_ws for w in store._workspaces):
            store._active_workspace_id = active_ws
        elif store._workspaces:
            store._active_workspace_id = store._workspaces[0].workspace_id

        store._update_gauges()
        return store

    # === 内部 ===

    def _ensure_new_session(self, session_id: str) -> None:
        group_id = self.find_group(session_id)
        if group_id is not None:
            raise DuplicateSessionError(f"Session {session_id} already in group {group_id}")

    def _noop(self, op: str, session_id: str) -> None:
        logger.debug(format_session_log("Layout", session_id, f"{op}: not found, no-op"))
        metrics.inc("layout.noop", {"op": op})

    def _update_gauges(self) -> None:
        metrics.gauge("workspace.groups", float(len(self._layouts)))


def _restore_layout(raw: Any, keep_sessions: bool) -> LayoutNode:
    if raw is None:
        return _vacant()
    try:
        layout = node_from_dict(raw)
    except LayoutError as e:
        logger.warning(f"[Workspace] Discarding malformed layout: {e}")
        return _vacant()
    return layout if keep_sessions else clear_session_ids(layout)
