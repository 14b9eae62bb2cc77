"""Workspace 模块

- store: WorkspaceStore（每个 terminal group 持有一棵 layout 树）
- persistence: 保存/加载 store
"""

from .store import (
    DuplicateSessionError,
    UnknownGroupError,
    UnknownPresetError,
    UnknownWorkspaceError,
    Workspace,
    WorkspaceError,
    WorkspaceStore,
)
from . import persistence

__all__ = [
    "Workspace",
    "WorkspaceStore",
    "WorkspaceError",
    "UnknownWorkspaceError",
    "UnknownGroupError",
    "UnknownPresetError",
    "DuplicateSessionError",
    "persistence",
]
