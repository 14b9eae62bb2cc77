"""WebSocket 消息处理器

拖拽分隔条等高频操作走 WebSocket，消息格式为 JSON：
- {"action": "resize", "group_id": ..., "path": [0, 1], "ratio": 0.4}
- {"action": "swap", "group_id": ..., "session_a": ..., "session_b": ...}
- {"action": "close", "group_id": ..., "session_id": ...}
"""

import json
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fastapi import WebSocket

from splitdeck.workspace import WorkspaceError, WorkspaceStore

logger = logging.getLogger(__name__)


@dataclass
class MessageHandler:
    """WebSocket 消息处理器"""

    store: WorkspaceStore
    on_change: Callable[[], Awaitable[None]]

    async def handle(self, websocket: WebSocket, data: str):
        """处理 WebSocket 消息"""
        try:
            msg = json.loads(data)
        except json.JSONDecodeError:
            await websocket.send_json({"type": "error", "message": "invalid json"})
            return

        if not isinstance(msg, dict):
            await websocket.send_json({"type": "error", "message": "expected an object"})
            return

        action = msg.get("action")
        handler = {
            "resize": self._handle_resize,
            "swap": self._handle_swap,
            "close": self._handle_close,
        }.get(action)
        if handler is None:
            await websocket.send_json({"type": "error", "message": f"unknown action: {action}"})
            return

        try:
            success = handler(msg)
        except (KeyError, TypeError, ValueError) as e:
            # WorkspaceError 是 KeyError 的子类
            reason = e.args[0] if isinstance(e, WorkspaceError) else str(e)
            logger.debug(f"[WS] {action} failed: {reason}")
            await websocket.send_json({"type": f"{action}_result", "success": False, "error": str(reason)})
            return

        await websocket.send_json({"type": f"{action}_result", "success": success})
        if success:
            await self.on_change()

    def _handle_resize(self, msg: dict) -> bool:
        """处理分隔条拖拽"""
        path = msg["path"]
        if not isinstance(path, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in path
        ):
            raise TypeError(f"path must be a list of integers: {path!r}")
        return self.store.resize(msg["group_id"], path, float(msg["ratio"]))

    def _handle_swap(self, msg: dict) -> bool:
        """处理 pane 拖放交换"""
        return self.store.swap_sessions(msg["group_id"], msg["session_a"], msg["session_b"])

    def _handle_close(self, msg: dict) -> bool:
        """处理关闭 pane"""
        return self.store.close_session(msg["group_id"], msg["session_id"])
