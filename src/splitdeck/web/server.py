"""Web 服务器

REST 接口操作 WorkspaceStore，状态变化通过 WebSocket 广播。
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from splitdeck.layout import LAYOUT_PRESETS, Direction, get_session_ids, node_to_dict
from splitdeck.render import LayoutRenderer, compute_geometry
from splitdeck.telemetry import metrics
from splitdeck.workspace import DuplicateSessionError, WorkspaceError, WorkspaceStore, persistence
from splitdeck.web.handlers import MessageHandler

logger = logging.getLogger(__name__)


class WorkspaceRequest(BaseModel):
    """创建 workspace 请求体"""

    name: str
    color: str | None = None
    emoji: str | None = None


class GroupRequest(BaseModel):
    """创建 group 请求体"""

    preset: str | None = None  # 预设布局 ID，缺省为单个空位


class PlaceSessionRequest(BaseModel):
    """放置 session 请求体"""

    session_id: str | None = None  # 缺省自动生成
    split_target: str | None = None  # 指定时分割该 pane
    direction: Direction = Direction.HORIZONTAL


class SplitRequest(BaseModel):
    """分割 pane 请求体"""

    target: str
    direction: Direction = Direction.HORIZONTAL
    session_id: str | None = None


class CloseRequest(BaseModel):
    session_id: str


class SwapRequest(BaseModel):
    session_a: str
    session_b: str


class ResizeRequest(BaseModel):
    path: list[int]
    ratio: float


class WebServer:
    """HTTP + WebSocket 服务器"""

    def __init__(self, store: WorkspaceStore, persist_path: Path | None = None):
        """
        Args:
            store: 工作区状态
            persist_path: 指定时每次变化后保存到该文件
        """
        self.app = FastAPI(title="splitdeck")
        self.store = store
        self.persist_path = persist_path
        self.clients: list[WebSocket] = []
        self._renderer = LayoutRenderer()

        self._handler = MessageHandler(store=store, on_change=self.notify_change)

        self._setup_routes()

    async def notify_change(self) -> None:
        """状态变化：持久化并广播"""
        if self.persist_path is not None:
            persistence.save(self.store, self.persist_path)
        await self.broadcast({"type": "state", "state": self.store.to_dict()})

    def _group_payload(self, group_id: str) -> dict:
        layout = self.store.get_layout(group_id)
        return {
            "group_id": group_id,
            "layout": node_to_dict(layout),
            "session_ids": get_session_ids(layout),
        }

    def _setup_routes(self):
        app = self.app

        @app.exception_handler(WorkspaceError)
        async def workspace_error_handler(request: Request, exc: WorkspaceError):
            return JSONResponse(status_code=404, content={"detail": f"Not found: {exc.args[0]}"})

        @app.exception_handler(DuplicateSessionError)
        async def duplicate_session_handler(request: Request, exc: DuplicateSessionError):
            return JSONResponse(status_code=409, content={"detail": str(exc)})

        @app.get("/api/state")
        async def get_state():
            return self.store.to_dict()

        @app.get("/api/presets")
        async def get_presets():
            return [preset.to_dict() for preset in LAYOUT_PRESETS]

        @app.get("/api/metrics")
        async def get_metrics():
            return metrics.get_all_counters()

        @app.post("/api/workspaces")
        async def add_workspace(request: WorkspaceRequest):
            workspace = self.store.add_workspace(request.name, request.color, request.emoji)
            await self.notify_change()
            return {
                **workspace.to_dict(),
                "groups": self.store.groups(workspace.workspace_id),
            }

        @app.delete("/api/workspaces/{workspace_id}")
        async def remove_workspace(workspace_id: str):
            self.store.remove_workspace(workspace_id)
            await self.notify_change()
            return {"success": True}

        @app.post("/api/workspaces/{workspace_id}/groups")
        async def add_group(workspace_id: str, request: GroupRequest):
            if request.preset:
                group_id = self.store.apply_preset(workspace_id, request.preset)
            else:
                group_id = self.store.add_terminal_group(workspace_id)
            await self.notify_change()
            return self._group_payload(group_id)

        @app.delete("/api/workspaces/{workspace_id}/groups/{group_id}")
        async def remove_group(workspace_id: str, group_id: str):
            self.store.remove_terminal_group(workspace_id, group_id)
            await self.notify_change()
            return {"success": True}

        @app.post("/api/workspaces/{workspace_id}/sessions")
        async def place_session(workspace_id: str, request: PlaceSessionRequest):
            group_id, session_id = self.store.place_session(
                workspace_id,
                session_id=request.session_id,
                split_target=request.split_target,
                direction=request.direction,
            )
            await self.notify_change()
            return {**self._group_payload(group_id), "session_id": session_id}

        @app.get("/api/groups/{group_id}/layout")
        async def get_layout(group_id: str):
            return self._group_payload(group_id)

        @app.get("/api/groups/{group_id}/geometry")
        async def get_geometry(group_id: str, width: float = 1.0, height: float = 1.0):
            layout = self.store.get_layout(group_id)
            return compute_geometry(layout, width, height).to_dict()

        @app.get("/api/groups/{group_id}/svg")
        async def get_layout_svg(group_id: str):
            """获取 group 布局的 SVG 预览图。"""
            layout = self.store.get_layout(group_id)
            svg = self._renderer.render_svg(layout)
            return Response(
                content=svg,
                media_type="image/svg+xml",
                headers={"Cache-Control": "no-cache"},
            )

        @app.post("/api/groups/{group_id}/split")
        async def split(group_id: str, request: SplitRequest):
            session_id = self.store.split_session(
                group_id, request.target, request.direction, request.session_id
            )
            if session_id is None:
                raise HTTPException(status_code=404, detail=f"Session not in group: {request.target}")
            await self.notify_change()
            return {**self._group_payload(group_id), "session_id": session_id}

        @app.post("/api/groups/{group_id}/close")
        async def close(group_id: str, request: CloseRequest):
            success = self.store.close_session(group_id, request.session_id)
            if success:
                await self.notify_change()
            return {**self._group_payload(group_id), "success": success}

        @app.post("/api/groups/{group_id}/swap")
        async def swap(group_id: str, request: SwapRequest):
            success = self.store.swap_sessions(group_id, request.session_a, request.session_b)
            if success:
                await self.notify_change()
            return {**self._group_payload(group_id), "success": success}

        @app.post("/api/groups/{group_id}/resize")
        async def resize(group_id: str, request: ResizeRequest):
            success = self.store.resize(group_id, request.path, request.ratio)
            if success:
                await self.notify_change()
            return {**self._group_payload(group_id), "success": success}

        @app.websocket("/ws")
        async def websocket_endpoint(websocket: WebSocket):
            await websocket.accept()
            self.clients.append(websocket)
            try:
                await websocket.send_json({"type": "state", "state": self.store.to_dict()})
                while True:
                    data = await websocket.receive_text()
                    await self._handler.handle(websocket, data)
            except WebSocketDisconnect:
                logger.debug("[WebServer] Client disconnected")
            finally:
                # broadcast 可能已移除该连接
                if websocket in self.clients:
                    self.clients.remove(websocket)

    async def broadcast(self, data: dict):
        """广播消息给所有客户端"""
        for client in list(self.clients):
            try:
                await client.send_json(data)
            except Exception as e:
                logger.debug(f"[WebServer] Dropping client: {e}")
                if client in self.clients:
                    self.clients.remove(client)
