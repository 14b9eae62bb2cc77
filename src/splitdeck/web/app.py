"""FastAPI 应用初始化"""

import asyncio
import logging
from pathlib import Path

import uvicorn

from splitdeck import config
from splitdeck.telemetry import setup_logging
from splitdeck.web.server import WebServer
from splitdeck.workspace import WorkspaceStore, persistence

logger = logging.getLogger(__name__)


def load_store(path: Path | None = None) -> WorkspaceStore:
    """加载持久化状态；无文件或加载失败时创建默认 workspace"""
    store = persistence.load(path)
    if store is None or not store.workspaces:
        store = WorkspaceStore()
        store.add_workspace("Default")
        logger.info("[App] Created default workspace")
    return store


def create_app(store: WorkspaceStore | None = None, persist_path: Path | None = None) -> WebServer:
    """创建 Web 应用"""
    return WebServer(store or WorkspaceStore(), persist_path=persist_path)


async def start_server(persist_path: Path = config.PERSIST_FILE):
    """启动服务器"""
    store = load_store(persist_path)
    server = create_app(store, persist_path=persist_path)

    uvicorn_config = uvicorn.Config(
        server.app, host=config.SERVER_HOST, port=config.SERVER_PORT, log_level="info"
    )
    uvicorn_server = uvicorn.Server(uvicorn_config)

    print(f"splitdeck server starting at http://{config.SERVER_HOST}:{config.SERVER_PORT}")

    try:
        await uvicorn_server.serve()
    finally:
        persistence.save(store, persist_path)


def main():
    """入口函数"""
    setup_logging()
    try:
        asyncio.run(start_server())
    except KeyboardInterrupt:
        print("\nServer stopped")


if __name__ == "__main__":
    main()
