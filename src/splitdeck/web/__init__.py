"""Web 服务模块"""

from splitdeck.web.app import create_app, load_store
from splitdeck.web.server import WebServer

__all__ = ["create_app", "load_store", "WebServer"]
