"""splitdeck 配置

配置分为以下几类：
- 布局配置：默认分割比例、拖拽比例上下限
- 工作区配置：颜色轮换
- 持久化配置：存储目录、文件、版本
- 日志配置
- 服务配置：监听地址与端口
"""

import os
from pathlib import Path

# === 布局配置 ===
DEFAULT_SPLIT_RATIO = 0.5  # split_pane 新建分割的比例
MIN_RATIO = 0.15  # 拖拽比例下限（clamp_ratio）
MAX_RATIO = 0.85  # 拖拽比例上限（clamp_ratio）

# === 工作区配置 ===
# Soft, eye-friendly workspace colors, assigned round-robin
WORKSPACE_COLORS = [
    "#60a5fa",  # blue
    "#a78bfa",  # purple
    "#34d399",  # emerald
    "#fb923c",  # orange
    "#f472b6",  # pink
    "#38bdf8",  # sky
    "#facc15",  # yellow
    "#4ade80",  # green
]

# === 持久化配置 ===
PERSIST_DIR = Path(os.environ.get("SPLITDECK_HOME", Path.home() / ".splitdeck"))
PERSIST_FILE = PERSIST_DIR / "ui-state.json"
PERSIST_VERSION = 1  # 文件格式版本，不匹配时放弃加载

# === 日志配置 ===
LOG_LEVEL = os.environ.get("SPLITDECK_LOG_LEVEL", "INFO")  # 日志级别

# === 服务配置 ===
SERVER_HOST = os.environ.get("SPLITDECK_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("SPLITDECK_PORT", "8765"))
