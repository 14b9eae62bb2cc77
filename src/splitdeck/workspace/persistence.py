"""持久化模块

保存/加载 WorkspaceStore：
- 原子写入（temp + rename）
- checksum 校验（sha256）
- version 版本控制
- 损坏文件跳过告警

失败时不抛异常：记录日志、计入 persist.error，返回 False / None。
"""

import hashlib
import json
import os
import tempfile
import time
from pathlib import Path

from ..config import PERSIST_FILE, PERSIST_VERSION
from ..telemetry import get_logger, metrics
from .store import WorkspaceStore

logger = get_logger(__name__)


def _calculate_checksum(data: bytes) -> str:
    """计算 SHA256 checksum"""
    return hashlib.sha256(data).hexdigest()


def _encode(data: dict) -> bytes:
    return json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")


def save(
    store: WorkspaceStore,
    path: Path | None = None,
    version: int = PERSIST_VERSION,
) -> bool:
    """保存状态到文件

    使用 temp + rename 原子写入，包含 checksum 校验。

    Args:
        store: 要保存的 WorkspaceStore
        path: 保存路径，默认使用配置
        version: 版本号

    Returns:
        是否成功
    """
    path = path or PERSIST_FILE

    try:
        data = {
            "version": version,
            "saved_at": time.time(),
            "state": store.to_dict(),
        }
        data["checksum"] = _calculate_checksum(_encode(data))
        json_bytes = _encode(data)

        path.parent.mkdir(parents=True, exist_ok=True)

        # 原子写入：先写临时文件，再 rename
        fd, temp_path = tempfile.mkstemp(
            prefix="splitdeck_state_",
            suffix=".tmp",
            dir=path.parent,
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(json_bytes)
            os.replace(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.info(f"[Persist] Saved {len(store.workspaces)} workspaces to {path}")
        return True

    except Exception as e:
        logger.error(f"[Persist] Save failed: {e}")
        metrics.inc("persist.error", {"op": "save"})
        return False


def load(
    path: Path | None = None,
    version: int = PERSIST_VERSION,
    keep_sessions: bool = False,
) -> WorkspaceStore | None:
    """加载状态文件

    校验 version 和 checksum，失败时返回 None。

    Args:
        path: 文件路径，默认使用配置
        version: 期望的版本号
        keep_sessions: 保留叶子中的 session_id（默认只恢复形状）

    Returns:
        恢复的 WorkspaceStore，失败返回 None
    """
    path = path or PERSIST_FILE

    if not path.exists():
        logger.debug(f"[Persist] File not found: {path}")
        return None

    try:
        data = json.loads(path.read_bytes().decode("utf-8"))

        file_version = data.get("version", 1)
        if file_version != version:
            logger.warning(
                f"[Persist] Version mismatch: file={file_version}, expected={version}"
            )
            metrics.inc("persist.error", {"op": "load", "reason": "version"})
            return None

        stored_checksum = data.pop("checksum", None)
        if stored_checksum and _calculate_checksum(_encode(data)) != stored_checksum:
            logger.warning("[Persist] Checksum mismatch")
            metrics.inc("persist.error", {"op": "load", "reason": "checksum"})
            return None

        store = WorkspaceStore.from_dict(data.get("state") or {}, keep_sessions=keep_sessions)
        logger.info(f"[Persist] Loaded {len(store.workspaces)} workspaces")
        return store

    except json.JSONDecodeError as e:
        logger.warning(f"[Persist] Invalid JSON: {e}")
        metrics.inc("persist.error", {"op": "load", "reason": "json"})
        return None

    except Exception as e:
        logger.error(f"[Persist] Load failed: {e}")
        metrics.inc("persist.error", {"op": "load", "reason": "unknown"})
        return None


def delete(path: Path | None = None) -> bool:
    """删除状态文件"""
    path = path or PERSIST_FILE

    try:
        if path.exists():
            os.unlink(path)
            logger.info(f"[Persist] Deleted: {path}")
        return True
    except OSError as e:
        logger.error(f"[Persist] Delete failed: {e}")
        return False
