"""Core utilities shared across modules"""

from .ids import id_kind, make_group_id, make_session_id, make_workspace_id, short_id

__all__ = ["make_workspace_id", "make_group_id", "make_session_id", "id_kind", "short_id"]
