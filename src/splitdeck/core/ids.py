"""ID utilities

Generates identifiers for the objects the workspace store hands out:

- ws-<millis>-<rand>   - workspace
- tg-<millis>-<rand>   - terminal group (one layout tree per group)
- s-<millis>-<rand>    - session occupying a pane

Identifiers are opaque to the layout engine; it only compares them for
equality. Freshness is guaranteed here so callers can pass new ids to
split_pane / fill_empty_leaf without checking the tree first.
"""

import itertools
import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

# Disambiguates ids created within the same millisecond
_counter = itertools.count()


def _suffix(length: int = 4) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def _make_id(prefix: str) -> str:
    millis = int(time.time() * 1000)
    return f"{prefix}-{millis}-{next(_counter)}{_suffix()}"


def make_workspace_id() -> str:
    """Create a fresh workspace ID like "ws-1718000000000-0k3x9"."""
    return _make_id("ws")


def make_group_id() -> str:
    """Create a fresh terminal group ID like "tg-1718000000000-1a9zq"."""
    return _make_id("tg")


def make_session_id() -> str:
    """Create a fresh session ID like "s-1718000000000-2p0vd"."""
    return _make_id("s")


def id_kind(identifier: str) -> str | None:
    """Return the prefix of an ID created by this module.

    Args:
        identifier: An ID such as "tg-1718000000000-1a9zq"

    Returns:
        "ws", "tg" or "s", or None if the ID has another shape
    """
    prefix, sep, _ = identifier.partition("-")
    if not sep or prefix not in ("ws", "tg", "s"):
        return None
    return prefix


def short_id(identifier: str, length: int = 8) -> str:
    """Get a short display version of an ID for logging.

    IDs created by this module keep the tail after the last "-" (counter
    plus random suffix), since ids created in the same second share the
    leading timestamp digits. Other IDs are truncated from the start.

    Args:
        identifier: The ID to shorten
        length: Maximum length (default 8)

    Returns:
        Shortened ID for display in logs
    """
    if id_kind(identifier):
        return identifier.rsplit("-", 1)[-1][-length:]
    return identifier[:length]
