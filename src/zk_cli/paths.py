"""Path normalization for node paths."""

from __future__ import annotations

import logging

from zk_cli.types import NodePath

logger = logging.getLogger(__name__)

ROOT = NodePath("/")


def normalize_path(raw: str) -> NodePath:
    """Canonicalize a user-supplied node path.

    Prepends a missing leading ``/`` and strips trailing ``/`` characters,
    logging a warning for each rewrite. Never fails: the empty string
    normalizes to the root.

    Args:
        raw: Path as typed by the user.

    Returns:
        Absolute path without a trailing separator (unless it is the root).

    Example:
        >>> normalize_path("a/b/")
        '/a/b'
    """
    path = raw
    if not path.startswith("/"):
        logger.warning(
            "Invalid path, adding a `/` to the beginning of your path: `%s` => `/%s`",
            path,
            path,
        )
        path = f"/{path}"
    if path.endswith("/") and path != "/":
        stripped = path.rstrip("/") or "/"
        logger.warning(
            "Invalid path, removing the `/` at the end of your path: `%s` => `%s`",
            path,
            stripped,
        )
        path = stripped
    return NodePath(path)


def child_path(parent: str, name: str) -> NodePath:
    """Join a parent path and a bare child name."""
    prefix = "" if parent == "/" else parent
    return NodePath(f"{prefix}/{name}")
