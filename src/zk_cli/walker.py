"""Listing and tree traversal over a remote namespace."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from rich.text import Text

from zk_cli.client import NoNodeError
from zk_cli.formatting import render_entry
from zk_cli.paths import child_path
from zk_cli.protocols import NodeClient
from zk_cli.types import NodeEntry

logger = logging.getLogger(__name__)

INDENT = "  "


def _name_key(name: str) -> bytes:
    return name.encode("utf-8")


class TreeWalker:
    """Enumerates children and subtrees in a deterministic order.

    The remote tree can change between the listing call and the per-child
    stat calls. A child that disappears in between is skipped with a
    warning; any other failure aborts the traversal.
    """

    def __init__(self, client: NodeClient) -> None:
        self.client = client

    def list_entries(self, path: str) -> list[NodeEntry]:
        """List the children of a node with their metadata.

        Names are sorted byte-wise before any stat is fetched.

        Args:
            path: Normalized parent path.

        Returns:
            Sorted entries for every child still present at stat time.

        Raises:
            NoNodeError: If ``path`` itself does not exist.
            NodeClientError: If a child stat fails for another reason.
        """
        names = sorted(self.client.list_children(path), key=_name_key)
        entries = []
        for name in names:
            target = child_path(path, name)
            stat = self.client.stat(target)
            if stat is None:
                logger.warning("`%s` disappeared while listing, skipping it", target)
                continue
            entries.append(NodeEntry(name=name, stat=stat))
        return entries

    def walk(self, path: str) -> Iterator[tuple[int, NodeEntry]]:
        """Yield every descendant of ``path`` depth-first, pre-order.

        Only children reporting a positive child count are descended into.
        Uses an explicit stack, so depth is not bounded by the interpreter.

        Args:
            path: Normalized root of the walk.

        Yields:
            Tuples of (depth, entry), depth 1 being the children of ``path``.
        """
        stack: list[tuple[int, str, NodeEntry]] = []

        def push_children(parent: str, depth: int) -> None:
            entries = self.list_entries(parent)
            for entry in reversed(entries):
                stack.append((depth, child_path(parent, entry.name), entry))

        push_children(path, 1)
        while stack:
            depth, entry_path, entry = stack.pop()
            yield depth, entry
            if entry.has_children:
                try:
                    push_children(entry_path, depth + 1)
                except NoNodeError:
                    logger.warning("`%s` disappeared while walking, skipping it", entry_path)

    def print_tree(self, path: str, emit: Callable[[Text], None]) -> None:
        """Render the subtree rooted at ``path`` line by line.

        Args:
            path: Normalized root path.
            emit: Sink receiving one styled line per node.

        Raises:
            NoNodeError: If the root does not exist.
        """
        stat = self.client.stat(path)
        if stat is None:
            raise NoNodeError(path)
        emit(render_entry(path, stat))
        for depth, entry in self.walk(path):
            emit(Text(INDENT * depth) + render_entry(entry.name, entry.stat))
