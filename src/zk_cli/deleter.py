"""Recursive and batch deletion of nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from zk_cli.client import NodeClientError, NoNodeError
from zk_cli.paths import child_path
from zk_cli.protocols import NodeClient
from zk_cli.types import DeleteResult

logger = logging.getLogger(__name__)


class RecursiveDeleter:
    """Deletes nodes and subtrees, children before parents.

    The store refuses to delete a node that still has children, so subtrees
    are removed post-order. Descendants removed concurrently by another
    actor count as already deleted unless ``strict`` is set. Deletion is
    best-effort: a failure part way leaves the already-deleted part gone.
    """

    def __init__(self, client: NodeClient, strict: bool = False) -> None:
        """Initialize deleter.

        Args:
            client: Connected node client.
            strict: Raise NoNodeError for descendants that vanish mid-delete.
        """
        self.client = client
        self.strict = strict

    def delete(self, path: str) -> None:
        """Delete a single node."""
        self.client.delete(path)

    def delete_tree(self, path: str) -> None:
        """Delete ``path`` and everything below it.

        Args:
            path: Normalized root of the subtree.

        Raises:
            NoNodeError: If ``path`` does not exist when the call starts.
            NotEmptyError: If a node gained children after they were removed.
            NodeClientError: On any other remote failure.
        """
        # (path, children_done)
        stack: list[tuple[str, bool]] = [(path, False)]
        while stack:
            current, children_done = stack.pop()
            if children_done:
                self._delete_node(current)
                continue

            stat = self.client.stat(current)
            if stat is None:
                if current == path or self.strict:
                    raise NoNodeError(current)
                logger.info("`%s` is already gone", current)
                continue
            if stat.num_children == 0:
                self._delete_node(current)
                continue

            try:
                names = self.client.list_children(current)
            except NoNodeError:
                if self.strict:
                    raise
                logger.info("`%s` is already gone", current)
                continue
            stack.append((current, True))
            for name in sorted(names, reverse=True):
                stack.append((child_path(current, name), False))

    def _delete_node(self, path: str) -> None:
        try:
            self.client.delete(path)
        except NoNodeError:
            if self.strict:
                raise
            logger.info("`%s` is already gone", path)

    def delete_many(self, paths: Iterable[str], recursive: bool = False) -> list[DeleteResult]:
        """Delete several paths independently.

        A failure on one path is logged with the path as context and the
        batch moves on to the next one. With ``recursive``, a path already
        removed as part of an earlier subtree of the same batch counts as
        deleted unless ``strict`` is set.

        Args:
            paths: Normalized paths to delete.
            recursive: Delete whole subtrees instead of single nodes.

        Returns:
            One DeleteResult per path, in input order.
        """
        results = []
        removed: list[str] = []
        for path in paths:
            try:
                if recursive:
                    try:
                        self.delete_tree(path)
                    except NoNodeError:
                        if self.strict or not _covered_by(path, removed):
                            raise
                        logger.info("`%s` was removed with an earlier path", path)
                    removed.append(path)
                else:
                    self.delete(path)
            except NodeClientError as e:
                logger.error("%s", e)
                results.append(DeleteResult(path=path, success=False, error=str(e)))
            else:
                logger.info("Deleted `%s`", path)
                results.append(DeleteResult(path=path, success=True))
        return results


def _covered_by(path: str, roots: Iterable[str]) -> bool:
    """Whether ``path`` equals or lies below one of ``roots``."""
    for root in roots:
        prefix = root if root.endswith("/") else root + "/"
        if path == root or path.startswith(prefix):
            return True
    return False
