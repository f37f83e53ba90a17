"""Protocol definitions for core abstractions.

This module defines the capability interface the engine consumes from the
coordination service. The engine never talks to kazoo directly; anything
that satisfies ``NodeClient`` structurally (the kazoo adapter, an in-memory
test double) can be injected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from zk_cli.types import CreationMode, NodeStat


@runtime_checkable
class NodeClient(Protocol):
    """Protocol for operations on a remote hierarchical namespace.

    Implementations are assumed connected and synchronous: every call
    blocks until the remote answers. Failures are reported as
    ``zk_cli.client.NodeClientError`` subclasses carrying the path.
    """

    def list_children(self, path: str) -> list[str]:
        """List the bare names of a node's children.

        Args:
            path: Absolute node path.

        Returns:
            Child names in the order the store returned them.

        Raises:
            NoNodeError: If the node does not exist.
        """
        ...

    def stat(self, path: str) -> NodeStat | None:
        """Fetch a fresh metadata snapshot.

        Args:
            path: Absolute node path.

        Returns:
            NodeStat, or None if the node is absent.
        """
        ...

    def read(self, path: str) -> bytes:
        """Read a node's payload.

        Args:
            path: Absolute node path.

        Returns:
            Raw payload bytes.

        Raises:
            NoNodeError: If the node does not exist.
        """
        ...

    def write(self, path: str, data: bytes) -> None:
        """Replace the payload of an existing node.

        Args:
            path: Absolute node path.
            data: New payload.

        Raises:
            NoNodeError: If the node does not exist.
        """
        ...

    def create(self, path: str, data: bytes, mode: CreationMode) -> str:
        """Create a node with the open access policy.

        Args:
            path: Absolute node path.
            data: Initial payload.
            mode: Persistence/uniqueness mode.

        Returns:
            Path assigned by the store (differs from ``path`` for
            sequential modes).

        Raises:
            NodeExistsError: If the node already exists.
            NoNodeError: If the parent does not exist.
        """
        ...

    def delete(self, path: str) -> None:
        """Delete a node.

        Args:
            path: Absolute node path.

        Raises:
            NoNodeError: If the node does not exist.
            NotEmptyError: If the node still has children.
        """
        ...

    def close(self) -> None:
        """Tear down the session."""
        ...
