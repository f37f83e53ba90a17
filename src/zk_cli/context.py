"""Application context for dependency injection.

This module separates object creation from object use. CLI commands
receive an AppContext; production code builds it with `create_context()`,
tests construct it directly around an in-memory NodeClient.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from zk_cli.deleter import RecursiveDeleter
from zk_cli.editor import NodeEditor
from zk_cli.protocols import NodeClient
from zk_cli.walker import TreeWalker


@dataclass
class AppContext:
    """Container for the services used by CLI commands.

    The engine services are wired around ``client``.
    """

    client: NodeClient
    walker: TreeWalker = field(init=False)
    deleter: RecursiveDeleter = field(init=False)
    editor: NodeEditor = field(init=False)

    def __post_init__(self) -> None:
        self.walker = TreeWalker(self.client)
        self.deleter = RecursiveDeleter(self.client)
        self.editor = NodeEditor(self.client)

    def close(self) -> None:
        """Tear down the underlying session."""
        self.client.close()


def create_context(addr: str, timeout: float) -> AppContext:
    """Factory for application dependencies.

    Opens the session. Use this in production code; for tests, construct
    AppContext directly with a test double.

    Args:
        addr: Connect string of the coordination service.
        timeout: Connection timeout in seconds.

    Returns:
        Configured AppContext with a connected client.

    Raises:
        ConnectionFailedError: If the session cannot be established.
    """
    from zk_cli.client import KazooNodeClient

    client = KazooNodeClient.connect(addr, timeout)
    return AppContext(client=client)
