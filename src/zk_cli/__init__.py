"""Command-line client for browsing and editing a ZooKeeper namespace."""

__version__ = "0.1.0"

# Export the client protocol for type hints and dependency injection
from zk_cli.protocols import NodeClient

__all__ = [
    "__version__",
    "NodeClient",
]
