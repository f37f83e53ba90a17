"""ZooKeeper access through kazoo."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException
from kazoo.exceptions import NodeExistsError as KazooNodeExistsError
from kazoo.exceptions import NoNodeError as KazooNoNodeError
from kazoo.exceptions import NotEmptyError as KazooNotEmptyError
from kazoo.handlers.threading import KazooTimeoutError
from kazoo.security import OPEN_ACL_UNSAFE

from zk_cli.types import CreationMode, NodeStat

logger = logging.getLogger(__name__)

DEFAULT_ADDR = "localhost:2181"
DEFAULT_TIMEOUT = 1.0


class NodeClientError(Exception):
    """Error during a remote node operation.

    Attributes:
        path: Node path the failed operation targeted.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"`{path}`: {message}")
        self.path = path


class NoNodeError(NodeClientError):
    """The node does not exist."""

    def __init__(self, path: str, message: str = "node does not exist") -> None:
        super().__init__(path, message)


class NodeExistsError(NodeClientError):
    """The node already exists."""

    def __init__(self, path: str, message: str = "node already exists") -> None:
        super().__init__(path, message)


class NotEmptyError(NodeClientError):
    """The node still has children."""

    def __init__(self, path: str, message: str = "node has children") -> None:
        super().__init__(path, message)


class ConnectionFailedError(NodeClientError):
    """The session could not be established."""


@contextmanager
def _translate_errors(path: str) -> Iterator[None]:
    """Re-raise kazoo failures as NodeClientError carrying ``path``."""
    try:
        yield
    except KazooNoNodeError as e:
        raise NoNodeError(path) from e
    except KazooNodeExistsError as e:
        raise NodeExistsError(path) from e
    except KazooNotEmptyError as e:
        raise NotEmptyError(path) from e
    except (KazooException, KazooTimeoutError) as e:
        raise NodeClientError(path, f"{type(e).__name__}: {e}") from e


class KazooNodeClient:
    """NodeClient implementation backed by a started KazooClient.

    Satisfies the NodeClient protocol structurally.
    """

    def __init__(self, zk: KazooClient) -> None:
        """Wrap an already started kazoo client.

        Args:
            zk: Connected KazooClient.

        Note:
            Prefer using the factory method `connect()` for construction.
        """
        self.zk = zk

    @classmethod
    def connect(cls, addr: str = DEFAULT_ADDR, timeout: float = DEFAULT_TIMEOUT) -> KazooNodeClient:
        """Open a session to the coordination service.

        Args:
            addr: Connect string, ``host:port[,host:port...][/chroot]``.
            timeout: Seconds to wait for the session to be established.

        Returns:
            Connected KazooNodeClient.

        Raises:
            ConnectionFailedError: If the session cannot be established.
        """
        logger.info("Connecting to %s", addr)
        try:
            zk = KazooClient(hosts=addr, timeout=timeout)
        except ValueError as e:
            raise ConnectionFailedError(addr, f"invalid connect string: {e}") from e
        try:
            zk.start(timeout=timeout)
        except (KazooTimeoutError, KazooException) as e:
            zk.close()
            raise ConnectionFailedError(addr, f"unable to connect: {e}") from e
        logger.info("Connected")
        return cls(zk)

    def list_children(self, path: str) -> list[str]:
        with _translate_errors(path):
            return list(self.zk.get_children(path))

    def stat(self, path: str) -> NodeStat | None:
        with _translate_errors(path):
            stat = self.zk.exists(path)
        if stat is None:
            return None
        return NodeStat(
            num_children=stat.numChildren,
            data_length=stat.dataLength,
            ephemeral=stat.ephemeralOwner != 0,
        )

    def read(self, path: str) -> bytes:
        with _translate_errors(path):
            data, _ = self.zk.get(path)
        return data or b""

    def write(self, path: str, data: bytes) -> None:
        with _translate_errors(path):
            self.zk.set(path, data)

    def create(self, path: str, data: bytes, mode: CreationMode) -> str:
        with _translate_errors(path):
            return self.zk.create(
                path,
                data,
                acl=OPEN_ACL_UNSAFE,
                ephemeral=mode.ephemeral,
                sequence=mode.sequential,
            )

    def delete(self, path: str) -> None:
        with _translate_errors(path):
            self.zk.delete(path)

    def close(self) -> None:
        """Stop the session and release the connection."""
        self.zk.stop()
        self.zk.close()
