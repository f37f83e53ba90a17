"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from zk_cli.client import NodeExistsError, NoNodeError, NotEmptyError
from zk_cli.context import AppContext
from zk_cli.types import CreationMode, NodeStat


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] or "/"


@dataclass
class _Node:
    data: bytes = b""
    ephemeral: bool = False


class FakeNodeClient:
    """In-memory NodeClient.

    ``after_list`` and ``after_stat`` run right after a listing or a stat is
    taken, which lets tests mutate the tree between dependent calls.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, _Node] = {"/": _Node()}
        self.sequence = 0
        self.after_list: Callable[[str], None] | None = None
        self.after_stat: Callable[[str], None] | None = None
        self.stat_errors: dict[str, Exception] = {}
        self.deleted: list[str] = []
        self.closed = False

    def add(self, path: str, data: bytes = b"", ephemeral: bool = False) -> None:
        """Add a node, creating missing parents as empty persistent nodes."""
        missing = []
        parent = _parent(path)
        while parent not in self.nodes:
            missing.append(parent)
            parent = _parent(parent)
        for ancestor in reversed(missing):
            self.nodes[ancestor] = _Node()
        self.nodes[path] = _Node(data=data, ephemeral=ephemeral)

    def remove(self, path: str) -> None:
        """Drop a node and its subtree behind the client's back."""
        for existing in list(self.nodes):
            if existing == path or existing.startswith(f"{path}/"):
                del self.nodes[existing]

    def _children(self, path: str) -> list[str]:
        return [
            p.rsplit("/", 1)[1] for p in self.nodes if p != "/" and _parent(p) == path
        ]

    def list_children(self, path: str) -> list[str]:
        if path not in self.nodes:
            raise NoNodeError(path)
        names = self._children(path)
        if self.after_list is not None:
            self.after_list(path)
        return names

    def stat(self, path: str) -> NodeStat | None:
        if path in self.stat_errors:
            raise self.stat_errors[path]
        node = self.nodes.get(path)
        if node is None:
            return None
        stat = NodeStat(
            num_children=len(self._children(path)),
            data_length=len(node.data),
            ephemeral=node.ephemeral,
        )
        if self.after_stat is not None:
            self.after_stat(path)
        return stat

    def read(self, path: str) -> bytes:
        if path not in self.nodes:
            raise NoNodeError(path)
        return self.nodes[path].data

    def write(self, path: str, data: bytes) -> None:
        if path not in self.nodes:
            raise NoNodeError(path)
        self.nodes[path].data = data

    def create(self, path: str, data: bytes, mode: CreationMode) -> str:
        if _parent(path) not in self.nodes:
            raise NoNodeError(path)
        if mode.sequential:
            path = f"{path}{self.sequence:010d}"
            self.sequence += 1
        if path in self.nodes:
            raise NodeExistsError(path)
        self.nodes[path] = _Node(data=data, ephemeral=mode.ephemeral)
        return path

    def delete(self, path: str) -> None:
        if path not in self.nodes:
            raise NoNodeError(path)
        if self._children(path):
            raise NotEmptyError(path)
        del self.nodes[path]
        self.deleted.append(path)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeNodeClient:
    """Create an empty in-memory namespace."""
    return FakeNodeClient()


@pytest.fixture
def populated_client(fake_client: FakeNodeClient) -> FakeNodeClient:
    """Namespace with a three level subtree under /a plus a few siblings."""
    fake_client.add("/zeta", b"last")
    fake_client.add("/a/b/c", b"leaf")
    fake_client.add("/a/b2")
    fake_client.add("/m", b"session", ephemeral=True)
    return fake_client


@pytest.fixture
def app_context(populated_client: FakeNodeClient) -> AppContext:
    """AppContext wired around the populated in-memory namespace."""
    return AppContext(client=populated_client)


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary configuration directory."""
    config_dir = tmp_path / ".zk-cli"
    config_dir.mkdir(parents=True)
    return config_dir
