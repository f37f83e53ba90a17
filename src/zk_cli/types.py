"""Shared data types for zk-cli."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NewType

__all__ = [
    "CreationMode",
    "DeleteResult",
    "ModeFlag",
    "NodeEntry",
    "NodePath",
    "NodeStat",
]

NodePath = NewType("NodePath", str)


@dataclass(frozen=True)
class NodeStat:
    """Metadata snapshot of a node, valid only at the instant it was taken.

    Attributes:
        num_children: Number of direct children.
        data_length: Length of the payload in bytes.
        ephemeral: True if the node is bound to its owning session.
    """

    num_children: int
    data_length: int
    ephemeral: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.num_children < 0:
            raise ValueError("num_children cannot be negative")
        if self.data_length < 0:
            raise ValueError("data_length cannot be negative")


@dataclass(frozen=True)
class NodeEntry:
    """A child name paired with its stat, used for ordering and display."""

    name: str
    stat: NodeStat

    @property
    def has_children(self) -> bool:
        return self.stat.num_children > 0


class ModeFlag(str, Enum):
    """Creation qualifiers accepted on the command line."""

    PERSISTENT = "persistent"
    EPHEMERAL = "ephemeral"
    SEQUENTIAL = "sequential"


class CreationMode(Enum):
    """Concrete persistence/uniqueness mode of a created node."""

    PERSISTENT = "persistent"
    EPHEMERAL = "ephemeral"
    PERSISTENT_SEQUENTIAL = "persistent_sequential"
    EPHEMERAL_SEQUENTIAL = "ephemeral_sequential"

    @property
    def ephemeral(self) -> bool:
        return self in (CreationMode.EPHEMERAL, CreationMode.EPHEMERAL_SEQUENTIAL)

    @property
    def sequential(self) -> bool:
        return self in (CreationMode.PERSISTENT_SEQUENTIAL, CreationMode.EPHEMERAL_SEQUENTIAL)


@dataclass
class DeleteResult:
    """Outcome of deleting one path in a batch.

    Attributes:
        path: Normalized path that was targeted.
        success: True if the path (and its subtree, when recursive) is gone.
        error: Error message (None on success).
    """

    path: str
    success: bool
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.success and self.error is not None:
            raise ValueError("success=True but error is set")
        if not self.success and self.error is None:
            raise ValueError("success=False requires error message")
        if not self.path:
            raise ValueError("path cannot be empty")
