"""Creation mode resolution."""

from __future__ import annotations

from collections.abc import Iterable

from zk_cli.types import CreationMode, ModeFlag


class ModeConflictError(ValueError):
    """Requested creation qualifiers cannot be combined."""


def resolve_mode(flags: Iterable[ModeFlag]) -> CreationMode:
    """Resolve a set of creation qualifiers to one concrete mode.

    Persistent is implied when neither persistent nor ephemeral is given,
    so an empty set resolves to ``CreationMode.PERSISTENT``.

    Args:
        flags: Any combination of persistent, ephemeral and sequential.

    Returns:
        The resolved CreationMode.

    Raises:
        ModeConflictError: If persistent and ephemeral are both requested.
    """
    requested = set(flags)
    persistent = ModeFlag.PERSISTENT in requested
    ephemeral = ModeFlag.EPHEMERAL in requested
    sequential = ModeFlag.SEQUENTIAL in requested

    if persistent and ephemeral:
        raise ModeConflictError(
            "persistent and ephemeral are mutually exclusive, "
            "can't use both at the same time"
        )
    if ephemeral:
        return CreationMode.EPHEMERAL_SEQUENTIAL if sequential else CreationMode.EPHEMERAL
    return CreationMode.PERSISTENT_SEQUENTIAL if sequential else CreationMode.PERSISTENT
