"""Reading, writing and creating node payloads."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import BinaryIO

from zk_cli.client import NoNodeError
from zk_cli.modes import resolve_mode
from zk_cli.protocols import NodeClient
from zk_cli.types import CreationMode, ModeFlag

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """The command was invoked with ambiguous or missing input."""


class PayloadDecodeError(ValueError):
    """A payload could not be decoded as UTF-8 text."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"`{path}`: payload is not valid UTF-8. "
            "To output the binary data use `-b` or `--binary`."
        )
        self.path = path


def read_content(
    content: str | None,
    stream: BinaryIO | None = None,
    allow_empty: bool = False,
) -> bytes:
    """Pick the payload to send from the command line or piped input.

    Precedence: explicit ``content``, then ``stream`` when it is not an
    interactive terminal, then an empty payload if ``allow_empty``.

    Args:
        content: Content given as a command argument.
        stream: Binary standard input.
        allow_empty: Accept an empty payload when nothing was provided.

    Returns:
        Payload bytes.

    Raises:
        UsageError: If nothing was provided and empty content is not allowed.
    """
    if content is not None:
        return content.encode("utf-8")
    if stream is not None and not stream.isatty():
        return stream.read()
    if allow_empty:
        return b""
    raise UsageError(
        "Did you forget to pipe something in the command? "
        "If you wanted to reset the content of the node use `--force` or `-f`."
    )


class NodeEditor:
    """Payload operations: read, update-or-create, create."""

    def __init__(self, client: NodeClient) -> None:
        self.client = client

    def read(self, path: str) -> bytes:
        return self.client.read(path)

    def read_text(self, path: str) -> str:
        """Read a payload as UTF-8 text.

        Raises:
            PayloadDecodeError: If the payload is binary.
        """
        data = self.client.read(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadDecodeError(path) from e

    def write(self, path: str, content: bytes, force: bool = False) -> None:
        """Update a node, creating it persistently when ``force`` is set.

        Args:
            path: Normalized node path.
            content: New payload.
            force: Create the node if it does not exist.

        Raises:
            NoNodeError: If the node is missing and ``force`` is not set.
            NodeClientError: On any other remote failure.
        """
        try:
            self.client.write(path, content)
        except NoNodeError:
            if not force:
                raise
            logger.info("`%s` does not exist, creating it", path)
            self.client.create(path, content, CreationMode.PERSISTENT)

    def create(self, path: str, content: bytes, flags: Iterable[ModeFlag] = ()) -> str:
        """Create a node with the mode resolved from ``flags``.

        Returns:
            The path assigned by the store.

        Raises:
            ModeConflictError: If the flags conflict; nothing is sent.
        """
        mode = resolve_mode(flags)
        return self.client.create(path, content, mode)
