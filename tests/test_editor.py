"""Tests for payload reading, writing and creation."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from zk_cli.client import NodeClientError, NodeExistsError, NoNodeError
from zk_cli.editor import NodeEditor, PayloadDecodeError, UsageError, read_content
from zk_cli.modes import ModeConflictError
from zk_cli.types import CreationMode, ModeFlag

if TYPE_CHECKING:
    from conftest import FakeNodeClient


class _Stream(io.BytesIO):
    """Binary stdin stand-in with a configurable TTY flag."""

    def __init__(self, data: bytes = b"", tty: bool = False) -> None:
        super().__init__(data)
        self.tty = tty

    def isatty(self) -> bool:
        return self.tty


class TestReadContent:
    """Tests for content source precedence."""

    def test_explicit_content_wins(self) -> None:
        """Test an argument is used even when input is piped."""
        assert read_content("hello", _Stream(b"piped")) == b"hello"

    def test_piped_input(self) -> None:
        """Test piped stdin is read when no argument is given."""
        assert read_content(None, _Stream(b"piped\n")) == b"piped\n"

    def test_terminal_without_content_is_usage_error(self) -> None:
        """Test an interactive terminal with nothing to send is ambiguous."""
        with pytest.raises(UsageError, match="forget to pipe"):
            read_content(None, _Stream(tty=True))

    def test_terminal_with_allow_empty(self) -> None:
        """Test empty content is accepted when allowed."""
        assert read_content(None, _Stream(tty=True), allow_empty=True) == b""

    def test_no_stream(self) -> None:
        assert read_content(None, None, allow_empty=True) == b""

    def test_unicode_content_encoded(self) -> None:
        assert read_content("héllo") == "héllo".encode()


class TestNodeEditorRead:
    """Tests for reading payloads."""

    def test_read_text(self, populated_client: FakeNodeClient) -> None:
        assert NodeEditor(populated_client).read_text("/zeta") == "last"

    def test_read_binary(self, fake_client: FakeNodeClient) -> None:
        fake_client.add("/bin", b"\xff\x00")

        assert NodeEditor(fake_client).read("/bin") == b"\xff\x00"

    def test_read_text_binary_payload(self, fake_client: FakeNodeClient) -> None:
        """Test non UTF-8 payloads point the user at binary mode."""
        fake_client.add("/bin", b"\xff\x00")

        with pytest.raises(PayloadDecodeError, match="--binary") as exc_info:
            NodeEditor(fake_client).read_text("/bin")
        assert exc_info.value.path == "/bin"

    def test_read_missing(self, fake_client: FakeNodeClient) -> None:
        with pytest.raises(NoNodeError, match="/nope"):
            NodeEditor(fake_client).read_text("/nope")


class TestNodeEditorWrite:
    """Tests for the update-or-create path."""

    def test_update_existing(self, populated_client: FakeNodeClient) -> None:
        """Test an existing node is updated in place."""
        NodeEditor(populated_client).write("/zeta", b"new")

        assert populated_client.nodes["/zeta"].data == b"new"

    def test_missing_without_force(self, fake_client: FakeNodeClient) -> None:
        """Test nothing is created implicitly."""
        with pytest.raises(NoNodeError, match="/x"):
            NodeEditor(fake_client).write("/x", b"world")

        assert "/x" not in fake_client.nodes

    def test_missing_with_force_creates_persistent(self, fake_client: FakeNodeClient) -> None:
        """Test force falls back to a persistent create."""
        NodeEditor(fake_client).write("/x", b"world", force=True)

        assert fake_client.nodes["/x"].data == b"world"
        assert fake_client.nodes["/x"].ephemeral is False

    def test_force_create_uses_persistent_mode(self) -> None:
        """Test the fallback create asks for the persistent mode."""
        client = MagicMock()
        client.write.side_effect = NoNodeError("/x")

        NodeEditor(client).write("/x", b"world", force=True)

        client.create.assert_called_once_with("/x", b"world", CreationMode.PERSISTENT)

    def test_other_failures_propagate(self) -> None:
        """Test non-absence failures are not turned into creates."""
        client = MagicMock()
        client.write.side_effect = NodeClientError("/x", "ConnectionLoss")

        with pytest.raises(NodeClientError, match="ConnectionLoss"):
            NodeEditor(client).write("/x", b"world", force=True)
        client.create.assert_not_called()


class TestNodeEditorCreate:
    """Tests for node creation."""

    def test_create_default_persistent(self, fake_client: FakeNodeClient) -> None:
        created = NodeEditor(fake_client).create("/x", b"hello")

        assert created == "/x"
        assert fake_client.nodes["/x"].data == b"hello"
        assert fake_client.nodes["/x"].ephemeral is False

    def test_create_ephemeral_sequential(self, fake_client: FakeNodeClient) -> None:
        """Test the store-assigned name is returned."""
        created = NodeEditor(fake_client).create(
            "/job-", b"", [ModeFlag.EPHEMERAL, ModeFlag.SEQUENTIAL]
        )

        assert created == "/job-0000000000"
        assert fake_client.nodes[created].ephemeral is True

    def test_conflicting_modes_send_nothing(self) -> None:
        """Test a conflict is rejected before any remote call."""
        client = MagicMock()

        with pytest.raises(ModeConflictError):
            NodeEditor(client).create("/x", b"", [ModeFlag.PERSISTENT, ModeFlag.EPHEMERAL])
        client.create.assert_not_called()

    def test_create_existing(self, populated_client: FakeNodeClient) -> None:
        with pytest.raises(NodeExistsError, match="/zeta"):
            NodeEditor(populated_client).create("/zeta", b"")
