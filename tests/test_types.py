"""Tests for shared data types."""

from __future__ import annotations

import pytest

from zk_cli.types import DeleteResult, NodeEntry, NodeStat


class TestNodeStat:
    """Tests for NodeStat validation."""

    def test_negative_children_rejected(self) -> None:
        """Test a negative child count is invalid."""
        with pytest.raises(ValueError, match="num_children"):
            NodeStat(num_children=-1, data_length=0)

    def test_negative_length_rejected(self) -> None:
        """Test a negative payload length is invalid."""
        with pytest.raises(ValueError, match="data_length"):
            NodeStat(num_children=0, data_length=-1)

    def test_entry_has_children(self) -> None:
        """Test has_children follows the stat."""
        assert NodeEntry("a", NodeStat(2, 0)).has_children
        assert not NodeEntry("a", NodeStat(0, 5)).has_children


class TestDeleteResult:
    """Tests for DeleteResult invariants."""

    def test_success(self) -> None:
        result = DeleteResult(path="/a", success=True)
        assert result.error is None

    def test_success_with_error_rejected(self) -> None:
        """Test success cannot carry an error."""
        with pytest.raises(ValueError, match="error is set"):
            DeleteResult(path="/a", success=True, error="boom")

    def test_failure_requires_error(self) -> None:
        """Test failure must carry an error."""
        with pytest.raises(ValueError, match="requires error"):
            DeleteResult(path="/a", success=False)

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="path"):
            DeleteResult(path="", success=True)
