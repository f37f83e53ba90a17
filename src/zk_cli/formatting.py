"""Display rendering of nodes."""

from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text

from zk_cli.types import NodeEntry, NodeStat

CHILDREN_MARKER = "/ "


def render_entry(name: str, stat: NodeStat) -> Text:
    """Render a node name styled from its metadata.

    Nodes with children get a trailing ``/ `` marker (except the root),
    nodes holding data are green, ephemeral nodes are italic. Styling never
    alters the name itself.

    Args:
        name: Bare child name, or a full path for a tree root.
        stat: Snapshot of the node.

    Returns:
        Styled rich Text.
    """
    label = name
    if stat.num_children > 0 and name != "/":
        label = f"{name}{CHILDREN_MARKER}"

    style = "bold blue"
    if stat.data_length > 0:
        style = "bold green"
    if stat.ephemeral:
        style = f"{style} italic"
    return Text(label, style=style)


def render_listing(entries: Iterable[NodeEntry]) -> Text:
    """Render entries on one line, separated by spaces."""
    return Text(" ").join(render_entry(entry.name, entry.stat) for entry in entries)
