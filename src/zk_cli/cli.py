"""CLI commands using Typer."""

from __future__ import annotations

import atexit
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, BinaryIO

if TYPE_CHECKING:
    from zk_cli.context import AppContext

import typer

from zk_cli import __version__
from zk_cli.client import DEFAULT_ADDR, DEFAULT_TIMEOUT, ConnectionFailedError, NodeClientError
from zk_cli.config import ConfigManager
from zk_cli.console import Printer, configure_logging
from zk_cli.context import create_context
from zk_cli.editor import read_content
from zk_cli.formatting import render_listing
from zk_cli.modes import resolve_mode
from zk_cli.paths import ROOT, normalize_path
from zk_cli.types import ModeFlag

app = typer.Typer(
    name="zk-cli",
    help="Cli around zookeeper",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

printer = Printer()


@dataclass
class _Options:
    """Connection settings resolved by the main callback."""

    addr: str = DEFAULT_ADDR
    timeout: float = DEFAULT_TIMEOUT


options = _Options()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        printer.show_line(f"zk-cli v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    addr: Annotated[
        str | None,
        typer.Option("--addr", "-a", help="Connect string, host:port[,host:port...][/chroot]"),
    ] = None,
    timeout: Annotated[
        float | None, typer.Option("--timeout", help="Connection timeout in seconds")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log informational messages")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Cli around zookeeper."""
    try:
        config = ConfigManager.create_default().load()
    except ValueError as e:
        printer.show_error(f"Invalid configuration file: {e}")
        raise typer.Exit(1) from e

    options.addr = addr or config.addr
    options.timeout = timeout or config.timeout
    configure_logging("info" if verbose else config.log_level)


def _open_context() -> AppContext:
    """Connect to the coordination service; failure ends the process."""
    try:
        ctx = create_context(options.addr, options.timeout)
    except ConnectionFailedError as e:
        printer.show_error(str(e))
        raise typer.Exit(1) from e
    atexit.register(ctx.close)
    return ctx


def _stdin_stream() -> BinaryIO:
    return sys.stdin.buffer


@contextmanager
def _fail_on_error() -> Iterator[None]:
    """Report a command's failure and exit non-zero."""
    try:
        yield
    except (NodeClientError, ValueError) as e:
        printer.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# Browsing Commands
# ============================================================================


@app.command("ls")
def ls(
    path: Annotated[
        str | None, typer.Argument(help="List directory contents from the given path.")
    ] = None,
    _context=None,
) -> None:
    """List directory contents."""
    target = normalize_path(path) if path is not None else ROOT
    ctx = _context or _open_context()

    with _fail_on_error():
        entries = ctx.walker.list_entries(target)
    printer.show_line(render_listing(entries))


@app.command("tree")
def tree(
    path: Annotated[str | None, typer.Argument(help="Print the tree from the given path.")] = None,
    _context=None,
) -> None:
    """List contents of directories in a tree-like format."""
    target = normalize_path(path) if path is not None else ROOT
    ctx = _context or _open_context()

    with _fail_on_error():
        ctx.walker.print_tree(target, printer.show_line)


@app.command("cat")
def cat(
    path: Annotated[str, typer.Argument(help="Path of the node to print.")],
    binary: Annotated[
        bool, typer.Option("--binary", "-b", help="Send the raw payload to stdout.")
    ] = False,
    _context=None,
) -> None:
    """Print a node's payload."""
    target = normalize_path(path)
    ctx = _context or _open_context()

    with _fail_on_error():
        if binary:
            typer.echo(ctx.editor.read(target), nl=False)
        else:
            # color=True keeps escape sequences in the payload when piped
            typer.echo(ctx.editor.read_text(target), color=True)


# ============================================================================
# Mutating Commands
# ============================================================================


@app.command("rm")
def rm(
    paths: Annotated[list[str], typer.Argument(help="Paths of the nodes to remove.")],
    recursive: Annotated[
        bool,
        typer.Option(
            "--recursive",
            "-r",
            help="Delete every child before deleting the node itself.",
        ),
    ] = False,
    _context=None,
) -> None:
    """Remove nodes. A failing path is reported and the others are still removed."""
    targets = [normalize_path(p) for p in paths]
    ctx = _context or _open_context()

    results = ctx.deleter.delete_many(targets, recursive=recursive)
    failed = [r for r in results if not r.success]
    if failed and len(results) > 1:
        printer.show_warning(f"{len(failed)} of {len(results)} paths could not be removed")


@app.command("write")
def write(
    path: Annotated[str, typer.Argument(help="Path of the node to write.")],
    content: Annotated[
        str | None, typer.Argument(help="Content to write, read from stdin if omitted.")
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Create the node as persistent if it does not exist, "
            "and allow erasing its content when nothing is provided.",
        ),
    ] = False,
    _context=None,
) -> None:
    """Write the content of stdin or argv to an existing node.

    See the create command if you need to create a new node.
    """
    target = normalize_path(path)
    with _fail_on_error():
        data = read_content(content, _stdin_stream(), allow_empty=force)

    ctx = _context or _open_context()
    with _fail_on_error():
        ctx.editor.write(target, data, force=force)


@app.command("create")
def create(
    path: Annotated[str, typer.Argument(help="Path of the node to create.")],
    content: Annotated[
        str | None, typer.Argument(help="Content to write, read from stdin if omitted.")
    ] = None,
    mode: Annotated[
        list[ModeFlag] | None,
        typer.Option(
            "--mode",
            "-m",
            help="Mode to use when creating the node, can be repeated.",
            case_sensitive=False,
        ),
    ] = None,
    _context=None,
) -> None:
    """Create a new node from the content of stdin or argv.

    By default the node is persistent; an ephemeral node is deleted when the
    cli exits. The node is readable and writable by anyone.
    """
    target = normalize_path(path)
    flags = mode or []
    with _fail_on_error():
        resolve_mode(flags)
        data = read_content(content, _stdin_stream(), allow_empty=True)

    ctx = _context or _open_context()
    with _fail_on_error():
        created = ctx.editor.create(target, data, flags)
    printer.show_line(created)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _config=None,
) -> None:
    """Show current configuration."""
    manager = _config or ConfigManager.create_default()
    printer.show_config(manager.load(), str(manager.config_file))


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key: addr, timeout or log-level")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _config=None,
) -> None:
    """Set a configuration value."""
    manager = _config or ConfigManager.create_default()

    try:
        manager.set_value(key, value)
    except ValueError as e:
        printer.show_error(str(e))
        raise typer.Exit(1) from e
    printer.show_success(f"Set {key} to {value}")


# ============================================================================
# Aliases
# ============================================================================

for _alias in ("list", "l", "ll"):
    app.command(_alias, hidden=True)(ls)
app.command("t", hidden=True)(tree)
app.command("bat", hidden=True)(cat)
app.command("rmdir", hidden=True)(rm)
app.command("set", hidden=True)(write)


if __name__ == "__main__":
    app()
