"""Console output and logging setup for non-interactive CLI use."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from zk_cli.config import CliConfig


def configure_logging(level: str = "warning") -> None:
    """Route log records to stderr through rich, once per process.

    Args:
        level: Level name, e.g. ``"warning"`` or ``"info"``.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                markup=False,
            )
        ],
        force=True,
    )


class Printer:
    """Writes results to stdout and status messages to stderr."""

    def __init__(self) -> None:
        """Initialize printer."""
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def show_line(self, line: Text | str) -> None:
        """Print one line of command output without markup or wrapping."""
        self.console.print(line, markup=False, emoji=False, soft_wrap=True)

    def show_config(self, config: CliConfig, location: str) -> None:
        """Display configuration table.

        Args:
            config: Loaded configuration.
            location: Path of the configuration file.
        """
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value")

        table.add_row("addr", config.addr)
        table.add_row("timeout", f"{config.timeout:g}")
        table.add_row("log-level", config.log_level)

        self.console.print(table)
        self.console.print(Text(f"  File: {location}"))

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.err_console.print(Text.assemble(("✓", "green"), " ", message), soft_wrap=True)

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.err_console.print(Text.assemble(("✗", "red"), " ", message), soft_wrap=True)

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.err_console.print(Text.assemble(("!", "yellow"), " ", message), soft_wrap=True)
