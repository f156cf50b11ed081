"""Console reporting shared by the command-line pipelines.

A pipeline reports each unit of work (one emoji pack) as an indented block
and finishes with a summary panel. Plain log records still go through the
standard logging module so they honour setup_logging().
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from telegram_emoji.utils.logging import console

# Wide enough to blank any progress message we print
_PROGRESS_WIDTH = 72


class StructuredBlock:
    """Indented output for one unit of work.

    Usage:
        with logger.block("NeonIcons") as block:
            block.progress("fetching sticker set...")
            block.field("title", "Neon Icons")
            block.result("48 emojis synced")

    Output:
        NeonIcons
            title: Neon Icons
            ✓ 48 emojis synced
    """

    def __init__(self, title: str, parent: "BasePipelineLogger") -> None:
        self.title = title
        self.console = parent.console
        self._parent = parent

    def __enter__(self) -> "StructuredBlock":
        self._parent._clear_progress_line()
        self.console.print(f"\n[bold]{self.title}[/bold]")
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._parent._clear_progress_line()

    def field(self, key: str, value: Any, color: str | None = None) -> None:
        shown = f"[{color}]{value}[/{color}]" if color else f"{value}"
        self.console.print(f"    [dim]{key}:[/dim] {shown}")

    def progress(self, message: str) -> None:
        """Print a transient status line; the next output overwrites it."""
        self.console.print(f"    [dim]{message}[/dim]", end="\r")
        self._parent._has_progress_line = True

    def result(self, message: str, success: bool = True) -> None:
        self._parent._clear_progress_line()
        mark = "[green]✓[/green]" if success else "[red]✗[/red]"
        self.console.print(f"    {mark} {message}")


class BasePipelineLogger(ABC):
    """Common state and helpers for a pipeline's console output.

    Subclasses add event methods for their own pipeline and implement
    summary().
    """

    def __init__(self, logger_name: str | None = None) -> None:
        self.console: Console = console
        self._has_progress_line = False
        self._logger = logging.getLogger(logger_name or type(self).__module__)

    def _clear_progress_line(self) -> None:
        if self._has_progress_line:
            self.console.print(" " * _PROGRESS_WIDTH, end="\r")
            self._has_progress_line = False

    @contextmanager
    def block(self, title: str) -> Iterator[StructuredBlock]:
        """Open a StructuredBlock titled ``title``."""
        with StructuredBlock(title, self) as block:
            yield block

    # -------------------------------------------------------------------------
    # Plain log records
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def success(self, message: str) -> None:
        """Print a green check line straight to the console."""
        self.console.print(f"[green]✓[/green] {message}")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def print_summary(
        self,
        pipeline_name: str,
        *,
        elapsed: float,
        stats: Mapping[str, int | str],
        style: str = "cyan",
    ) -> None:
        """Print a "<pipeline_name> Complete" panel of stats plus elapsed time.

        Integer values are shown with thousands separators.
        """
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column(justify="right", style="green")
        for label, value in stats.items():
            table.add_row(label, f"{value:,}" if isinstance(value, int) else str(value))
        table.add_row("Time elapsed", f"{elapsed:.1f}s")

        self.console.print()
        self.console.print(
            Panel(
                table,
                title=f"[bold]{pipeline_name} Complete[/bold]",
                border_style=style,
                padding=(1, 2),
            )
        )

    @abstractmethod
    def summary(self, **kwargs: Any) -> None:
        """Print the pipeline's final summary."""
