"""Logging setup built on rich.

All rich output, log records included, goes through the single ``console``
defined here. It is bound to stderr: when the MCP server runs over stdio,
stdout carries the protocol stream and must stay clean.

Call setup_logging() once from a CLI entry point, never at import time, and
use logging.getLogger(__name__) everywhere else.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


# Shared by RichHandler, pipeline loggers and summary panels.
console = Console(stderr=True)

# httpx logs full request URLs at INFO, and Bot API URLs embed the token.
_THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "mcp", "PIL")

_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
    debug_third_party: bool = False,
) -> None:
    """Install a RichHandler (and optionally a file handler) on the root logger.

    Args:
        level: Root logger level
        log_file: Also append plain-text records to this file
        debug_third_party: Let httpx, mcp and Pillow log at DEBUG
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=console, show_path=False, rich_tracebacks=True)
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)

    third_party_level = logging.DEBUG if debug_third_party else logging.WARNING
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)
