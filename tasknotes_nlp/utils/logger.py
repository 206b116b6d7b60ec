"""Logging setup for the command line and API server."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING", fmt: str = "%(message)s", console: Console | None = None) -> None:
    """Route log records through rich.

    Safe to call more than once; later calls replace the handler.

    Args:
        level: Log level name
        fmt: Record format passed to the handler
        console: Console to write to (defaults to stderr)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format=fmt,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
