"""Logging setup shared by the CLI and the API server."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = logging.WARNING, console: Console | None = None) -> None:
    """Route log records through rich, replacing any handlers already installed."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO; keep that for --debug only.
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if logging.getLogger().level <= logging.DEBUG else logging.WARNING
    )
