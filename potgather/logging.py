"""Logging utilities."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "potgather"


def configure_logging(level: str = "INFO", *, rich_tracebacks: bool = True) -> None:
    """Route potgather records to stderr; other libraries stay at WARNING."""
    console = Console(stderr=True)
    handler = RichHandler(
        console=console,
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_path=False,
        show_time=False,
    )
    logging.basicConfig(level=logging.WARNING, handlers=[handler], force=True)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the potgather namespace."""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER", "configure_logging", "get_logger"]
