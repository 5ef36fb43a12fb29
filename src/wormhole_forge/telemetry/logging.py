"""Console logging setup for the command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "wormhole_forge"


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Attach a single rich handler to the package logger and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
    )
    return logger
