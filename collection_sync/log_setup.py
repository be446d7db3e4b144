"""Logging configuration for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "collection_sync"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Args:
        verbose: Log at DEBUG (request details included) instead of INFO
        console: Console to write to (stderr if not provided)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Avoid adding handlers multiple times
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return logger

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
