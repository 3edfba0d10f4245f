"""Logging setup for the xr command line."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "xr"


def configure_logging(
    verbose: bool = False,
    level: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Args:
        verbose: Force DEBUG level
        level: Level name from configuration (e.g. "WARNING")
        console: Console to log to (defaults to stderr)

    Returns:
        logging.Logger: The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)

    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = logging.getLevelName((level or "WARNING").upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    logger.setLevel(resolved)

    # Replace handlers from a previous call (CliRunner invokes main repeatedly)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
