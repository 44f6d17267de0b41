"""Logging setup for the maplist CLI.

Library modules only create loggers under the ``maplist`` namespace; the
command line decides whether and where they are shown.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "maplist"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Configure the ``maplist`` logger.

    Args:
        verbose: Show debug messages instead of warnings and above
        console: Console to render to (defaults to stderr)

    Returns:
        The configured ``maplist`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace handlers from an earlier call
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
