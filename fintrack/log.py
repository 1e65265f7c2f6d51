"""Logging setup for fintrack.

Log records go to stderr through a rich handler so they never mix with
command output on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "fintrack"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the fintrack hierarchy (e.g. "store")."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Install the rich handler on the fintrack logger.

    Calling this again replaces the handler rather than adding another.

    Args:
        level: Level name such as "DEBUG" or "INFO".

    Returns:
        The configured fintrack logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
