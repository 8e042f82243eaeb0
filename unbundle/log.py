"""Logging setup for the unbundle command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = 'unbundle'


def configure_logging(
    *, verbose: bool = False, console: Console | None = None
) -> logging.Logger:
    """Attach a rich handler to the ``unbundle`` logger hierarchy."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Invoking the CLI more than once in a process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)

    return logger


__all__ = ['configure_logging']
