"""Logging configuration for the CLI (stdlib logging + rich handler)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "canada_climate_bulk"


def configure_logging(console: Console, *, verbose: bool = False) -> logging.Logger:
    """Attach a single `RichHandler` to the package logger.

    Calling it again (tests, repeated CLI invocations) replaces the handler
    instead of stacking a new one.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console,
        show_path=verbose,
        show_time=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
