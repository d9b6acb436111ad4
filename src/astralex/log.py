"""Logging setup: rich console handler on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "astralex"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger; DEBUG when *verbose*, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
