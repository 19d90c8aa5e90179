"""Logging utilities."""

import logging

from rich.console import Console
from rich.logging import RichHandler


PACKAGE_LOGGER = "wpspawn"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Send wpspawn log records to stderr through rich.

    Manifests are written to stdout, so log output must never go there.
    Calling this again replaces the previous handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers = []

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
