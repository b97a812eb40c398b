"""Logging setup for cliforge commands."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_handler: RichHandler | None = None


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route cliforge log records to stderr through rich.

    Args:
        verbose: Enable debug-level logging. Otherwise only warnings and
            errors are shown.

    Safe to call more than once; the handler is installed a single time.
    """
    global _handler

    logger = logging.getLogger("cliforge")
    if _handler is None:
        _handler = RichHandler(console=Console(stderr=True), show_path=False)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_handler)

    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
