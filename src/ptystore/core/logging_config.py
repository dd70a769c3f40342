"""Centralized logging configuration.

Usage at a process entry point:
    from ptystore.core.logging_config import setup_logging
    setup_logging(verbose=False)

Then in any module:
    from ptystore.core.logging_config import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ptystore logger hierarchy for this process.

    Call this once from the entry point (CLI group, TUI). Library callers
    that never call it get the host application's logging configuration.

    Args:
        verbose: Log at DEBUG instead of WARNING.

    Returns:
        The package root logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root = logging.getLogger("ptystore")
    root.setLevel(level)
    root.handlers.clear()

    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module. Call at module level with __name__."""
    return logging.getLogger(name)
