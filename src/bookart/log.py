"""Logging setup for bookart.

Every module logs through ``logging.getLogger(__name__)``; this installs a
Rich console handler on the package logger.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "bookart"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a Rich handler to the ``bookart`` logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
