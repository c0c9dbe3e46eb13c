"""Logging setup for the stepaxis command line."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(module)s - %(levelname)s - %(message)s"
HANDLER_NAME = "stepaxis-stdout"


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Route ``stepaxis`` log records to the current stdout.

    A handler installed by an earlier call is replaced, never stacked, so the
    logger always writes to whatever ``sys.stdout`` is now.

    Args:
        level: Threshold for messages published by ``stepaxis`` loggers.

    Returns:
        The ``stepaxis`` package logger.
    """
    logger = logging.getLogger("stepaxis")
    for old in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
