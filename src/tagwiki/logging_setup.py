"""Logging configuration."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "tagwiki-stdout"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the ``tagwiki`` logger.

    Safe to call more than once; the handler is only added the first time,
    later calls just update the level.
    """
    logger = logging.getLogger("tagwiki")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
