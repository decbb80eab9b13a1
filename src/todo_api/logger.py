from __future__ import annotations

import logging

from .settings import get_settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# PUBLIC_INTERFACE
def get_logger(name: str = "todo_api") -> logging.Logger:
    """
    Return a named logger writing to stderr at the configured LOG_LEVEL.

    Handlers are attached once per logger, so repeated calls are cheap and do
    not duplicate output.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, get_settings().log_level, logging.INFO))
    logger.propagate = False
    return logger
