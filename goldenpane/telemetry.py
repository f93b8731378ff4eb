"""Logging helpers.

Log format: [module] message
"""

import logging

_LOG_FORMAT = "[%(name)s] %(message)s"
_ROOT_LOGGER = "goldenpane"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger.

    Args:
        name: Module name, usually ``__name__``.
    """
    return logging.getLogger(name)


def configure_logging(debug: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    if not any(getattr(h, "_goldenpane", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._goldenpane = True
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger
