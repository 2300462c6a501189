"""
Logger factory.

Every service gets a named logger with a single console handler, so
repeated imports never stack duplicate handlers.
"""

import logging

from hireboard.core.config import settings


def get_logger(name: str, tag: str) -> logging.Logger:
    """
    Return the named logger, configured once.

    Args:
        name: Logger name (e.g. "user_service")
        tag: Short label printed in front of every message

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    # Console handler for terminal output
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            f"%(asctime)s [{tag}] %(levelname)s %(message)s"
        ))
        logger.addHandler(handler)

    return logger
