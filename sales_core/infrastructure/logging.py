"""
Logging infrastructure.

Provides logging utilities for the sales_core package.
"""
import logging
from typing import Optional

from sales_core.settings import AppSettings, get_app_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, settings: Optional[AppSettings] = None) -> logging.Logger:
    """
    Get logger instance.

    The first call for a given name attaches a stream handler and applies
    the configured level; later calls return the same logger untouched.

    Args:
        name: Logger name (usually module name)
        settings: Settings to read the level from (cached app settings if omitted)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        settings = settings or get_app_settings()
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(settings.logging.log_level)
    return logger
