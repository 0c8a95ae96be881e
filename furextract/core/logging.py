"""
Logging setup for furextract.

Everything logs through loguru's ``logger``; this module only decides where
the records go and at which level.
"""

import sys
from typing import Optional

from loguru import logger

from .config import get_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with a stderr sink at the configured level.

    Args:
        log_level: Override for ``Settings.LOG_LEVEL`` (DEBUG, INFO, ...)
    """
    level = (log_level or get_settings().LOG_LEVEL).upper()

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, backtrace=False, diagnose=False)
    logger.debug(f"Logging initialised with level {level}")
