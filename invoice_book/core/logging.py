"""
Loguru configuration shared by the API and the services.

Modules log through ``from loguru import logger``; this only decides where
the records go and at which level.
"""

import sys

from loguru import logger

from .config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level> | {extra}"
)


def setup_logging(level: str | None = None, json_logs: bool | None = None):
    """
    Replace loguru's default sink with one configured from settings.

    Args:
        level: Minimum level (default: LOG_LEVEL setting)
        json_logs: Emit one JSON document per record (default: LOG_JSON setting)

    Returns:
        The configured loguru logger
    """
    level = level or settings.log_level
    json_logs = settings.log_json if json_logs is None else json_logs

    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        serialize=json_logs,
        backtrace=False,
        diagnose=False,
    )
    return logger
