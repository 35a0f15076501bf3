"""
Logging setup shared by the app operations and the seeder.

Every module logs through ``get_logger(__name__)``. Loggers handed out here
write to stdout in one format and can be re-levelled together, which the
seeder does when ``--log-level`` is given.
"""
import logging
import os
import sys
from typing import Dict, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_loggers: Dict[str, logging.Logger] = {}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get('LOG_LEVEL', 'INFO')).upper()
    return getattr(logging, name, logging.INFO)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a stdout logger, creating its handler on first use.

    Args:
        name: Logger name, normally the caller's ``__name__``

    Returns:
        Logger at the LOG_LEVEL level that does not propagate to root
    """
    name = name or 'food_ordering'
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    level = _resolve_level(None)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    # Root handlers would print every record twice
    logger.propagate = False

    _loggers[name] = logger
    return logger


def set_log_level(level: str) -> None:
    """Apply a level name (DEBUG, INFO, ...) to every logger from get_logger."""
    resolved = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(resolved)
        for handler in logger.handlers:
            handler.setLevel(resolved)
