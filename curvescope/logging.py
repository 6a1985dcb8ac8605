"""
Logging setup for CurveScope.

``__main__`` calls setup_logging() once; every module then does
``logger = get_logger(__name__)``. All loggers hang off the ``curvescope``
logger so one call controls the whole package.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER = 'curvescope'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = 'WARNING',
    log_file: Optional[str] = None,
    console: bool = False
) -> None:
    """
    Configure the ``curvescope`` logger.

    Args:
        level: Log level name; unknown names fall back to WARNING
        log_file: Written (truncated) only at DEBUG or INFO
        console: Also log to stderr
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers = []
    if numeric_level <= logging.INFO and log_file:
        handlers.append(logging.FileHandler(log_file, mode='w'))
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if not handlers:
        root.addHandler(logging.NullHandler())

    root.debug(f"Logging configured: level={level}, log_file={log_file}, console={console}")


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, nested under ``curvescope``."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
