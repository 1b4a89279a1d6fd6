"""Logging setup for scripts and workers that drive the entity graph."""

import logging
import sys
from typing import Iterable, Optional

from trues.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP and SQL chatter drowns out lookups at DEBUG
QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine")


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def setup_logging(level: Optional[str] = None, quiet: Iterable[str] = QUIET_LOGGERS) -> int:
    """
    Configure the root handler and the ``trues`` logger.

    Args:
        level: Level name such as DEBUG or INFO. Defaults to ``settings.LOG_LEVEL``.
        quiet: Third-party loggers capped at WARNING.

    Returns:
        The numeric level that was applied.
    """
    log_level = _level(level or settings.LOG_LEVEL)

    # force: build_context may run more than once per process
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("trues").setLevel(log_level)

    logging.getLogger(__name__).debug("Logging at %s", logging.getLevelName(log_level))
    return log_level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
