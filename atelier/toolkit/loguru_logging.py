"""The `loguru` setup for `atelier`.

The database layer (Tortoise ORM and its drivers) logs through the standard `logging` module: only its loggers are
forwarded to `loguru`, the root logger of the process is left alone.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable

from loguru import logger

from ..settings import settings


class InterceptHandler(logging.Handler):
    """Forwards the `logging` records to `loguru`, keeping the original logger name in the `extra`."""

    def emit(self, record: logging.LogRecord):
        """Redirect the record to `loguru`."""
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Point `loguru` at the code that logged, not at the `logging` internals
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(logger_name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_loggers(logger_names: Iterable[str], level: str = settings.LOG_LEVEL):
    """Send the records of the given `logging` loggers to `loguru` instead of their own handlers."""
    # `loguru`-only levels (`TRACE`, `SUCCESS`) are unknown to `logging`: let everything through then
    logging_level = logging.getLevelName(level)
    if not isinstance(logging_level, int):
        logging_level = logging.NOTSET

    for name in logger_names:
        logging_logger = logging.getLogger(name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.setLevel(logging_level)
        logging_logger.propagate = False


def setup_logging():
    """Replace the default `loguru` sink and route the database logs into it."""
    try:
        logger.remove(0)
    except (KeyError, ValueError):
        pass

    logger.add(
        sys.stderr, level=settings.LOG_LEVEL, serialize=not bool(settings.DEBUG), backtrace=True, diagnose=False
    )

    if settings.DO_USE_FILE_LOGS:
        logger.add(
            Path(settings.LOGS_PATH) / "atelier_{time}.log",
            level=settings.LOG_LEVEL,
            encoding="utf-8",
            rotation="00:00",
            retention=settings.LOGS_RETENTION,
        )

    intercept_loggers(settings.INTERCEPTED_LOGGERS)


setup_logging()

__all__ = ["logger", "InterceptHandler", "intercept_loggers"]
