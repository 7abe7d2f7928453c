"""Logging configuration for the event server.

Everything is logged through loguru. Records emitted with the standard
``logging`` module (uvicorn, strawberry, asyncio) are forwarded to loguru by
``InterceptHandler`` so there is a single sink and a single level.
"""

import logging
import sys
from collections.abc import Iterable

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Standard library loggers that follow the application level
LIBRARY_LOGGERS = ("asyncio", "strawberry", "strawberry.execution", "event_server")
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def intercept_loggers(names: Iterable[str], level: str | int | None = None) -> None:
    """Route the named standard loggers to loguru only.

    Args:
        names: Logger names to take over
        level: Level to set on them; None leaves their level unchanged
    """
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
        if level is not None:
            std_logger.setLevel(level)


def setup_logging(log_level: str, serialize: bool = False) -> None:
    """Configure loguru logging for the entire application.

    Args:
        log_level: Log level to use (from settings, which handles env vars and CLI args).
        serialize: Write one JSON object per record instead of colored text.
    """
    log_level = log_level.upper()

    logger.remove()
    if serialize:
        logger.add(sys.stderr, level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=log_level, format=LOG_FORMAT, colorize=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    intercept_loggers(list(logging.Logger.manager.loggerDict))
    # The standard library has no TRACE level
    intercept_loggers(LIBRARY_LOGGERS, level="DEBUG" if log_level == "TRACE" else log_level)

    logger.info(f"Log level set to: {log_level}")


def setup_uvicorn_logging() -> None:
    """Route uvicorn's own loggers through loguru."""
    intercept_loggers(UVICORN_LOGGERS)
