"""
Handlers for the ``chaosmaps`` package logger.

Library modules only create child loggers (``chaosmaps.lyapunov``,
``chaosmaps.cli``, ...) and never attach handlers themselves; the CLI, or
a script using the package, calls setup_logging() once.
"""
import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "chaosmaps"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Route chaosmaps log records to a console stream and optionally a file.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: threshold for the package logger and its handlers
        log_file: path of a log file, truncated on open
        stream: console stream, stdout when omitted (the CLI passes stderr
            so CSV output on stdout stays clean)

    Returns:
        the configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(stream if stream is not None else sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    logger.debug(f"logging at {logging.getLevelName(level)}, file={log_file}")
    return logger
