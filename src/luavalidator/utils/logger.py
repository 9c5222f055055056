"""
Logging infrastructure for the Lua validator.

This module provides configurable logging with console and file output,
log rotation, and hierarchical logger management. Library modules only call
``get_logger``; the command-line entry point is the one place that calls
``setup_logger`` with a level and optional log file.

Examples:
    >>> from luavalidator.utils.logger import setup_logger
    >>> logger = setup_logger("luavalidator", level="DEBUG", log_file=Path("logs/validator.log"))
    >>> logger.info("Validation started")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .path_utils import ensure_directory

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotating file handler limits
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _check_level(level: str) -> str:
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return level.upper()


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Path | None = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Creates a logger with console output and optional file output. The
    console handler filters at ``level``; the file handler always records
    DEBUG and up, so the logger itself is opened to DEBUG when a file is given.
    Calling it again for the same name does not add duplicate handlers.

    Args:
        name: Logger name (typically "luavalidator" or a dotted child).
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If provided, enables file logging.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If level is not a valid log level.

    Note:
        File logs use detailed format, console logs use simple format.
    """
    level = _check_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file is not None else getattr(logging, level))

    has_console_handler = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.handlers.RotatingFileHandler)
        for h in logger.handlers
    )
    has_file_handler = any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)

    if not has_console_handler:
        add_console_handler(logger, level)

    if log_file is not None and not has_file_handler:
        add_file_handler(logger, log_file, level="DEBUG")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a logger for a validator module.

    Unlike ``setup_logger`` this never attaches handlers: a library module
    must stay silent until the application configures logging, and child
    loggers reach the handlers of "luavalidator" through propagation.

    Args:
        name: Logger name, e.g. "luavalidator.core.validator".

    Returns:
        Logger instance.
    """
    logger = logging.getLogger(name)
    root_name = name.split(".", 1)[0]
    package_logger = logging.getLogger(root_name)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logger


def add_file_handler(
    logger: logging.Logger,
    log_file: Path,
    level: str = "DEBUG"
) -> None:
    """
    Add file output handler to logger with rotation.

    Creates the log directory if it doesn't exist. Uses a rotating file
    handler with 10MB max size and 5 backup files.

    Args:
        logger: Logger instance to modify.
        log_file: Path to log file.
        level: Logging level for file handler.

    Raises:
        ValueError: If level is not valid.
        OSError: If log directory cannot be created.
    """
    level = _check_level(level)

    ensure_directory(log_file.parent)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(getattr(logging, level))
    file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))

    logger.addHandler(file_handler)


def add_console_handler(logger: logging.Logger, level: str = "INFO") -> None:
    """
    Add console output handler to logger.

    Args:
        logger: Logger instance to modify.
        level: Logging level for console handler.

    Raises:
        ValueError: If level is not valid.
    """
    level = _check_level(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))

    logger.addHandler(console_handler)
