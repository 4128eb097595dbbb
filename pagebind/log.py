"""
================================================================================
Logging
================================================================================

Centralized Loguru logging configuration for pagebind.

Levels used across the package:
    - TRACE:   lookup attempts, session push/pop
    - DEBUG:   element actions, settings loading
    - INFO:    configuration discovery, browser start, test results
    - WARNING: timeouts, teardown problems, absolute URL overrides

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .configuration.loader import ConfigLoader


DEFAULT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {thread.name} | "
    "{name}:{function}:{line} | {message}"
)

_logger_initialized: bool = False


def init_logger(level: Optional[str] = None, format_str: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR). Defaults to
            the `logging.level` setting.
        format_str: Custom log format string. Defaults to `logging.format`.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    settings = ConfigLoader()
    log_level = (level or settings.get("logging.level", "INFO")).upper()
    log_format = format_str or settings.get("logging.format", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
        enqueue=True,
    )

    log_file = settings.get("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=settings.get("logging.rotation", "10 MB"),
            retention=settings.get("logging.retention", "7 days"),
            compression="zip",
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """
    Returns the configured Loguru logger instance.

    Ensures the logger is initialized before returning.
    """
    if not _logger_initialized:
        init_logger()
    return logger


def reset_logger() -> None:
    """Allow init_logger() to configure sinks again."""
    global _logger_initialized
    _logger_initialized = False


__all__ = [
    "DEFAULT_FORMAT",
    "init_logger",
    "get_logger",
    "reset_logger",
]
