"""
================================================================================
SauceDemo Tools Common Utilities
================================================================================

Logging setup shared by the test runner and the pytest session.

Exports:
    - init_logger: Initialize loguru with the suite's console and file sinks
    - ensure_directory: Create a directory if missing

Usage:
    from saucedemo_tools.common import init_logger

    init_logger(level="DEBUG", log_file="logs/ui_tests.log")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "1 day",
    retention: str = "7 days",
    format_string: str = DEFAULT_FORMAT,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path to write logs to (rotated)
        rotation: loguru rotation rule for the file sink
        retention: loguru retention rule for the file sink
        format_string: Log format string
        force: Re-initialize even if already configured

    Example:
        init_logger()  # console only
        init_logger(level="DEBUG", log_file="logs/ui_tests.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        format=format_string,
        level=level.upper(),
        colorize=True,
    )

    if log_file:
        ensure_directory(os.path.dirname(log_file))
        logger.add(
            log_file,
            format=format_string,
            level=level.upper(),
            rotation=rotation,
            retention=retention,
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path (empty means current directory)

    Returns:
        The path (for chaining)
    """
    if path:
        os.makedirs(path, exist_ok=True)
    return path


__all__ = [
    "init_logger",
    "ensure_directory",
]
