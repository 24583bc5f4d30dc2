#!/usr/bin/env python3
"""Loguru-based logging for hafetch.

Every module in the package logs through the ``logger`` object defined here,
so a single call (or a single environment variable) controls the verbosity of
endpoint probing and failover.

Basic Usage:
    from hafetch.utils.loguru_setup import logger

    logger.configure_level("INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    logger.info("Switched to <green>rm2</green>")

Environment Variables:
    HAFETCH_LOG_LEVEL: Global log level (default ERROR)
    HAFETCH_LOG_FILE: Optional log file path for file output
    HAFETCH_DISABLE_COLORS: Set to "true" to disable colored output
"""

import logging
import os
import sys
from pathlib import Path

from loguru import logger as _loguru_logger

# Remove default loguru handler to have full control
_loguru_logger.remove()

DEFAULT_LOG_LEVEL = os.getenv("HAFETCH_LOG_LEVEL", "ERROR").upper()
LOG_FILE = os.getenv("HAFETCH_LOG_FILE")
DISABLE_COLORS = os.getenv("HAFETCH_DISABLE_COLORS", "false").lower() == "true"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

SIMPLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_LEVEL_NAMES = {10: "DEBUG", 20: "INFO", 30: "WARNING", 40: "ERROR", 50: "CRITICAL"}
_LEVEL_HIERARCHY = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class HAFetchLogger:
    """Thin wrapper around loguru with level, file and color controls."""

    def __init__(self) -> None:
        self._current_level = DEFAULT_LOG_LEVEL
        self._log_file = LOG_FILE
        self._disable_colors = DISABLE_COLORS
        self._setup_logger()

    def _setup_logger(self) -> None:
        """(Re)install loguru handlers from the current settings."""
        _loguru_logger.remove()

        format_template = SIMPLE_FORMAT if self._disable_colors else LOG_FORMAT

        _loguru_logger.add(
            sys.stderr,
            level=self._current_level,
            format=format_template,
            colorize=not self._disable_colors,
            backtrace=True,
            diagnose=False,
        )

        if self._log_file:
            log_path = Path(self._log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            _loguru_logger.add(
                str(log_path),
                level=self._current_level,
                format=SIMPLE_FORMAT,
                rotation="10 MB",
                retention="1 week",
                compression="zip",
                backtrace=True,
                diagnose=False,
            )

    def configure_level(self, level: str) -> "HAFetchLogger":
        """Configure the log level.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

        Returns:
            Self for method chaining
        """
        self._current_level = level.upper()
        self._setup_logger()
        return self

    def configure_file(self, log_file: str | Path | None) -> "HAFetchLogger":
        """Configure file logging.

        Args:
            log_file: Path to log file, or None to disable file logging

        Returns:
            Self for method chaining
        """
        self._log_file = str(log_file) if log_file else None
        self._setup_logger()
        return self

    def disable_colors(self, disable: bool = True) -> "HAFetchLogger":
        """Enable or disable colored output."""
        self._disable_colors = disable
        self._setup_logger()
        return self

    def debug(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).debug(message, *args, **kwargs)
        return self

    def info(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).info(message, *args, **kwargs)
        return self

    def warning(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).warning(message, *args, **kwargs)
        return self

    def error(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).error(message, *args, **kwargs)
        return self

    def critical(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).critical(message, *args, **kwargs)
        return self

    def exception(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).exception(message, *args, **kwargs)
        return self

    # Compatibility with the stdlib logging interface
    def setLevel(self, level: str | int):
        if isinstance(level, int):
            level = _LEVEL_NAMES.get(level, "INFO")
        return self.configure_level(level)

    def getEffectiveLevel(self) -> str:
        return self._current_level

    def isEnabledFor(self, level: str | int) -> bool:
        if isinstance(level, int):
            level = _LEVEL_NAMES.get(level, "INFO")
        return _LEVEL_HIERARCHY.index(level.upper()) >= _LEVEL_HIERARCHY.index(self._current_level)

    def bind(self, **kwargs):
        """Bind additional context to logger."""
        return _loguru_logger.bind(**kwargs)

    def opt(self, **kwargs):
        return _loguru_logger.opt(**kwargs)


logger = HAFetchLogger()


def configure_level(level: str) -> None:
    """Configure the global logger level."""
    logger.configure_level(level)


def configure_file(log_file: str | Path | None) -> None:
    """Configure global file logging."""
    logger.configure_file(log_file)


def disable_colors(disable: bool = True) -> None:
    """Enable or disable colored output globally."""
    logger.disable_colors(disable)


def suppress_http_logging(suppress: bool = True) -> None:
    """Control HTTP library logging globally.

    httpx and httpcore log through the standard library, so their loggers are
    adjusted directly rather than through loguru.

    Args:
        suppress: If True, set to WARNING (quiet). If False, set to DEBUG (verbose).
    """
    level = logging.WARNING if suppress else logging.DEBUG
    for logger_name in ("httpcore", "httpx"):
        logging.getLogger(logger_name).setLevel(level)
