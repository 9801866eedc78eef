"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the UI automation framework.

Features:
    - Console and rotating file sinks driven by LoggingConfiguration
    - .NET style and Python style level names ("Information", "info", ...)
    - Per-component loggers via ``logger.bind(component=...)``

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import LoggingConfiguration


STRUCTURED_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | {message}"
)
PLAIN_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"

_LEVEL_ALIASES = {
    "trace": "TRACE",
    "debug": "DEBUG",
    "information": "INFO",
    "info": "INFO",
    "warning": "WARNING",
    "warn": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
    "fatal": "CRITICAL",
}

# Sink ids registered by init_logger
_handler_ids: List[int] = []
_logger_initialized: bool = False

# Components without an explicit binding show up as "framework"
logger.configure(extra={"component": "framework"})


def map_log_level(level: Optional[str]) -> str:
    """
    Map a configured level name to a Loguru level.

    Unknown or empty names fall back to INFO.
    """
    if not level:
        return "INFO"
    return _LEVEL_ALIASES.get(level.strip().lower(), "INFO")


def resolve_log_file_path(template: str, now: Optional[datetime] = None) -> Path:
    """Replace the ``{Date}`` placeholder with YYYYMMDD."""
    now = now or datetime.now()
    return Path(template.replace("{Date}", now.strftime("%Y%m%d")))


def init_logger(logging_config: LoggingConfiguration, force: bool = False) -> None:
    """
    Initializes the global Loguru logger from configuration.

    Runs once per process unless ``force`` is set. Called by the base test's
    one-time setup so every test class shares the same sinks.

    Args:
        logging_config: Logging section of the test configuration
        force: Re-create the sinks even if already initialized
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    level = map_log_level(logging_config.minimum_level)
    log_format = STRUCTURED_FORMAT if logging_config.structured_logging else PLAIN_FORMAT

    logger.remove()
    _handler_ids.clear()

    if logging_config.write_to_console:
        _handler_ids.append(logger.add(
            sys.stderr,
            level=level,
            format=log_format,
            colorize=True,
            backtrace=True,
            diagnose=False,
        ))

    if logging_config.write_to_file:
        log_file = resolve_log_file_path(logging_config.log_file_path_template)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(logger.add(
            str(log_file),
            level=level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            enqueue=True,
        ))

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def get_logger(component: str):
    """
    Returns a Loguru logger bound to a component name.

    Args:
        component: Name shown in the structured log layout (usually a class name)
    """
    return logger.bind(component=component)


def is_debug_enabled(logging_config: LoggingConfiguration) -> bool:
    """True when the configured level is DEBUG or TRACE."""
    return map_log_level(logging_config.minimum_level) in ("DEBUG", "TRACE")


__all__ = [
    "get_logger",
    "init_logger",
    "is_debug_enabled",
    "map_log_level",
    "resolve_log_file_path",
]
