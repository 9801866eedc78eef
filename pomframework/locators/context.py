"""
Locator context.

Holds the configuration and logger of the test currently executing so that
module-level locator helpers can read timeouts and highlight settings without
explicit parameter threading. Backed by ``contextvars``: each test (and each
coroutine scheduled on its behalf) sees only its own context.
"""

from contextvars import ContextVar
from typing import Any, Optional

from ..config import TestConfiguration


_config_var: ContextVar[Optional[TestConfiguration]] = ContextVar("locator_config", default=None)
_logger_var: ContextVar[Optional[Any]] = ContextVar("locator_logger", default=None)


class LocatorContextError(RuntimeError):
    """Raised when a locator helper runs without a context."""
    pass


def set_context(config: TestConfiguration, logger: Any) -> None:
    if config is None:
        raise ValueError("config must not be None")
    if logger is None:
        raise ValueError("logger must not be None")
    _config_var.set(config)
    _logger_var.set(logger)


def clear_context() -> None:
    _config_var.set(None)
    _logger_var.set(None)


def has_context() -> bool:
    return _config_var.get() is not None and _logger_var.get() is not None


def current_config() -> TestConfiguration:
    config = _config_var.get()
    if config is None:
        raise LocatorContextError(
            "Locator context not set. Call set_context() first."
        )
    return config


def current_logger():
    log = _logger_var.get()
    if log is None:
        raise LocatorContextError(
            "Locator context not set. Call set_context() first."
        )
    return log


def resolve_timeout(timeout: Optional[float]) -> float:
    """Explicit timeout, or the configured default element timeout."""
    if timeout is not None:
        return timeout
    return current_config().browser.timeout_ms


__all__ = [
    "LocatorContextError",
    "clear_context",
    "current_config",
    "current_logger",
    "has_context",
    "resolve_timeout",
    "set_context",
]
