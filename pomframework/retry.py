# ================================================================================
# Retry Module
# ================================================================================
#
# Fixed-delay retry helpers for flaky UI steps.
#
# Key Features:
#   - Sync and async variants with identical semantics
#   - Exactly max_attempts executions, fixed delay between attempts
#   - The last exception is re-raised unchanged
#   - Decorator form driven by a RetryPolicy
#
# ================================================================================

import asyncio
import inspect
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger as default_logger


T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry behavior for ``with_retry``.

    Attributes:
        max_attempts: Total number of executions (not additional retries)
        delay_ms: Fixed pause between attempts in milliseconds
    """
    max_attempts: int = 2
    delay_ms: int = 1000

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        return cls(
            max_attempts=config.execution.max_retry_attempts,
            delay_ms=config.execution.retry_delay_ms,
        )


def _validate(max_attempts: int, delay_ms: int) -> None:
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if delay_ms < 0:
        raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")


def _action_name(action: Callable) -> str:
    return getattr(action, "__name__", repr(action))


def retry(
    action: Callable[[], T],
    max_attempts: int = 2,
    delay_ms: int = 1000,
    logger=None,
) -> T:
    """
    Execute ``action`` until it succeeds or attempts are exhausted.

    Args:
        action: Zero-argument callable
        max_attempts: Total number of executions
        delay_ms: Fixed delay between attempts
        logger: Loguru logger (bound component logger preferred)

    Returns:
        The action's result on first success

    Raises:
        The exception from the final attempt, unchanged
    """
    _validate(max_attempts, delay_ms)
    log = logger or default_logger
    name = _action_name(action)

    for attempt in range(1, max_attempts + 1):
        try:
            return action()
        except Exception as e:
            if attempt == max_attempts:
                log.error(f"All {max_attempts} attempts failed for {name}: {e}")
                raise
            log.warning(
                f"Attempt {attempt}/{max_attempts} failed for {name}: {e}. "
                f"Retrying in {delay_ms}ms..."
            )
            if delay_ms:
                time.sleep(delay_ms / 1000)

    raise AssertionError("unreachable")


async def retry_async(
    action: Callable[[], Awaitable[T]],
    max_attempts: int = 2,
    delay_ms: int = 1000,
    logger=None,
) -> T:
    """
    Async counterpart of ``retry``.

    ``action`` is a zero-argument callable returning a fresh awaitable on every
    call (a coroutine function or lambda), never a single coroutine object.
    """
    _validate(max_attempts, delay_ms)
    log = logger or default_logger
    name = _action_name(action)

    for attempt in range(1, max_attempts + 1):
        try:
            return await action()
        except Exception as e:
            if attempt == max_attempts:
                log.error(f"All {max_attempts} attempts failed for {name}: {e}")
                raise
            log.warning(
                f"Attempt {attempt}/{max_attempts} failed for {name}: {e}. "
                f"Retrying in {delay_ms}ms..."
            )
            if delay_ms:
                await asyncio.sleep(delay_ms / 1000)

    raise AssertionError("unreachable")


def with_retry(policy: Optional[RetryPolicy] = None):
    """
    Decorator for adding fixed-delay retry to a sync or async function.

    Args:
        policy: RetryPolicy controlling attempts and delay
    """
    if policy is None:
        policy = RetryPolicy()

    def decorator(func: Callable[..., Any]):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                async def attempt():
                    return await func(*args, **kwargs)
                attempt.__name__ = func.__name__
                return await retry_async(attempt, policy.max_attempts, policy.delay_ms)
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            def attempt():
                return func(*args, **kwargs)
            attempt.__name__ = func.__name__
            return retry(attempt, policy.max_attempts, policy.delay_ms)
        return wrapper

    return decorator


__all__ = [
    "RetryPolicy",
    "retry",
    "retry_async",
    "with_retry",
]
