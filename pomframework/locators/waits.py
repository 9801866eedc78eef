"""
Locator wait helpers.

Unlike the visibility-aware helpers, waits are assertions: when the condition
is not met in time they raise ``WaitTimeoutError`` (a Playwright
``TimeoutError``) naming the condition.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .context import current_logger, resolve_timeout
from .interactions import describe


POLL_INTERVAL_MS = 100


class WaitTimeoutError(PlaywrightTimeoutError):
    """A wait condition was not met within its timeout."""

    def __init__(self, message: str):
        super().__init__(message)


async def poll_until(
    predicate: Callable[[], Awaitable[bool]],
    timeout_ms: float,
    interval_ms: float = POLL_INTERVAL_MS,
) -> bool:
    """
    Evaluate ``predicate`` every ``interval_ms`` until it is true or the timeout expires.

    The predicate is always evaluated at least once. Playwright errors raised
    by the predicate count as "not yet".

    Returns:
        True if the predicate became true, False on timeout
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000
    while True:
        try:
            if await predicate():
                return True
        except PlaywrightError:
            pass
        remaining = deadline - loop.time()
        if remaining <= 0:
            return False
        await asyncio.sleep(min(interval_ms / 1000, remaining))


async def _wait_for_state(locator: Locator, state: str, timeout: Optional[float]) -> None:
    timeout = resolve_timeout(timeout)
    current_logger().debug(f"Waiting for {describe(locator)} to be {state} ({timeout}ms)")
    try:
        await locator.wait_for(state=state, timeout=timeout)
    except PlaywrightTimeoutError as e:
        raise WaitTimeoutError(
            f"{describe(locator)} did not become {state} within {timeout}ms"
        ) from e


async def wait_for(locator: Locator, state: str = "visible", timeout: Optional[float] = None) -> None:
    await _wait_for_state(locator, state, timeout)


async def wait_for_hidden(locator: Locator, timeout: Optional[float] = None) -> None:
    await _wait_for_state(locator, "hidden", timeout)


async def wait_for_attached(locator: Locator, timeout: Optional[float] = None) -> None:
    await _wait_for_state(locator, "attached", timeout)


async def wait_for_detached(locator: Locator, timeout: Optional[float] = None) -> None:
    await _wait_for_state(locator, "detached", timeout)


async def _wait_until(
    locator: Locator,
    predicate: Callable[[], Awaitable[bool]],
    condition: str,
    timeout: Optional[float],
) -> None:
    timeout = resolve_timeout(timeout)
    current_logger().debug(f"Waiting for {describe(locator)} {condition} ({timeout}ms)")
    if not await poll_until(predicate, timeout):
        raise WaitTimeoutError(f"Timed out after {timeout}ms waiting for {describe(locator)} {condition}")


async def wait_for_text(
    locator: Locator,
    text: str,
    exact: bool = False,
    timeout: Optional[float] = None,
) -> None:
    async def matches() -> bool:
        content = await locator.text_content(timeout=POLL_INTERVAL_MS) or ""
        return content.strip() == text if exact else text in content

    condition = f"to have text {text!r}" if exact else f"to contain text {text!r}"
    await _wait_until(locator, matches, condition, timeout)


async def wait_for_attribute(
    locator: Locator,
    name: str,
    value: str,
    timeout: Optional[float] = None,
) -> None:
    async def matches() -> bool:
        return await locator.get_attribute(name, timeout=POLL_INTERVAL_MS) == value

    await _wait_until(locator, matches, f"to have {name}={value!r}", timeout)


async def wait_to_be_enabled(locator: Locator, timeout: Optional[float] = None) -> None:
    async def enabled() -> bool:
        return await locator.is_enabled(timeout=POLL_INTERVAL_MS)

    await _wait_until(locator, enabled, "to be enabled", timeout)


async def wait_to_be_disabled(locator: Locator, timeout: Optional[float] = None) -> None:
    async def disabled() -> bool:
        return await locator.is_disabled(timeout=POLL_INTERVAL_MS)

    await _wait_until(locator, disabled, "to be disabled", timeout)


async def wait_to_be_editable(locator: Locator, timeout: Optional[float] = None) -> None:
    async def editable() -> bool:
        return await locator.is_editable(timeout=POLL_INTERVAL_MS)

    await _wait_until(locator, editable, "to be editable", timeout)


async def wait_for_count(locator: Locator, expected: int, timeout: Optional[float] = None) -> None:
    last_count = -1

    async def has_count() -> bool:
        nonlocal last_count
        last_count = await locator.count()
        return last_count == expected

    timeout = resolve_timeout(timeout)
    current_logger().debug(f"Waiting for {describe(locator)} count == {expected} ({timeout}ms)")
    if not await poll_until(has_count, timeout):
        raise WaitTimeoutError(
            f"Expected {expected} elements for {describe(locator)} "
            f"but found {last_count} after {timeout}ms"
        )


__all__ = [
    "POLL_INTERVAL_MS",
    "WaitTimeoutError",
    "poll_until",
    "wait_for",
    "wait_for_attached",
    "wait_for_attribute",
    "wait_for_count",
    "wait_for_detached",
    "wait_for_hidden",
    "wait_for_text",
    "wait_to_be_disabled",
    "wait_to_be_editable",
    "wait_to_be_enabled",
]
