"""
Composite locator actions.

Multi-step conveniences built on the interaction helpers. The ``try_*`` and
``*_if_*`` variants return a bool instead of raising when the element is not
available; the rest propagate Playwright errors.
"""

import asyncio
from typing import Iterable, Optional

from playwright.async_api import Locator
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from . import interactions
from .context import current_config, current_logger
from .interactions import describe
from .waits import wait_for


DEFAULT_TRY_TIMEOUT_MS = 5000


async def click_and_wait_for_navigation(
    locator: Locator,
    wait_until: str = "networkidle",
    timeout: Optional[float] = None,
) -> None:
    """Click, then wait for the page to reach ``wait_until``."""
    timeout = timeout if timeout is not None else current_config().browser.navigation_timeout_ms
    await interactions.click(locator)
    await locator.page.wait_for_load_state(wait_until, timeout=timeout)


async def clear_and_fill(locator: Locator, text: str) -> None:
    await interactions.clear(locator)
    await interactions.fill(locator, text)


async def fill_and_submit(locator: Locator, text: str, submit_key: str = "Enter") -> None:
    await interactions.fill(locator, text)
    await locator.press(submit_key)


async def click_if_visible(locator: Locator) -> bool:
    if await locator.is_visible():
        await interactions.click(locator)
        return True
    current_logger().debug(f"Skipped click, not visible: {describe(locator)}")
    return False


async def click_if_enabled(locator: Locator) -> bool:
    if await locator.is_enabled():
        await interactions.click(locator)
        return True
    current_logger().debug(f"Skipped click, not enabled: {describe(locator)}")
    return False


async def try_click(locator: Locator, timeout: float = DEFAULT_TRY_TIMEOUT_MS) -> bool:
    """Wait up to ``timeout`` for the element, then click. False on timeout."""
    try:
        await wait_for(locator, timeout=timeout)
        await interactions.click(locator, timeout=timeout)
        return True
    except PlaywrightTimeoutError as e:
        current_logger().warning(f"try_click gave up on {describe(locator)}: {e}")
        return False


async def try_fill(locator: Locator, text: str, timeout: float = DEFAULT_TRY_TIMEOUT_MS) -> bool:
    """Wait up to ``timeout`` for the element, then fill. False on timeout."""
    try:
        await wait_for(locator, timeout=timeout)
        await interactions.fill(locator, text, timeout=timeout)
        return True
    except PlaywrightTimeoutError as e:
        current_logger().warning(f"try_fill gave up on {describe(locator)}: {e}")
        return False


async def select_option_by_index(locator: Locator, index: int) -> str:
    """
    Select the ``index``-th ``<option>`` of a select element.

    Raises:
        IndexError: index outside the available options
        ValueError: the option has no value attribute

    Returns:
        The selected option value
    """
    options = locator.locator("option")
    total = await options.count()
    if index < 0 or index >= total:
        raise IndexError(f"Option index {index} out of range (0..{total - 1}) for {describe(locator)}")

    value = await options.nth(index).get_attribute("value")
    if not value:
        raise ValueError(f"Option {index} of {describe(locator)} has no value")

    await interactions.select_option(locator, value)
    return value


async def double_click_and_wait(locator: Locator, wait_ms: int = 1000) -> None:
    await interactions.double_click(locator)
    await asyncio.sleep(wait_ms / 1000)


async def hover_and_click(locator: Locator) -> None:
    await interactions.hover(locator)
    await interactions.click(locator)


async def scroll_to_and_click(locator: Locator) -> None:
    await interactions.scroll_into_view(locator)
    await interactions.click(locator)


async def focus_and_type(locator: Locator, text: str, delay: Optional[float] = None) -> None:
    await locator.focus()
    await interactions.type_text(locator, text, delay=delay)


async def press_key_sequence(locator: Locator, keys: Iterable[str]) -> None:
    for key in keys:
        await locator.press(key)


__all__ = [
    "clear_and_fill",
    "click_and_wait_for_navigation",
    "click_if_enabled",
    "click_if_visible",
    "double_click_and_wait",
    "fill_and_submit",
    "focus_and_type",
    "hover_and_click",
    "press_key_sequence",
    "scroll_to_and_click",
    "select_option_by_index",
    "try_click",
    "try_fill",
]
