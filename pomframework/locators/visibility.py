"""
================================================================================
Visibility-Aware Locator Helpers
================================================================================

Act only on the first matching element that a user could actually interact
with. Many application shells render several copies of the same control
(responsive layouts, hidden templates, off-canvas menus); a plain Playwright
click on such a locator either hits the wrong copy or fails strict mode.

Selection rules:
    - Candidates are examined in DOM order via ``locator.nth(i)``
    - A candidate qualifies when it is visible; with ``strict_visibility`` its
      bounding box must also intersect the viewport; fills also require it to
      be enabled
    - Selection is re-tried every 100 ms until the timeout expires
      (timeout 0 checks exactly once)
    - At most one element is acted on, and only a qualifying one

Failure contract:
    These helpers never raise for timeouts or Playwright errors. They log a
    warning and return False (None for ``get_first_visible``). Use the wait
    helpers when a missing element should fail the test.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

from .context import current_logger, resolve_timeout
from .interactions import describe, highlight
from .waits import POLL_INTERVAL_MS, poll_until


IN_VIEWPORT_SCRIPT = """
el => {
    const rect = el.getBoundingClientRect();
    const width = window.innerWidth || document.documentElement.clientWidth;
    const height = window.innerHeight || document.documentElement.clientHeight;
    return rect.width > 0 && rect.height > 0
        && rect.bottom > 0 && rect.right > 0
        && rect.top < height && rect.left < width;
}
"""


def _checked_timeout(timeout: Optional[float]) -> float:
    resolved = resolve_timeout(timeout)
    if resolved < 0:
        raise ValueError(f"timeout must be >= 0, got {resolved}")
    return resolved


async def _qualifies(candidate: Locator, strict_visibility: bool, require_enabled: bool) -> bool:
    if not await candidate.is_visible():
        return False
    if strict_visibility and not await candidate.evaluate(IN_VIEWPORT_SCRIPT):
        return False
    if require_enabled and not await candidate.is_enabled(timeout=POLL_INTERVAL_MS):
        return False
    return True


async def _scan(locator: Locator, strict_visibility: bool, require_enabled: bool) -> Optional[Locator]:
    """One pass over the current matches; returns the first qualifying one."""
    total = await locator.count()
    for index in range(total):
        candidate = locator.nth(index)
        try:
            if await _qualifies(candidate, strict_visibility, require_enabled):
                return candidate
        except PlaywrightError:
            # detached between count() and the check
            continue
    return None


async def _select(
    locator: Locator,
    timeout: float,
    strict_visibility: bool,
    require_enabled: bool,
) -> Optional[Locator]:
    found: Optional[Locator] = None

    async def probe() -> bool:
        nonlocal found
        found = await _scan(locator, strict_visibility, require_enabled)
        return found is not None

    await poll_until(probe, timeout)
    return found


async def get_first_visible(
    locator: Locator,
    timeout: Optional[float] = None,
    strict_visibility: bool = False,
    require_enabled: bool = False,
    wait_for_visible: bool = False,
) -> Optional[Locator]:
    """
    Return the first qualifying match, or None.

    Args:
        locator: Locator that may match several elements
        timeout: Milliseconds to keep looking when ``wait_for_visible`` is set
        strict_visibility: Also require the element to intersect the viewport
        require_enabled: Also require the element to be enabled
        wait_for_visible: Poll until the timeout instead of scanning once
    """
    log = current_logger()
    effective = _checked_timeout(timeout) if wait_for_visible else 0
    try:
        found = await _select(locator, effective, strict_visibility, require_enabled)
    except PlaywrightError as e:
        log.warning(f"Could not resolve a visible element for {describe(locator)}: {e}")
        return None

    if found is None:
        log.debug(f"No visible element for {describe(locator)}")
    return found


async def click_only_visible(
    locator: Locator,
    timeout: Optional[float] = None,
    strict_visibility: bool = False,
    **click_options: Any,
) -> bool:
    """
    Click the first visible match.

    Returns:
        True if an element was clicked, False otherwise
    """
    log = current_logger()
    effective = _checked_timeout(timeout)
    try:
        target = await _select(locator, effective, strict_visibility, require_enabled=False)
        if target is None:
            log.warning(f"No visible element to click for {describe(locator)} within {effective}ms")
            return False

        if not strict_visibility:
            await target.scroll_into_view_if_needed(timeout=effective or None)
        await highlight(target)
        click_options.setdefault("timeout", effective or None)
        await target.click(**click_options)
        log.info(f"Clicked first visible element of {describe(locator)}")
        return True
    except PlaywrightError as e:
        log.warning(f"Click on visible element of {describe(locator)} failed: {e}")
        return False


async def fill_only_visible(
    locator: Locator,
    text: str,
    timeout: Optional[float] = None,
    strict_visibility: bool = False,
    **fill_options: Any,
) -> bool:
    """
    Clear and fill the first visible, enabled match.

    Returns:
        True if an element was filled, False when none qualified or the
        chosen element is not editable
    """
    log = current_logger()
    effective = _checked_timeout(timeout)
    try:
        target = await _select(locator, effective, strict_visibility, require_enabled=True)
        if target is None:
            log.warning(f"No visible enabled element to fill for {describe(locator)} within {effective}ms")
            return False

        if not strict_visibility:
            await target.scroll_into_view_if_needed(timeout=effective or None)
        await highlight(target)

        if not await target.is_editable(timeout=effective or None):
            log.warning(f"First visible element of {describe(locator)} is not editable")
            return False

        fill_options.setdefault("timeout", effective or None)
        await target.clear(**fill_options)
        await target.fill(text, **fill_options)
        log.info(f"Filled first visible element of {describe(locator)}")
        return True
    except PlaywrightError as e:
        log.warning(f"Fill on visible element of {describe(locator)} failed: {e}")
        return False


async def with_first_visible(
    locator: Locator,
    action: Callable[[Locator], Awaitable[Any]],
    timeout: Optional[float] = None,
    strict_visibility: bool = False,
) -> bool:
    """
    Run ``action`` against the first visible match.

    Playwright errors raised by the action are reported as False; any other
    exception (e.g. an assertion) propagates.
    """
    log = current_logger()
    effective = _checked_timeout(timeout)
    try:
        target = await _select(locator, effective, strict_visibility, require_enabled=False)
        if target is None:
            log.warning(f"No visible element for {describe(locator)} within {effective}ms")
            return False
        await action(target)
        return True
    except PlaywrightError as e:
        log.warning(f"Action on visible element of {describe(locator)} failed: {e}")
        return False


__all__ = [
    "IN_VIEWPORT_SCRIPT",
    "click_only_visible",
    "fill_only_visible",
    "get_first_visible",
    "with_first_visible",
]
