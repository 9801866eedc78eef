"""
================================================================================
JavaScript Fallback Actions
================================================================================

Direct DOM manipulation for elements that resist normal Playwright actions
(overlays intercepting pointer events, custom widgets ignoring synthetic
input, framework-managed inputs that only react to DOM events).

Behavior:
    - The selector is resolved inside the page: XPath when it starts with
      ``//``, ``(//`` or ``xpath=``, CSS otherwise
    - No waiting and no retry: a missing element raises
      ``JavaScriptActionError`` immediately
    - Selector and text travel as evaluate arguments and are never spliced
      into the script source
    - ``js_fill`` sets ``value`` and dispatches exactly one ``input`` and one
      ``change`` event, both bubbling

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .context import current_logger, has_context


_RESOLVE = """
    const selector = args.selector;
    let xpath = null;
    if (selector.startsWith('xpath=')) {
        xpath = selector.slice(6);
    } else if (selector.startsWith('//') || selector.startsWith('(//')) {
        xpath = selector;
    }
    const el = xpath
        ? document.evaluate(xpath, document, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null).singleNodeValue
        : document.querySelector(selector);
    if (!el) {
        throw new Error('Element not found: ' + selector);
    }
"""

JS_CLICK = "(args) => {" + _RESOLVE + """
    el.click();
}"""

JS_SET_VALUE = "(args) => {" + _RESOLVE + """
    if (typeof el.focus === 'function') {
        el.focus();
    }
    el.value = args.value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""

JS_DOUBLE_CLICK = "(args) => {" + _RESOLVE + """
    el.dispatchEvent(new MouseEvent('dblclick', { bubbles: true, cancelable: true, view: window }));
}"""

JS_SCROLL_INTO_VIEW = "(args) => {" + _RESOLVE + """
    el.scrollIntoView({ behavior: args.behavior, block: 'center', inline: 'nearest' });
}"""


class JavaScriptActionError(PlaywrightError):
    """A JavaScript fallback action could not be performed."""

    def __init__(self, message: str):
        super().__init__(message)


def _log():
    return current_logger() if has_context() else logger


async def _run(page: Page, action: str, script: str, args: Dict[str, Any]) -> None:
    try:
        await page.evaluate(script, args)
    except PlaywrightError as e:
        raise JavaScriptActionError(
            f"JavaScript {action} failed for '{args.get('selector')}': {e}"
        ) from e


@allure.step("JS click: {selector}")
async def js_click(page: Page, selector: str) -> None:
    _log().info(f"JS click on {selector}")
    await _run(page, "click", JS_CLICK, {"selector": selector})


@allure.step("JS fill: {selector}")
async def js_fill(page: Page, selector: str, text: str) -> None:
    _log().info(f"JS fill on {selector}")
    await _run(page, "fill", JS_SET_VALUE, {"selector": selector, "value": text})


@allure.step("JS clear: {selector}")
async def js_clear(page: Page, selector: str) -> None:
    _log().info(f"JS clear on {selector}")
    await _run(page, "clear", JS_SET_VALUE, {"selector": selector, "value": ""})


@allure.step("JS double-click: {selector}")
async def js_double_click(page: Page, selector: str) -> None:
    _log().info(f"JS double-click on {selector}")
    await _run(page, "double-click", JS_DOUBLE_CLICK, {"selector": selector})


async def js_scroll_into_view(page: Page, selector: str, behavior: str = "auto") -> None:
    """Scroll element to the viewport center; ``behavior`` is "auto" or "smooth"."""
    _log().debug(f"JS scroll into view: {selector}")
    await _run(page, "scroll", JS_SCROLL_INTO_VIEW, {"selector": selector, "behavior": behavior})


@allure.step("Scroll to position: ({x}, {y})")
async def js_scroll_to(page: Page, x: int = 0, y: int = 0) -> None:
    await page.evaluate("([x, y]) => window.scrollTo(x, y)", [x, y])


@allure.step("Scroll by offset: ({dx}, {dy})")
async def js_scroll_by(page: Page, dx: int = 0, dy: int = 0) -> None:
    await page.evaluate("([dx, dy]) => window.scrollBy(dx, dy)", [dx, dy])


async def js_scroll_to_top(page: Page) -> None:
    await page.evaluate("() => window.scrollTo(0, 0)")


async def js_scroll_to_bottom(page: Page) -> None:
    await page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")


__all__ = [
    "JavaScriptActionError",
    "js_clear",
    "js_click",
    "js_double_click",
    "js_fill",
    "js_scroll_by",
    "js_scroll_into_view",
    "js_scroll_to",
    "js_scroll_to_bottom",
    "js_scroll_to_top",
]
