"""
Logged locator interactions.

Each helper highlights the element (when enabled in configuration), logs the
action through the context logger and delegates to Playwright. Playwright
errors propagate unchanged.
"""

from typing import Any, Optional, Sequence, Union

from playwright.async_api import Locator

from .context import current_config, current_logger


# Resolves once the original inline style is back when opts.wait is set.
HIGHLIGHT_SCRIPT = """
(el, opts) => {
    const original = el.style.cssText;
    el.style.border = `${opts.width}px solid ${opts.color}`;
    const restored = new Promise(resolve => setTimeout(() => {
        el.style.cssText = original;
        resolve();
    }, opts.duration));
    return opts.wait ? restored : undefined;
}
"""


def describe(locator: Locator) -> str:
    """Short human-readable form of a locator for log lines."""
    return repr(locator)


async def highlight(locator: Locator) -> None:
    """
    Apply the configured temporary border to ``locator``.

    Does nothing when ``execution.highlight_elements`` is off. With a
    positive ``highlight_duration_ms`` the border is shown for that long and
    the call returns only after the element's original style is restored.
    A duration of 0 uses Playwright's overlay, which leaves the element's
    style untouched and adds no delay. Failures are logged at DEBUG and
    never interrupt the calling action.
    """
    execution = current_config().execution
    if not execution.highlight_elements:
        return

    duration = execution.highlight_duration_ms
    try:
        if duration > 0:
            await locator.evaluate(
                HIGHLIGHT_SCRIPT,
                {
                    "color": execution.highlight_color,
                    "width": execution.highlight_border_width,
                    "duration": duration,
                    "wait": True,
                },
            )
        else:
            await locator.highlight()
    except Exception as e:
        current_logger().debug(f"Highlight skipped for {describe(locator)}: {e}")


async def highlight_element(
    locator: Locator,
    color: str = "yellow",
    duration_ms: int = 1000,
) -> None:
    """Explicit highlight with a custom color; ignores the config switch and does not wait."""
    try:
        if duration_ms > 0:
            await locator.evaluate(
                HIGHLIGHT_SCRIPT,
                {"color": color, "width": 2, "duration": duration_ms, "wait": False},
            )
        else:
            await locator.highlight()
    except Exception as e:
        current_logger().debug(f"Highlight skipped for {describe(locator)}: {e}")


async def click(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Clicking {describe(locator)}")
    await highlight(locator)
    await locator.click(**options)


async def double_click(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Double-clicking {describe(locator)}")
    await highlight(locator)
    await locator.dblclick(**options)


async def right_click(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Right-clicking {describe(locator)}")
    await highlight(locator)
    await locator.click(button="right", **options)


async def fill(locator: Locator, text: str, **options: Any) -> None:
    current_logger().info(f"Filling {describe(locator)}")
    await highlight(locator)
    await locator.fill(text, **options)


async def type_text(locator: Locator, text: str, delay: Optional[float] = None, **options: Any) -> None:
    """Type character by character; ``delay`` is milliseconds between keystrokes."""
    current_logger().info(f"Typing into {describe(locator)}")
    await highlight(locator)
    if delay is not None:
        options["delay"] = delay
    await locator.press_sequentially(text, **options)


async def clear(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Clearing {describe(locator)}")
    await highlight(locator)
    await locator.fill("", **options)


async def hover(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Hovering {describe(locator)}")
    await highlight(locator)
    await locator.hover(**options)


async def scroll_into_view(locator: Locator, **options: Any) -> None:
    current_logger().debug(f"Scrolling into view {describe(locator)}")
    await locator.scroll_into_view_if_needed(**options)
    await highlight(locator)


async def select_option(
    locator: Locator,
    value: Union[str, Sequence[str]],
    **options: Any,
) -> list:
    current_logger().info(f"Selecting value {value!r} in {describe(locator)}")
    await highlight(locator)
    return await locator.select_option(value=value, **options)


async def select_option_by_text(locator: Locator, text: str, **options: Any) -> list:
    current_logger().info(f"Selecting label {text!r} in {describe(locator)}")
    await highlight(locator)
    return await locator.select_option(label=text, **options)


async def check(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Checking {describe(locator)}")
    await highlight(locator)
    await locator.check(**options)


async def uncheck(locator: Locator, **options: Any) -> None:
    current_logger().info(f"Unchecking {describe(locator)}")
    await highlight(locator)
    await locator.uncheck(**options)


async def set_checked(locator: Locator, checked: bool, **options: Any) -> None:
    current_logger().info(f"Setting checked={checked} on {describe(locator)}")
    await highlight(locator)
    await locator.set_checked(checked, **options)


__all__ = [
    "check",
    "clear",
    "click",
    "describe",
    "double_click",
    "fill",
    "highlight",
    "highlight_element",
    "hover",
    "right_click",
    "scroll_into_view",
    "select_option",
    "select_option_by_text",
    "set_checked",
    "type_text",
    "uncheck",
]
