"""
================================================================================
Locator Helpers
================================================================================

Module-level helpers operating on Playwright locators:

    - context       Per-test configuration/logger context
    - visibility    Act on the first visible match only
    - interactions  Logged, highlighted single actions
    - actions       Composite and try-style actions
    - waits         Raising wait helpers
    - queries       Logged reads
    - javascript    DOM-level fallbacks

Author: Automation Team
License: MIT
================================================================================
"""

from .actions import (
    clear_and_fill,
    click_and_wait_for_navigation,
    click_if_enabled,
    click_if_visible,
    double_click_and_wait,
    fill_and_submit,
    focus_and_type,
    hover_and_click,
    press_key_sequence,
    scroll_to_and_click,
    select_option_by_index,
    try_click,
    try_fill,
)
from .context import (
    LocatorContextError,
    clear_context,
    current_config,
    current_logger,
    has_context,
    set_context,
)
from .interactions import highlight, highlight_element
from .javascript import (
    JavaScriptActionError,
    js_clear,
    js_click,
    js_double_click,
    js_fill,
    js_scroll_into_view,
)
from .visibility import (
    click_only_visible,
    fill_only_visible,
    get_first_visible,
    with_first_visible,
)
from .waits import WaitTimeoutError


__all__ = [
    # Context
    "LocatorContextError",
    "clear_context",
    "current_config",
    "current_logger",
    "has_context",
    "set_context",
    # Visibility-aware
    "click_only_visible",
    "fill_only_visible",
    "get_first_visible",
    "with_first_visible",
    # Composite
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
    # Highlight
    "highlight",
    "highlight_element",
    # JavaScript fallbacks
    "JavaScriptActionError",
    "js_clear",
    "js_click",
    "js_double_click",
    "js_fill",
    "js_scroll_into_view",
    # Waits
    "WaitTimeoutError",
]
