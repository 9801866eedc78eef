"""
Test doubles for framework unit tests.

FakeLocator mimics the subset of Playwright's async Locator the framework
uses, over a list of FakeElement objects, so locator helpers can be tested
without a browser.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pomframework.config import TestConfiguration


BASE_CONFIG: Dict[str, Any] = {
    "browser": {"timeout_ms": 300, "navigation_timeout_ms": 500},
    "application": {
        "base_url": "http://app.local",
        "environment": "Test",
        "default_user": {"username": "tester@example.com", "password": "secret"},
    },
    "execution": {
        "highlight_elements": False,
        "highlight_duration_ms": 0,
        "output_directory": "test_results",
    },
    "reporting": {"allure_enabled": False},
    "logging": {"write_to_file": False},
}


def make_config(**sections: Dict[str, Any]) -> TestConfiguration:
    """Build a configuration from BASE_CONFIG with per-section key overrides."""
    data = {name: dict(values) for name, values in BASE_CONFIG.items()}
    for name, values in sections.items():
        data.setdefault(name, {}).update(values)
    return TestConfiguration.from_dict(data)


@dataclass
class FakeElement:
    name: str = "element"
    visible: bool = True
    enabled: bool = True
    editable: bool = True
    in_viewport: bool = True
    text: str = ""
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    # becomes visible after this many is_visible() checks
    visible_after: int = 0
    click_error: Optional[Exception] = None
    highlight_error: Optional[Exception] = None

    visibility_checks: int = 0
    clicks: int = 0
    scrolls: int = 0
    highlights: List[Any] = field(default_factory=list)
    overlays: int = 0
    actions: List[str] = field(default_factory=list)

    def is_shown(self) -> bool:
        self.visibility_checks += 1
        if self.visibility_checks <= self.visible_after:
            return False
        return self.visible


class FakeLocator:
    """Async Locator stand-in over a fixed list of elements."""

    def __init__(self, elements: List[FakeElement], page: Any = None, label: str = "fake"):
        self.elements = elements
        self.page = page
        self.label = label

    def __repr__(self) -> str:
        return f"<FakeLocator {self.label}>"

    def _single(self) -> FakeElement:
        if not self.elements:
            raise PlaywrightTimeoutError(f"Timeout: no element for {self.label}")
        return self.elements[0]

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def nth(self, index: int) -> "FakeLocator":
        elements = self.elements[index:index + 1]
        return FakeLocator(elements, self.page, f"{self.label}[{index}]")

    async def count(self) -> int:
        return len(self.elements)

    async def is_visible(self, **kwargs) -> bool:
        return bool(self.elements) and self.elements[0].is_shown()

    async def is_hidden(self, **kwargs) -> bool:
        return not await self.is_visible()

    async def is_enabled(self, **kwargs) -> bool:
        return self._single().enabled

    async def is_disabled(self, **kwargs) -> bool:
        return not self._single().enabled

    async def is_editable(self, **kwargs) -> bool:
        return self._single().editable

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        element = self._single()
        if "getBoundingClientRect" in script:
            return element.in_viewport
        if element.highlight_error is not None:
            raise element.highlight_error
        element.highlights.append(arg)
        # the page keeps the border on for the duration before resolving
        if isinstance(arg, dict) and arg.get("wait"):
            await asyncio.sleep(arg["duration"] / 1000)
        return None

    async def highlight(self) -> None:
        element = self._single()
        if element.highlight_error is not None:
            raise element.highlight_error
        element.overlays += 1

    async def scroll_into_view_if_needed(self, **kwargs) -> None:
        self._single().scrolls += 1

    async def click(self, **kwargs) -> None:
        element = self._single()
        if element.click_error is not None:
            raise element.click_error
        element.clicks += 1
        element.actions.append("click")

    async def dblclick(self, **kwargs) -> None:
        self._single().actions.append("dblclick")

    async def hover(self, **kwargs) -> None:
        self._single().actions.append("hover")

    async def focus(self, **kwargs) -> None:
        self._single().actions.append("focus")

    async def press(self, key: str, **kwargs) -> None:
        self._single().actions.append(f"press:{key}")

    async def press_sequentially(self, text: str, **kwargs) -> None:
        element = self._single()
        element.value += text
        element.actions.append(f"type:{text}")

    async def clear(self, **kwargs) -> None:
        element = self._single()
        element.value = ""
        element.actions.append("clear")

    async def fill(self, text: str, **kwargs) -> None:
        element = self._single()
        element.value = text
        element.actions.append(f"fill:{text}")

    async def select_option(self, value=None, label=None, **kwargs) -> List[str]:
        element = self._single()
        element.actions.append(f"select:{value or label}")
        return [value or label]

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        shown = any(e.is_shown() for e in self.elements)
        if state == "visible" and shown:
            return
        if state == "hidden" and not shown:
            return
        if state == "attached" and self.elements:
            return
        if state == "detached" and not self.elements:
            return
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {state}")

    async def text_content(self, **kwargs) -> Optional[str]:
        return self._single().text

    async def inner_text(self, **kwargs) -> str:
        return self._single().text

    async def all_text_contents(self) -> List[str]:
        return [e.text for e in self.elements]

    async def get_attribute(self, name: str, **kwargs) -> Optional[str]:
        return self._single().attributes.get(name)

    async def input_value(self, **kwargs) -> str:
        return self._single().value

    def locator(self, selector: str) -> "FakeLocator":
        # child lookups resolve to the elements stored in attributes["children"]
        element = self._single()
        children = element.attributes.get("children", [])
        return FakeLocator(list(children), self.page, f"{self.label} >> {selector}")


def fake_locator(*elements: FakeElement, page: Any = None) -> FakeLocator:
    return FakeLocator(list(elements), page)


def with_execution(config: TestConfiguration, **values) -> TestConfiguration:
    return replace(config, execution=replace(config.execution, **values))
