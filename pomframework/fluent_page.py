"""
================================================================================
Fluent Base Page
================================================================================

Base class for page objects that chain:

    login_page.navigate_to_login_page().enter_username(user).enter_password(pw)

Every fluent method is a blocking wrapper around an ``*_async`` counterpart.
The coroutine runs on the event-loop thread owning the Playwright objects
(see ``sync_bridge``) and the caller blocks until it completes. Pages reach
other pages through the shared ``PageFactory``, so chaining across pages
returns the cached instance for each type.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Coroutine, Optional, Protocol, TypeVar, runtime_checkable

from playwright.async_api import Page

from .config import TestConfiguration
from .page_base import BasePage

if TYPE_CHECKING:
    from .page_factory import PageFactory


T = TypeVar("T")
P = TypeVar("P", bound="FluentBasePage")


@runtime_checkable
class FluentPage(Protocol):
    """Minimal surface shared by chainable pages."""

    @property
    def page(self) -> Page: ...

    @property
    def current_url(self) -> str: ...


class FluentBasePage(BasePage):
    """
    Chainable page object.

    Subclasses add pairs of methods: ``do_thing_async`` holding the logic and
    ``do_thing`` returning ``self.run(self.do_thing_async(...))`` or the next
    page from ``self.page_factory``.
    """

    def __init__(
        self,
        page: Page,
        config: TestConfiguration,
        logger,
        page_factory: "PageFactory",
    ):
        super().__init__(page, config, logger)
        if page_factory is None:
            raise ValueError("page_factory must not be None")
        self.page_factory = page_factory

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Block until ``coro`` completes on the Playwright event loop."""
        return self.page_factory.run(coro)

    def get_page(self, page_type: "type[P]") -> P:
        return self.page_factory.get_page(page_type)

    def navigate_to(self: P, url: str, wait_until: str = "load") -> P:
        self.run(self.navigate_to_async(url, wait_until=wait_until))
        return self

    def wait_for_load(self: P, wait_until: str = "load", timeout: Optional[float] = None) -> P:
        self.run(self.wait_for_load_async(wait_until=wait_until, timeout=timeout))
        return self

    def wait(self: P, seconds: float) -> P:
        self.run(self.wait_async(seconds))
        return self

    def refresh(self: P, wait_until: str = "load") -> P:
        self.run(self.refresh_async(wait_until=wait_until))
        return self

    def get_title(self) -> str:
        return self.run(self.get_title_async())


__all__ = [
    "FluentBasePage",
    "FluentPage",
]
