"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Locator creation and URL handling
    - Navigation relative to the configured base URL
    - Load-state and element waits
    - Selector-based helpers for non-fluent pages
    - Screenshot capture

Every page sets the locator context on construction so that the module-level
locator helpers pick up this page's configuration and logger.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import allure
from playwright.async_api import Locator, Page

from .config import TestConfiguration
from .locators import context as locator_context
from .locators import interactions, queries, waits


def join_url(base_url: str, url: str) -> str:
    """Absolute URLs pass through; relative ones are joined to the base URL."""
    if url.lower().startswith(("http://", "https://")):
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class SettingsPage(BasePage):
            SAVE_BUTTON = "[data-testid='save']"

            async def save_async(self) -> None:
                await self.click_async(self.SAVE_BUTTON)
    """

    def __init__(self, page: Page, config: TestConfiguration, logger):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            config: Test configuration
            logger: Loguru logger bound to this page's component name
        """
        if page is None:
            raise ValueError("page must not be None")
        if config is None:
            raise ValueError("config must not be None")
        if logger is None:
            raise ValueError("logger must not be None")

        self.page = page
        self.config = config
        self.logger = logger
        locator_context.set_context(config, logger)

    @property
    def base_url(self) -> str:
        return self.config.application.base_url

    @property
    def current_url(self) -> str:
        return self.page.url

    def locate(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def resolve_url(self, url: str) -> str:
        return join_url(self.base_url, url)

    # =========================================================================
    # Navigation
    # =========================================================================

    async def get_title_async(self) -> str:
        return await self.page.title()

    async def navigate_to_async(self, url: str, wait_until: str = "load") -> None:
        """
        Navigate to an absolute URL or a path relative to the base URL.

        Args:
            url: Target URL or path
            wait_until: 'load', 'domcontentloaded', 'networkidle' or 'commit'
        """
        target = self.resolve_url(url)
        with allure.step(f"Navigate to {target}"):
            self.logger.info(f"Navigating to {target}")
            await self.page.goto(
                target,
                wait_until=wait_until,
                timeout=self.config.browser.navigation_timeout_ms,
            )

    async def wait_for_load_async(
        self,
        wait_until: str = "load",
        timeout: Optional[float] = None,
    ) -> None:
        """Wait for a load state; timeout defaults to the navigation timeout."""
        if timeout is None:
            timeout = self.config.browser.navigation_timeout_ms
        await self.page.wait_for_load_state(wait_until, timeout=timeout)

    async def wait_async(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    async def refresh_async(self, wait_until: str = "load") -> None:
        self.logger.info("Reloading page")
        await self.page.reload(
            wait_until=wait_until,
            timeout=self.config.browser.navigation_timeout_ms,
        )

    # =========================================================================
    # Selector Helpers
    # =========================================================================

    async def click_async(self, selector: str, **options) -> None:
        with allure.step(f"Click: {selector}"):
            await interactions.click(self.locate(selector), **options)

    async def fill_async(self, selector: str, text: str, sensitive: bool = False, **options) -> None:
        shown = "*" * len(text) if sensitive else text
        with allure.step(f"Fill {selector}: {shown}"):
            await interactions.fill(self.locate(selector), text, **options)

    async def get_text_async(self, selector: str) -> str:
        return await queries.get_text(self.locate(selector))

    async def is_visible_async(self, selector: str) -> bool:
        return await queries.is_visible(self.locate(selector))

    async def wait_for_element_async(
        self,
        selector: str,
        state: str = "visible",
        timeout: Optional[float] = None,
    ) -> Locator:
        locator = self.locate(selector)
        await waits.wait_for(locator, state=state, timeout=timeout)
        return locator

    async def wait_for_element_to_be_hidden_async(
        self,
        selector: str,
        timeout: Optional[float] = None,
    ) -> None:
        await waits.wait_for_hidden(self.locate(selector), timeout=timeout)

    async def get_elements(self, selector: str) -> List[Locator]:
        return await self.locate(selector).all()

    async def take_screenshot_async(self, path: str, full_page: Optional[bool] = None) -> Path:
        """Save a screenshot to ``path``; full_page defaults to configuration."""
        if full_page is None:
            full_page = self.config.execution.full_page_screenshots
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(target), full_page=full_page)
        self.logger.debug(f"Screenshot saved: {target}")
        return target


__all__ = [
    "BasePage",
    "join_url",
]
