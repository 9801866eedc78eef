"""
================================================================================
Dashboard Page Object (Async / Playwright)
================================================================================

Async-only page object for the application dashboard. Unlike the fluent
pages it has no sync wrappers; tests drive it with ``await`` (or through
``BaseTest.run``).

Selectors rely on stable ``data-testid`` attributes.

================================================================================
"""

from __future__ import annotations

from typing import Dict, List

import allure

from pomframework.locators import queries
from pomframework.page_base import BasePage


class DashboardPage(BasePage):
    """Dashboard page object (async)."""

    URL_PATH = "/dashboard"

    USER_MENU = "[data-testid='user-menu']"
    LOGOUT_BUTTON = "[data-testid='logout-button']"
    PROFILE_LINK = "[data-testid='profile-link']"
    SETTINGS_LINK = "[data-testid='settings-link']"

    WELCOME_MESSAGE = "[data-testid='welcome-message']"
    NOTIFICATION_BELL = "[data-testid='notification-bell']"
    NOTIFICATION_COUNT = "[data-testid='notification-count']"
    SEARCH_BOX = "[data-testid='search-box']"
    SEARCH_BUTTON = "[data-testid='search-button']"

    RECENT_ACTIVITY_WIDGET = "[data-testid='recent-activity-widget']"
    STATISTICS_WIDGET = "[data-testid='statistics-widget']"
    QUICK_ACTIONS_WIDGET = "[data-testid='quick-actions-widget']"

    SIDEBAR = "[data-testid='sidebar']"
    SIDEBAR_TOGGLE = "[data-testid='sidebar-toggle']"
    NAVIGATION_ITEM = "[data-testid='nav-item']"

    LOADING_SPINNER = "[data-testid='loading-spinner']"
    DASHBOARD_CONTENT = "[data-testid='dashboard-content']"

    @allure.step("Open dashboard")
    async def open(self) -> "DashboardPage":
        await self.navigate_to_async(self.URL_PATH)
        return await self.wait_for_dashboard_to_load()

    @allure.step("Wait for dashboard to load")
    async def wait_for_dashboard_to_load(self) -> "DashboardPage":
        if await self.is_visible_async(self.LOADING_SPINNER):
            await self.wait_for_element_to_be_hidden_async(self.LOADING_SPINNER)
        await self.wait_for_element_async(self.DASHBOARD_CONTENT)
        self.logger.debug("Dashboard loaded")
        return self

    @allure.step("Get welcome message")
    async def get_welcome_message(self) -> str:
        return (await self.get_text_async(self.WELCOME_MESSAGE)).strip()

    async def click_user_menu(self) -> "DashboardPage":
        await self.click_async(self.USER_MENU)
        return self

    @allure.step("Logout")
    async def logout(self) -> "DashboardPage":
        await self.click_user_menu()
        await self.click_async(self.LOGOUT_BUTTON)
        self.logger.info("Logged out")
        return self

    @allure.step("Open user profile")
    async def go_to_profile(self) -> "DashboardPage":
        await self.click_user_menu()
        await self.click_async(self.PROFILE_LINK)
        return self

    @allure.step("Open settings")
    async def go_to_settings(self) -> "DashboardPage":
        await self.click_user_menu()
        await self.click_async(self.SETTINGS_LINK)
        return self

    @allure.step("Search for: {term}")
    async def search(self, term: str) -> "DashboardPage":
        await self.fill_async(self.SEARCH_BOX, term)
        await self.click_async(self.SEARCH_BUTTON)
        self.logger.info(f"Searched for: {term}")
        return self

    @allure.step("Get notification count")
    async def get_notification_count(self) -> int:
        """Badge value; 0 when the badge is hidden or not a number."""
        if not await self.is_visible_async(self.NOTIFICATION_COUNT):
            return 0

        text = (await self.get_text_async(self.NOTIFICATION_COUNT)).strip()
        try:
            return int(text)
        except ValueError:
            self.logger.warning(f"Could not parse notification count: {text!r}")
            return 0

    async def click_notification_bell(self) -> "DashboardPage":
        await self.click_async(self.NOTIFICATION_BELL)
        return self

    @allure.step("Toggle sidebar")
    async def toggle_sidebar(self) -> "DashboardPage":
        await self.click_async(self.SIDEBAR_TOGGLE)
        return self

    async def is_sidebar_visible(self) -> bool:
        return await self.is_visible_async(self.SIDEBAR)

    @allure.step("Get navigation items")
    async def get_navigation_items(self) -> List[str]:
        return await queries.get_all_texts(self.locate(self.NAVIGATION_ITEM))

    @allure.step("Click navigation item: {item_name}")
    async def click_navigation_item(self, item_name: str) -> "DashboardPage":
        """
        Click the navigation entry whose text matches ``item_name`` (case-insensitive).

        Raises:
            ValueError: No such navigation item
        """
        items = self.locate(self.NAVIGATION_ITEM)
        for index in range(await items.count()):
            item = items.nth(index)
            text = (await item.text_content() or "").strip()
            if text.lower() == item_name.lower():
                await item.click()
                self.logger.info(f"Clicked navigation item: {item_name}")
                return self
        raise ValueError(f"Navigation item '{item_name}' not found")

    @allure.step("Validate dashboard widgets")
    async def validate_dashboard_widgets(self) -> bool:
        for widget in (
            self.RECENT_ACTIVITY_WIDGET,
            self.STATISTICS_WIDGET,
            self.QUICK_ACTIONS_WIDGET,
        ):
            if not await self.is_visible_async(widget):
                self.logger.error(f"Dashboard widget not found: {widget}")
                return False
        return True

    @allure.step("Get dashboard statistics")
    async def get_dashboard_statistics(self) -> Dict[str, str]:
        stats = self.locate(f"{self.STATISTICS_WIDGET} [data-testid='stat-item']")
        statistics: Dict[str, str] = {}
        for index in range(await stats.count()):
            item = stats.nth(index)
            label = await item.locator("[data-testid='stat-label']").text_content()
            value = await item.locator("[data-testid='stat-value']").text_content()
            statistics[(label or f"Stat{index + 1}").strip()] = (value or "0").strip()
        return statistics

    @allure.step("Get recent activity items")
    async def get_recent_activity_items(self) -> List[str]:
        return await queries.get_all_texts(
            self.locate(f"{self.RECENT_ACTIVITY_WIDGET} [data-testid='activity-item']")
        )

    @allure.step("Validate user is logged in")
    async def validate_user_logged_in(self) -> bool:
        user_menu = await self.is_visible_async(self.USER_MENU)
        welcome = await self.is_visible_async(self.WELCOME_MESSAGE)
        return user_menu and welcome

    @allure.step("Refresh dashboard")
    async def refresh_dashboard(self) -> "DashboardPage":
        await self.refresh_async()
        return await self.wait_for_dashboard_to_load()

    async def take_dashboard_screenshot(self, name: str = "dashboard"):
        path = f"{self.config.execution.output_directory}/screenshots/{name}.png"
        return await self.take_screenshot_async(path)


__all__ = [
    "DashboardPage",
]
