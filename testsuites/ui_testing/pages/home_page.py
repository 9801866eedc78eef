"""
================================================================================
Home Page Object (Fluent)
================================================================================

Landing page after sign-in. Hosts the side menu component.

================================================================================
"""

from __future__ import annotations

import allure

from pomframework.fluent_page import FluentBasePage

from .side_menu import SideMenuComponent


class HomePage(FluentBasePage):
    """Home page object (fluent)."""

    EXPECTED_TITLE = "Dashboard - Microsoft Dynamics 365"

    @property
    def side_menu(self) -> SideMenuComponent:
        return self.get_page(SideMenuComponent)

    @allure.step("Verify home page loaded")
    async def is_home_page_loaded_async(self) -> bool:
        await self.wait_for_load_async()
        title = await self.get_title_async()
        loaded = title == self.EXPECTED_TITLE
        if not loaded:
            self.logger.warning(f"Unexpected home page title: {title!r}")
        return loaded

    def is_home_page_loaded(self) -> bool:
        return self.run(self.is_home_page_loaded_async())


__all__ = [
    "HomePage",
]
