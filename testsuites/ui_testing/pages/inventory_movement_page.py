"""
Inventory movement journal list page.
"""

from __future__ import annotations

import allure

from pomframework.fluent_page import FluentBasePage
from pomframework.locators import queries, visibility


class InventoryMovementPage(FluentBasePage):

    NEW_BUTTON = "//span[contains(text(), 'New')]"

    @allure.step("Create new inventory movement journal")
    async def click_on_new_button_async(self) -> None:
        if not await visibility.click_only_visible(self.locate(self.NEW_BUTTON)):
            raise AssertionError("New button was not available")
        await self.wait_for_load_async("networkidle")

    async def is_new_button_visible_async(self) -> bool:
        return await queries.is_visible(self.locate(self.NEW_BUTTON).first)

    def click_on_new_button(self) -> "InventoryMovementPage":
        self.run(self.click_on_new_button_async())
        return self

    def is_new_button_visible(self) -> bool:
        return self.run(self.is_new_button_visible_async())
