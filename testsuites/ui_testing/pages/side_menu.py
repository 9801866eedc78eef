"""
Side menu component shared by the application's workspace pages.
"""

from __future__ import annotations

import allure

from pomframework.fluent_page import FluentBasePage
from pomframework.locators import visibility

from .inventory_movement_page import InventoryMovementPage


class SideMenuComponent(FluentBasePage):
    """Navigation pane toggled from the top-left menu button."""

    SIDE_MENU_BUTTON = "//button[@data-dyn-role='SideNavToggleButton']"
    INVENTORY_MOVEMENT_LINK = "//span[contains(text(), 'Inventory movement')]"

    @allure.step("Open side menu")
    async def click_on_side_menu_async(self) -> bool:
        return await visibility.click_only_visible(self.locate(self.SIDE_MENU_BUTTON))

    @allure.step("Open Inventory movement")
    async def click_on_inventory_movement_async(self) -> bool:
        clicked = await visibility.click_only_visible(self.locate(self.INVENTORY_MOVEMENT_LINK))
        if clicked:
            await self.wait_for_load_async("networkidle")
        return clicked

    def click_on_side_menu(self) -> "SideMenuComponent":
        if not self.run(self.click_on_side_menu_async()):
            raise AssertionError("Side menu button was not available")
        return self

    def click_on_inventory_movement(self) -> InventoryMovementPage:
        if not self.run(self.click_on_inventory_movement_async()):
            raise AssertionError("Inventory movement link was not available")
        return self.get_page(InventoryMovementPage)
