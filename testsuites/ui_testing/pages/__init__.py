"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions (async, plus sync wrappers on fluent pages)
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .dashboard_page import DashboardPage
from .home_page import HomePage
from .inventory_movement_page import InventoryMovementPage
from .login_page import LoginPage
from .side_menu import SideMenuComponent

__all__ = [
    "DashboardPage",
    "HomePage",
    "InventoryMovementPage",
    "LoginPage",
    "SideMenuComponent",
]
