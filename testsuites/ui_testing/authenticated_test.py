"""
================================================================================
Authenticated Base Test
================================================================================

Base class for test classes that need a signed-in user.

The first test of the class performs the login; later tests reuse the
session cookies of the class's shared browser context. Login state is held
per class (``BaseTest.login_state``) and reset in one-time teardown.

================================================================================
"""

from __future__ import annotations

import pytest

from pomframework.base_test import BaseTest

from .pages.home_page import HomePage
from .pages.login_page import LoginPage


class AuthenticatedBaseTest(BaseTest):
    """BaseTest that signs in once per class with ``application.default_user``."""

    REQUIRE_SMS_VERIFICATION = False

    def set_up(self, test_name: str) -> None:
        # Skip before a page or locator context exists; tear_down will not run.
        user = self.config.get_user()
        if not user.password:
            pytest.skip("No password configured for the default user")

        super().set_up(test_name)
        if self.login_state.performed:
            return

        login_page = self.page_factory.get_page(LoginPage)
        login_page.navigate_to_login_page().enter_username(user.username).enter_password(user.password)
        if self.REQUIRE_SMS_VERIFICATION:
            login_page.enter_sms()
        self.login_state.mark_performed()
        self.logger.info(f"Signed in as {user.username}")

    @property
    def home_page(self) -> HomePage:
        return self.page_factory.get_page(HomePage)
