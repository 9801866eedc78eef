"""
================================================================================
Login Feature UI Tests (Fluent / Playwright)
================================================================================

Fluent sign-in flows against the configured application:
  - Login form readiness and field state
  - Chained login reaching the home page
  - Navigation from the home page through the side menu

Credentials come from configuration (``application.default_user``); tests
that need a password skip when none is configured.

================================================================================
"""

import allure
import pytest

from pomframework.base_test import BaseTest
from testsuites.ui_testing.authenticated_test import AuthenticatedBaseTest
from testsuites.ui_testing.pages.home_page import HomePage
from testsuites.ui_testing.pages.inventory_movement_page import InventoryMovementPage
from testsuites.ui_testing.pages.login_page import LoginPage


@allure.epic("UI Testing")
@allure.feature("Authentication")
@pytest.mark.ui
class TestLoginForm(BaseTest):
    """Login form checks that need no credentials."""

    @allure.story("Form")
    @allure.title("Login form is ready after navigation")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_login_form_ready(self):
        login_page = self.page_factory.get_page(LoginPage).navigate_to_login_page()

        with allure.step("Verify username field"):
            login_page.wait_for_username_to_be_editable()
            assert login_page.is_login_form_ready()

    @allure.story("Form")
    @allure.title("Typed username is kept in the field")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    def test_username_value_is_kept(self):
        login_page = self.page_factory.get_page(LoginPage).navigate_to_login_page()
        username = self.config.get_user().username

        assert login_page.try_enter_username(username)
        assert login_page.get_username_value() == username

    @allure.story("Factory")
    @allure.title("Pages are cached per test")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P2
    def test_login_page_is_cached(self):
        login_page = self.page_factory.get_page(LoginPage)
        assert self.page_factory.get_page(LoginPage) is login_page
        assert login_page.home_page is self.page_factory.get_page(HomePage)


@allure.epic("UI Testing")
@allure.feature("Authentication")
@pytest.mark.ui
@pytest.mark.e2e
class TestFluentLogin(BaseTest):
    """Chained sign-in flow."""

    @allure.story("Happy Path")
    @allure.title("Login succeeds with configured credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_login_reaches_home_page(self):
        user = self.config.get_user()
        if not user.password:
            pytest.skip("No password configured for the default user")

        home_page = (
            self.page_factory.get_page(LoginPage)
            .navigate_to_login_page()
            .enter_username(user.username)
            .enter_password(user.password)
            .home_page
        )

        with allure.step("Verify home page loaded"):
            assert home_page.is_home_page_loaded()
        self.take_screenshot("home_after_login")


@allure.epic("UI Testing")
@allure.feature("Navigation")
@pytest.mark.ui
@pytest.mark.e2e
class TestSideMenuNavigation(AuthenticatedBaseTest):
    """Signed-in navigation, login performed once for the class."""

    @allure.story("Side Menu")
    @allure.title("Inventory movement opens from the side menu")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_open_inventory_movement(self):
        self.navigate_to("/")
        inventory_page = (
            self.home_page.side_menu
            .click_on_side_menu()
            .click_on_inventory_movement()
        )

        assert isinstance(inventory_page, InventoryMovementPage)

        def new_button_shown():
            assert inventory_page.is_new_button_visible(), "New button not shown yet"
            return True

        assert self.retry(new_button_shown)

    @allure.story("Side Menu")
    @allure.title("New inventory movement journal can be started")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    def test_new_inventory_movement(self):
        self.navigate_to("/")
        (
            self.home_page.side_menu
            .click_on_side_menu()
            .click_on_inventory_movement()
            .click_on_new_button()
        )
        assert self.page.url.startswith("http")
