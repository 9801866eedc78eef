"""
================================================================================
Login Page Object (Fluent)
================================================================================

Sign-in flow of the application's identity provider:

    username -> Next -> password -> Sign in -> (optional) SMS verification

Every step has an ``*_async`` implementation and a chainable sync wrapper:

    home = (
        login_page.navigate_to_login_page()
        .enter_username(user.username)
        .enter_password(user.password)
        .home_page
    )

Fields are located with the visibility-aware helpers because the provider
keeps hidden copies of its inputs in the DOM between steps.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from playwright.async_api import Locator

from pomframework.fluent_page import FluentBasePage
from pomframework.locators import actions, queries, visibility, waits
from pomframework.otp_client import SmsOtpClient

from .home_page import HomePage


class LoginPage(FluentBasePage):
    """Login page object (fluent)."""

    USERNAME_INPUT = "//input[@name='loginfmt']"
    NEXT_BUTTON = "//input[@type='submit' and @value='Next']"
    PASSWORD_INPUT = "//input[@placeholder='Password']"
    SIGN_IN_BUTTON = "//input[@value='Sign in']"
    SEND_SMS_BUTTON = "//div[@data-value='OneWaySMS' and @role='button']"
    OTP_INPUT = "//input[@placeholder='Code']"
    VERIFY_BUTTON = "//input[@value='Verify']"

    @property
    def username_input(self) -> Locator:
        return self.locate(self.USERNAME_INPUT)

    @property
    def next_button(self) -> Locator:
        return self.locate(self.NEXT_BUTTON)

    @property
    def password_input(self) -> Locator:
        return self.locate(self.PASSWORD_INPUT)

    @property
    def sign_in_button(self) -> Locator:
        return self.locate(self.SIGN_IN_BUTTON)

    @property
    def send_sms_button(self) -> Locator:
        return self.locate(self.SEND_SMS_BUTTON)

    @property
    def otp_input(self) -> Locator:
        return self.locate(self.OTP_INPUT)

    @property
    def verify_button(self) -> Locator:
        return self.locate(self.VERIFY_BUTTON)

    @property
    def home_page(self) -> HomePage:
        return self.get_page(HomePage)

    def _ensure(self, done: bool, message: str) -> None:
        if not done:
            self.logger.error(message)
            raise AssertionError(message)

    # =========================================================================
    # Async Implementation
    # =========================================================================

    @allure.step("Open login page")
    async def navigate_to_login_page_async(self) -> None:
        await self.navigate_to_async(self.base_url)
        await self.wait_for_load_async("domcontentloaded")

    @allure.step("Enter username")
    async def enter_username_async(self, username: str) -> None:
        self._ensure(
            await visibility.fill_only_visible(self.username_input, username),
            "Username field was not available",
        )
        self._ensure(
            await visibility.click_only_visible(self.next_button),
            "Next button was not available",
        )
        await self.wait_for_load_async("networkidle")

    @allure.step("Enter password")
    async def enter_password_async(self, password: str) -> None:
        await self.wait_for_password_field_async()
        self._ensure(
            await visibility.fill_only_visible(self.password_input, password),
            "Password field was not available",
        )
        await self.click_sign_in_async()

    async def click_sign_in_async(self) -> None:
        self._ensure(
            await visibility.click_only_visible(self.sign_in_button),
            "Sign in button was not available",
        )
        await self.wait_for_load_async("networkidle")

    @allure.step("Complete SMS verification")
    async def enter_sms_async(self) -> None:
        self._ensure(
            await visibility.click_only_visible(self.send_sms_button),
            "Send SMS option was not available",
        )
        async with SmsOtpClient(self.config.otp, logger=self.logger) as client:
            code = await client.fetch_code()
        self._ensure(
            await visibility.fill_only_visible(self.otp_input, code),
            "Verification code field was not available",
        )
        self._ensure(
            await visibility.click_only_visible(self.verify_button),
            "Verify button was not available",
        )
        await self.wait_for_load_async("networkidle")

    async def is_login_form_ready_async(self) -> bool:
        """Username input is visible and enabled right now."""
        target = await visibility.get_first_visible(self.username_input, require_enabled=True)
        return target is not None

    async def get_username_value_async(self) -> str:
        target = await visibility.get_first_visible(self.username_input)
        return await queries.get_value(target or self.username_input.first)

    async def get_password_placeholder_async(self) -> Optional[str]:
        return await queries.get_placeholder(self.password_input)

    async def wait_for_password_field_async(self, timeout: Optional[float] = None) -> None:
        await waits.wait_for(self.password_input, timeout=timeout)

    async def wait_for_username_to_be_editable_async(self, timeout: Optional[float] = None) -> None:
        await waits.wait_to_be_editable(self.username_input, timeout=timeout)

    async def try_enter_username_async(self, username: str, timeout: float = 5000) -> bool:
        return await actions.try_fill(self.username_input.first, username, timeout=timeout)

    # =========================================================================
    # Fluent API
    # =========================================================================

    def navigate_to_login_page(self) -> "LoginPage":
        self.run(self.navigate_to_login_page_async())
        return self

    def enter_username(self, username: str) -> "LoginPage":
        self.run(self.enter_username_async(username))
        return self

    def enter_password(self, password: str) -> "LoginPage":
        self.run(self.enter_password_async(password))
        return self

    def enter_sms(self) -> "LoginPage":
        self.run(self.enter_sms_async())
        return self

    def click_on_login_button(self) -> HomePage:
        self.run(self.click_sign_in_async())
        return self.home_page

    def login(self, username: Optional[str] = None, password: Optional[str] = None) -> HomePage:
        """
        Sign in; credentials default to ``application.default_user``.

        Returns:
            The cached HomePage
        """
        user = self.config.get_user()
        self.logger.info(f"Logging in as {username or user.username}")
        return (
            self.navigate_to_login_page()
            .enter_username(username or user.username)
            .enter_password(password if password is not None else user.password)
            .home_page
        )

    def is_login_form_ready(self) -> bool:
        return self.run(self.is_login_form_ready_async())

    def get_username_value(self) -> str:
        return self.run(self.get_username_value_async())

    def wait_for_username_to_be_editable(self, timeout: Optional[float] = None) -> "LoginPage":
        self.run(self.wait_for_username_to_be_editable_async(timeout))
        return self

    def try_enter_username(self, username: str, timeout: float = 5000) -> bool:
        return self.run(self.try_enter_username_async(username, timeout))


__all__ = [
    "LoginPage",
]
