"""
================================================================================
Base Test
================================================================================

Lifecycle base class for UI test classes.

One-time (per class) setup:
    1. Create the output directory
    2. Load configuration (fails fast, before any browser is launched)
    3. Initialize logging
    4. Start the Playwright event-loop thread and launch the browser
    5. Write the Allure environment file

Per-test setup:
    Open a page, set the locator context, create a fresh PageFactory and a
    ScreenshotHelper, record environment parameters in Allure.

Per-test teardown:
    Clear the locator context; on failure capture a screenshot and the page
    HTML; close the page. Teardown problems are logged, never raised.

One-time teardown:
    Dispose the browser manager and stop the event-loop thread.

Usage:
    class TestCheckout(BaseTest):

        def test_cart_badge(self):
            home = self.page_factory.get_page(HomePage)
            home.navigate_to("/cart")
            assert home.get_title() == "Cart"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, ClassVar, Coroutine, Optional, TypeVar

import pytest
from playwright.async_api import Page

from . import allure_utils
from .browser_manager import BrowserManager
from .config import TestConfiguration, load_configuration
from .locators import context as locator_context
from .logging_setup import get_logger, init_logger
from .page_base import join_url
from .page_factory import PageFactory
from .retry import retry, retry_async
from .screenshot_helper import ScreenshotHelper, safe_file_name, timestamp
from .sync_bridge import EventLoopThread


T = TypeVar("T")


@dataclass
class LoginState:
    """Tracks whether a test class has already logged in with its shared context."""
    performed: bool = False

    def mark_performed(self) -> None:
        self.performed = True

    def reset(self) -> None:
        self.performed = False


def node_failed(node) -> bool:
    """True when the setup or call phase of ``node`` failed (see pytest_plugin)."""
    for phase in ("setup", "call"):
        report = getattr(node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False


class BaseTest:
    """
    Base class for UI test classes.

    Override ``CONFIG_PATH`` / ``ENVIRONMENT`` / ``BROWSER`` on a subclass to
    pin a configuration; by default the usual lookup and environment
    variables apply.
    """

    CONFIG_PATH: ClassVar[Optional[str]] = None
    ENVIRONMENT: ClassVar[Optional[str]] = None
    BROWSER: ClassVar[Optional[str]] = None

    # Class-level state, set by one_time_set_up
    config: ClassVar[TestConfiguration]
    logger: ClassVar[Any]
    runner: ClassVar[EventLoopThread]
    browser_manager: ClassVar[BrowserManager]
    login_state: ClassVar[LoginState]

    # Per-test state, set by set_up
    page: Page
    page_factory: PageFactory
    screenshot_helper: ScreenshotHelper

    # =========================================================================
    # Pytest Wiring
    # =========================================================================

    @pytest.fixture(scope="class", autouse=True)
    def _class_lifecycle(self, request):
        cls = request.cls
        cls.one_time_set_up()
        yield
        cls.one_time_tear_down()

    @pytest.fixture(autouse=True)
    def _test_lifecycle(self, request):
        self.set_up(request.node.name)
        yield
        self.tear_down(request.node.name, node_failed(request.node))

    # =========================================================================
    # One-Time Lifecycle
    # =========================================================================

    @classmethod
    def one_time_set_up(cls) -> None:
        cls.logger = get_logger(cls.__name__)
        cls.login_state = LoginState()
        cls.runner = None
        cls.browser_manager = None

        config = load_configuration(cls.CONFIG_PATH, cls.ENVIRONMENT)
        Path(config.execution.output_directory).mkdir(parents=True, exist_ok=True)
        init_logger(config.logging)
        cls.config = config

        try:
            cls.runner = EventLoopThread(name=f"playwright-{cls.__name__}")
            cls.runner.start()
            cls.browser_manager = BrowserManager(config, get_logger("BrowserManager"))
            cls.runner.run(cls.browser_manager.initialize(cls.BROWSER))
        except Exception:
            cls.logger.exception("One-time setup failed")
            cls.one_time_tear_down()
            raise

        allure_utils.write_environment_properties(config)
        cls.logger.info(
            f"Test class ready: {cls.__name__} "
            f"(environment={config.application.environment}, "
            f"browser={cls.browser_manager.browser_name})"
        )

    @classmethod
    def one_time_tear_down(cls) -> None:
        if getattr(cls, "browser_manager", None) is not None and cls.runner is not None:
            try:
                cls.runner.run(cls.browser_manager.dispose())
            except Exception as e:
                cls.logger.error(f"Browser disposal failed: {e}")
        if getattr(cls, "runner", None) is not None:
            cls.runner.stop()
        cls.browser_manager = None
        cls.runner = None
        if getattr(cls, "login_state", None) is not None:
            cls.login_state.reset()

    # =========================================================================
    # Per-Test Lifecycle
    # =========================================================================

    def set_up(self, test_name: str) -> None:
        self.logger.info(f"Starting test: {test_name}")
        self.page = self.run(self.browser_manager.create_page())
        locator_context.set_context(self.config, self.logger)
        self.page_factory = PageFactory(self.page, self.config, self.runner)
        self.screenshot_helper = ScreenshotHelper(self.page, self.config, self.logger)

        reporting = self.config.reporting
        if reporting.allure_enabled and reporting.include_environment_info:
            allure_utils.add_environment_parameters(self.config, test_name)

    def tear_down(self, test_name: str, failed: bool) -> None:
        locator_context.clear_context()

        if failed:
            self.logger.error(f"Test failed: {test_name}")
            self._capture_failure_artifacts(test_name)
        else:
            self.logger.info(f"Test passed: {test_name}")

        page = getattr(self, "page", None)
        if page is not None:
            try:
                self.run(page.close())
            except Exception as e:
                self.logger.error(f"Failed to close page after {test_name}: {e}")
        self.page = None

    def _capture_failure_artifacts(self, test_name: str) -> None:
        if getattr(self, "page", None) is None:
            return

        if self.config.execution.capture_screenshot_on_failure:
            try:
                path = self.run(self.screenshot_helper.take_screenshot(f"failure_{test_name}"))
                allure_utils.attach_png_file(path, name=f"failure_{test_name}")
            except Exception as e:
                self.logger.error(f"Failure screenshot not captured for {test_name}: {e}")

        try:
            html = self.run(self.page.content())
            source_path = (
                Path(self.config.execution.output_directory)
                / f"page_source_{safe_file_name(test_name)}_{timestamp()}.html"
            )
            source_path.write_text(html, encoding="utf-8")
            allure_utils.attach_html(html, name="page_source")
            self.logger.info(f"Page source saved: {source_path}")
        except Exception as e:
            self.logger.error(f"Page source not captured for {test_name}: {e}")

    # =========================================================================
    # Helpers
    # =========================================================================

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run a coroutine against this class's browser and block for the result."""
        return self.runner.run(coro)

    def navigate_to(self, url: str, wait_until: str = "load") -> None:
        target = join_url(self.config.application.base_url, url)
        self.logger.info(f"Navigating to {target}")
        self.run(self.page.goto(
            target,
            wait_until=wait_until,
            timeout=self.config.browser.navigation_timeout_ms,
        ))

    def wait(self, seconds: float) -> None:
        time.sleep(seconds)

    def take_screenshot(self, name: str) -> Path:
        """Capture the page and attach it to the Allure report."""
        path = self.run(self.screenshot_helper.take_screenshot(name))
        allure_utils.attach_png_file(path, name=name)
        return path

    def retry(
        self,
        action: Callable[[], T],
        max_attempts: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> T:
        """Fixed-delay retry; defaults come from ``execution`` configuration."""
        execution = self.config.execution
        return retry(
            action,
            max_attempts if max_attempts is not None else execution.max_retry_attempts,
            delay_ms if delay_ms is not None else execution.retry_delay_ms,
            logger=self.logger,
        )

    async def retry_async(
        self,
        action: Callable[[], Awaitable[T]],
        max_attempts: Optional[int] = None,
        delay_ms: Optional[int] = None,
    ) -> T:
        execution = self.config.execution
        return await retry_async(
            action,
            max_attempts if max_attempts is not None else execution.max_retry_attempts,
            delay_ms if delay_ms is not None else execution.retry_delay_ms,
            logger=self.logger,
        )


__all__ = [
    "BaseTest",
    "LoginState",
    "node_failed",
]
