"""
Fixtures for browser-backed framework tests.

Pages are built with ``page.set_content``; no application under test is
needed. Tests are skipped when Chromium is not installed
(``python -m playwright install chromium``).
"""

from unittest.mock import MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError

from pomframework.browser_manager import BrowserManager
from pomframework.locators import context as locator_context
from testsuites.unit.fakes import make_config


@pytest.fixture
def config():
    return make_config(
        browser={
            "default_browser": "chromium",
            "headless": True,
            "start_maximized": False,
            "viewport_width": 1280,
            "viewport_height": 720,
            "timeout_ms": 2000,
            "navigation_timeout_ms": 5000,
        },
    )


@pytest.fixture
def log():
    return MagicMock(name="logger")


@pytest.fixture
def locator_ctx(config, log):
    locator_context.set_context(config, log)
    yield config
    locator_context.clear_context()


@pytest.fixture
async def browser_manager(config, log):
    manager = BrowserManager(config, logger=log)
    try:
        await manager.initialize()
    except PlaywrightError as e:
        pytest.skip(f"Chromium not available: {e}")
    yield manager
    await manager.dispose()


@pytest.fixture
async def page(browser_manager):
    return await browser_manager.create_page()
