"""
================================================================================
Playwright Page-Object Framework
================================================================================

Core framework for browser UI automation:

    - config           Typed YAML configuration with env overrides
    - logging_setup    Loguru sinks and component loggers
    - locators         Visibility-aware, highlighted locator helpers
    - page_base        BasePage (async page objects)
    - fluent_page      FluentBasePage (chainable sync page objects)
    - page_factory     Cached page-object construction
    - browser_manager  Browser / context / page lifecycle
    - base_test        Pytest base class with one-time and per-test lifecycle

Author: Automation Team
License: MIT
================================================================================
"""

from .base_test import BaseTest, LoginState
from .browser_manager import BrowserManager
from .config import ConfigurationError, TestConfiguration, load_configuration
from .fluent_page import FluentBasePage, FluentPage
from .logging_setup import get_logger, init_logger
from .page_base import BasePage
from .page_factory import PageConstructionError, PageFactory
from .retry import RetryPolicy, retry, retry_async, with_retry
from .screenshot_helper import ScreenshotHelper
from .sync_bridge import EventLoopThread, SyncBridgeError


__version__ = "1.0.0"

__all__ = [
    "BaseTest",
    "BasePage",
    "BrowserManager",
    "ConfigurationError",
    "EventLoopThread",
    "FluentBasePage",
    "FluentPage",
    "LoginState",
    "PageConstructionError",
    "PageFactory",
    "RetryPolicy",
    "ScreenshotHelper",
    "SyncBridgeError",
    "TestConfiguration",
    "get_logger",
    "init_logger",
    "load_configuration",
    "retry",
    "retry_async",
    "with_retry",
]
