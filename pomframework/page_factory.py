"""
================================================================================
Page Object Factory
================================================================================

Creates and caches page objects bound to one Playwright page.

Construction:
    Page classes are built with ``(page, config, logger, page_factory)`` when
    their constructor accepts it, otherwise with ``(page, config, logger)``.
    The logger is bound to the page class name.

Caching:
    One instance per page type per factory; repeated requests for the same
    type return the identical object. The cache is lock-protected.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
import threading
from typing import Any, Coroutine, Dict, Optional, Tuple, Type, TypeVar

from playwright.async_api import Page

from .config import TestConfiguration
from .logging_setup import get_logger
from .sync_bridge import EventLoopThread, SyncBridgeError


T = TypeVar("T")


class PageConstructionError(TypeError):
    """Raised when a page type has no supported constructor shape."""
    pass


class PageFactory:
    """
    Factory and per-type cache for page objects.

    Usage:
        factory = PageFactory(page, config, runner)
        login = factory.get_page(LoginPage)
        assert factory.get_page(LoginPage) is login
    """

    def __init__(
        self,
        page: Page,
        config: TestConfiguration,
        runner: Optional[EventLoopThread] = None,
    ):
        if page is None:
            raise ValueError("page must not be None")
        if config is None:
            raise ValueError("config must not be None")
        self.page = page
        self.config = config
        self.runner = runner
        self._cache: Dict[type, Any] = {}
        self._lock = threading.RLock()

    def get_page(self, page_type: Type[T]) -> T:
        """
        Return the cached instance of ``page_type``, creating it on first use.

        Raises:
            PageConstructionError: No supported constructor shape
        """
        with self._lock:
            instance = self._cache.get(page_type)
            if instance is None:
                instance = self._construct(page_type)
                self._cache[page_type] = instance
            return instance

    def is_cached(self, page_type: type) -> bool:
        with self._lock:
            return page_type in self._cache

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _construct(self, page_type: Type[T]) -> T:
        logger = get_logger(page_type.__name__)
        shapes: Tuple[tuple, ...] = (
            (self.page, self.config, logger, self),
            (self.page, self.config, logger),
        )

        try:
            signature = inspect.signature(page_type)
        except (TypeError, ValueError):
            signature = None

        if signature is not None:
            for args in shapes:
                try:
                    signature.bind(*args)
                except TypeError:
                    continue
                logger.debug(f"Creating page object {page_type.__name__} ({len(args)} args)")
                return page_type(*args)

        name = page_type.__name__
        raise PageConstructionError(
            f"Cannot create an instance of {page_type.__module__}.{name}. "
            f"Expected constructor: {name}(page, config, logger, page_factory) "
            f"or {name}(page, config, logger)"
        )

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """
        Run a coroutine on the Playwright event loop and block for its result.

        Raises:
            SyncBridgeError: Factory created without an event loop runner
        """
        if self.runner is None:
            coro.close()
            raise SyncBridgeError(
                "PageFactory has no event loop runner; sync page methods are unavailable"
            )
        return self.runner.run(coro)


__all__ = [
    "PageConstructionError",
    "PageFactory",
]
