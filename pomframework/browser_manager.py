"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Ownership:
    Playwright -> Browser (zero or one) -> default context + named contexts
    -> pages. Disposal cascades top-down and is idempotent.

Features:
    - Browser selection by name (chrome, chromium, firefox, webkit, safari, edge)
    - Launch/context options derived from TestConfiguration
    - Maximized window handling for headed and headless runs
    - Named context isolation
    - Request/response, console and page error logging
    - Video recording, tracing and storage state persistence

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    BrowserType,
    Page,
    Playwright,
)

from .config import TestConfiguration
from .logging_setup import get_logger, is_debug_enabled


# Browser name -> (Playwright engine, channel)
BROWSER_ENGINES: Dict[str, Tuple[str, Optional[str]]] = {
    "chrome": ("chromium", None),
    "chromium": ("chromium", None),
    "firefox": ("firefox", None),
    "safari": ("webkit", None),
    "webkit": ("webkit", None),
    "edge": ("chromium", "msedge"),
}

MIN_MAXIMIZED_WIDTH = 1920
MIN_MAXIMIZED_HEIGHT = 1080


def resolve_browser(name: str) -> Tuple[str, Optional[str]]:
    """
    Map a configured browser name to a Playwright engine and channel.

    Raises:
        ValueError: Unsupported browser name
    """
    key = (name or "").strip().lower()
    try:
        return BROWSER_ENGINES[key]
    except KeyError:
        supported = ", ".join(sorted(BROWSER_ENGINES))
        raise ValueError(f"Unsupported browser type: '{name}'. Supported: {supported}") from None


class BrowserManager:
    """
    Manages the browser, its contexts and pages for one test class.

    Usage:
        async with BrowserManager(config) as manager:
            page = await manager.create_page()
            await page.goto(config.application.base_url)

        # Named, isolated contexts
        await manager.create_context("admin")
        admin_page = await manager.create_page("admin")
    """

    def __init__(self, config: TestConfiguration, logger=None):
        """
        Initialize browser manager.

        Args:
            config: Test configuration
            logger: Loguru logger; defaults to a "BrowserManager" component logger
        """
        if config is None:
            raise ValueError("config must not be None")
        self.config = config
        self.logger = logger or get_logger("BrowserManager")

        self.browser_name: str = config.browser.default_browser
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._default_context: Optional[BrowserContext] = None
        self._contexts: Dict[str, BrowserContext] = {}
        self._disposed = False

    async def __aenter__(self) -> "BrowserManager":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()

    # =========================================================================
    # Option Builders
    # =========================================================================

    def build_launch_options(self, browser_name: Optional[str] = None) -> Dict[str, Any]:
        """Launch options for the given (or configured) browser."""
        browser_cfg = self.config.browser
        engine, channel = resolve_browser(browser_name or self.browser_name)

        args: List[str] = list(browser_cfg.launch_args)
        if browser_cfg.start_maximized:
            if browser_cfg.headless:
                if not any(a.startswith("--window-size") for a in args):
                    width = max(browser_cfg.viewport_width, MIN_MAXIMIZED_WIDTH)
                    height = max(browser_cfg.viewport_height, MIN_MAXIMIZED_HEIGHT)
                    args.append(f"--window-size={width},{height}")
            else:
                args = [a for a in args if not a.startswith("--window-size")]
                if "--start-maximized" not in args:
                    args.append("--start-maximized")

        if engine == "firefox":
            # Chromium-only switches
            args = [
                a for a in args
                if a != "--start-maximized" and not a.startswith("--window-size")
            ]
            args.extend([
                f"--width={browser_cfg.viewport_width}",
                f"--height={browser_cfg.viewport_height}",
            ])

        options: Dict[str, Any] = {
            "headless": browser_cfg.headless,
            "timeout": browser_cfg.timeout_ms,
            "args": args,
        }
        if channel:
            options["channel"] = channel
        return options

    def build_context_options(self, **overrides: Any) -> Dict[str, Any]:
        """Context options from configuration, with explicit overrides winning."""
        browser_cfg = self.config.browser
        execution = self.config.execution

        options: Dict[str, Any] = {"accept_downloads": browser_cfg.accept_downloads}

        if browser_cfg.start_maximized and not browser_cfg.headless:
            options["no_viewport"] = True
        elif browser_cfg.start_maximized:
            options["viewport"] = {
                "width": max(browser_cfg.viewport_width, MIN_MAXIMIZED_WIDTH),
                "height": max(browser_cfg.viewport_height, MIN_MAXIMIZED_HEIGHT),
            }
        else:
            options["viewport"] = {
                "width": browser_cfg.viewport_width,
                "height": browser_cfg.viewport_height,
            }

        if execution.record_video:
            options["record_video_dir"] = str(Path(execution.output_directory) / "videos")

        if browser_cfg.storage_state_path and Path(browser_cfg.storage_state_path).exists():
            options["storage_state"] = browser_cfg.storage_state_path

        options.update(overrides)
        return options

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def initialize(self, browser_type: Optional[str] = None) -> Browser:
        """
        Start Playwright and launch the browser.

        Args:
            browser_type: Override of ``browser.default_browser``

        Raises:
            ValueError: Unsupported browser name (raised before Playwright starts)
        """
        if self._browser is not None:
            return self._browser

        name = browser_type or self.config.browser.default_browser
        engine, _ = resolve_browser(name)
        launch_options = self.build_launch_options(name)

        self._playwright = await async_playwright().start()
        launcher: BrowserType = getattr(self._playwright, engine)
        try:
            self._browser = await launcher.launch(**launch_options)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        self.browser_name = name
        self._disposed = False
        self.logger.info(
            f"Browser started: {name} (engine={engine}, "
            f"headless={self.config.browser.headless})"
        )
        return self._browser

    async def create_context(self, name: Optional[str] = None, **options: Any) -> BrowserContext:
        """
        Create a browser context.

        Args:
            name: Register the context under this name; None creates/replaces
                the default context
            **options: Playwright context options overriding configuration

        Returns:
            New BrowserContext
        """
        if self._browser is None:
            raise RuntimeError("Browser not initialized. Call initialize() first.")

        context = await self._browser.new_context(**self.build_context_options(**options))
        self._configure_context(context)

        if self.config.execution.record_trace:
            await context.tracing.start(screenshots=True, snapshots=True, sources=True)

        if name is None:
            if self._default_context is not None:
                await self._close_context_safely("default", self._default_context)
            self._default_context = context
        else:
            if name in self._contexts:
                await self._close_context_safely(name, self._contexts[name])
            self._contexts[name] = context
        self.logger.debug(f"Context created: {name or 'default'}")
        return context

    def _configure_context(self, context: BrowserContext) -> None:
        context.set_default_timeout(self.config.browser.timeout_ms)
        context.set_default_navigation_timeout(self.config.browser.navigation_timeout_ms)

        if is_debug_enabled(self.config.logging):
            context.on("request", lambda request: self.logger.debug(
                f"Request: {request.method} {request.url}"
            ))
            context.on("response", lambda response: self.logger.debug(
                f"Response: {response.status} {response.url}"
            ))

    def _configure_page(self, page: Page) -> None:
        page.set_default_timeout(self.config.browser.timeout_ms)
        page.set_default_navigation_timeout(self.config.browser.navigation_timeout_ms)
        page.on("console", lambda message: self.logger.debug(
            f"Console [{message.type}]: {message.text}"
        ))
        page.on("pageerror", lambda error: self.logger.error(f"Page error: {error}"))

    def get_context(self, name: Optional[str] = None) -> Optional[BrowserContext]:
        """Named context, or the default context when ``name`` is None."""
        if name is None:
            return self._default_context
        return self._contexts.get(name)

    async def create_page(self, context_name: Optional[str] = None) -> Page:
        """
        Open a page in the default context (created on demand) or a named one.

        Raises:
            KeyError: Named context does not exist
        """
        if context_name is None:
            context = self._default_context or await self.create_context()
        else:
            context = self._contexts.get(context_name)
            if context is None:
                raise KeyError(f"Context '{context_name}' not found")

        page = await context.new_page()
        self._configure_page(page)
        return page

    async def close_context(self, name: str) -> None:
        context = self._contexts.pop(name, None)
        if context is not None:
            await self._close_context_safely(name, context)

    async def save_storage_state(
        self,
        path: Optional[str] = None,
        context: Optional[BrowserContext] = None,
    ) -> Path:
        """
        Save cookies and localStorage for reuse by later contexts.

        Args:
            path: Target file; defaults to ``browser.storage_state_path``
            context: Context to save; defaults to the default context
        """
        target = path or self.config.browser.storage_state_path
        if not target:
            raise ValueError("No storage state path given or configured")
        context = context or self._default_context
        if context is None:
            raise RuntimeError("No context to save storage state from")

        Path(target).parent.mkdir(parents=True, exist_ok=True)
        await context.storage_state(path=str(target))
        self.logger.info(f"Storage state saved to: {target}")
        return Path(target)

    async def _close_context_safely(self, name: str, context: BrowserContext) -> None:
        try:
            if self.config.execution.record_trace:
                trace_dir = Path(self.config.execution.output_directory) / "traces"
                trace_dir.mkdir(parents=True, exist_ok=True)
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                await context.tracing.stop(path=str(trace_dir / f"trace_{name}_{timestamp}.zip"))
            await context.close()
        except Exception as e:
            self.logger.error(f"Failed to close context '{name}': {e}")

    async def dispose(self) -> None:
        """Close named contexts, the default context, the browser and Playwright."""
        if self._disposed:
            return
        self._disposed = True

        for name, context in list(self._contexts.items()):
            await self._close_context_safely(name, context)
        self._contexts.clear()

        if self._default_context is not None:
            await self._close_context_safely("default", self._default_context)
            self._default_context = None

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                self.logger.error(f"Failed to close browser: {e}")
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                self.logger.error(f"Failed to stop Playwright: {e}")
            self._playwright = None

        self.logger.info("Browser disposed")

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    @property
    def is_initialized(self) -> bool:
        return self._browser is not None


__all__ = [
    "BROWSER_ENGINES",
    "BrowserManager",
    "resolve_browser",
]
