"""
================================================================================
Sync Bridge
================================================================================

Runs Playwright's async API on a dedicated event-loop thread so that fluent
page objects can expose blocking, chainable methods.

All Playwright objects created through the bridge belong to its loop. Every
sync wrapper submits a coroutine with ``run_coroutine_threadsafe`` and blocks
the caller until it completes. Calling a sync wrapper from the loop thread
itself would deadlock, so it is rejected with ``SyncBridgeError``.

Context variables (the locator context) travel with the submitted coroutine,
because the loop schedules it with a copy of the caller's context.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Coroutine, Optional, TypeVar

from loguru import logger


T = TypeVar("T")


class SyncBridgeError(RuntimeError):
    """Raised when a sync wrapper cannot safely run its coroutine."""
    pass


class EventLoopThread:
    """
    Owns one asyncio event loop running on a daemon thread.

    Usage:
        with EventLoopThread() as runner:
            title = runner.run(page.title())
    """

    def __init__(self, name: str = "playwright-loop"):
        self.name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._started = threading.Event()

    def __enter__(self) -> "EventLoopThread":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def loop(self) -> Optional[asyncio.AbstractEventLoop]:
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def in_loop_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    def start(self) -> None:
        """Start the loop thread. Calling start on a running bridge is a no-op."""
        if self.is_running:
            return

        self._loop = asyncio.new_event_loop()
        self._started.clear()
        self._thread = threading.Thread(target=self._serve, name=self.name, daemon=True)
        self._thread.start()
        self._started.wait()
        logger.debug(f"Event loop thread started: {self.name}")

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.call_soon(self._started.set)
        try:
            self._loop.run_forever()
        finally:
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
            self._loop.close()

    def run(self, coro: Coroutine[Any, Any, T], timeout: Optional[float] = None) -> T:
        """
        Run a coroutine on the loop thread and block until it completes.

        Args:
            coro: Coroutine to execute
            timeout: Optional limit in seconds for the whole call

        Returns:
            The coroutine's result

        Raises:
            SyncBridgeError: Bridge not running, or called from the loop thread
            Any exception raised by the coroutine, unchanged
        """
        if not self.is_running or self._loop is None:
            coro.close()
            raise SyncBridgeError(f"Event loop thread '{self.name}' is not running")

        if self.in_loop_thread():
            coro.close()
            raise SyncBridgeError(
                "Sync wrapper called from the event loop thread; "
                "await the *_async variant instead"
            )

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(timeout)
        except FutureTimeoutError:
            future.cancel()
            raise

    def stop(self, timeout: float = 10.0) -> None:
        """Stop the loop and join the thread. Safe to call more than once."""
        if not self.is_running or self._loop is None:
            return

        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"Event loop thread '{self.name}' did not stop within {timeout}s")
        else:
            logger.debug(f"Event loop thread stopped: {self.name}")
        self._thread = None
        self._loop = None


__all__ = [
    "EventLoopThread",
    "SyncBridgeError",
]
