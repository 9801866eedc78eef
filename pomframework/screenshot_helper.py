"""
================================================================================
Screenshot Helper
================================================================================

Screenshot capture, baselines and housekeeping.

Files are written to ``<output_directory>/screenshots`` with a millisecond
timestamp suffix; baselines live in ``screenshots/baselines``.

Comparison is a plain byte comparison: files of different sizes never match,
otherwise the share of differing bytes must not exceed the threshold. It is
meant for detecting "nothing changed", not perceptual diffing.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.async_api import Page

from .config import TestConfiguration


_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_file_name(name: str) -> str:
    """Make a test or page name usable as a file name."""
    return _UNSAFE_CHARS.sub("_", name).strip("_") or "screenshot"


def timestamp() -> str:
    """Current time as YYYYMMDD_HHMMSS_fff."""
    now = datetime.now()
    return f"{now:%Y%m%d_%H%M%S}_{now.microsecond // 1000:03d}"


class ScreenshotHelper:
    """Page screenshots bound to the configured output directory."""

    def __init__(self, page: Page, config: TestConfiguration, logger):
        self.page = page
        self.config = config
        self.logger = logger
        self.screenshot_dir = Path(config.execution.output_directory) / "screenshots"
        self.baseline_dir = self.screenshot_dir / "baselines"

    def _target(self, name: str) -> Path:
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        return self.screenshot_dir / f"{safe_file_name(name)}_{timestamp()}.png"

    async def take_screenshot(self, name: str, full_page: Optional[bool] = None) -> Path:
        """
        Capture the page.

        Args:
            name: Base file name
            full_page: Whole scrollable page; defaults to configuration

        Returns:
            Path of the written PNG
        """
        if full_page is None:
            full_page = self.config.execution.full_page_screenshots
        path = self._target(name)
        try:
            await self.page.screenshot(path=str(path), full_page=full_page)
        except Exception as e:
            self.logger.error(f"Failed to take screenshot '{name}': {e}")
            raise
        self.logger.info(f"Screenshot saved: {path}")
        return path

    async def take_element_screenshot(self, selector: str, name: str) -> Path:
        path = self._target(name)
        try:
            await self.page.locator(selector).screenshot(path=str(path))
        except Exception as e:
            self.logger.error(f"Failed to take element screenshot '{name}' ({selector}): {e}")
            raise
        self.logger.info(f"Element screenshot saved: {path}")
        return path

    async def take_screenshot_bytes(self, full_page: Optional[bool] = None) -> bytes:
        if full_page is None:
            full_page = self.config.execution.full_page_screenshots
        return await self.page.screenshot(full_page=full_page)

    async def save_baseline(self, name: str) -> Path:
        """Capture the page as the baseline for ``name`` (overwrites)."""
        self.baseline_dir.mkdir(parents=True, exist_ok=True)
        path = self.baseline_dir / f"{safe_file_name(name)}_baseline.png"
        await self.page.screenshot(
            path=str(path),
            full_page=self.config.execution.full_page_screenshots,
        )
        self.logger.info(f"Baseline saved: {path}")
        return path

    def baseline_path(self, name: str) -> Path:
        return self.baseline_dir / f"{safe_file_name(name)}_baseline.png"

    async def compare_with_baseline(self, name: str, threshold: float = 0.1) -> bool:
        """Capture the current page and compare it to the stored baseline for ``name``."""
        current = await self.take_screenshot(f"{name}_current")
        return self.compare_screenshots(self.baseline_path(name), current, threshold)

    def compare_screenshots(
        self,
        baseline_path: Path,
        current_path: Path,
        threshold: float = 0.1,
    ) -> bool:
        """
        Byte-level comparison of two images.

        Returns:
            True when sizes are equal and the differing-byte ratio is within
            ``threshold``; False otherwise, including when either file is missing
        """
        baseline_path, current_path = Path(baseline_path), Path(current_path)
        if not baseline_path.exists():
            self.logger.warning(f"Baseline not found: {baseline_path}")
            return False
        if not current_path.exists():
            self.logger.warning(f"Screenshot not found: {current_path}")
            return False

        try:
            baseline = baseline_path.read_bytes()
            current = current_path.read_bytes()
        except OSError as e:
            self.logger.error(f"Failed to read screenshots for comparison: {e}")
            return False

        if len(baseline) != len(current):
            self.logger.info(
                f"Screenshot size differs: {len(baseline)} vs {len(current)} bytes"
            )
            return False
        if not baseline:
            return True

        differing = sum(1 for a, b in zip(baseline, current) if a != b)
        ratio = differing / len(baseline)
        self.logger.info(f"Screenshot difference ratio: {ratio:.4f} (threshold {threshold})")
        return ratio <= threshold

    def cleanup_old_screenshots(self, max_age_seconds: float) -> int:
        """
        Delete screenshots older than ``max_age_seconds``; baselines are kept.

        Returns:
            Number of files deleted
        """
        if not self.screenshot_dir.exists():
            return 0

        cutoff = time.time() - max_age_seconds
        deleted = 0
        for path in self.screenshot_dir.glob("*.png"):
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    deleted += 1
            except OSError as e:
                self.logger.warning(f"Could not delete {path}: {e}")
        self.logger.info(f"Deleted {deleted} old screenshot(s)")
        return deleted


__all__ = [
    "ScreenshotHelper",
    "safe_file_name",
    "timestamp",
]
