import os
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from pomframework.screenshot_helper import ScreenshotHelper, safe_file_name, timestamp
from testsuites.unit.fakes import make_config


class ScreenshotPage:
    """Writes fixed PNG bytes wherever a screenshot is requested."""

    def __init__(self, content=b"\x89PNG-current"):
        self.content = content
        self.calls = []

    async def screenshot(self, path=None, full_page=False):
        self.calls.append({"path": path, "full_page": full_page})
        if path:
            Path(path).write_bytes(self.content)
        return self.content


@pytest.fixture
def helper(tmp_path):
    config = make_config(execution={"output_directory": str(tmp_path), "full_page_screenshots": True})
    return ScreenshotHelper(ScreenshotPage(), config, MagicMock())


def test_safe_file_name():
    assert safe_file_name("test_login[chrome] / step 1") == "test_login_chrome_step_1"
    assert safe_file_name("///") == "screenshot"


def test_timestamp_format():
    value = timestamp()
    date, clock, millis = value.split("_")
    assert len(date) == 8 and len(clock) == 6 and len(millis) == 3


@pytest.mark.asyncio
async def test_take_screenshot_writes_into_output_dir(helper, tmp_path):
    path = await helper.take_screenshot("home page")

    assert path.parent == tmp_path / "screenshots"
    assert path.name.startswith("home_page_")
    assert path.read_bytes() == b"\x89PNG-current"
    assert helper.page.calls[0]["full_page"] is True


@pytest.mark.asyncio
async def test_take_screenshot_failure_is_logged_and_raised(tmp_path):
    page = MagicMock()

    async def broken(**kwargs):
        raise RuntimeError("page closed")

    page.screenshot = broken
    helper = ScreenshotHelper(page, make_config(execution={"output_directory": str(tmp_path)}), MagicMock())

    with pytest.raises(RuntimeError):
        await helper.take_screenshot("x")
    helper.logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_baseline_round_trip(helper):
    baseline = await helper.save_baseline("dashboard")

    assert baseline == helper.baseline_path("dashboard")
    assert await helper.compare_with_baseline("dashboard", threshold=0.0)


def test_compare_missing_files(helper, tmp_path):
    existing = tmp_path / "a.png"
    existing.write_bytes(b"abc")

    assert not helper.compare_screenshots(tmp_path / "missing.png", existing)
    assert not helper.compare_screenshots(existing, tmp_path / "missing.png")


def test_compare_size_mismatch_and_threshold(helper, tmp_path):
    a = tmp_path / "a.png"
    b = tmp_path / "b.png"
    c = tmp_path / "c.png"
    a.write_bytes(b"0123456789")
    b.write_bytes(b"0123456780")
    c.write_bytes(b"012345678")

    assert not helper.compare_screenshots(a, c)
    assert helper.compare_screenshots(a, b, threshold=0.1)
    assert not helper.compare_screenshots(a, b, threshold=0.05)


def test_compare_empty_files_match(helper, tmp_path):
    a = tmp_path / "a.png"
    b = tmp_path / "b.png"
    a.write_bytes(b"")
    b.write_bytes(b"")

    assert helper.compare_screenshots(a, b)


def test_cleanup_keeps_recent_and_baselines(helper):
    helper.screenshot_dir.mkdir(parents=True)
    helper.baseline_dir.mkdir(parents=True)
    old = helper.screenshot_dir / "old.png"
    recent = helper.screenshot_dir / "recent.png"
    baseline = helper.baseline_dir / "page_baseline.png"
    for path in (old, recent, baseline):
        path.write_bytes(b"png")
    two_days_ago = time.time() - 2 * 24 * 3600
    os.utime(old, (two_days_ago, two_days_ago))
    os.utime(baseline, (two_days_ago, two_days_ago))

    assert helper.cleanup_old_screenshots(24 * 3600) == 1
    assert not old.exists()
    assert recent.exists()
    assert baseline.exists()


def test_cleanup_without_directory(helper):
    assert helper.cleanup_old_screenshots(0) == 0
