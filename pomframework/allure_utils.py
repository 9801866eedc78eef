"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers and environment reporting for Allure.

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Optional

import allure
from loguru import logger

from .config import TestConfiguration, section_as_pairs


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    allure.attach(
        json.dumps(data, indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_html(html: str, name: str = "HTML"):
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_png_file(path: Path, name: Optional[str] = None):
    """Attach an existing PNG file; missing files are logged and skipped."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Screenshot not found, not attached: {path}")
        return
    allure.attach.file(
        str(path),
        name=name or path.stem,
        attachment_type=allure.attachment_type.PNG,
    )


# ================================================================================
# Environment Reporting
# ================================================================================

def add_environment_parameters(config: TestConfiguration, test_name: str):
    """Record the run environment as Allure parameters of the current test."""
    for key, value in section_as_pairs(config):
        allure.dynamic.parameter(key, value)
    allure.dynamic.parameter("Test Name", test_name)


def write_environment_properties(config: TestConfiguration) -> Optional[Path]:
    """
    Write ``environment.properties`` into the Allure results directory.

    Returns:
        Path written, or None when Allure reporting is disabled
    """
    reporting = config.reporting
    if not reporting.allure_enabled:
        return None

    results_dir = Path(reporting.allure_results_directory)
    results_dir.mkdir(parents=True, exist_ok=True)
    path = results_dir / "environment.properties"

    lines = [f"{key.replace(' ', '.')}={value}" for key, value in section_as_pairs(config)]
    lines.append(f"Application={config.application.name}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug(f"Allure environment written: {path}")
    return path


__all__ = [
    "add_environment_parameters",
    "attach_html",
    "attach_json",
    "attach_png_file",
    "attach_text",
    "write_environment_properties",
]
