"""
Repository-level pytest configuration.

  - Loads the framework plugin (phase reports on items, framework markers)
  - Provides safe environment defaults so local runs never need secrets

Real credentials belong in environment variables, e.g.
TEST_CONFIGURATION__APPLICATION__DEFAULT_USER__PASSWORD, set by CI from a
secret store.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


pytest_plugins = ["pomframework.pytest_plugin"]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set safe environment defaults if not already provided by the user/CI.

    Keeps local runs predictable: configuration resolves to the repository's
    config directory and the development overlay.
    """
    defaults = {
        "TEST_CONFIG_PATH": str(Path(__file__).parent / "config" / "config.yaml"),
        "ENVIRONMENT": "development",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
