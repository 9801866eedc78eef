"""
Fixtures for framework unit tests.
"""

from unittest.mock import MagicMock

import pytest

from pomframework.config import TestConfiguration
from pomframework.locators import context as locator_context
from testsuites.unit.fakes import make_config


@pytest.fixture
def config() -> TestConfiguration:
    return make_config()


@pytest.fixture
def log() -> MagicMock:
    """Logger double recording debug/info/warning/error calls."""
    return MagicMock(name="logger")


@pytest.fixture
def locator_ctx(config, log):
    """Set the locator context for the test and clear it afterwards."""
    locator_context.set_context(config, log)
    yield config
    locator_context.clear_context()


@pytest.fixture(autouse=True)
def _no_leaked_context():
    """Page objects set the locator context on construction; never let it outlive a test."""
    yield
    locator_context.clear_context()
