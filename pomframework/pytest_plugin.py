"""
================================================================================
Pytest Plugin
================================================================================

Pytest hooks used by the UI framework:

    - Registers the framework markers
    - Stores each phase report on the test item (``item.rep_setup``,
      ``item.rep_call``, ``item.rep_teardown``) so fixtures can see the
      outcome during teardown

Enable with ``pytest_plugins = ["pomframework.pytest_plugin"]`` in the
root conftest.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with framework markers."""
    config.addinivalue_line(
        "markers", "ui: browser-driven test against the configured application"
    )
    config.addinivalue_line(
        "markers", "e2e: end-to-end user flow"
    )
    config.addinivalue_line(
        "markers", "integration: runs against a real local browser, no application needed"
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Attach the phase report to the item.

    BaseTest reads ``rep_setup``/``rep_call`` in its teardown to decide
    whether to capture failure artifacts.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
