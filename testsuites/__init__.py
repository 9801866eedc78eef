"""
Test suites package.

Keeps ``testsuites`` importable so page objects and test doubles can be
imported by their full path:

  - testsuites.ui_testing.pages      page objects for the application under test
  - testsuites.ui_testing.tests      live UI tests (marker: ui)
  - testsuites.unit                  framework tests without a browser
  - testsuites.integration           framework tests against local Chromium

No credentials live in this package; see config/config.yaml.
"""
