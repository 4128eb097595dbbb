"""
Test suites package.

`testsuites` stays importable so the suites can share helpers:
  - support: fake driver and clock for the unit suites
  - ui_testing.pages: page objects for the example browser suite
"""
