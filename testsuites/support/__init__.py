"""Test doubles shared by the unit suites."""
