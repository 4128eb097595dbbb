"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the browser-driven example suite.

Key Features:
- One Playwright browser per test session, one context per test
- Screenshot capture on failure, attached to the Allure report
- Suite skipped unless PAGEBIND_E2E=1

================================================================================
"""

import os
from typing import Generator, List

import allure
import pytest
from loguru import logger

from pagebind.configuration import actual_configuration
from pagebind.log import init_logger
from pagebind.drivers.browser_manager import BrowserManager
from pagebind.drivers.playwright_driver import PlaywrightDriver
from testsuites.ui_testing.pages import ShopSite


def pytest_collection_modifyitems(config, items):
    """Skip browser tests unless explicitly enabled."""
    if os.getenv("PAGEBIND_E2E") == "1":
        return
    skip = pytest.mark.skip(reason="Set PAGEBIND_E2E=1 to run browser tests")
    for item in items:
        if "ui_testing" in str(item.fspath):
            item.add_marker(skip)


# ================================================================================
# Browser Fixtures
# ================================================================================

class DriverFactory:
    """Creates drivers from the session browser and remembers them."""

    def __init__(self, manager: BrowserManager):
        self._manager = manager
        self.created: List[PlaywrightDriver] = []

    def __call__(self) -> PlaywrightDriver:
        driver = self._manager.new_driver()
        self.created.append(driver)
        return driver


@pytest.fixture(scope="session")
def browser_manager() -> Generator[BrowserManager, None, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser for all tests in the session, reducing launch
    overhead. Browser name and headless mode come from the project
    configuration (PAGEBIND_BROWSER_NAME / PAGEBIND_BROWSER_HEADLESS).
    """
    init_logger()
    configuration = actual_configuration()
    manager = BrowserManager(
        headless=True if configuration.headless is None else bool(configuration.headless),
        browser_type=configuration.browser or "chromium",
    )
    manager.start()
    yield manager
    manager.close()


@pytest.fixture
def driver_factory(browser_manager: BrowserManager) -> DriverFactory:
    """Fresh browser context per test."""
    return DriverFactory(browser_manager)


@pytest.fixture
def shop() -> ShopSite:
    return ShopSite()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot when a UI test fails.

    The screenshot is taken from the last driver the test opened and
    attached to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    factory = getattr(item, "funcargs", {}).get("driver_factory")
    if not factory or not factory.created:
        return

    driver = factory.created[-1]
    try:
        screenshot = driver.page.screenshot(full_page=True)
    except Exception as e:
        # The test may have quit the browser already.
        logger.warning(f"Failed to capture screenshot on failure: {e}")
        return

    allure.attach(
        screenshot,
        name="failure_screenshot",
        attachment_type=allure.attachment_type.PNG,
    )
