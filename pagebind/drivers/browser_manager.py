"""
================================================================================
Browser Manager
================================================================================

Playwright browser lifecycle for pagebind sessions.

Features:
    - One browser per manager, one isolated context per driver
    - Browser configuration presets
    - Usable directly as a driver factory for web_test()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.sync_api import Browser, BrowserContext, Playwright, sync_playwright

from ..configuration.project import actual_configuration
from .playwright_driver import PlaywrightDriver


class BrowserManager:
    """
    Manages a Playwright browser and hands out drivers.

    Must be started, used and closed on the same thread.

    Usage:
        with BrowserManager(headless=False) as manager:
            web_test(SHOP, block, driver_factory=manager.new_driver)

        # Or let the driver own the browser
        web_test(SHOP, block, driver_factory=default_driver_factory)
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
            "--disable-features=IsolateOrigins,site-per-process",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
        """
        self.headless = headless
        self.browser_type = browser_type

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = sync_playwright().start()

        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        self._browser = browser_launcher.launch(**launch_options)
        logger.info(f"Browser started: {self.browser_type} (headless={self.headless})")

    def close(self) -> None:
        """Close all contexts, the browser and Playwright."""
        for context in self._contexts:
            try:
                context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = self._browser.new_context(**{**self.DEFAULT_CONTEXT_OPTIONS, **options})
        self._contexts.append(context)
        return context

    def new_driver(self, **context_options: Any) -> PlaywrightDriver:
        """Driver on a fresh page in a fresh context."""
        context = self.new_context(**context_options)
        return PlaywrightDriver(context.new_page())

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


def default_driver_factory() -> PlaywrightDriver:
    """
    Launch a browser configured by the project configuration.

    The returned driver stops the browser when it quits.
    """
    configuration = actual_configuration()
    manager = BrowserManager(
        headless=True if configuration.headless is None else bool(configuration.headless),
        browser_type=configuration.browser or "chromium",
    )
    manager.start()
    context = manager.new_context()
    return PlaywrightDriver(context.new_page(), on_quit=manager.close)


__all__ = [
    "BrowserManager",
    "default_driver_factory",
]
