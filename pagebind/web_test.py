"""
================================================================================
Web Test Entry Points
================================================================================

Browser session lifecycle for a test and page-to-page chaining.

Session setup (web_session / web_test):
    1. prepare() runs before any browser exists
    2. the driver factory creates the browser
    3. navigate to site.base_url to establish the origin
    4. if the site declares cookies: add them, then navigate to base_url
       again so the next request carries them
    5. bind Session(driver, site) to the current thread
    6. site.configure_site(), then site.on_session_ready(driver)
    7. run startup and the test block
    8. quit the browser unless keep_browser_open

Usage:
    def test_login(driver_factory):
        def block(entry):
            (entry.open(LoginPage)
                  .on(lambda page: page.login("standard_user", "secret_sauce"))
                  .verify(lambda inventory: inventory.items.get()))

        web_test(SHOP, block, driver_factory=driver_factory)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional, Type, TypeVar, Union
from urllib.parse import urlparse

import allure
from loguru import logger

from .configuration.project import actual_configuration
from .drivers.base import Driver
from .page import Page, PageState, join_url
from .session import Session, session_context, with_driver
from .site import Cookie, Site


DriverFactory = Callable[[], Driver]
P = TypeVar("P", bound=Page)
PageSource = Union[Type[P], Callable[[], P], P]


def _resolve_keep_open(keep_browser_open: Optional[bool]) -> bool:
    if keep_browser_open is not None:
        return keep_browser_open
    return bool(actual_configuration().keep_browser_open)


def _resolve_factory(driver_factory: Optional[DriverFactory]) -> DriverFactory:
    if driver_factory is not None:
        return driver_factory
    from .drivers.browser_manager import default_driver_factory

    return default_driver_factory


def _normalize_host(url: str) -> Optional[str]:
    host = urlparse(url).hostname
    if not host:
        return None
    host = host.lower()
    return host[4:] if host.startswith("www.") else host


# =============================================================================
# Session lifecycle
# =============================================================================

@contextmanager
def web_session(
    site: Site,
    driver_factory: Optional[DriverFactory] = None,
    keep_browser_open: Optional[bool] = None,
) -> Iterator["SiteEntry"]:
    """
    Open a browser for `site` and bind it to the current thread.

    Args:
        site: Site under test
        driver_factory: Creates the driver; defaults to a Playwright browser
            configured from the project configuration
        keep_browser_open: Skip quitting the browser on exit; defaults to the
            project configuration

    Yields:
        SiteEntry for opening pages
    """
    keep_open = _resolve_keep_open(keep_browser_open)
    driver = _resolve_factory(driver_factory)()
    if not isinstance(driver, Driver):
        # Unusable, but it may still hold a browser process.
        if callable(getattr(driver, "quit", None)):
            _quit_quietly(driver)
        raise TypeError(
            f"driver_factory returned {type(driver).__name__}, which does not implement the Driver protocol"
        )
    try:
        with allure.step(f"Open site {site.base_url}"):
            driver.get(site.base_url)
            if site.cookies:
                # Cookies bind to the loaded origin; the second load sends them.
                for cookie in site.cookies:
                    driver.add_cookie(cookie)
                driver.get(site.base_url)

        with session_context.with_session(Session(driver=driver, site=site)):
            site.configure_site()
            site.on_session_ready(driver)
            yield SiteEntry(driver)
    finally:
        if keep_open:
            logger.info("Leaving browser open (keep_browser_open=True)")
        else:
            _quit_quietly(driver)


def _quit_quietly(driver: Any) -> None:
    try:
        driver.quit()
    except Exception as e:
        logger.warning(f"Failed to quit browser: {e}")


def web_test(
    site: Site,
    block: Callable[..., Any],
    startup: Optional[Callable[..., Any]] = None,
    prepare: Optional[Callable[[], Any]] = None,
    driver_factory: Optional[DriverFactory] = None,
    keep_browser_open: Optional[bool] = None,
) -> Any:
    """
    Run one browser test against `site`.

    `startup` and `block` receive the SiteEntry, plus the value returned by
    `prepare` when one is given.

    Returns:
        Whatever `block` returns
    """
    extra = (prepare(),) if prepare is not None else ()

    with web_session(site, driver_factory, keep_browser_open) as entry:

        def run() -> Any:
            if startup is not None:
                startup(entry, *extra)
            return block(entry, *extra)

        return with_driver(entry.driver, run)


class WebTestStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class WebTestResult:
    """
    Outcome of web_test_result().

    Attributes:
        duration: Wall time of the whole test in seconds
        status: SUCCESS or FAILURE
        error: The failure, when status is FAILURE
    """

    duration: float
    status: WebTestStatus
    error: Optional[BaseException] = None

    @property
    def passed(self) -> bool:
        return self.status is WebTestStatus.SUCCESS

    def also_log_duration(
        self,
        formatter: Optional[Callable[[float], str]] = None,
        log: Optional[Callable[[str], Any]] = None,
    ) -> "WebTestResult":
        message = formatter(self.duration) if formatter else f"This test took: {self.duration:.3f}s"
        (log or logger.info)(message)
        return self


def web_test_result(
    site: Site,
    block: Callable[..., Any],
    startup: Optional[Callable[..., Any]] = None,
    prepare: Optional[Callable[[], Any]] = None,
    driver_factory: Optional[DriverFactory] = None,
    keep_browser_open: Optional[bool] = None,
    clock: Callable[[], float] = time.monotonic,
) -> WebTestResult:
    """Like web_test(), but reports failures as a result instead of raising."""
    started = clock()
    try:
        web_test(site, block, startup, prepare, driver_factory, keep_browser_open)
    except Exception as e:
        logger.error(f"Web test failed: {type(e).__name__}: {e}")
        return WebTestResult(clock() - started, WebTestStatus.FAILURE, e)
    return WebTestResult(clock() - started, WebTestStatus.SUCCESS)


# =============================================================================
# Site entry
# =============================================================================

class SiteEntry:
    """
    Driver-bound entry point for opening pages within a session.

    Every call checks that a session is active on the calling thread.
    """

    def __init__(self, driver: Any):
        self._driver = driver

    @property
    def driver(self) -> Any:
        return self._driver

    def _require(self, operation: str) -> Session:
        return session_context.require(operation)

    @property
    def site(self) -> Site:
        return self._require("SiteEntry.site").site

    # -------------------------------------------------------------------------
    # Cookies and navigation
    # -------------------------------------------------------------------------

    def add_cookie(self, cookie: Cookie) -> None:
        self._require("SiteEntry.add_cookie")
        self._driver.add_cookie(cookie)

    def delete_cookie(self, name: str) -> None:
        self._require("SiteEntry.delete_cookie")
        self._driver.delete_cookie(name)

    def delete_all_cookies(self) -> None:
        self._require("SiteEntry.delete_all_cookies")
        self._driver.delete_all_cookies()

    def apply_cookies(self, cookies: Iterable[Cookie]) -> None:
        cookies = list(cookies)
        if not cookies:
            return
        self._require("SiteEntry.apply_cookies")
        for cookie in cookies:
            self._driver.add_cookie(cookie)

    def navigate_to(self, url: str) -> None:
        self._require("SiteEntry.navigate_to")
        self._driver.get(url)

    # -------------------------------------------------------------------------
    # Windows
    # -------------------------------------------------------------------------

    def window_handles(self) -> List[str]:
        self._require("SiteEntry.window_handles")
        return list(self._driver.window_handles)

    def current_window_handle(self) -> str:
        self._require("SiteEntry.current_window_handle")
        return self._driver.current_window_handle

    def switch_to_window(self, handle: str) -> None:
        self._require("SiteEntry.switch_to_window")
        self._driver.switch_to_window(handle)

    def switch_to_newest_window_since(self, original_window: str) -> None:
        """Switch to the newest window if one opened after `original_window`."""
        handles = self.window_handles()
        if len(handles) > 1 and handles[-1] != original_window:
            self._driver.switch_to_window(handles[-1])

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    @staticmethod
    def _instantiate(page: PageSource) -> Page:
        if isinstance(page, Page):
            return page
        created = page()
        if not isinstance(created, Page):
            raise TypeError(f"Expected a Page, got {type(created).__name__}")
        return created

    def open(self, page: PageSource, path: Optional[str] = None) -> "PageScope":
        """
        Navigate to a page and wait until it is ready.

        Args:
            page: Page class, factory or instance
            path: Overrides the page's own path
        """
        session = self._require("SiteEntry.open")
        target = self._instantiate(page)
        url = join_url(session.site.base_url, path) if path is not None else target.url_for(session.site)

        with allure.step(f"Open {type(target).__name__} at {url}"):
            self._driver.get(url)
            target.mark_navigated()
            with_driver(self._driver, target.ensure_ready)
        return PageScope(target, self)

    def on(self, page: PageSource) -> "PageScope":
        """
        Attach to a page already loaded in the current tab.

        Raises:
            ValueError: The tab's host differs from the site's (ignoring "www.")
        """
        session = self._require("SiteEntry.on")
        target = self._instantiate(page)

        current_host = _normalize_host(self._driver.current_url)
        site_host = _normalize_host(session.site.base_url)
        if current_host is None or site_host is None or current_host != site_host:
            raise ValueError(
                f"Current tab origin does not match site origin "
                f"(tab={self._driver.current_url!r}, site={session.site.base_url!r})"
            )

        with allure.step(f"On {type(target).__name__}"):
            target.mark_navigated()
            with_driver(self._driver, target.ensure_ready)
        return PageScope(target, self)


# =============================================================================
# Page chaining
# =============================================================================

class PageScope:
    """
    A ready page plus the entry it was opened through.

    Usage:
        (entry.open(LoginPage)
              .then(lambda page: page.username.send_keys("standard_user"))
              .on(lambda page: page.submit())
              .verify(lambda inventory: ...))
    """

    def __init__(self, page: Page, entry: SiteEntry):
        self.page = page
        self.entry = entry

    def on(self, action: Callable[[Page], Page]) -> "PageScope":
        """Run `action` and continue on the page it returns."""

        def step() -> PageScope:
            self.page.assert_ready()
            following = action(self.page)
            if not isinstance(following, Page):
                raise TypeError(
                    f"on() action must return the next Page, got {type(following).__name__}"
                )
            if following.state is PageState.UNBOUND:
                following.mark_navigated()
            following.ensure_ready()
            return PageScope(following, self.entry)

        return with_driver(self.entry.driver, step)

    def then(self, action: Callable[[Page], Any]) -> "PageScope":
        """Run `action` and stay on the same page."""

        def step() -> None:
            self.page.assert_ready()
            action(self.page)

        with_driver(self.entry.driver, step)
        return self

    def verify(self, assertions: Callable[[Page], Any]) -> "PageScope":
        """Run assertions against the page; failures propagate."""
        return self.then(assertions)

    def switch_to(
        self,
        site: Site,
        block: Callable[[SiteEntry], Any],
        navigate_to_base: bool = True,
        cookies: Optional[Iterable[Cookie]] = None,
    ) -> "SwitchBackScope":
        """
        Continue on another site with the same browser.

        A newly opened window is selected first. The session is rebound to
        `site` until switch_back().
        """
        entry = self.entry
        original_window = entry.current_window_handle()
        original_site = session_context.require("PageScope.switch_to").site

        with allure.step(f"Switch to {site!r}"):
            entry.switch_to_newest_window_since(original_window)
            session_context.replace_current(Session(driver=entry.driver, site=site))

            if cookies:
                entry.apply_cookies(cookies)
            if navigate_to_base:
                entry.navigate_to(site.base_url)

            site.configure_site()
            site.on_session_ready(entry.driver)
            block(entry)

        return SwitchBackScope(entry.driver, original_site, original_window, self.page)


class SwitchBackScope:
    """Returns to the window and site that were active before switch_to()."""

    def __init__(self, driver: Any, original_site: Site, original_window: str, original_page: Page):
        self._driver = driver
        self._original_site = original_site
        self._original_window = original_window
        self._original_page = original_page

    def switch_back(self, block: Optional[Callable[[Page], Any]] = None) -> PageScope:
        session_context.require("SwitchBackScope.switch_back")

        with allure.step(f"Switch back to {self._original_site!r}"):
            self._driver.switch_to_window(self._original_window)
            session_context.replace_current(Session(driver=self._driver, site=self._original_site))

            self._original_site.configure_site()
            self._original_site.on_session_ready(self._driver)

            if block is not None:
                with_driver(self._driver, block, self._original_page)
        return PageScope(self._original_page, SiteEntry(self._driver))


__all__ = [
    "DriverFactory",
    "web_session",
    "web_test",
    "web_test_result",
    "WebTestResult",
    "WebTestStatus",
    "SiteEntry",
    "PageScope",
    "SwitchBackScope",
]
