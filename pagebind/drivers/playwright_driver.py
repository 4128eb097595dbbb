"""
================================================================================
Playwright Driver
================================================================================

Driver adapter over Playwright's sync API.

Locator strategies are translated into Playwright selectors:

    id                  [id="v"]
    name                [name="v"]
    class name          [class~="v"]
    css selector        v
    xpath               xpath=v
    link text           a:text-is("v")
    partial link text   a:has-text("v")
    tag name            v
    id or name          [id="v"], [name="v"]

Playwright errors are mapped to the driver failure kinds so the resolution
engine can tell "not there yet" apart from real failures.

Playwright's sync API is itself bound to the thread that started it, which
matches pagebind's one-session-per-thread model.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page

from ..errors import (
    DriverError,
    ElementClickInterceptedError,
    ElementNotInteractableError,
    NoSuchElementError,
    StaleElementError,
)
from ..locator import Locator, Strategy


# Timeout for element actions; waiting is owned by the resolution engine.
ACTION_TIMEOUT_MS = 5000

# Runs a Selenium-style script body with an `arguments` array.
_SCRIPT_RUNNER = "([body, args]) => new Function(body).apply(null, args)"

_SUBMIT_SCRIPT = "el => { const f = el.form || el; f.requestSubmit ? f.requestSubmit() : f.submit(); }"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_selector(locator: Locator) -> str:
    """Playwright selector equivalent to `locator`."""
    strategy, value = locator.strategy, locator.value
    if strategy is Strategy.ID:
        return f"[id={_quote(value)}]"
    if strategy is Strategy.NAME:
        return f"[name={_quote(value)}]"
    if strategy is Strategy.CLASS_NAME:
        return f"[class~={_quote(value)}]"
    if strategy is Strategy.CSS_SELECTOR:
        return value
    if strategy is Strategy.XPATH:
        return f"xpath={value}"
    if strategy is Strategy.LINK_TEXT:
        return f"a:text-is({_quote(value)})"
    if strategy is Strategy.PARTIAL_LINK_TEXT:
        return f"a:has-text({_quote(value)})"
    if strategy is Strategy.TAG_NAME:
        return value
    if strategy is Strategy.ID_OR_NAME:
        return f"[id={_quote(value)}], [name={_quote(value)}]"
    raise ValueError(f"Unsupported strategy: {strategy}")


def translate_error(error: PlaywrightError, context: str = "") -> DriverError:
    """Map a Playwright error onto a driver failure kind."""
    message = str(error)
    lowered = message.lower()
    prefix = f"{context}: " if context else ""

    if "not attached" in lowered or "detached" in lowered:
        return StaleElementError(f"{prefix}{message}")
    if "intercepts pointer events" in lowered:
        return ElementClickInterceptedError(f"{prefix}{message}")
    if "not visible" in lowered or "not enabled" in lowered or "not editable" in lowered:
        return ElementNotInteractableError(f"{prefix}{message}")
    return DriverError(f"{prefix}{message}")


class PlaywrightElement:
    """Element protocol over a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle, locator: Optional[Locator] = None):
        self.handle = handle
        self.locator = locator

    def _call(self, operation: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except PlaywrightError as e:
            raise translate_error(e, f"{operation} {self.locator or ''}".strip()) from e

    def find_element(self, locator: Locator) -> "PlaywrightElement":
        handle = self._call("find_element", lambda: self.handle.query_selector(to_selector(locator)))
        if handle is None:
            raise NoSuchElementError(f"No element found for {locator}")
        return PlaywrightElement(handle, locator)

    def find_elements(self, locator: Locator) -> List["PlaywrightElement"]:
        handles = self._call(
            "find_elements", lambda: self.handle.query_selector_all(to_selector(locator))
        )
        return [PlaywrightElement(h, locator) for h in handles]

    @property
    def tag_name(self) -> str:
        tag = self._call("tag_name", lambda: self.handle.evaluate("el => el.isConnected ? el.tagName : null"))
        if tag is None:
            raise StaleElementError(f"Element is not attached to the DOM: {self.locator}")
        return str(tag).lower()

    @property
    def text(self) -> str:
        return self._call("text", self.handle.inner_text)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._call("get_attribute", lambda: self.handle.get_attribute(name))

    def is_displayed(self) -> bool:
        return self._call("is_displayed", self.handle.is_visible)

    def is_enabled(self) -> bool:
        return self._call("is_enabled", self.handle.is_enabled)

    def is_selected(self) -> bool:
        return self._call("is_selected", self.handle.is_checked)

    def click(self) -> None:
        self._call("click", lambda: self.handle.click(timeout=ACTION_TIMEOUT_MS))

    def send_keys(self, *keys: str) -> None:
        self._call("send_keys", lambda: self.handle.type("".join(keys), timeout=ACTION_TIMEOUT_MS))

    def clear(self) -> None:
        self._call("clear", lambda: self.handle.fill("", timeout=ACTION_TIMEOUT_MS))

    def submit(self) -> None:
        self._call(
            "submit",
            lambda: self.handle.evaluate(_SUBMIT_SCRIPT),
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PlaywrightElement):
            return self.handle == other.handle
        return NotImplemented

    def __hash__(self) -> int:
        return id(self.handle)

    def __repr__(self) -> str:
        return f"PlaywrightElement({self.locator!r})"


class PlaywrightDriver:
    """
    Driver protocol over a Playwright sync Page.

    Args:
        page: Playwright page to drive
        on_quit: Called after the page's context is closed (e.g. to stop
            the BrowserManager that launched it)
    """

    def __init__(self, page: Page, on_quit: Optional[Callable[[], None]] = None):
        self._page = page
        self._context = page.context
        self._on_quit = on_quit

    @property
    def page(self) -> Page:
        return self._page

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_element(self, locator: Locator) -> PlaywrightElement:
        try:
            handle = self._page.query_selector(to_selector(locator))
        except PlaywrightError as e:
            raise translate_error(e, f"find_element {locator}") from e
        if handle is None:
            raise NoSuchElementError(f"No element found for {locator}")
        return PlaywrightElement(handle, locator)

    def find_elements(self, locator: Locator) -> List[PlaywrightElement]:
        try:
            handles = self._page.query_selector_all(to_selector(locator))
        except PlaywrightError as e:
            raise translate_error(e, f"find_elements {locator}") from e
        return [PlaywrightElement(h, locator) for h in handles]

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def current_url(self) -> str:
        return self._page.url

    def get(self, url: str) -> None:
        logger.debug(f"Navigating to {url}")
        self._page.goto(url)

    def refresh(self) -> None:
        self._page.reload()

    # -------------------------------------------------------------------------
    # Cookies
    # -------------------------------------------------------------------------

    def add_cookie(self, cookie: Any) -> None:
        data = cookie.to_dict() if hasattr(cookie, "to_dict") else dict(cookie)
        entry = {"name": data["name"], "value": data["value"]}
        if data.get("domain"):
            entry["domain"] = data["domain"]
            entry["path"] = data.get("path", "/")
        else:
            entry["url"] = self._page.url
        if data.get("secure"):
            entry["secure"] = True
        if data.get("http_only"):
            entry["httpOnly"] = True
        if data.get("expiry") is not None:
            entry["expires"] = data["expiry"]
        self._context.add_cookies([entry])

    def delete_cookie(self, name: str) -> None:
        self._context.clear_cookies(name=name)

    def delete_all_cookies(self) -> None:
        self._context.clear_cookies()

    # -------------------------------------------------------------------------
    # Windows
    # -------------------------------------------------------------------------

    def _window_pages(self) -> List[Page]:
        return list(self._context.pages)

    @property
    def window_handles(self) -> List[str]:
        return [str(i) for i, _ in enumerate(self._window_pages())]

    @property
    def current_window_handle(self) -> str:
        return str(self._window_pages().index(self._page))

    def switch_to_window(self, handle: str) -> None:
        pages = self._window_pages()
        index = int(handle)
        if not 0 <= index < len(pages):
            raise DriverError(f"No such window: {handle}")
        self._page = pages[index]
        self._page.bring_to_front()

    # -------------------------------------------------------------------------
    # Scripts and teardown
    # -------------------------------------------------------------------------

    def execute_script(self, script: str, *args: Any) -> Any:
        converted = [a.handle if isinstance(a, PlaywrightElement) else a for a in args]
        try:
            return self._page.evaluate(_SCRIPT_RUNNER, [script, converted])
        except PlaywrightError as e:
            raise translate_error(e, "execute_script") from e

    def quit(self) -> None:
        try:
            self._context.close()
        finally:
            if self._on_quit is not None:
                self._on_quit()

    def __repr__(self) -> str:
        return f"PlaywrightDriver(url={self._page.url!r})"


__all__ = [
    "ACTION_TIMEOUT_MS",
    "to_selector",
    "translate_error",
    "PlaywrightElement",
    "PlaywrightDriver",
]
