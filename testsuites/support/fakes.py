"""
================================================================================
Fake Driver and Clock
================================================================================

In-memory stand-ins for a browser driver, used by the unit suites.

FakeDriver answers lookups from scripted outcomes per locator:

    driver.register(locator, NoSuchElementError(), element)
    driver.find_element(locator)   # raises NoSuchElementError
    driver.find_element(locator)   # element
    driver.find_element(locator)   # element (last outcome repeats)

Every driver call is recorded in `driver.calls` in order.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pagebind.errors import NoSuchElementError, StaleElementError
from pagebind.locator import Locator


class FakeClock:
    """Monotonic clock advanced only by sleep()."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeElement:
    """Element whose state tests flip directly."""

    def __init__(
        self,
        tag: str = "div",
        text: str = "",
        displayed: bool = True,
        enabled: bool = True,
        selected: bool = False,
        attributes: Optional[Dict[str, str]] = None,
        label: str = "",
    ):
        self.tag = tag
        self._text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.attributes = dict(attributes or {})
        self.label = label or tag
        self.stale = False
        self.action_error: Optional[BaseException] = None
        self.actions: List[tuple] = []
        self.probes = 0

    def _check(self) -> None:
        if self.stale:
            raise StaleElementError(f"{self.label} is no longer attached")

    @property
    def tag_name(self) -> str:
        self.probes += 1
        self._check()
        return self.tag

    @property
    def text(self) -> str:
        self._check()
        return self._text

    def get_attribute(self, name: str) -> Optional[str]:
        self._check()
        return self.attributes.get(name)

    def is_displayed(self) -> bool:
        self._check()
        return self.displayed

    def is_enabled(self) -> bool:
        self._check()
        return self.enabled

    def is_selected(self) -> bool:
        self._check()
        return self.selected

    def _act(self, name: str, *args: Any) -> None:
        self._check()
        if self.action_error is not None:
            raise self.action_error
        self.actions.append((name,) + args)

    def click(self) -> None:
        self._act("click")

    def send_keys(self, *keys: str) -> None:
        self._act("send_keys", *keys)

    def clear(self) -> None:
        self._act("clear")

    def submit(self) -> None:
        self._act("submit")

    def find_element(self, locator: Locator) -> "FakeElement":
        self._check()
        raise NoSuchElementError(f"No child for {locator}")

    def find_elements(self, locator: Locator) -> List["FakeElement"]:
        self._check()
        return []

    def __repr__(self) -> str:
        return f"FakeElement({self.label})"


class FakeDriver:
    """Scripted driver recording every call."""

    def __init__(self, name: str = "driver"):
        self.name = name
        self.calls: List[tuple] = []
        self.cookies: List[Any] = []
        self.url = "about:blank"
        self.handles: List[str] = ["main"]
        self.current_handle = "main"
        self.script_result: Any = ""
        self.quit_error: Optional[BaseException] = None
        self.quit_called = False
        self._outcomes: Dict[Locator, List[Any]] = {}

    # -------------------------------------------------------------------------
    # Scripting
    # -------------------------------------------------------------------------

    def register(self, locator: Locator, *outcomes: Any) -> None:
        """Outcomes: element, list of elements, None (nothing found) or an exception."""
        self._outcomes[locator] = list(outcomes)

    def _next(self, locator: Locator) -> Any:
        outcomes = self._outcomes.get(locator)
        if not outcomes:
            return None
        if len(outcomes) > 1:
            return outcomes.pop(0)
        return outcomes[0]

    def lookups(self, locator: Locator) -> int:
        return sum(1 for c in self.calls if c[0] in ("find_element", "find_elements") and c[1] == locator)

    # -------------------------------------------------------------------------
    # Driver surface
    # -------------------------------------------------------------------------

    def find_element(self, locator: Locator) -> Any:
        self.calls.append(("find_element", locator))
        outcome = self._next(locator)
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, list):
            outcome = outcome[0] if outcome else None
        if outcome is None:
            raise NoSuchElementError(f"No element for {locator}")
        return outcome

    def find_elements(self, locator: Locator) -> List[Any]:
        self.calls.append(("find_elements", locator))
        outcome = self._next(locator)
        if isinstance(outcome, BaseException):
            raise outcome
        if outcome is None:
            return []
        if isinstance(outcome, list):
            return list(outcome)
        return [outcome]

    @property
    def current_url(self) -> str:
        return self.url

    def get(self, url: str) -> None:
        self.calls.append(("get", url))
        self.url = url

    def refresh(self) -> None:
        self.calls.append(("refresh",))

    def add_cookie(self, cookie: Any) -> None:
        self.calls.append(("add_cookie", cookie.name))
        self.cookies.append(cookie)

    def delete_cookie(self, name: str) -> None:
        self.calls.append(("delete_cookie", name))
        self.cookies = [c for c in self.cookies if c.name != name]

    def delete_all_cookies(self) -> None:
        self.calls.append(("delete_all_cookies",))
        self.cookies = []

    @property
    def window_handles(self) -> List[str]:
        return list(self.handles)

    @property
    def current_window_handle(self) -> str:
        return self.current_handle

    def switch_to_window(self, handle: str) -> None:
        self.calls.append(("switch_to_window", handle))
        self.current_handle = handle

    def execute_script(self, script: str, *args: Any) -> Any:
        self.calls.append(("execute_script",) + args[1:])
        return self.script_result

    def quit(self) -> None:
        self.calls.append(("quit",))
        self.quit_called = True
        if self.quit_error is not None:
            raise self.quit_error

    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def __repr__(self) -> str:
        return f"FakeDriver({self.name})"


__all__ = [
    "FakeClock",
    "FakeElement",
    "FakeDriver",
]
