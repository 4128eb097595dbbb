"""
================================================================================
Driver Protocols
================================================================================

The narrow browser surface pagebind depends on.

Adapters (e.g. PlaywrightDriver) implement these protocols and report
failures with the driver failure kinds from pagebind.errors:
    NoSuchElementError, StaleElementError,
    ElementNotInteractableError, ElementClickInterceptedError

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol, runtime_checkable

from ..locator import Locator

if TYPE_CHECKING:
    from ..site import Cookie


@runtime_checkable
class SearchContext(Protocol):
    def find_element(self, locator: Locator) -> "Element": ...

    def find_elements(self, locator: Locator) -> List["Element"]: ...


@runtime_checkable
class Element(SearchContext, Protocol):
    @property
    def tag_name(self) -> str: ...

    @property
    def text(self) -> str: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_selected(self) -> bool: ...

    def click(self) -> None: ...

    def send_keys(self, *keys: str) -> None: ...

    def clear(self) -> None: ...

    def submit(self) -> None: ...


@runtime_checkable
class Driver(SearchContext, Protocol):
    @property
    def current_url(self) -> str: ...

    @property
    def window_handles(self) -> List[str]: ...

    @property
    def current_window_handle(self) -> str: ...

    def get(self, url: str) -> None: ...

    def refresh(self) -> None: ...

    def add_cookie(self, cookie: "Cookie") -> None: ...

    def delete_cookie(self, name: str) -> None: ...

    def delete_all_cookies(self) -> None: ...

    def switch_to_window(self, handle: str) -> None: ...

    def execute_script(self, script: str, *args: Any) -> Any: ...

    def quit(self) -> None: ...


__all__ = [
    "SearchContext",
    "Element",
    "Driver",
]
