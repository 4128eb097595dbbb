"""
================================================================================
Page
================================================================================

Base class for page objects built from declared locators.

Lifecycle:
    UNBOUND     constructed, nothing loaded yet
    NAVIGATED   its URL was loaded in the session's browser
    READY       await_ready() and assert_ready() passed
    DISCARDED   scope left; cached elements dropped

A page is bound to the thread and driver of the session active when it is
created (or first used). Every element read checks that binding:
    - no session on the calling thread      -> NoActiveSession
    - session active, but another thread or
      another driver owns the page          -> ThreadConfinementViolation

Usage:
    class InventoryPage(Page):
        path = "/inventory.html"
        ready = ReadinessDescriptor(Locator(Strategy.CLASS_NAME, "inventory_list"))

        items = class_names("inventory_item")

        def assert_ready(self):
            assert self.driver.current_url.endswith(self.path)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import threading
from enum import Enum
from typing import Any, Dict, Optional

import allure
from loguru import logger

from .decorators.base import DecoratorChain
from .descriptors import LocatorSpec, _Accessor, accessor_type
from .element_cache import CacheEntry, ElementCache, Resolved
from .errors import NoActiveSession, PageBindError, ThreadConfinementViolation
from .readiness import ReadinessDescriptor
from .resolution import ResolutionEngine
from .session import Session, session_context
from .site import Site


_ABSOLUTE_URL = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def is_absolute_url(url: str) -> bool:
    return bool(_ABSOLUTE_URL.match(url))


def join_url(base: str, path: Optional[str]) -> str:
    """
    Join a base URL and a path with exactly one slash.

    Absolute paths are returned unchanged; a blank path yields the base.
    """
    if path is None or not path.strip():
        return base
    if is_absolute_url(path):
        return path
    if path == base:
        return path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


class PageState(Enum):
    UNBOUND = "unbound"
    NAVIGATED = "navigated"
    READY = "ready"
    DISCARDED = "discarded"


class Page:
    """
    Base page object.

    Class attributes:
        path: Relative path (or absolute URL) of the page; None means the
            site's base URL
        ready: Optional descriptor of the element that signals readiness

    Args:
        engine: Resolution engine for this page's lookups
    """

    path: Optional[str] = None
    ready: Optional[ReadinessDescriptor] = None

    def __init__(self, engine: Optional[ResolutionEngine] = None):
        self._cache = ElementCache(engine)
        self._accessors: Dict[str, _Accessor] = {}
        self._state = PageState.UNBOUND
        self._owner_thread: Optional[threading.Thread] = None
        self._driver: Any = None

        session = session_context.current()
        if session is not None:
            session.assert_thread(f"{type(self).__name__}()")
            self._bind(session)

    # -------------------------------------------------------------------------
    # Binding and confinement
    # -------------------------------------------------------------------------

    def _bind(self, session: Session) -> None:
        self._owner_thread = threading.current_thread()
        self._driver = session.driver
        logger.trace(f"{type(self).__name__} bound to {session!r}")

    @property
    def _owner_thread_name(self) -> str:
        return self._owner_thread.name if self._owner_thread is not None else "?"

    @property
    def is_bound(self) -> bool:
        return self._driver is not None

    def _session(self, operation: str) -> Session:
        """
        Active session, verified to own this page.

        Raises:
            NoActiveSession: No session on the calling thread
            ThreadConfinementViolation: The page belongs to another thread
                or another driver
            PageBindError: The page was discarded
        """
        current_thread = threading.current_thread().name
        session = session_context.current()
        if session is None:
            raise NoActiveSession(operation, current_thread)

        if self._state is PageState.DISCARDED:
            raise PageBindError(f"{operation}: {type(self).__name__} was discarded")

        if self._driver is None:
            session.assert_thread(operation)
            self._bind(session)

        if threading.current_thread() is not self._owner_thread:
            raise ThreadConfinementViolation(
                operation=operation,
                owner_thread=self._owner_thread_name,
                current_thread=current_thread,
                detail=f"{type(self).__name__} was created on another thread.",
            )
        session.assert_thread(operation)
        if session.driver is not self._driver:
            raise ThreadConfinementViolation(
                operation=operation,
                owner_thread=self._owner_thread_name,
                current_thread=current_thread,
                detail=(
                    f"{type(self).__name__} is bound to a different driver "
                    f"than the active session."
                ),
            )
        return session

    @property
    def driver(self) -> Any:
        """Driver of the active session, checked against this page."""
        return self._session(f"{type(self).__name__}.driver").driver

    @property
    def site(self) -> Site:
        return self._session(f"{type(self).__name__}.site").site

    @property
    def state(self) -> PageState:
        return self._state

    # -------------------------------------------------------------------------
    # Declared locators
    # -------------------------------------------------------------------------

    def _accessor(self, spec: LocatorSpec) -> _Accessor:
        key = spec.name or str(id(spec))
        accessor = self._accessors.get(key)
        if accessor is None:
            accessor = accessor_type(spec)(self, spec)
            self._accessors[key] = accessor
        return accessor

    def _entry_for(self, spec: LocatorSpec, session: Optional[Session] = None) -> CacheEntry:
        key = spec.name or str(id(spec))
        if session is None:
            session = self._session(f"{type(self).__name__}.{key}")
        site = session.site

        def create() -> CacheEntry:
            if spec.ready_when is not None:
                predicate = spec.ready_when
            else:
                predicate = site.elements_ready if spec.multiple else site.element_ready
            return CacheEntry(
                name=key,
                locator=spec.locator,
                policy=spec.wait_policy or site.wait_policy,
                predicate=predicate,
                cache_enabled=spec.cache,
                multiple=spec.multiple,
            )

        return self._cache.entry(key, create)

    def _element_for(self, spec: LocatorSpec, force: bool = False) -> Resolved:
        session = self._session(f"{type(self).__name__}.{spec.name}")
        entry = self._entry_for(spec, session)
        chain = session.site.decorator_chain()
        driver = session.driver
        if force:
            return self._cache.resolve(entry, driver, chain, driver)
        return self._cache.get(entry, driver, chain, driver)

    def _peek_entry(self, spec: LocatorSpec) -> Optional[CacheEntry]:
        return self._cache.peek(spec.name or str(id(spec)))

    def _peek_chain(self) -> Optional[DecoratorChain]:
        session = session_context.current()
        if session is None or not session.is_owner():
            return None
        return session.site.decorator_chain()

    @property
    def cache(self) -> ElementCache:
        return self._cache

    # -------------------------------------------------------------------------
    # Navigation and readiness
    # -------------------------------------------------------------------------

    def url_for(self, site: Site) -> str:
        """Absolute URL of this page on `site`."""
        if self.path and is_absolute_url(self.path) and self.path != site.base_url:
            logger.warning(
                f"{type(self).__name__} uses absolute URL '{self.path}' which overrides "
                f"base_url '{site.base_url}'."
            )
        return join_url(site.base_url, self.path)

    @property
    def url(self) -> str:
        return self.url_for(self.site)

    def navigate(self, path: Optional[str] = None) -> "Page":
        """Load this page (or `path` relative to the site) in the session's browser."""
        session = self._session(f"{type(self).__name__}.navigate")
        target = join_url(session.site.base_url, path) if path is not None else self.url_for(session.site)
        logger.debug(f"Navigating to {target}")
        with allure.step(f"Navigate to {target}"):
            session.driver.get(target)
        self._cache.invalidate_all()
        self.mark_navigated()
        return self

    def mark_navigated(self) -> None:
        self._state = PageState.NAVIGATED

    def await_ready(self) -> "Page":
        """
        Block until the page's readiness element satisfies its condition.

        Pages without a `ready` descriptor are ready immediately.

        Raises:
            ResolutionTimeout: Readiness not reached within the wait policy
        """
        session = self._session(f"{type(self).__name__}.await_ready")
        descriptor = self.ready
        if descriptor is not None:
            self._cache.engine.resolve(
                session.driver,
                descriptor.locator,
                descriptor.wait_policy or session.site.wait_policy,
                descriptor.predicate,
                chain=session.site.decorator_chain(),
                driver=session.driver,
            )
        self._state = PageState.READY
        return self

    def assert_ready(self) -> None:
        """Page-specific readiness assertions. No-op by default."""

    def ensure_ready(self) -> "Page":
        self.await_ready()
        self.assert_ready()
        return self

    def discard(self) -> None:
        """Drop cached elements; further use of the page fails."""
        self._cache.clear()
        self._accessors.clear()
        self._state = PageState.DISCARDED

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.value}, path={self.path!r})"


__all__ = [
    "Page",
    "PageState",
    "is_absolute_url",
    "join_url",
]
