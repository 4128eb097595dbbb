"""
================================================================================
Element Cache
================================================================================

Per-page cache of resolved elements, one entry per declared locator.

Read path:
    1. cache enabled and an element was resolved before
         -> probe it; if still attached, return the same handle
            (rewrapped when the decorator chain changed since)
    2. stale, cache disabled or never resolved
         -> resolve through the ResolutionEngine and store the result

A stale probe invalidates the entry and triggers exactly one fresh
resolution. Every resolution writes `last_resolved`, including reads with
caching disabled, so a later cached read sees the newest element.

Resolved elements are wrapped in DecoratedElement so that every action on
them runs through the site's decorator chain.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from loguru import logger

from .decorators.base import EMPTY_CHAIN, DecoratorChain, Operation, OperationKind
from .errors import StaleElementError
from .locator import Locator
from .readiness import DEFAULT_ELEMENT_READY, DEFAULT_ELEMENTS_READY
from .resolution import ResolutionEngine
from .wait_policy import WaitPolicy


class DecoratedElement:
    """
    Element handle whose actions and queries run through a decorator chain.

    Wraps the raw element returned by the driver adapter; `raw` gives access
    to it for adapter-specific calls.
    """

    __slots__ = ("raw", "locator", "_chain", "_driver")

    def __init__(
        self,
        raw: Any,
        locator: Optional[Locator] = None,
        chain: DecoratorChain = EMPTY_CHAIN,
        driver: Any = None,
    ):
        self.raw = raw
        self.locator = locator
        self._chain = chain
        self._driver = driver

    def _run(self, name: str, kind: OperationKind, call: Callable[[], Any], *args: Any) -> Any:
        return self._chain.apply(
            Operation(
                name=name,
                call=call,
                kind=kind,
                locator=self.locator,
                element=self.raw,
                driver=self._driver,
                args=args,
            )
        )

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def click(self) -> None:
        self._run("click", OperationKind.ACTION, self.raw.click)

    def send_keys(self, *keys: str) -> None:
        self._run("send_keys", OperationKind.ACTION, lambda: self.raw.send_keys(*keys), *keys)

    def clear(self) -> None:
        self._run("clear", OperationKind.ACTION, self.raw.clear)

    def submit(self) -> None:
        self._run("submit", OperationKind.ACTION, self.raw.submit)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._run("text", OperationKind.QUERY, lambda: self.raw.text)

    @property
    def tag_name(self) -> str:
        return self._run("tag_name", OperationKind.QUERY, lambda: self.raw.tag_name)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._run(
            "get_attribute", OperationKind.QUERY, lambda: self.raw.get_attribute(name), name
        )

    def is_displayed(self) -> bool:
        return self._run("is_displayed", OperationKind.QUERY, self.raw.is_displayed)

    def is_enabled(self) -> bool:
        return self._run("is_enabled", OperationKind.QUERY, self.raw.is_enabled)

    def is_selected(self) -> bool:
        return self._run("is_selected", OperationKind.QUERY, self.raw.is_selected)

    # -------------------------------------------------------------------------
    # Nested lookups
    # -------------------------------------------------------------------------

    @property
    def chain(self) -> DecoratorChain:
        return self._chain

    def rebind(self, chain: DecoratorChain, driver: Any = None) -> "DecoratedElement":
        """Same raw element, different decorator chain."""
        return DecoratedElement(self.raw, self.locator, chain, driver if driver is not None else self._driver)

    def find_element(self, locator: Locator) -> "DecoratedElement":
        raw = self._run(
            "find_element", OperationKind.LOOKUP, lambda: self.raw.find_element(locator)
        )
        return DecoratedElement(raw, locator, self._chain, self._driver)

    def find_elements(self, locator: Locator) -> List["DecoratedElement"]:
        raws = self._run(
            "find_elements", OperationKind.LOOKUP, lambda: list(self.raw.find_elements(locator))
        )
        return [DecoratedElement(raw, locator, self._chain, self._driver) for raw in raws]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DecoratedElement):
            return self.raw == other.raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"DecoratedElement({self.locator!r}, decorators={self._chain.class_names()})"


Resolved = Union[DecoratedElement, List[DecoratedElement]]


@dataclass(eq=False)
class CacheEntry:
    """
    Cache slot owned by exactly one declared locator of one page.

    Attributes:
        name: Attribute name on the page class
        locator: What to look for
        policy: Wait policy used for resolution
        predicate: Readiness predicate
        cache_enabled: Reuse the last resolved element on reads
        multiple: Resolve a list instead of a single element
        last_resolved: Most recent resolution result
        resolutions: Number of completed resolutions
    """

    name: str
    locator: Locator
    policy: WaitPolicy
    predicate: Callable[[Any], bool]
    cache_enabled: bool = True
    multiple: bool = False
    last_resolved: Optional[Resolved] = None
    resolutions: int = 0

    def invalidate(self) -> None:
        self.last_resolved = None


class ElementCache:
    """
    Owns the CacheEntries of one page instance.

    Entries are created on first access and die with the page.
    """

    def __init__(self, engine: Optional[ResolutionEngine] = None):
        self._engine = engine or ResolutionEngine()
        self._entries: Dict[str, CacheEntry] = {}

    @property
    def engine(self) -> ResolutionEngine:
        return self._engine

    def entry(self, name: str, factory: Callable[[], CacheEntry]) -> CacheEntry:
        """Existing entry for `name`, or a new one built by `factory`."""
        entry = self._entries.get(name)
        if entry is None:
            entry = factory()
            self._entries[name] = entry
        return entry

    def get(
        self,
        entry: CacheEntry,
        root: Any,
        chain: DecoratorChain = EMPTY_CHAIN,
        driver: Any = None,
    ) -> Resolved:
        """
        Element (or list) for `entry`, from cache when still attached.

        Raises:
            ResolutionTimeout: Not ready within the entry's wait policy
        """
        cached = entry.last_resolved
        if entry.cache_enabled and cached is not None:
            if not self._is_stale(cached):
                if self._chain_changed(cached, chain):
                    cached = self._rebind(cached, chain, driver)
                    entry.last_resolved = cached
                return cached
            logger.debug(f"Cached element for {entry.name} ({entry.locator}) is stale, re-resolving")
            entry.invalidate()

        return self.resolve(entry, root, chain, driver)

    def resolve(
        self,
        entry: CacheEntry,
        root: Any,
        chain: DecoratorChain = EMPTY_CHAIN,
        driver: Any = None,
    ) -> Resolved:
        """Resolve `entry` now, ignoring the cache, and store the result."""
        found = self._engine.resolve(
            root,
            entry.locator,
            entry.policy,
            self._wrap_predicate(entry),
            multiple=entry.multiple,
            chain=chain,
            driver=driver,
        )
        if entry.multiple:
            resolved: Resolved = [DecoratedElement(raw, entry.locator, chain, driver) for raw in found]
        else:
            resolved = DecoratedElement(found, entry.locator, chain, driver)

        entry.last_resolved = resolved
        entry.resolutions += 1
        return resolved

    def invalidate_all(self) -> None:
        for entry in self._entries.values():
            entry.invalidate()

    def clear(self) -> None:
        self._entries.clear()

    def peek(self, name: str) -> Optional[CacheEntry]:
        """Entry for `name` if it was created, without creating it."""
        return self._entries.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _wrap_predicate(entry: CacheEntry) -> Callable[[Any], bool]:
        predicate = entry.predicate
        if predicate is None:
            return DEFAULT_ELEMENTS_READY if entry.multiple else DEFAULT_ELEMENT_READY
        return predicate

    @staticmethod
    def _chain_changed(resolved: Resolved, chain: DecoratorChain) -> bool:
        """Test-level decorators may differ from the ones the element was wrapped with."""
        sample = resolved[0] if isinstance(resolved, list) and resolved else resolved
        if not isinstance(sample, DecoratedElement):
            return False
        return sample.chain.decorators != chain.decorators

    @staticmethod
    def _rebind(resolved: Resolved, chain: DecoratorChain, driver: Any) -> Resolved:
        if isinstance(resolved, list):
            return [e.rebind(chain, driver) for e in resolved]
        return resolved.rebind(chain, driver)

    @staticmethod
    def _is_stale(resolved: Resolved) -> bool:
        """Probe with a tag name read; only a stale-element failure counts."""
        elements: Sequence[DecoratedElement] = (
            resolved if isinstance(resolved, list) else [resolved]
        )
        try:
            for element in elements:
                element.raw.tag_name
        except StaleElementError:
            return True
        return False


__all__ = [
    "DecoratedElement",
    "CacheEntry",
    "ElementCache",
]
