"""
================================================================================
Decorator Chain
================================================================================

Ordered interception of driver and element operations.

Every lookup attempt made by the resolution engine and every action made
through an element handle is described by an Operation. Decorators wrap
operations; the chain composes them so that the first declared decorator is
the outermost one:

    chain = DecoratorChain([A, B])
    chain.apply(op)   # A-pre, B-pre, op, B-post, A-post

Decorators never change an operation's return value and never swallow its
failure.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from ..locator import Locator


T = TypeVar("T")


class OperationKind(Enum):
    """What an intercepted operation does."""

    LOOKUP = "lookup"    # find_element / find_elements
    ACTION = "action"    # click, send_keys, clear, submit
    QUERY = "query"      # text, attribute and state reads


@dataclass(frozen=True)
class Operation(Generic[T]):
    """
    A zero-argument call plus the metadata decorators need.

    Attributes:
        name: Operation name, e.g. "find_element" or "click"
        call: The work to run
        kind: Lookup, action or query
        locator: Locator involved, if any
        element: Raw element the action targets, if any
        driver: Driver that owns the element, used for script injection
        args: Positional arguments of the action, for tracing
    """

    name: str
    call: Callable[[], T]
    kind: OperationKind = OperationKind.ACTION
    locator: Optional[Locator] = None
    element: Any = None
    driver: Any = None
    args: Tuple[Any, ...] = field(default_factory=tuple)

    def __call__(self) -> T:
        return self.call()

    def with_call(self, call: Callable[[], T]) -> "Operation[T]":
        """Same metadata, different body."""
        return replace(self, call=call)


class Decorator(ABC):
    """
    Base class for cross-cutting interceptors.

    Subclasses implement `wrap`, returning an operation that runs their own
    logic around `operation()`. Wrappers must re-raise whatever the wrapped
    operation raises, after their own cleanup.
    """

    @abstractmethod
    def wrap(self, operation: Operation[T]) -> Operation[T]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return type(self).__name__


def compose(decorators: Sequence[Decorator]) -> Callable[[Operation[T]], Operation[T]]:
    """
    Combine decorators into a single operation transformer.

    Applied right-to-left so the first decorator ends up outermost.
    """
    ordered = tuple(decorators)

    def transform(operation: Operation[T]) -> Operation[T]:
        for decorator in reversed(ordered):
            operation = decorator.wrap(operation)
        return operation

    return transform


class DecoratorChain:
    """
    Immutable ordered list of decorators.

    Shared read-only by every session that uses the same site configuration.
    """

    __slots__ = ("_decorators", "_transform")

    def __init__(self, decorators: Iterable[Decorator] = ()):
        self._decorators: Tuple[Decorator, ...] = tuple(decorators)
        self._transform = compose(self._decorators)

    @property
    def decorators(self) -> Tuple[Decorator, ...]:
        return self._decorators

    def apply(self, operation: Operation[T]) -> T:
        """Run `operation` through every decorator and return its result."""
        if not self._decorators:
            return operation()
        return self._transform(operation)()

    def class_names(self) -> List[str]:
        return [type(d).__name__ for d in self._decorators]

    def __len__(self) -> int:
        return len(self._decorators)

    def __bool__(self) -> bool:
        return bool(self._decorators)

    def __repr__(self) -> str:
        return f"DecoratorChain({self.class_names()})"


EMPTY_CHAIN = DecoratorChain()


# =============================================================================
# Test-level decorators
# =============================================================================

class DecoratorManager:
    """
    Test-level decorators registered for the current thread.

    Site-level decorators come from the Site; these are added on top by a
    single test and never leak into other threads.

    Usage:
        with DecoratorManager.using(SlowMotionDecorator(0.5)):
            page.submit.click()
    """

    _local = threading.local()

    @classmethod
    def _store(cls) -> List[Decorator]:
        store = getattr(cls._local, "decorators", None)
        if store is None:
            store = []
            cls._local.decorators = store
        return store

    @classmethod
    def add_decorators(cls, *decorators: Decorator) -> None:
        cls._store().extend(decorators)
        logger.debug(f"Added test-level decorators: {list(decorators)}")

    @classmethod
    def clear_decorators(cls) -> None:
        cls._store().clear()

    @classmethod
    def get_all_decorators(cls) -> List[Decorator]:
        return list(cls._store())

    @classmethod
    @contextmanager
    def using(cls, *decorators: Decorator) -> Iterator[None]:
        """Register decorators for the duration of a with-block."""
        store = cls._store()
        previous = list(store)
        store.extend(decorators)
        try:
            yield
        finally:
            store[:] = previous


def merge_decorators(
    site_level: Iterable[Decorator],
    test_level: Iterable[Decorator],
) -> List[Decorator]:
    """
    Merge site and test decorators deterministically.

    Site first, then test. Duplicates by class are dropped (first one wins
    within a level) and a test-level decorator replaces a site-level one of
    the same class.
    """

    def dedup(items: Iterable[Decorator]) -> List[Decorator]:
        seen = set()
        result = []
        for item in items:
            if type(item) not in seen:
                seen.add(type(item))
                result.append(item)
        return result

    site_dedup = dedup(site_level)
    test_dedup = dedup(test_level)
    test_classes = {type(d) for d in test_dedup}
    return [d for d in site_dedup if type(d) not in test_classes] + test_dedup


__all__ = [
    "OperationKind",
    "Operation",
    "Decorator",
    "compose",
    "DecoratorChain",
    "EMPTY_CHAIN",
    "DecoratorManager",
    "merge_decorators",
]
