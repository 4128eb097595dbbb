"""
================================================================================
Logger Decorator
================================================================================

Structured tracing of lookups and element actions.

Each intercepted operation produces a "before" event and either an "after"
or an "error" event. Events go to loguru (bound with operation metadata)
and, optionally, to a TraceLog shared between test threads.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from loguru import logger

from .base import Decorator, Operation, OperationKind, T


MAX_PREVIEW_CHARS = 20
ELLIPSIS = "…"


@dataclass(frozen=True)
class TraceEvent:
    """
    One trace record.

    Attributes:
        phase: "before", "after" or "error"
        operation: Operation name
        locator: Locator string or None
        thread: Name of the thread that ran the operation
        elapsed: Seconds since "before" (0 for "before" events)
        detail: Preview of action arguments or the error text
    """

    phase: str
    operation: str
    locator: Optional[str]
    thread: str
    elapsed: float = 0.0
    detail: str = ""


class TraceLog:
    """
    Append-only, lock-protected collection of TraceEvents.

    Safe to share between LoggerDecorators used by several test threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[TraceEvent] = []

    def append(self, event: TraceEvent) -> None:
        with self._lock:
            self._events.append(event)

    def events(self) -> List[TraceEvent]:
        """Snapshot of the recorded events."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def _preview(args) -> str:
    text = "".join(str(a) for a in args)
    if len(text) > MAX_PREVIEW_CHARS:
        return text[:MAX_PREVIEW_CHARS] + ELLIPSIS
    return text


class LoggerDecorator(Decorator):
    """
    Logs every intercepted operation.

    Lookups are logged at TRACE, actions and queries at DEBUG.

    Args:
        sink: Optional callable receiving every TraceEvent (e.g. TraceLog.append)
        clock: Monotonic clock, replaceable in tests
    """

    def __init__(
        self,
        sink: Optional[Callable[[TraceEvent], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sink = sink
        self._clock = clock

    def wrap(self, operation: Operation[T]) -> Operation[T]:
        level = "TRACE" if operation.kind is OperationKind.LOOKUP else "DEBUG"
        locator = str(operation.locator) if operation.locator is not None else None
        detail = _preview(operation.args) if operation.args else ""

        def logged() -> T:
            thread = threading.current_thread().name
            bound = logger.bind(operation=operation.name, locator=locator, thread=thread)
            self._emit(TraceEvent("before", operation.name, locator, thread, 0.0, detail))
            if locator:
                bound.log(level, f"{operation.name} with locator {{ {locator} }}")
            else:
                bound.log(level, f"{operation.name} {detail!r}" if detail else operation.name)

            started = self._clock()
            try:
                result = operation()
            except Exception as e:
                elapsed = self._clock() - started
                self._emit(TraceEvent("error", operation.name, locator, thread, elapsed, str(e)))
                bound.log(level, f"{operation.name} failed after {elapsed:.3f}s: {type(e).__name__}")
                raise

            elapsed = self._clock() - started
            self._emit(TraceEvent("after", operation.name, locator, thread, elapsed))
            if operation.kind is OperationKind.LOOKUP and isinstance(result, list):
                bound.log(level, f"found {len(result)} element(s) for locator {{ {locator} }}")
            else:
                bound.log(level, f"{operation.name} done in {elapsed:.3f}s")
            return result

        return operation.with_call(logged)

    def _emit(self, event: TraceEvent) -> None:
        if self._sink is not None:
            self._sink(event)


__all__ = [
    "TraceEvent",
    "TraceLog",
    "LoggerDecorator",
]
