"""
================================================================================
Session Context
================================================================================

Binds one driver handle to the thread that opened it.

A Session is {driver, site, owner thread}. The process-wide registry
(`session_context`) keeps one stack of sessions per thread:

    with session_context.with_session(Session(driver, site)):
        ...                         # session active on this thread
        with session_context.with_session(inner):
            ...                     # inner active
        ...                         # outer restored

Stacks are thread-local, so the registry needs no lock. A thread only ever
sees its own sessions; touching a session from another thread fails with
ThreadConfinementViolation, and session-bound calls on a thread without a
session fail with NoActiveSession. Neither is ever retried.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, TypeVar

from loguru import logger

from .errors import DriverMismatch, NoActiveSession, ThreadConfinementViolation

if TYPE_CHECKING:
    from .site import Site


R = TypeVar("R")


def _current_thread_name() -> str:
    return threading.current_thread().name


@dataclass(eq=False)
class Session:
    """
    Binding of one driver to one site and one owner thread.

    The owner thread is captured when the session is created.
    """

    driver: Any
    site: "Site"
    owner_thread: threading.Thread = field(default_factory=threading.current_thread)

    @property
    def owner_thread_name(self) -> str:
        return self.owner_thread.name

    def is_owner(self) -> bool:
        # Thread objects, not get_ident(): idents are reused once a thread exits.
        return threading.current_thread() is self.owner_thread

    def assert_thread(self, operation: str) -> None:
        """Fail fast when called from any thread other than the owner."""
        if not self.is_owner():
            raise ThreadConfinementViolation(
                operation=operation,
                owner_thread=self.owner_thread_name,
                current_thread=_current_thread_name(),
            )

    def __repr__(self) -> str:
        return (
            f"Session(driver={type(self.driver).__name__}@{id(self.driver):#x}, "
            f"site={self.site!r}, owner={self.owner_thread_name})"
        )


class SessionRegistry:
    """
    Process-wide registry of per-thread session stacks.

    Lifecycle:
        - push on scope enter (with_session)
        - pop on scope exit, restoring the previous session
        - replace_current to rebind the innermost scope (site switches)
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _stack(self) -> List[Session]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = []
            self._local.stack = stack
        return stack

    def current(self) -> Optional[Session]:
        """Active session of the calling thread, or None."""
        stack = self._stack()
        return stack[-1] if stack else None

    def depth(self) -> int:
        return len(self._stack())

    def push(self, session: Session) -> None:
        session.assert_thread("SessionContext.push")
        self._stack().append(session)
        logger.trace(f"Session pushed on {_current_thread_name()}: {session!r}")

    def pop(self) -> Session:
        stack = self._stack()
        if not stack:
            raise NoActiveSession("SessionContext.pop", _current_thread_name())
        session = stack.pop()
        logger.trace(f"Session popped on {_current_thread_name()}: {session!r}")
        return session

    def replace_current(self, session: Session) -> Session:
        """
        Swap the innermost session for `session` and return the old one.

        The scope that pushed the old session still owns the slot and
        clears it on exit.
        """
        session.assert_thread("SessionContext.replace_current")
        stack = self._stack()
        if not stack:
            raise NoActiveSession("SessionContext.replace_current", _current_thread_name())
        previous = stack[-1]
        stack[-1] = session
        return previous

    @contextmanager
    def with_session(self, session: Session) -> Iterator[Session]:
        """Make `session` active for the duration of the with-block."""
        depth = self.depth()
        self.push(session)
        try:
            yield session
        finally:
            del self._stack()[depth:]

    def require(self, operation: str) -> Session:
        """
        Active session checked against the calling thread.

        Raises:
            NoActiveSession: No session on this thread
            ThreadConfinementViolation: Session owned by another thread
        """
        session = self.current()
        if session is None:
            raise NoActiveSession(operation, _current_thread_name())
        session.assert_thread(operation)
        return session

    def clear(self) -> None:
        """Drop every session of the calling thread."""
        self._stack().clear()


session_context = SessionRegistry()


def with_driver(driver: Any, block: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """
    Run `block` only if `driver` is the active session's driver.

    Args:
        driver: Driver the caller expects to be active
        block: Callable to run
        *args, **kwargs: Passed to `block`

    Returns:
        Whatever `block` returns

    Raises:
        NoActiveSession: No session on this thread
        DriverMismatch: `driver` is not the active session's driver
    """
    session = session_context.require("with_driver()")
    if session.driver is not driver:
        raise DriverMismatch(expected=driver, active=session.driver)
    return block(*args, **kwargs)


__all__ = [
    "Session",
    "SessionRegistry",
    "session_context",
    "with_driver",
]
