"""
================================================================================
Errors
================================================================================

Exception taxonomy for locator resolution, sessions and configuration.

Two families live here:
    - Driver failure kinds reported by a browser driver adapter
      (element not found, stale, not interactable, click intercepted)
    - pagebind errors raised by the resolution engine, the session
      registry and the configuration loader

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class PageBindError(Exception):
    """Base class for every error raised by pagebind."""
    pass


# =============================================================================
# Driver failure kinds
# =============================================================================

class DriverError(PageBindError):
    """Base class for failures reported by a driver adapter."""
    pass


class NoSuchElementError(DriverError):
    """No element matched the locator."""
    pass


class StaleElementError(DriverError):
    """The element handle no longer refers to a live node."""
    pass


class ElementNotInteractableError(DriverError):
    """The element exists but cannot be interacted with."""
    pass


class ElementClickInterceptedError(DriverError):
    """Another element would receive the click."""
    pass


# =============================================================================
# Resolution
# =============================================================================

class InvalidLocator(PageBindError, ValueError):
    """Raised when a locator has an unknown strategy or a blank value."""
    pass


class ResolutionTimeout(PageBindError):
    """
    Raised when no ready element was produced within the wait timeout.

    Attributes:
        locator: Locator that was being resolved
        elapsed: Seconds spent polling
        attempts: Number of lookup attempts made
        last_failure: Last ignored driver failure, if any
        reason: Why the last attempt was not ready
    """

    def __init__(
        self,
        locator: Any,
        elapsed: float,
        attempts: int,
        last_failure: Optional[BaseException] = None,
        reason: str = "",
        message: Optional[str] = None,
    ):
        self.locator = locator
        self.elapsed = elapsed
        self.attempts = attempts
        self.last_failure = last_failure
        self.reason = reason
        self.message = message

        parts = [
            message or "Element was not ready within timeout",
            f"locator={locator}",
            f"elapsed={elapsed:.3f}s",
            f"attempts={attempts}",
        ]
        if reason:
            parts.append(f"reason={reason}")
        if last_failure is not None:
            parts.append(
                f"last_failure={type(last_failure).__name__}: {last_failure}"
            )
        super().__init__(" | ".join(parts))


# =============================================================================
# Sessions
# =============================================================================

class NoActiveSession(PageBindError):
    """Raised when a session-bound operation runs with no active session."""

    def __init__(self, operation: str, thread_name: str):
        self.operation = operation
        self.thread_name = thread_name
        super().__init__(
            f"{operation} requires an active session, but thread "
            f"'{thread_name}' has no active session. Run it inside "
            f"web_session()/web_test() on the thread that opened the browser."
        )


class ThreadConfinementViolation(PageBindError):
    """Raised when a driver-bound object is used from a foreign thread or session."""

    def __init__(
        self,
        operation: str,
        owner_thread: str,
        current_thread: str,
        detail: str = "",
    ):
        self.operation = operation
        self.owner_thread = owner_thread
        self.current_thread = current_thread
        message = (
            f"Thread confinement violation: {operation} was called from "
            f"thread '{current_thread}' but is owned by thread "
            f"'{owner_thread}'. One session per thread."
        )
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class DriverMismatch(PageBindError):
    """Raised when with_driver() receives a driver other than the session's."""

    def __init__(self, expected: Any, active: Any):
        self.expected = expected
        self.active = active
        super().__init__(
            "with_driver() received a driver different from the active "
            f"session's driver (given={type(expected).__name__}@{id(expected):#x}, "
            f"active={type(active).__name__}@{id(active):#x})"
        )


# =============================================================================
# Configuration
# =============================================================================

class ConfigurationError(PageBindError):
    """Raised when configuration loading, discovery or access fails."""
    pass


__all__ = [
    "PageBindError",
    "DriverError",
    "NoSuchElementError",
    "StaleElementError",
    "ElementNotInteractableError",
    "ElementClickInterceptedError",
    "InvalidLocator",
    "ResolutionTimeout",
    "NoActiveSession",
    "ThreadConfinementViolation",
    "DriverMismatch",
    "ConfigurationError",
]
