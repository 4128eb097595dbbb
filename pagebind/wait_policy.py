# ================================================================================
# Wait Policy Module
# ================================================================================
#
# Timeout, poll interval and ignored failure kinds used while resolving
# locators.
#
# Key Features:
#   - Validated, immutable policies
#   - Pre-configured policies for common scenarios (default, quick, patient)
#   - NoSuchElementError is always ignored so the first miss never fails a wait
#
# Usage:
#   policy = WaitPolicy(timeout=5.0, polling_interval=0.25)
#   policy = get_wait_policy("patient").replace(message="Cart never loaded")
#
# ================================================================================

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import ClassVar, Dict, FrozenSet, Iterable, Optional, Type

from .errors import NoSuchElementError, StaleElementError


MIN_POLLING_INTERVAL = 0.01
MIN_TIMEOUT = 0.1

# Only these failure kinds mean "not ready yet"; everything else is fatal.
RETRYABLE_FAILURES: tuple = (NoSuchElementError, StaleElementError)


def _validate_ignored(ignoring: Iterable[Type[BaseException]]) -> FrozenSet[Type[BaseException]]:
    result = set()
    for kind in ignoring:
        if not (isinstance(kind, type) and issubclass(kind, RETRYABLE_FAILURES)):
            raise ValueError(
                f"Only element-not-found and stale-element failures can be ignored, got {kind!r}"
            )
        result.add(kind)
    result.add(NoSuchElementError)
    return frozenset(result)


@dataclass(frozen=True)
class WaitPolicy:
    """
    Configuration for locator resolution waits.

    Attributes:
        timeout: Total time budget in seconds
        polling_interval: Sleep between attempts in seconds
        ignoring: Failure kinds treated as "not ready yet"
        message: Optional message used when the wait times out
    """

    timeout: float = 10.0
    polling_interval: float = 0.2
    ignoring: FrozenSet[Type[BaseException]] = field(
        default_factory=lambda: frozenset(RETRYABLE_FAILURES)
    )
    message: Optional[str] = None

    DEFAULT: ClassVar["WaitPolicy"]
    QUICK: ClassVar["WaitPolicy"]
    PATIENT: ClassVar["WaitPolicy"]

    def __post_init__(self) -> None:
        if self.polling_interval < 0:
            raise ValueError("polling_interval must not be negative.")
        if self.polling_interval < MIN_POLLING_INTERVAL:
            raise ValueError("polling_interval must be at least 10ms.")
        if self.timeout < 0:
            raise ValueError("timeout must not be negative.")
        if self.timeout < MIN_TIMEOUT:
            raise ValueError("timeout must be at least 100ms.")
        if self.polling_interval > self.timeout:
            raise ValueError(
                f"polling_interval ({self.polling_interval}s) must not be "
                f"greater than timeout ({self.timeout}s)."
            )
        object.__setattr__(self, "ignoring", _validate_ignored(self.ignoring))

    def replace(self, **changes) -> "WaitPolicy":
        """Copy of this policy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def ignores(self, error: BaseException) -> bool:
        """Whether `error` should be retried rather than propagated."""
        return isinstance(error, tuple(self.ignoring))

    def __str__(self) -> str:
        return f"(timeout={self.timeout}s, polling={self.polling_interval}s)"


WaitPolicy.DEFAULT = WaitPolicy(
    timeout=10.0,
    polling_interval=0.2,
    message="Element could not be found",
)
WaitPolicy.QUICK = WaitPolicy.DEFAULT.replace(timeout=2.0, polling_interval=0.1)
WaitPolicy.PATIENT = WaitPolicy.DEFAULT.replace(timeout=30.0, polling_interval=0.5)


# Pre-configured wait policies for common scenarios
WAIT_SCENARIOS: Dict[str, WaitPolicy] = {
    "default": WaitPolicy.DEFAULT,
    "quick": WaitPolicy.QUICK,
    "patient": WaitPolicy.PATIENT,
}


def get_wait_policy(scenario: str) -> WaitPolicy:
    """
    Get the wait policy for a named scenario.

    Args:
        scenario: Scenario name ("default", "quick", "patient")

    Returns:
        WaitPolicy for the scenario, or the default if not found
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


__all__ = [
    "WaitPolicy",
    "WAIT_SCENARIOS",
    "RETRYABLE_FAILURES",
    "get_wait_policy",
]
