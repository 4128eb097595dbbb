"""
================================================================================
Resolution Engine
================================================================================

Polls a search root until a locator yields a ready element or the wait
policy's timeout expires.

Each lookup attempt is classified into a tagged result:

    Ready(value)        lookup succeeded and the predicate holds
    NotReady(reason)    ignorable failure or predicate false; retry
    Fatal(error)        anything else; propagate immediately

The poll loop consumes these results explicitly. It runs on the calling
thread and blocks in a plain sleep between attempts; it never starts
background workers.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from loguru import logger

from .decorators.base import EMPTY_CHAIN, DecoratorChain, Operation, OperationKind
from .errors import ResolutionTimeout
from .locator import Locator
from .wait_policy import WaitPolicy


@dataclass(frozen=True)
class Ready:
    value: Any


@dataclass(frozen=True)
class NotReady:
    reason: str
    failure: Optional[BaseException] = None


@dataclass(frozen=True)
class Fatal:
    error: BaseException


AttemptResult = Union[Ready, NotReady, Fatal]


class ResolutionEngine:
    """
    Blocking poll loop for locator resolution.

    Args:
        clock: Monotonic clock in seconds
        sleep: Blocking sleep function

    Usage:
        >>> engine = ResolutionEngine()
        >>> button = engine.resolve(driver, Locator("id", "submit"),
        ...                         WaitPolicy.QUICK, is_clickable)
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._clock = clock
        self._sleep = sleep

    def attempt(
        self,
        root: Any,
        locator: Locator,
        policy: WaitPolicy,
        predicate: Callable[[Any], bool],
        multiple: bool = False,
        chain: DecoratorChain = EMPTY_CHAIN,
        driver: Any = None,
    ) -> AttemptResult:
        """
        Run one lookup + readiness check and classify the outcome.

        Args:
            root: Driver or element exposing find_element / find_elements
            locator: What to look for
            policy: Decides which failures are retryable
            predicate: Readiness check over the element or list
            multiple: Use find_elements and return a list
            chain: Decorators wrapped around the lookup
            driver: Driver owning `root`, passed to decorators

        Returns:
            Ready, NotReady or Fatal
        """
        if multiple:
            operation = Operation(
                name="find_elements",
                call=lambda: list(root.find_elements(locator)),
                kind=OperationKind.LOOKUP,
                locator=locator,
                driver=driver,
            )
        else:
            operation = Operation(
                name="find_element",
                call=lambda: root.find_element(locator),
                kind=OperationKind.LOOKUP,
                locator=locator,
                driver=driver,
            )

        try:
            found = chain.apply(operation)
        except Exception as e:
            return self._classify(e, policy)

        try:
            ready = predicate(found)
        except Exception as e:
            return self._classify(e, policy)

        if ready:
            return Ready(found)
        return NotReady("readiness predicate returned false")

    def resolve(
        self,
        root: Any,
        locator: Locator,
        policy: WaitPolicy,
        predicate: Callable[[Any], bool],
        multiple: bool = False,
        chain: DecoratorChain = EMPTY_CHAIN,
        driver: Any = None,
    ) -> Any:
        """
        Poll until ready or timed out.

        Returns:
            The ready element (or list of elements when `multiple`)

        Raises:
            ResolutionTimeout: Not ready within `policy.timeout`
            Exception: Any failure the policy does not ignore, unchanged
        """
        started = self._clock()
        attempts = 0
        last_failure: Optional[BaseException] = None
        reason = ""

        while True:
            attempts += 1
            result = self.attempt(root, locator, policy, predicate, multiple, chain, driver)

            if isinstance(result, Ready):
                if attempts > 1:
                    logger.trace(f"{locator} ready after {attempts} attempts")
                return result.value

            if isinstance(result, Fatal):
                raise result.error

            reason = result.reason
            if result.failure is not None:
                last_failure = result.failure

            elapsed = self._clock() - started
            if elapsed >= policy.timeout:
                logger.warning(
                    f"Timed out after {elapsed:.3f}s resolving {locator} ({reason})"
                )
                raise ResolutionTimeout(
                    locator=locator,
                    elapsed=elapsed,
                    attempts=attempts,
                    last_failure=last_failure,
                    reason=reason,
                    message=policy.message,
                )

            self._sleep(min(policy.polling_interval, policy.timeout - elapsed))

    @staticmethod
    def _classify(error: Exception, policy: WaitPolicy) -> AttemptResult:
        if policy.ignores(error):
            return NotReady(type(error).__name__, error)
        return Fatal(error)


__all__ = [
    "Ready",
    "NotReady",
    "Fatal",
    "AttemptResult",
    "ResolutionEngine",
]
