"""
================================================================================
Slow Motion Decorator
================================================================================

Inserts a fixed delay before lookups and element actions, which makes a
running test easier to follow by eye.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from typing import Callable

from .base import Decorator, Operation, OperationKind, T


class SlowMotionDecorator(Decorator):
    """
    Sleeps `delay` seconds before each lookup or action.

    State queries (text, attributes, is_displayed) are not delayed.
    """

    def __init__(self, delay: float = 1.0, sleep: Callable[[float], None] = time.sleep):
        if delay < 0:
            raise ValueError("delay must not be negative.")
        self.delay = delay
        self._sleep = sleep

    def wrap(self, operation: Operation[T]) -> Operation[T]:
        if operation.kind is OperationKind.QUERY:
            return operation

        def delayed() -> T:
            self._sleep(self.delay)
            return operation()

        return operation.with_call(delayed)

    def __repr__(self) -> str:
        return f"SlowMotionDecorator({self.delay}s)"


__all__ = ["SlowMotionDecorator"]
