"""
================================================================================
Readiness Predicates
================================================================================

Conditions a found element (or collection) must satisfy before it is handed
to the caller.

Predicates are plain functions and must not have side effects:
    - Single element:  Callable[[Element], bool]
    - Collection:      Callable[[Sequence[Element]], bool]

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from .locator import Locator

if TYPE_CHECKING:
    from .wait_policy import WaitPolicy


ElementPredicate = Callable[[Any], bool]
ElementsPredicate = Callable[[Sequence[Any]], bool]


# =============================================================================
# Single element
# =============================================================================

def is_present(element: Any) -> bool:
    """Ready as soon as the lookup returned an element."""
    return element is not None


def is_displayed(element: Any) -> bool:
    return bool(element.is_displayed())


def is_enabled(element: Any) -> bool:
    return bool(element.is_enabled())


def is_clickable(element: Any) -> bool:
    """Displayed and enabled."""
    return bool(element.is_displayed() and element.is_enabled())


# =============================================================================
# Collections
# =============================================================================

def any_present(elements: Sequence[Any]) -> bool:
    """Ready when the collection is not empty."""
    return len(elements) > 0


def all_displayed(elements: Sequence[Any]) -> bool:
    """Non-empty and every element displayed."""
    return len(elements) > 0 and all(e.is_displayed() for e in elements)


def all_enabled(elements: Sequence[Any]) -> bool:
    return len(elements) > 0 and all(e.is_enabled() for e in elements)


def all_clickable(elements: Sequence[Any]) -> bool:
    return len(elements) > 0 and all(is_clickable(e) for e in elements)


DEFAULT_ELEMENT_READY: ElementPredicate = is_present
DEFAULT_ELEMENTS_READY: ElementsPredicate = any_present


# =============================================================================
# Page readiness
# =============================================================================

class ReadinessCondition(Enum):
    """Built-in readiness conditions for a page's canonical element."""

    IS_DISPLAYED = "is_displayed"
    IS_ENABLED = "is_enabled"
    IS_CLICKABLE = "is_clickable"

    @property
    def predicate(self) -> ElementPredicate:
        return {
            ReadinessCondition.IS_DISPLAYED: is_displayed,
            ReadinessCondition.IS_ENABLED: is_enabled,
            ReadinessCondition.IS_CLICKABLE: is_clickable,
        }[self]


@dataclass(frozen=True)
class ReadinessDescriptor:
    """
    Describes how to decide that a page is ready.

    The page is ready when the element found by `locator` satisfies
    `custom` if given, otherwise `condition`.

    Attributes:
        locator: Locator of the canonical element
        wait_policy: Optional override; the site policy is used when None
        condition: Built-in condition used when no custom check is given
        custom: Custom predicate; takes precedence over `condition`
    """

    locator: Locator
    wait_policy: Optional["WaitPolicy"] = None
    condition: ReadinessCondition = ReadinessCondition.IS_DISPLAYED
    custom: Optional[ElementPredicate] = None

    @property
    def predicate(self) -> ElementPredicate:
        return self.custom if self.custom is not None else self.condition.predicate


__all__ = [
    "ElementPredicate",
    "ElementsPredicate",
    "is_present",
    "is_displayed",
    "is_enabled",
    "is_clickable",
    "any_present",
    "all_displayed",
    "all_enabled",
    "all_clickable",
    "DEFAULT_ELEMENT_READY",
    "DEFAULT_ELEMENTS_READY",
    "ReadinessCondition",
    "ReadinessDescriptor",
]
