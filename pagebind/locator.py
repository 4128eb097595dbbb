"""
================================================================================
Locator
================================================================================

Immutable description of how to search for an element.

A Locator is a strategy + value pair. Values are passed to the driver
adapter unchanged; xpath and CSS are never parsed here.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidLocator


class Strategy(str, Enum):
    """Supported find strategies."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    CSS_SELECTOR = "css selector"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TAG_NAME = "tag name"
    XPATH = "xpath"
    ID_OR_NAME = "id or name"


@dataclass(frozen=True)
class Locator:
    """
    Strategy + value pair identifying how to search for an element.

    Attributes:
        strategy: One of Strategy (or its string value)
        value: Search value; must not be blank

    Usage:
        >>> Locator(Strategy.ID, "login-button")
        Locator(by=id, value='login-button')
        >>> Locator.of("css selector", ".card")
    """

    strategy: Strategy
    value: str

    def __post_init__(self) -> None:
        try:
            strategy = Strategy(self.strategy)
        except ValueError as e:
            raise InvalidLocator(f"Unknown locator strategy: {self.strategy!r}") from e
        object.__setattr__(self, "strategy", strategy)

        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidLocator(
                f'"value" must not be blank (strategy={strategy.value})'
            )

    @classmethod
    def of(cls, strategy: Union[Strategy, str], value: str) -> "Locator":
        """Build a locator from a strategy name or enum member."""
        return cls(strategy, value)

    def __str__(self) -> str:
        return f"By.{self.strategy.name.lower()}: {self.value}"

    def __repr__(self) -> str:
        return f"Locator(by={self.strategy.value}, value={self.value!r})"


def escape_xpath_literal(value: str) -> str:
    """
    Quote a value for use inside an xpath expression.

    Values with single quotes are turned into a concat() call.
    """
    if "'" not in value:
        return f"'{value}'"
    parts = value.split("'")
    return "concat('" + "', \"'\", '".join(parts) + "')"


def attribute_xpath(attribute: str, value: str) -> str:
    """Xpath matching any descendant whose attribute equals value."""
    if not value or not value.strip():
        raise InvalidLocator(f'"value" must not be blank (attribute={attribute})')
    return f".//*[@{attribute}={escape_xpath_literal(value)}]"


__all__ = [
    "Strategy",
    "Locator",
    "escape_xpath_literal",
    "attribute_xpath",
]
