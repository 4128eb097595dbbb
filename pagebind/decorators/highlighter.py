"""
================================================================================
Highlighter Decorator
================================================================================

Draws a border around an element while an action runs on it.

Only element actions are highlighted; lookups and state queries pass
through untouched. The border is removed after the action even when the
action fails.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum

from loguru import logger

from .base import Decorator, Operation, OperationKind, T


MIN_WIDTH = 1
MAX_WIDTH = 20

APPLY_SCRIPT = """
const el = arguments[0];
const previous = el.style.border;
el.style.border = arguments[1];
return previous;
"""

RESTORE_SCRIPT = """
arguments[0].style.border = arguments[1];
"""


class BorderStyle(Enum):
    DASHED = "dashed"
    DOTTED = "dotted"
    SOLID = "solid"


class Color(Enum):
    BLACK = "black"
    BLUE = "blue"
    GRAY = "gray"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"
    PURPLE = "purple"
    RED = "red"
    YELLOW = "yellow"
    WHITE = "white"


class HighlighterDecorator(Decorator):
    """
    Visual highlight around element actions.

    Args:
        style: Border style
        color: Border color
        width: Border width in pixels (1-20)
    """

    def __init__(
        self,
        style: BorderStyle = BorderStyle.SOLID,
        color: Color = Color.RED,
        width: int = 5,
    ):
        if not MIN_WIDTH <= width <= MAX_WIDTH:
            raise ValueError(f"width must be between {MIN_WIDTH} and {MAX_WIDTH}.")
        self.style = style
        self.color = color
        self.width = width

    @property
    def border(self) -> str:
        return f"{self.style.value} {self.color.value} {self.width}px"

    def wrap(self, operation: Operation[T]) -> Operation[T]:
        if operation.kind is not OperationKind.ACTION or operation.element is None:
            return operation

        execute_script = getattr(operation.driver, "execute_script", None)
        if execute_script is None:
            return operation

        def highlighted() -> T:
            previous = self._apply(execute_script, operation)
            try:
                return operation()
            finally:
                self._restore(execute_script, operation, previous)

        return operation.with_call(highlighted)

    def _apply(self, execute_script, operation: Operation) -> str:
        try:
            return execute_script(APPLY_SCRIPT, operation.element, self.border) or ""
        except Exception as e:
            logger.error(f"Failed to highlight element for {operation.name}: {e}")
            return ""

    def _restore(self, execute_script, operation: Operation, previous: str) -> None:
        try:
            execute_script(RESTORE_SCRIPT, operation.element, previous)
        except Exception as e:
            # The action may have removed the node from the DOM.
            logger.debug(f"Could not remove highlight after {operation.name}: {e}")

    def __repr__(self) -> str:
        return f"HighlighterDecorator({self.border})"


__all__ = [
    "BorderStyle",
    "Color",
    "HighlighterDecorator",
]
