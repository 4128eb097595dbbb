"""
Decorators intercepting lookups and element actions.

Components:
    - base: Operation, Decorator, compose, DecoratorChain, DecoratorManager
    - logger: LoggerDecorator and the thread-safe TraceLog
    - highlighter: HighlighterDecorator
    - slow_motion: SlowMotionDecorator
"""

from .base import (
    EMPTY_CHAIN,
    Decorator,
    DecoratorChain,
    DecoratorManager,
    Operation,
    OperationKind,
    compose,
    merge_decorators,
)
from .highlighter import BorderStyle, Color, HighlighterDecorator
from .logger import LoggerDecorator, TraceEvent, TraceLog
from .slow_motion import SlowMotionDecorator

__all__ = [
    "EMPTY_CHAIN",
    "Decorator",
    "DecoratorChain",
    "DecoratorManager",
    "Operation",
    "OperationKind",
    "compose",
    "merge_decorators",
    "BorderStyle",
    "Color",
    "HighlighterDecorator",
    "LoggerDecorator",
    "TraceEvent",
    "TraceLog",
    "SlowMotionDecorator",
]
