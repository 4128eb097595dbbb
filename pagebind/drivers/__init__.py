"""
Driver protocols and the Playwright adapter.

The Playwright modules are imported on first use so that the core can be
used with any driver implementing the protocols.
"""

from .base import Driver, Element, SearchContext

__all__ = [
    "Driver",
    "Element",
    "SearchContext",
]
