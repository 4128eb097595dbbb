"""
================================================================================
Site
================================================================================

Shared, read-only configuration for the application under test.

A Site centralizes the defaults pages fall back to:
    - base_url: where the application lives
    - cookies: applied to every new browser session for this site
    - decorators: site-level interceptors (merged with test-level ones)
    - element_ready / elements_ready: default readiness predicates
    - wait_policy: default wait policy

Values are resolved once, at construction:
    constructor argument -> class attribute -> project configuration -> library default

A Site is never mutated after construction, so one instance may be shared
by sessions running on different threads.

Usage:
    class ShopSite(Site):
        base_url = "https://shop.example.com"
        cookies = (Cookie("locale", "en-US"),)
        decorators = (HighlighterDecorator(),)
        wait_policy = WaitPolicy.QUICK

        def on_session_ready(self, driver):
            driver.add_cookie(Cookie("run", os.environ["RUN_ID"]))

    SHOP = ShopSite()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from loguru import logger

from .configuration.project import ABOUT_BLANK, actual_configuration
from .decorators.base import Decorator, DecoratorChain, DecoratorManager, merge_decorators
from .readiness import DEFAULT_ELEMENT_READY, DEFAULT_ELEMENTS_READY
from .wait_policy import WaitPolicy


@dataclass(frozen=True)
class Cookie:
    """Browser cookie applied through the driver."""

    name: str
    value: str
    domain: Optional[str] = None
    path: str = "/"
    secure: bool = False
    http_only: bool = False
    expiry: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Cookie name must not be blank.")

    def to_dict(self) -> Dict[str, Any]:
        """Cookie fields without unset values."""
        return {k: v for k, v in asdict(self).items() if v is not None}


class Site:
    """
    Base configuration for an application under test.

    Hooks:
        configure_site(): per-site tweaks that need no browser, called first
        on_session_ready(driver): session-aware tweaks, called after
            configure_site(); must not navigate

    Both hooks run after the initial navigation to base_url and after
    cookies were applied, and again whenever a test switches to this site.
    """

    base_url: Optional[str] = None
    cookies: Optional[Sequence[Cookie]] = None
    decorators: Optional[Sequence[Decorator]] = None
    element_ready: Optional[Callable[[Any], bool]] = None
    elements_ready: Optional[Callable[[Sequence[Any]], bool]] = None
    wait_policy: Optional[WaitPolicy] = None

    _FIELDS = ("base_url", "cookies", "decorators", "element_ready", "elements_ready", "wait_policy")

    def __init__(
        self,
        base_url: Optional[str] = None,
        cookies: Optional[Sequence[Cookie]] = None,
        decorators: Optional[Sequence[Decorator]] = None,
        element_ready: Optional[Callable[[Any], bool]] = None,
        elements_ready: Optional[Callable[[Sequence[Any]], bool]] = None,
        wait_policy: Optional[WaitPolicy] = None,
    ):
        explicit = {
            "base_url": base_url,
            "cookies": cookies,
            "decorators": decorators,
            "element_ready": element_ready,
            "elements_ready": elements_ready,
            "wait_policy": wait_policy,
        }
        defaults = {
            "base_url": ABOUT_BLANK,
            "cookies": (),
            "decorators": (),
            "element_ready": DEFAULT_ELEMENT_READY,
            "elements_ready": DEFAULT_ELEMENTS_READY,
            "wait_policy": WaitPolicy.DEFAULT,
        }

        project = None
        for key in self._FIELDS:
            value = explicit[key]
            if value is None:
                value = getattr(type(self), key, None)
            if value is None:
                if project is None:
                    project = actual_configuration()
                value = getattr(project, key, None)
            if value is None:
                value = defaults[key]
            object.__setattr__(self, key, value)

        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ValueError(f"{type(self).__name__}: base_url must not be blank.")

        object.__setattr__(self, "cookies", tuple(self.cookies))
        object.__setattr__(self, "decorators", tuple(self.decorators))
        object.__setattr__(self, "_frozen", True)
        logger.debug(f"Site configured: {self!r}")

    def __setattr__(self, key: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(
                f"{type(self).__name__} is read-only after construction (tried to set {key!r})"
            )
        super().__setattr__(key, value)

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def configure_site(self) -> None:
        """Per-site tweaks that need no browser. No-op by default."""

    def on_session_ready(self, driver: Any) -> None:
        """Session-aware tweaks. Never navigate here. No-op by default."""

    # -------------------------------------------------------------------------
    # Derived configuration
    # -------------------------------------------------------------------------

    def decorator_chain(self) -> DecoratorChain:
        """Site decorators merged with the calling thread's test-level decorators."""
        test_level = DecoratorManager.get_all_decorators()
        if not test_level:
            return DecoratorChain(self.decorators)
        return DecoratorChain(merge_decorators(self.decorators, test_level))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"


__all__ = [
    "Cookie",
    "Site",
]
