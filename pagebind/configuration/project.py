"""
================================================================================
Project Configuration
================================================================================

Project-wide defaults and their discovery.

A project may register exactly one configuration object under the
`pagebind.configuration` entry-point group:

    # pyproject.toml of the test project
    [project.entry-points."pagebind.configuration"]
    shop = "shop_tests.config:configuration"

    # shop_tests/config.py
    class ShopConfiguration(ProjectConfiguration):
        base_url = "https://shop.example.com"
        wait_policy = WaitPolicy.PATIENT

    configuration = ShopConfiguration()

Without a registered object the defaults come from the YAML settings file
and environment (see ConfigLoader).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from importlib import metadata
from typing import Any, Callable, List, Optional, Sequence, Tuple, Type, TypeVar

from loguru import logger

from ..errors import ConfigurationError
from ..readiness import DEFAULT_ELEMENT_READY, DEFAULT_ELEMENTS_READY
from ..wait_policy import WaitPolicy
from .loader import ConfigLoader


ENTRY_POINT_GROUP = "pagebind.configuration"
ABOUT_BLANK = "about:blank"

C = TypeVar("C", bound="ProjectConfiguration")


class ProjectConfiguration:
    """
    Base class for project-wide defaults.

    Attributes left as None fall back to the library defaults.
    """

    entry_point_group: str = ENTRY_POINT_GROUP

    base_url: Optional[str] = None
    cookies: Optional[Sequence[Any]] = None
    decorators: Optional[Sequence[Any]] = None
    element_ready: Optional[Callable[[Any], bool]] = None
    elements_ready: Optional[Callable[[Sequence[Any]], bool]] = None
    wait_policy: Optional[WaitPolicy] = None
    keep_browser_open: Optional[bool] = None
    browser: Optional[str] = None
    headless: Optional[bool] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"


class DefaultProjectConfiguration(ProjectConfiguration):
    """Defaults read from ConfigLoader (YAML file + environment)."""

    def __init__(self, settings: Optional[ConfigLoader] = None):
        settings = settings or ConfigLoader()
        self.base_url = settings.get("site.base_url", ABOUT_BLANK)
        self.cookies = ()
        self.decorators = ()
        self.element_ready = DEFAULT_ELEMENT_READY
        self.elements_ready = DEFAULT_ELEMENTS_READY
        timeout = settings.get("wait.timeout", WaitPolicy.DEFAULT.timeout)
        polling_interval = settings.get("wait.polling_interval", WaitPolicy.DEFAULT.polling_interval)
        try:
            self.wait_policy = WaitPolicy.DEFAULT.replace(
                timeout=float(timeout), polling_interval=float(polling_interval)
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid wait settings (wait.timeout={timeout!r}, "
                f"wait.polling_interval={polling_interval!r}): {e}"
            ) from e
        self.keep_browser_open = bool(settings.get("browser.keep_open", False))
        self.browser = settings.get("browser.name", "chromium")
        self.headless = bool(settings.get("browser.headless", True))


def _entry_points(group: str) -> Sequence[metadata.EntryPoint]:
    return tuple(metadata.entry_points(group=group))


def load_configuration(kind: Type[C] = ProjectConfiguration) -> Optional[C]:
    """
    Discover the registered configuration object for `kind`.

    Args:
        kind: Configuration base class; its `entry_point_group` is searched

    Returns:
        None when nothing is registered, otherwise the single registered object

    Raises:
        ConfigurationError: More than one object registered, a registered
            object cannot be loaded, is a class instead of an instance, or
            is not an instance of `kind`
    """
    found: List[Tuple[str, C]] = []

    for entry_point in _entry_points(kind.entry_point_group):
        try:
            candidate = entry_point.load()
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load configuration {entry_point.value}: {e}"
            ) from e

        if isinstance(candidate, type):
            raise ConfigurationError(
                f"Configuration {entry_point.value} must be a module-level "
                f"instance, found the class {candidate.__name__}. "
                f"Register an instance instead, e.g. configuration = {candidate.__name__}()"
            )
        if not isinstance(candidate, kind):
            raise ConfigurationError(
                f"Configuration {entry_point.value} is a {type(candidate).__name__}, "
                f"which does not implement {kind.__name__}"
            )
        found.append((entry_point.value, candidate))

    if not found:
        return None

    if len(found) > 1:
        names = "\n".join(f" • {name}" for name, _ in found)
        raise ConfigurationError(
            f"More than one project configuration implementing {kind.__name__} was found:\n"
            f"{names}\n"
            f"Please make sure that only one object implements {kind.__name__}."
        )

    name, configuration = found[0]
    logger.info(f"Loading project configuration from {name}")
    return configuration


_actual: Optional[ProjectConfiguration] = None
_lock = threading.Lock()


def actual_configuration() -> ProjectConfiguration:
    """Registered configuration, or the settings-file defaults. Cached."""
    global _actual
    with _lock:
        if _actual is None:
            _actual = load_configuration(ProjectConfiguration) or DefaultProjectConfiguration()
        return _actual


def reset_configuration() -> None:
    """Forget the cached configuration (tests, settings reloads)."""
    global _actual
    with _lock:
        _actual = None


__all__ = [
    "ENTRY_POINT_GROUP",
    "ABOUT_BLANK",
    "ProjectConfiguration",
    "DefaultProjectConfiguration",
    "load_configuration",
    "actual_configuration",
    "reset_configuration",
]
