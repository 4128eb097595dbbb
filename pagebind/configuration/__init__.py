"""
Configuration: YAML/env settings and project configuration discovery.
"""

from ..errors import ConfigurationError
from .loader import ConfigLoader
from .project import (
    ABOUT_BLANK,
    ENTRY_POINT_GROUP,
    DefaultProjectConfiguration,
    ProjectConfiguration,
    actual_configuration,
    load_configuration,
    reset_configuration,
)

__all__ = [
    "ConfigurationError",
    "ConfigLoader",
    "ABOUT_BLANK",
    "ENTRY_POINT_GROUP",
    "DefaultProjectConfiguration",
    "ProjectConfiguration",
    "actual_configuration",
    "load_configuration",
    "reset_configuration",
]
