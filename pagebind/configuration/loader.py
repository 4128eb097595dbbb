"""
================================================================================
Configuration Loader
================================================================================

YAML-based settings with environment variable override support.

Features:
    - Single YAML settings file per project (config/pagebind.yaml)
    - Environment variable override (PAGEBIND_WAIT_TIMEOUT overrides wait.timeout)
    - Dot notation path access
    - Default value support

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from ..errors import ConfigurationError


ENV_PREFIX = "PAGEBIND"
CONFIG_PATH_ENV = "PAGEBIND_CONFIG"


def default_config_path() -> Path:
    """Settings file location: $PAGEBIND_CONFIG or ./config/pagebind.yaml."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path.cwd() / "config" / "pagebind.yaml"


class ConfigLoader:
    """
    Settings loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (PAGEBIND_SITE_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("site.base_url", "about:blank")
        'https://shop.example.com'

        >>> config.get("wait.timeout", 10.0)
        10.0

    Environment Variable Mapping:
        - site.base_url -> PAGEBIND_SITE_BASE_URL
        - wait.timeout -> PAGEBIND_WAIT_TIMEOUT
        - browser.headless -> PAGEBIND_BROWSER_HEADLESS
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton: settings are read once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else default_config_path()
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """Load settings from the YAML file."""
        if not self._config_path.exists():
            logger.debug(
                f"Settings file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in settings file {self._config_path}: {e}"
            ) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Settings file {self._config_path} must contain a mapping, "
                f"found {type(loaded).__name__}"
            )
        self._config = loaded
        logger.debug(f"Loaded settings from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting by dot-notation path.

        Checks the environment first, then the YAML file, then `default`.

        Args:
            key: Dot-notation path (e.g., "wait.timeout")
            default: Value used when the key is not configured

        Returns:
            Setting value or default
        """
        env_key = f"{ENV_PREFIX}_{key.upper().replace('.', '_')}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Entire section as a dict, or {} when missing."""
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Re-read the settings file."""
        self._load_config()
        logger.info(f"Settings reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """Convert an environment string to the type of `reference`."""
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton so the next instance re-reads settings."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ENV_PREFIX",
    "CONFIG_PATH_ENV",
    "default_config_path",
]
