"""
Repository-level pytest configuration.

Provides safe defaults for the example UI suite so a fresh clone runs the
unit tests without any environment setup. Browser tests stay skipped until
PAGEBIND_E2E=1 is set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.

    The demo shop credentials are public test accounts.
    """
    defaults = {
        "SHOP_BASE_URL": "https://www.saucedemo.com",
        "SHOP_USERNAME": "standard_user",
        "SHOP_PASSWORD": "secret_sauce",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
