"""
================================================================================
Shop Site
================================================================================

Site configuration for the public demo shop (https://www.saucedemo.com).

The base URL can be pointed elsewhere with SHOP_BASE_URL.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os

from loguru import logger

from pagebind import LoggerDecorator, Site, WaitPolicy


class ShopSite(Site):
    """Demo shop with quick waits and traced element actions."""

    wait_policy = WaitPolicy.QUICK.replace(timeout=5.0)

    def __init__(self, **kwargs):
        kwargs.setdefault("base_url", os.getenv("SHOP_BASE_URL", "https://www.saucedemo.com"))
        kwargs.setdefault("decorators", (LoggerDecorator(),))
        super().__init__(**kwargs)

    def on_session_ready(self, driver) -> None:
        logger.info(f"Shop session ready at {driver.current_url}")
