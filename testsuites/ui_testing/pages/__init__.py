"""
================================================================================
Page Objects
================================================================================

Page objects for the demo shop used by the example UI suite.

Each page class declares:
    - Its path relative to the site
    - The element that signals readiness
    - Declared locators and page-specific actions

Author: Automation Team
License: MIT
================================================================================
"""

from .cart_page import CartPage
from .inventory_page import InventoryPage
from .login_page import LoginPage
from .shop_site import ShopSite

__all__ = [
    "CartPage",
    "InventoryPage",
    "LoginPage",
    "ShopSite",
]
