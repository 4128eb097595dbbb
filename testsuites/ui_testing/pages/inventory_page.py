"""
================================================================================
Inventory Page Object
================================================================================

Product list shown after login.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from pagebind import Locator, Page, ReadinessDescriptor, Strategy, class_name, class_names, css_selectors

from .cart_page import CartPage


class InventoryPage(Page):
    """Inventory list with add-to-cart buttons and the cart badge."""

    path = "/inventory.html"
    ready = ReadinessDescriptor(Locator(Strategy.CLASS_NAME, "inventory_list"))

    item_names = class_names("inventory_item_name")
    add_buttons = css_selectors("button.btn_inventory", cache=False)
    cart_badge = class_name("shopping_cart_badge", cache=False)
    cart_link = class_name("shopping_cart_link")

    def assert_ready(self) -> None:
        assert self.driver.current_url.endswith(self.path), self.driver.current_url

    def product_names(self) -> List[str]:
        return self.item_names.texts()

    @allure.step("Add product #{index} to cart")
    def add_to_cart(self, index: int = 0) -> "InventoryPage":
        self.add_buttons[index].click()
        return self

    def cart_count(self) -> int:
        return int(self.cart_badge.text)

    @allure.step("Open cart")
    def open_cart(self) -> CartPage:
        self.cart_link.click()
        return CartPage()
