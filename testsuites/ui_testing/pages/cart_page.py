"""
Cart page object.
"""

from __future__ import annotations

from typing import List

from pagebind import Locator, Page, ReadinessDescriptor, Strategy, class_names, id_


class CartPage(Page):

    path = "/cart.html"
    ready = ReadinessDescriptor(Locator(Strategy.ID, "checkout"))

    item_names = class_names("inventory_item_name", cache=False)
    checkout_button = id_("checkout")

    def product_names(self) -> List[str]:
        return self.item_names.texts()
