"""
================================================================================
Login Page Object
================================================================================

The shop's landing page: username, password and a login button.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import Optional

import allure

from pagebind import Locator, Page, ReadinessDescriptor, Strategy, data_test, data_tests, is_clickable

from .inventory_page import InventoryPage


class LoginPage(Page):
    """Login form."""

    path = "/"
    ready = ReadinessDescriptor(Locator(Strategy.ID, "login-button"))

    username = data_test("username")
    password = data_test("password")
    login_button = data_test("login-button", ready_when=is_clickable)
    errors = data_tests("error", cache=False)

    def fill(self, username: Optional[str] = None, password: Optional[str] = None) -> "LoginPage":
        """Type credentials; defaults come from SHOP_USERNAME / SHOP_PASSWORD."""
        if username is None:
            username = os.getenv("SHOP_USERNAME", "standard_user")
        if password is None:
            password = os.getenv("SHOP_PASSWORD", "secret_sauce")

        self.username.clear()
        self.username.send_keys(username)
        self.password.clear()
        self.password.send_keys(password)
        return self

    @allure.step("Login (username={username})")
    def login(self, username: Optional[str] = None, password: Optional[str] = None) -> InventoryPage:
        self.fill(username, password)
        self.login_button.click()
        return InventoryPage()

    @allure.step("Submit login expecting an error")
    def login_expecting_error(self, username: str, password: str) -> "LoginPage":
        self.fill(username, password)
        self.login_button.click()
        return self

    def error_message(self) -> str:
        return self.errors.texts()[0]
