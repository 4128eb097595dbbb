"""
================================================================================
Login Feature UI Tests
================================================================================

Login flows against the demo shop, written with declared locators and
web_test().

================================================================================
"""

import allure
import pytest

from pagebind import web_test
from testsuites.ui_testing.pages import InventoryPage, LoginPage


@allure.epic("UI Testing")
@allure.feature("Authentication")
class TestLogin:
    """Login UI test suite."""

    @allure.story("Happy Path")
    @allure.title("Login succeeds with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.auth
    def test_login_success(self, shop, driver_factory):
        """Verify user can login and reach the inventory."""

        def has_products(inventory):
            assert inventory.product_names(), "inventory should list products"

        def block(entry):
            (entry.open(LoginPage)
                  .on(lambda page: page.login())
                  .verify(has_products))

        web_test(shop, block, driver_factory=driver_factory)

    @allure.story("Negative Path")
    @allure.title("Login fails for a locked out user")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.auth
    def test_locked_out_user(self, shop, driver_factory):
        """Verify a locked account sees an error and stays on the login page."""

        def verify(page):
            assert "locked out" in page.error_message()
            assert not page.driver.current_url.endswith(InventoryPage.path)

        def block(entry):
            (entry.open(LoginPage)
                  .then(lambda page: page.login_expecting_error("locked_out_user", "secret_sauce"))
                  .verify(verify))

        web_test(shop, block, driver_factory=driver_factory)

    @allure.story("Form Validation")
    @allure.title("Login fails with empty username")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.auth
    def test_login_empty_username(self, shop, driver_factory):
        """Verify the form asks for a username."""

        def block(entry):
            page = entry.open(LoginPage).page
            page.login_expecting_error("", "secret_sauce")
            return page.error_message()

        assert "Username is required" in web_test(shop, block, driver_factory=driver_factory)
