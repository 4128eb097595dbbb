import pytest

from pagebind.errors import InvalidLocator
from pagebind.locator import Locator, Strategy, attribute_xpath, escape_xpath_literal


def test_strategy_accepts_enum_and_string():
    assert Locator(Strategy.ID, "login").strategy is Strategy.ID
    assert Locator.of("css selector", ".card").strategy is Strategy.CSS_SELECTOR


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_value_is_rejected(value):
    with pytest.raises(InvalidLocator):
        Locator(Strategy.NAME, value)


def test_unknown_strategy_is_rejected():
    with pytest.raises(InvalidLocator, match="Unknown locator strategy"):
        Locator("shadow", "x")


def test_invalid_locator_is_a_value_error():
    with pytest.raises(ValueError):
        Locator(Strategy.ID, "")


def test_xpath_and_css_values_are_not_interpreted():
    raw = "//div[@class='a' and ./span[text()='b']]"
    assert Locator(Strategy.XPATH, raw).value == raw
    assert Locator(Strategy.CSS_SELECTOR, "div >>> [[").value == "div >>> [["


def test_locators_are_values():
    assert Locator(Strategy.ID, "a") == Locator("id", "a")
    assert len({Locator(Strategy.ID, "a"), Locator("id", "a")}) == 1


def test_string_forms():
    locator = Locator(Strategy.LINK_TEXT, "Home")
    assert str(locator) == "By.link_text: Home"
    assert repr(locator) == "Locator(by=link text, value='Home')"


def test_xpath_literal_escaping():
    assert escape_xpath_literal("login") == "'login'"
    assert escape_xpath_literal("it's") == "concat('it', \"'\", 's')"


def test_attribute_xpath():
    assert attribute_xpath("data-test", "login-button") == ".//*[@data-test='login-button']"
    with pytest.raises(InvalidLocator):
        attribute_xpath("data-test", " ")
