"""
================================================================================
Declared Locators
================================================================================

Class-level declarations of the elements a page works with.

    class LoginPage(Page):
        username = name("user-name")
        password = id_or_name("password")
        login_button = data_test("login-button", ready_when=is_clickable)
        errors = css_selectors(".error", cache=False)

        def login(self, user, secret):
            self.username.send_keys(user)
            self.password.send_keys(secret)
            self.login_button.click()

Reading a declared attribute on a page instance returns an accessor bound
to that page. The accessor resolves lazily on first use, caches per page and
recovers once from a stale element:

    page.username.get()          # DecoratedElement, resolved or cached
    page.username.click()        # resolve + click, one retry if stale
    page.errors.get()            # list of DecoratedElement

Defaults for the wait policy and readiness predicate come from the active
site when a declaration does not set them.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Type, Union

from loguru import logger

from .element_cache import DecoratedElement
from .errors import StaleElementError
from .locator import Locator, Strategy, attribute_xpath
from .wait_policy import WaitPolicy

if TYPE_CHECKING:
    from .page import Page


Predicate = Callable[[Any], bool]


class LocatorSpec:
    """
    Descriptor declaring one element (or list of elements) on a page class.

    Args:
        locator: What to look for
        multiple: Resolve a list instead of a single element
        cache: Reuse the resolved element between reads
        wait_policy: Overrides the site's wait policy
        ready_when: Overrides the site's readiness predicate
    """

    def __init__(
        self,
        locator: Locator,
        multiple: bool = False,
        cache: bool = True,
        wait_policy: Optional[WaitPolicy] = None,
        ready_when: Optional[Predicate] = None,
    ):
        self.locator = locator
        self.multiple = multiple
        self.cache = cache
        self.wait_policy = wait_policy
        self.ready_when = ready_when
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, page: Optional["Page"], owner: Optional[type] = None):
        if page is None:
            return self
        return page._accessor(self)

    def __set__(self, page: "Page", value: Any) -> None:
        raise AttributeError(f"Declared locator {self.name!r} cannot be reassigned")

    def __repr__(self) -> str:
        policy = self.wait_policy
        return (
            f"LocatorSpec(name={self.name!r}, by={self.locator!r}, "
            f"{'multiple, ' if self.multiple else ''}cache={self.cache}, "
            f"timeout={f'{policy.timeout}s' if policy else 'N/A'}, "
            f"polling={f'{policy.polling_interval}s' if policy else 'N/A'})"
        )


# =============================================================================
# Accessors
# =============================================================================

class _Accessor:
    """Binding of one LocatorSpec to one page instance."""

    __slots__ = ("_page", "_spec")

    def __init__(self, page: "Page", spec: LocatorSpec):
        self._page = page
        self._spec = spec

    @property
    def spec(self) -> LocatorSpec:
        return self._spec

    @property
    def locator(self) -> Locator:
        return self._spec.locator

    @property
    def entry(self):
        """The CacheEntry, created on first access."""
        return self._page._entry_for(self._spec)

    def get(self):
        return self._page._element_for(self._spec)

    def refresh(self):
        """Resolve again regardless of the cache."""
        return self._page._element_for(self._spec, force=True)

    def invalidate(self) -> None:
        self.entry.invalidate()

    def __repr__(self) -> str:
        page = type(self._page).__name__
        entry = self._page._peek_entry(self._spec)
        chain = self._page._peek_chain()
        policy = entry.policy if entry is not None else self._spec.wait_policy
        return (
            f"{type(self).__name__}(page={page}, by={self._spec.locator!r}, "
            f"cache={self._spec.cache}, "
            f"wait={policy if policy is not None else 'N/A'}, "
            f"decorators={chain.class_names() if chain else 'N/A'})"
        )


class ElementAccessor(_Accessor):
    """
    Single declared element.

    Actions and queries retry once on a freshly resolved element when the
    cached one turns out to be stale; a second staleness propagates.
    """

    __slots__ = ()

    def get(self) -> DecoratedElement:
        return super().get()

    def _with_stale_retry(self, action: str, call: Callable[[DecoratedElement], Any]) -> Any:
        try:
            return call(self.get())
        except StaleElementError:
            logger.debug(f"{self._spec.name}.{action}: element went stale, resolving once more")
            self.invalidate()
            return call(self.get())

    def click(self) -> None:
        self._with_stale_retry("click", lambda e: e.click())

    def send_keys(self, *keys: str) -> None:
        self._with_stale_retry("send_keys", lambda e: e.send_keys(*keys))

    def clear(self) -> None:
        self._with_stale_retry("clear", lambda e: e.clear())

    def submit(self) -> None:
        self._with_stale_retry("submit", lambda e: e.submit())

    @property
    def text(self) -> str:
        return self._with_stale_retry("text", lambda e: e.text)

    @property
    def tag_name(self) -> str:
        return self._with_stale_retry("tag_name", lambda e: e.tag_name)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._with_stale_retry("get_attribute", lambda e: e.get_attribute(name))

    def is_displayed(self) -> bool:
        return self._with_stale_retry("is_displayed", lambda e: e.is_displayed())

    def is_enabled(self) -> bool:
        return self._with_stale_retry("is_enabled", lambda e: e.is_enabled())

    def is_selected(self) -> bool:
        return self._with_stale_retry("is_selected", lambda e: e.is_selected())


class ElementsAccessor(_Accessor):
    """List of declared elements."""

    __slots__ = ()

    def get(self) -> List[DecoratedElement]:
        return super().get()

    def texts(self) -> List[str]:
        try:
            return [e.text for e in self.get()]
        except StaleElementError:
            logger.debug(f"{self._spec.name}.texts: list went stale, resolving once more")
            self.invalidate()
            return [e.text for e in self.get()]

    def __iter__(self) -> Iterator[DecoratedElement]:
        return iter(self.get())

    def __len__(self) -> int:
        return len(self.get())

    def __getitem__(self, index: int) -> DecoratedElement:
        return self.get()[index]


Accessor = Union[ElementAccessor, ElementsAccessor]


# =============================================================================
# Factories
# =============================================================================

def _single(strategy: Strategy) -> Callable[..., LocatorSpec]:
    def factory(
        value: str,
        cache: bool = True,
        wait_policy: Optional[WaitPolicy] = None,
        ready_when: Optional[Predicate] = None,
    ) -> LocatorSpec:
        return LocatorSpec(Locator(strategy, value), False, cache, wait_policy, ready_when)

    factory.__doc__ = f"Declare one element located by {strategy.value}."
    return factory


def _multiple(strategy: Strategy) -> Callable[..., LocatorSpec]:
    def factory(
        value: str,
        cache: bool = True,
        wait_policy: Optional[WaitPolicy] = None,
        ready_when: Optional[Predicate] = None,
    ) -> LocatorSpec:
        return LocatorSpec(Locator(strategy, value), True, cache, wait_policy, ready_when)

    factory.__doc__ = f"Declare a list of elements located by {strategy.value}."
    return factory


def _attribute(attribute: str, multiple: bool) -> Callable[..., LocatorSpec]:
    def factory(
        value: str,
        cache: bool = True,
        wait_policy: Optional[WaitPolicy] = None,
        ready_when: Optional[Predicate] = None,
    ) -> LocatorSpec:
        locator = Locator(Strategy.XPATH, attribute_xpath(attribute, value))
        return LocatorSpec(locator, multiple, cache, wait_policy, ready_when)

    factory.__doc__ = (
        f"Declare {'a list of elements' if multiple else 'one element'} "
        f"whose {attribute} attribute equals the value."
    )
    return factory


# `id_` avoids shadowing the builtin.
id_ = _single(Strategy.ID)
name = _single(Strategy.NAME)
names = _multiple(Strategy.NAME)
class_name = _single(Strategy.CLASS_NAME)
class_names = _multiple(Strategy.CLASS_NAME)
css_selector = _single(Strategy.CSS_SELECTOR)
css_selectors = _multiple(Strategy.CSS_SELECTOR)
link_text = _single(Strategy.LINK_TEXT)
link_texts = _multiple(Strategy.LINK_TEXT)
partial_link_text = _single(Strategy.PARTIAL_LINK_TEXT)
partial_link_texts = _multiple(Strategy.PARTIAL_LINK_TEXT)
tag_name = _single(Strategy.TAG_NAME)
tag_names = _multiple(Strategy.TAG_NAME)
xpath = _single(Strategy.XPATH)
xpaths = _multiple(Strategy.XPATH)
id_or_name = _single(Strategy.ID_OR_NAME)

data_test = _attribute("data-test", multiple=False)
data_tests = _attribute("data-test", multiple=True)
data_test_id = _attribute("data-testid", multiple=False)
data_test_ids = _attribute("data-testid", multiple=True)
data_qa = _attribute("data-qa", multiple=False)
data_qas = _attribute("data-qa", multiple=True)


def element(
    locator: Locator,
    cache: bool = True,
    wait_policy: Optional[WaitPolicy] = None,
    ready_when: Optional[Predicate] = None,
) -> LocatorSpec:
    """Declare one element from a prebuilt Locator."""
    return LocatorSpec(locator, False, cache, wait_policy, ready_when)


def elements(
    locator: Locator,
    cache: bool = True,
    wait_policy: Optional[WaitPolicy] = None,
    ready_when: Optional[Predicate] = None,
) -> LocatorSpec:
    """Declare a list of elements from a prebuilt Locator."""
    return LocatorSpec(locator, True, cache, wait_policy, ready_when)


def accessor_type(spec: LocatorSpec) -> Type[_Accessor]:
    return ElementsAccessor if spec.multiple else ElementAccessor


__all__ = [
    "LocatorSpec",
    "ElementAccessor",
    "ElementsAccessor",
    "Accessor",
    "accessor_type",
    "element",
    "elements",
    "id_",
    "name",
    "names",
    "class_name",
    "class_names",
    "css_selector",
    "css_selectors",
    "link_text",
    "link_texts",
    "partial_link_text",
    "partial_link_texts",
    "tag_name",
    "tag_names",
    "xpath",
    "xpaths",
    "id_or_name",
    "data_test",
    "data_tests",
    "data_test_id",
    "data_test_ids",
    "data_qa",
    "data_qas",
]
