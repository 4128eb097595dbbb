"""
================================================================================
pagebind
================================================================================

Declarative locators, readiness waits and thread-confined browser sessions
for UI test automation.

    class ShopSite(Site):
        base_url = "https://shop.example.com"

    class LoginPage(Page):
        username = name("user-name")
        password = id_or_name("password")
        login_button = data_test("login-button", ready_when=is_clickable)

    web_test(ShopSite(), lambda entry: entry.open(LoginPage).then(...))

Author: Automation Team
License: MIT
================================================================================
"""

from .configuration import (
    ConfigLoader,
    DefaultProjectConfiguration,
    ProjectConfiguration,
    actual_configuration,
    load_configuration,
    reset_configuration,
)
from .decorators import (
    BorderStyle,
    Color,
    Decorator,
    DecoratorChain,
    DecoratorManager,
    HighlighterDecorator,
    LoggerDecorator,
    Operation,
    OperationKind,
    SlowMotionDecorator,
    TraceEvent,
    TraceLog,
    compose,
    merge_decorators,
)
from .descriptors import (
    ElementAccessor,
    ElementsAccessor,
    LocatorSpec,
    class_name,
    class_names,
    css_selector,
    css_selectors,
    data_qa,
    data_qas,
    data_test,
    data_test_id,
    data_test_ids,
    data_tests,
    element,
    elements,
    id_,
    id_or_name,
    link_text,
    link_texts,
    name,
    names,
    partial_link_text,
    partial_link_texts,
    tag_name,
    tag_names,
    xpath,
    xpaths,
)
from .element_cache import CacheEntry, DecoratedElement, ElementCache
from .errors import (
    ConfigurationError,
    DriverError,
    DriverMismatch,
    ElementClickInterceptedError,
    ElementNotInteractableError,
    InvalidLocator,
    NoActiveSession,
    NoSuchElementError,
    PageBindError,
    ResolutionTimeout,
    StaleElementError,
    ThreadConfinementViolation,
)
from .locator import Locator, Strategy
from .log import get_logger, init_logger
from .page import Page, PageState
from .readiness import (
    ReadinessCondition,
    ReadinessDescriptor,
    all_clickable,
    all_displayed,
    all_enabled,
    any_present,
    is_clickable,
    is_displayed,
    is_enabled,
    is_present,
)
from .resolution import Fatal, NotReady, Ready, ResolutionEngine
from .session import Session, SessionRegistry, session_context, with_driver
from .site import Cookie, Site
from .wait_policy import WaitPolicy, get_wait_policy
from .web_test import (
    PageScope,
    SiteEntry,
    SwitchBackScope,
    WebTestResult,
    WebTestStatus,
    web_session,
    web_test,
    web_test_result,
)

__version__ = "1.0.0"
