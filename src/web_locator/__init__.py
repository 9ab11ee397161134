"""
Web Locator - Turns human-written locators into WebDriver elements.

Locators may be selectors (``"#login"``, ``"//form"``), structured
descriptors (``{"name": "password"}``) or plain text (``"Sign in"``).
Plain text is resolved through an ordered strategy chain that depends on
what the element is for: clicking, filling, checking or reading text.

Example:
    >>> from web_locator import WebHelper
    >>> from web_locator.browsers import SeleniumDriver
    >>> helper = WebHelper(SeleniumDriver(driver))
    >>> await helper.fill_field("Password", "secret")
    >>> await helper.click("Sign in")
"""

__version__ = "0.1.0"

from web_locator.config.settings import Settings, LocatorSettings
from web_locator.exceptions import (
    ElementNotFoundError,
    LocatorClassificationError,
    ScopeError,
)
from web_locator.helper import WebHelper
from web_locator.locator import Locator, LocatorType, Query, classify, xpath_literal
from web_locator.resolver import Resolver, assert_element_exists, locate
from web_locator.session import LocatorSession
from web_locator.strategies import Capability

__all__ = [
    "Capability",
    "ElementNotFoundError",
    "Locator",
    "LocatorClassificationError",
    "LocatorSession",
    "LocatorSettings",
    "LocatorType",
    "Query",
    "Resolver",
    "ScopeError",
    "Settings",
    "WebHelper",
    "assert_element_exists",
    "classify",
    "locate",
    "xpath_literal",
    "__version__",
]
