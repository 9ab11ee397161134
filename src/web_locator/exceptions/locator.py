"""
Locator and element resolution exceptions.
"""

from typing import Any

from web_locator.exceptions.base import WebLocatorError


class LocatorError(WebLocatorError):
    """Base exception for locator-related errors."""
    pass


class LocatorClassificationError(LocatorError):
    """
    Locator cannot be classified or safely embedded in a query.

    Raised for empty locators, structured descriptors with zero or
    several keys, non-string operands, and text that cannot be carried
    inside an XPath string literal. Never retried.
    """

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message, {"locator": repr(raw)} if raw is not None else None)
        self.raw = raw


class ElementNotFoundError(LocatorError):
    """
    No element matched a locator.

    The message reads ``"<prefix> <locator> <suffix>"`` where the locator
    is rendered the same way for strings and structured descriptors, e.g.
    ``Field "Password" was not found by text|CSS|XPath``.
    """

    def __init__(
        self,
        locator: Any,
        prefix: str = "Element",
        suffix: str = "was not found by text|CSS|XPath",
    ):
        # Imported lazily: locator.py imports this module.
        from web_locator.locator import render_locator

        rendered = render_locator(locator)
        super().__init__(f"{prefix} {rendered} {suffix}")
        self.locator = locator
        self.selector = rendered
        self.prefix = prefix
        self.suffix = suffix


class ScopeError(LocatorError):
    """
    Invalid ``within`` scope transition.

    Raised when a scope is entered while another one is still active.
    Scopes do not nest.
    """

    def __init__(self, message: str, active: Any = None):
        super().__init__(message, {"active": str(active)} if active is not None else None)
        self.active = active
