"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Web Locator,
providing clear error types for different failure scenarios.

Driver transport errors (stale elements, terminated sessions) are not
wrapped; they reach the caller as the driver raised them.
"""

from web_locator.exceptions.base import (
    WebLocatorError,
    ConfigurationError,
)
from web_locator.exceptions.locator import (
    LocatorError,
    LocatorClassificationError,
    ElementNotFoundError,
    ScopeError,
)
from web_locator.exceptions.assertion import AssertionFailedError

__all__ = [
    # Base exceptions
    "WebLocatorError",
    "ConfigurationError",
    # Locator exceptions
    "LocatorError",
    "LocatorClassificationError",
    "ElementNotFoundError",
    "ScopeError",
    # Assertion exceptions
    "AssertionFailedError",
]
