"""
Assertion exceptions.
"""

from typing import Any

from web_locator.exceptions.base import WebLocatorError


class AssertionFailedError(WebLocatorError, AssertionError):
    """
    A see/dontSee style check did not hold.

    Subclasses AssertionError so test runners report it as a failure
    rather than an error.

    Attributes:
        subject: What was inspected (e.g. "web application")
        expected: The value that was looked for
        actual: The value that was found
    """

    def __init__(self, message: str, subject: str = "", expected: Any = None, actual: Any = None):
        super().__init__(message)
        self.subject = subject
        self.expected = expected
        self.actual = actual
