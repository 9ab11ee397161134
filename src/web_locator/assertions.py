"""
Assertions - Comparators with a positive and a negated form.

Every check reads the same way from both sides:

    >>> includes("web application").assert_("Welcome", page_text)
    >>> includes("web application").negate("Error", page_text)

A failed check raises AssertionFailedError with a sentence describing
what was inspected.
"""

from typing import Any, Callable, Sized

from web_locator.exceptions import AssertionFailedError


def _short(value: Any, limit: int = 200) -> str:
    text = str(value)
    return text if len(text) <= limit else text[:limit] + "..."


class Comparator:
    """
    A named check usable as ``assert_`` or ``negate``.

    Attributes:
        subject: What is being inspected, used in failure messages
        verb: How the expectation reads ("to include", "to equal", ...)
    """

    def __init__(self, subject: str, verb: str, check: Callable[..., bool], unary: bool = False):
        self.subject = subject
        self.verb = verb
        self._check = check
        self._unary = unary

    def assert_(self, *args: Any) -> None:
        if not self._check(*args):
            self._fail(args, negated=False)

    def negate(self, *args: Any) -> None:
        if self._check(*args):
            self._fail(args, negated=True)

    def _fail(self, args: tuple, negated: bool) -> None:
        expectation = f"not {self.verb}" if negated else self.verb
        if self._unary:
            actual = args[0] if args else None
            message = f"expected {self.subject} {expectation}"
            raise AssertionFailedError(message, self.subject, None, actual)
        expected, actual = args
        message = f'expected {self.subject} "{_short(actual)}" {expectation} "{_short(expected)}"'
        raise AssertionFailedError(message, self.subject, expected, actual)


def includes(subject: str) -> Comparator:
    """``haystack`` contains ``needle``: call with ``(needle, haystack)``."""
    return Comparator(subject, "to include", lambda needle, haystack: str(needle) in str(haystack))


def equals(subject: str) -> Comparator:
    """Values are equal: call with ``(expected, actual)``."""
    return Comparator(subject, "to equal", lambda expected, actual: expected == actual)


def truth(subject: str, description: str) -> Comparator:
    """Value is truthy: call with ``(value)``."""
    return Comparator(subject, description, lambda value: bool(value), unary=True)


def empty(subject: str) -> Comparator:
    """Collection is empty: call with ``(collection)``."""

    def is_empty(collection: Sized) -> bool:
        return len(collection) == 0

    return Comparator(subject, "to be empty", is_empty, unary=True)
