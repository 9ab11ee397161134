"""
Locator - Classification of raw locators into typed values.

A raw locator is whatever a test author wrote to point at an element:

* a structured descriptor with a single key, ``{"css": "#login"}``,
  ``{"xpath": "//form"}``, ``{"id": "email"}``, ``{"name": "password"}``,
  or any other key, which is matched as an attribute
  (``{"data-test": "submit"}``);
* a string that is already a selector (``"#login"``, ``".btn"``,
  ``"//button"``, ``"(//a)[2]"``);
* any other string, which is *fuzzy*: free text matched against labels,
  visible text, names and values by the capability's strategy chain.

Classification is pure and deterministic.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

from selenium.webdriver.common.by import By

from web_locator.exceptions import LocatorClassificationError


class LocatorType(Enum):
    """Explicit locator types. A fuzzy locator has no type."""
    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    ATTRIBUTE = "attribute"


class Query(NamedTuple):
    """A driver-native query: a Selenium ``By`` strategy and its operand."""
    by: str
    value: str

    def __str__(self) -> str:
        return f"{self.by}={self.value}"


_KEYED_TYPES = {
    "css": LocatorType.CSS,
    "xpath": LocatorType.XPATH,
    "id": LocatorType.ID,
    "name": LocatorType.NAME,
}

_NATIVE_BY = {
    LocatorType.CSS: By.CSS_SELECTOR,
    LocatorType.XPATH: By.XPATH,
    LocatorType.ID: By.ID,
    LocatorType.NAME: By.NAME,
}

# "//a", ".//a", "./option", "../div", "/html", "(//a)[1]"
_XPATH_PREFIX = re.compile(r"^\(*(\.{1,2})?/")
_CSS_PREFIXES = ("#", ".")
_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_][\w.:-]*$")
# Characters outside the XPath 1.0 Char production
_XPATH_FORBIDDEN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


@dataclass(frozen=True)
class Locator:
    """
    A classified locator.

    Attributes:
        raw: The input as written (string or single-key mapping)
        type: Explicit type, or None for fuzzy text
        value: The operand for ``type`` (the text itself when fuzzy)
        attribute: Attribute name for ``LocatorType.ATTRIBUTE``
    """
    raw: Any = field(compare=False, hash=False)
    type: Optional[LocatorType]
    value: str
    attribute: Optional[str] = None

    @property
    def is_fuzzy(self) -> bool:
        return self.type is None

    def to_query(self) -> Query:
        """
        The single native query for an explicit locator.

        Raises:
            LocatorClassificationError: If the locator is fuzzy
        """
        if self.type is None:
            raise LocatorClassificationError(
                "Fuzzy locators have no direct query; resolve them through a strategy chain",
                self.raw,
            )
        if self.type is LocatorType.ATTRIBUTE:
            return Query(By.XPATH, f".//*[@{self.attribute} = {xpath_literal(self.value)}]")
        return Query(_NATIVE_BY[self.type], self.value)

    def as_css(self) -> Query:
        """Interpret the locator's text literally as a CSS selector."""
        return Query(By.CSS_SELECTOR, self.value)

    def __str__(self) -> str:
        if isinstance(self.raw, Mapping):
            key = self.attribute if self.type is LocatorType.ATTRIBUTE else self.type.value
            return f"{{{key}: {self.value}}}"
        if self.is_fuzzy:
            return f'"{self.value}"'
        return self.value


def classify(raw: Any) -> Locator:
    """
    Classify a raw locator.

    Args:
        raw: A string, a single-key mapping, or an existing Locator

    Returns:
        The classified Locator

    Raises:
        LocatorClassificationError: For empty input, mappings without
            exactly one key, non-string operands and unusable attribute names
    """
    if isinstance(raw, Locator):
        return raw

    if isinstance(raw, Mapping):
        if len(raw) != 1:
            raise LocatorClassificationError(
                f"Structured locator must have exactly one key, got {len(raw)}", raw
            )
        (key, value), = raw.items()
        if not isinstance(key, str) or not key:
            raise LocatorClassificationError("Structured locator key must be a non-empty string", raw)
        if not isinstance(value, str) or not value.strip():
            raise LocatorClassificationError(
                f"Structured locator {key!r} needs a non-empty string value", raw
            )
        locator_type = _KEYED_TYPES.get(key.lower())
        if locator_type is not None:
            return Locator(raw=raw, type=locator_type, value=value)
        if not _ATTRIBUTE_NAME.match(key):
            raise LocatorClassificationError(f"{key!r} is not a valid attribute name", raw)
        return Locator(raw=raw, type=LocatorType.ATTRIBUTE, value=value, attribute=key)

    if not isinstance(raw, str):
        raise LocatorClassificationError(
            f"Locator must be a string or a single-key mapping, got {type(raw).__name__}", raw
        )
    if not raw.strip():
        raise LocatorClassificationError("Locator must not be empty", raw)

    if _XPATH_PREFIX.match(raw):
        return Locator(raw=raw, type=LocatorType.XPATH, value=raw)
    if raw.startswith(_CSS_PREFIXES):
        return Locator(raw=raw, type=LocatorType.CSS, value=raw)
    return Locator(raw=raw, type=None, value=raw)


def render_locator(raw: Any) -> str:
    """Human-readable rendering of a raw locator, for error messages."""
    try:
        return str(classify(raw))
    except LocatorClassificationError:
        return repr(raw)


def xpath_literal(text: str) -> str:
    """
    Quote text as an XPath 1.0 string literal.

    XPath literals cannot escape quotes, so text holding both quote kinds
    is split on the single quotes and rebuilt with ``concat()``:

        Sign in            ->  'Sign in'
        Don't              ->  "Don't"
        Say "hi", don't    ->  concat('Say "hi", don', "'", 't')

    Raises:
        LocatorClassificationError: If the text has characters XPath cannot carry
    """
    if _XPATH_FORBIDDEN.search(text):
        raise LocatorClassificationError(
            "Locator text contains control characters that cannot appear in an XPath literal",
            text,
        )
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"
