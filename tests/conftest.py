"""
Pytest configuration and fixtures.

``FakeDriver`` is an in-memory IDriver over an lxml document: XPath and
CSS queries are evaluated for real, so strategy chains can be tested
against actual markup. Every query is logged on the driver.
"""

from typing import Any, Awaitable, Callable, List, Optional, Tuple

import lxml.html
import pytest
from cssselect import SelectorError
from selenium.common.exceptions import InvalidSelectorException, TimeoutException
from selenium.webdriver.common.by import By

from web_locator.interfaces.driver import IDriver, IElement


def _path(node) -> str:
    return node.getroottree().getpath(node)


def _is_hidden(node) -> bool:
    if node.tag == "input" and (node.get("type") or "").lower() == "hidden":
        return True
    current = node
    while current is not None:
        style = (current.get("style") or "").replace(" ", "").lower()
        if current.get("hidden") is not None or "display:none" in style:
            return True
        current = current.getparent()
    return False


class FakeElement(IElement):
    """IElement backed by an lxml node."""

    def __init__(self, node, driver: "FakeDriver"):
        self.node = node
        self.driver = driver

    @property
    def path(self) -> str:
        return _path(self.node)

    async def find_element(self, by: str, value: str) -> Optional[IElement]:
        found = await self.find_elements(by, value)
        return found[0] if found else None

    async def find_elements(self, by: str, value: str) -> List[IElement]:
        return self.driver.query(self.node, by, value)

    async def get_text(self) -> str:
        return " ".join(self.node.text_content().split())

    async def get_attribute(self, name: str) -> Optional[str]:
        node = self.node
        if name == "value":
            if node.tag == "select":
                options = node.xpath(".//option")
                chosen = [o for o in options if o.get("selected") is not None] or options[:1]
                if not chosen:
                    return ""
                option = chosen[0]
                return option.get("value", option.text_content())
            if node.tag == "textarea":
                return node.text or ""
            return node.get("value", "")
        return node.get(name)

    async def get_tag_name(self) -> str:
        return self.node.tag.lower()

    async def is_selected(self) -> bool:
        return self.node.get("checked") is not None or self.node.get("selected") is not None

    async def is_displayed(self) -> bool:
        return not _is_hidden(self.node)

    async def click(self) -> None:
        node = self.node
        self.driver.clicked.append(self.path)
        kind = (node.get("type") or "").lower()
        if node.tag == "input" and kind == "checkbox":
            if node.get("checked") is not None:
                del node.attrib["checked"]
            else:
                node.set("checked", "checked")
        elif node.tag == "input" and kind == "radio":
            node.set("checked", "checked")
        elif node.tag == "option":
            select = next(node.iterancestors("select"), None)
            if select is not None and select.get("multiple") is None:
                for option in select.iter("option"):
                    option.attrib.pop("selected", None)
            node.set("selected", "selected")

    async def clear(self) -> None:
        if self.node.tag == "textarea":
            self.node.text = ""
        else:
            self.node.set("value", "")

    async def send_keys(self, value: str) -> None:
        if self.node.tag == "textarea":
            self.node.text = (self.node.text or "") + value
        else:
            self.node.set("value", self.node.get("value", "") + value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FakeElement):
            return self.path == other.path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"FakeElement({self.path})"


class FakeDriver(IDriver):
    """
    IDriver over an HTML string.

    Attributes:
        queries: (by, value) of every query, from the document or any element
        implicit_waits: Every implicit wait set, in order
        clicked: Paths of clicked nodes
        double_clicked: Paths of double-clicked nodes
    """

    def __init__(self, html: str):
        self.document = lxml.html.document_fromstring(html)
        self.queries: List[Tuple[str, str]] = []
        self.implicit_waits: List[int] = []
        self.implicit_wait = 0
        self.clicked: List[str] = []
        self.double_clicked: List[str] = []

    def query(self, node, by: str, value: str) -> List[IElement]:
        self.queries.append((by, value))
        if by == By.XPATH:
            found = node.xpath(value)
        elif by == By.CSS_SELECTOR:
            try:
                found = node.cssselect(value)
            except SelectorError as e:
                raise InvalidSelectorException(f"invalid selector: {value!r}") from e
        elif by == By.ID:
            found = node.xpath(".//*[@id = $v]", v=value)
        elif by == By.NAME:
            found = node.xpath(".//*[@name = $v]", v=value)
        else:
            raise ValueError(f"Unsupported query strategy {by!r}")
        return [FakeElement(n, self) for n in found if isinstance(n, lxml.html.HtmlElement)]

    def element(self, css: str) -> FakeElement:
        """The first node matching ``css``, wrapped, without logging a query."""
        return FakeElement(self.document.cssselect(css)[0], self)

    async def find_element(self, by: str, value: str) -> Optional[IElement]:
        found = await self.find_elements(by, value)
        return found[0] if found else None

    async def find_elements(self, by: str, value: str) -> List[IElement]:
        return self.query(self.document, by, value)

    async def set_implicit_wait(self, timeout_ms: int) -> None:
        self.implicit_waits.append(timeout_ms)
        self.implicit_wait = timeout_ms

    async def double_click(self, element: IElement) -> None:
        self.double_clicked.append(element.path)

    async def wait_until(
        self,
        condition: Callable[[], Awaitable[Any]],
        timeout_ms: int,
        message: str = "",
    ) -> Any:
        value = await condition()
        if not value:
            raise TimeoutException(message)
        return value


@pytest.fixture
def settings():
    """Provide test settings."""
    from web_locator.config import Settings, LocatorSettings

    return Settings(locator=LocatorSettings(smart_wait_ms=0, wait_for_timeout_ms=500))


@pytest.fixture
def make_driver():
    """Build a FakeDriver from HTML."""
    return FakeDriver


@pytest.fixture
def make_session():
    """Build a LocatorSession over HTML: ``make_session(html, smart_wait_ms=0)``."""
    from web_locator.config import LocatorSettings
    from web_locator.session import LocatorSession

    def factory(html: str, smart_wait_ms: int = 0) -> LocatorSession:
        return LocatorSession(FakeDriver(html), LocatorSettings(smart_wait_ms=smart_wait_ms))

    return factory


@pytest.fixture
def make_helper():
    """Build a WebHelper over HTML: ``make_helper(html, smart_wait_ms=0)``."""
    from web_locator.config import LocatorSettings
    from web_locator.helper import WebHelper

    def factory(html: str, smart_wait_ms: int = 0) -> WebHelper:
        return WebHelper(FakeDriver(html), LocatorSettings(smart_wait_ms=smart_wait_ms))

    return factory
