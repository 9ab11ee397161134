"""
Selenium Driver - Implementation of IDriver on top of Selenium WebDriver.

Selenium's Python bindings are synchronous; every call is pushed to a
worker thread so an implicit wait never blocks the event loop.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional

from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from web_locator.interfaces.driver import IDriver, IElement

logger = logging.getLogger(__name__)

POLL_INTERVAL_S = 0.1


async def _run(fn: Callable[..., Any], *args: Any) -> Any:
    return await asyncio.to_thread(fn, *args)


class SeleniumElement(IElement):
    """Selenium implementation of IElement."""

    def __init__(self, element: WebElement):
        self._element = element

    @property
    def raw(self) -> WebElement:
        """The wrapped Selenium WebElement."""
        return self._element

    async def find_element(self, by: str, value: str) -> Optional[IElement]:
        try:
            found = await _run(self._element.find_element, by, value)
        except NoSuchElementException:
            return None
        return SeleniumElement(found)

    async def find_elements(self, by: str, value: str) -> List[IElement]:
        found = await _run(self._element.find_elements, by, value)
        return [SeleniumElement(el) for el in found]

    async def get_text(self) -> str:
        return await _run(lambda: self._element.text)

    async def get_attribute(self, name: str) -> Optional[str]:
        return await _run(self._element.get_attribute, name)

    async def get_tag_name(self) -> str:
        tag = await _run(lambda: self._element.tag_name)
        return tag.lower()

    async def is_selected(self) -> bool:
        return await _run(self._element.is_selected)

    async def is_displayed(self) -> bool:
        return await _run(self._element.is_displayed)

    async def click(self) -> None:
        await _run(self._element.click)

    async def clear(self) -> None:
        await _run(self._element.clear)

    async def send_keys(self, value: str) -> None:
        await _run(self._element.send_keys, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SeleniumElement):
            return self._element == other._element
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._element)

    def __repr__(self) -> str:
        return f"SeleniumElement({self._element.id!r})"


class SeleniumDriver(IDriver):
    """
    Selenium implementation of IDriver.

    Wraps an already started WebDriver session; starting and quitting the
    browser stays with the caller.

    Example:
        >>> from selenium import webdriver
        >>> driver = SeleniumDriver(webdriver.Firefox())
        >>> helper = WebHelper(driver)
        >>> await helper.click("Sign in")
    """

    def __init__(self, driver: WebDriver):
        self._driver = driver

    @property
    def raw(self) -> WebDriver:
        """The wrapped Selenium WebDriver."""
        return self._driver

    async def find_element(self, by: str, value: str) -> Optional[IElement]:
        try:
            found = await _run(self._driver.find_element, by, value)
        except NoSuchElementException:
            return None
        return SeleniumElement(found)

    async def find_elements(self, by: str, value: str) -> List[IElement]:
        found = await _run(self._driver.find_elements, by, value)
        return [SeleniumElement(el) for el in found]

    async def set_implicit_wait(self, timeout_ms: int) -> None:
        await _run(self._driver.implicitly_wait, timeout_ms / 1000)

    async def double_click(self, element: IElement) -> None:
        if not isinstance(element, SeleniumElement):
            raise TypeError(f"Expected a SeleniumElement, got {type(element).__name__}")
        await _run(lambda: ActionChains(self._driver).double_click(element.raw).perform())

    async def wait_until(
        self,
        condition: Callable[[], Awaitable[Any]],
        timeout_ms: int,
        message: str = "",
    ) -> Any:
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            value = await condition()
            if value:
                return value
            if time.monotonic() >= deadline:
                raise TimeoutException(message or f"Condition not met within {timeout_ms}ms")
            await asyncio.sleep(POLL_INTERVAL_S)
