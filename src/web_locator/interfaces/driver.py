"""
Driver Interface - Abstract base classes for the WebDriver the engine consumes.

The resolution engine only needs a handful of capabilities from a browser
driver: native element queries (``by`` is one of Selenium's ``By``
strategies, e.g. ``"css selector"`` or ``"xpath"``), a session-global
implicit wait, and a few element reads and actions. Anything that
implements these contracts can be driven by ``web_locator``.

Example:
    >>> from web_locator.browsers import SeleniumDriver
    >>> driver = SeleniumDriver(webdriver.Chrome())
    >>> elements = await driver.find_elements("css selector", "#login")
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, List, Optional


class ISearchRoot(ABC):
    """
    Something elements can be searched under: the document or an element.
    """

    @abstractmethod
    async def find_element(self, by: str, value: str) -> Optional["IElement"]:
        """
        Find the first element matching a native query.

        Args:
            by: Query strategy (Selenium ``By`` constant)
            value: CSS selector, XPath expression, id or name

        Returns:
            The first matching element, or None when nothing matched
        """
        ...

    @abstractmethod
    async def find_elements(self, by: str, value: str) -> List["IElement"]:
        """
        Find all elements matching a native query.

        Returns:
            Matching elements in document order (possibly empty)
        """
        ...


class IElement(ISearchRoot):
    """
    Abstract interface for a live DOM element.

    Searches made through an element are relative to it, which is what
    ``within`` scoping relies on.
    """

    @abstractmethod
    async def get_text(self) -> str:
        """Get the rendered text of this element."""
        ...

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute (or property) value from this element.

        Returns:
            The attribute value, or None if not present
        """
        ...

    @abstractmethod
    async def get_tag_name(self) -> str:
        """Get the lower-case tag name."""
        ...

    @abstractmethod
    async def is_selected(self) -> bool:
        """Check if a checkbox, radio or option is selected."""
        ...

    @abstractmethod
    async def is_displayed(self) -> bool:
        """Check if this element is visible."""
        ...

    @abstractmethod
    async def click(self) -> None:
        """Click on this element."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear the value of a text input."""
        ...

    @abstractmethod
    async def send_keys(self, value: str) -> None:
        """Type text into this element."""
        ...


class IDriver(ISearchRoot):
    """
    Abstract interface for a browser session.

    The implicit wait is session-global state: every query made on the
    session, or on any element of it, waits up to that long for matches.
    """

    @abstractmethod
    async def set_implicit_wait(self, timeout_ms: int) -> None:
        """
        Set the session's implicit wait.

        Args:
            timeout_ms: Milliseconds to wait for elements; 0 disables waiting
        """
        ...

    @abstractmethod
    async def double_click(self, element: IElement) -> None:
        """Double-click an element."""
        ...

    @abstractmethod
    async def wait_until(
        self,
        condition: Callable[[], Awaitable[Any]],
        timeout_ms: int,
        message: str = "",
    ) -> Any:
        """
        Poll ``condition`` until it returns a truthy value.

        Args:
            condition: Coroutine function polled until truthy
            timeout_ms: Upper bound on the whole wait
            message: Text for the timeout error

        Returns:
            The first truthy value returned by ``condition``

        Raises:
            The driver's timeout error if ``condition`` stays falsy for ``timeout_ms``
        """
        ...


FindElement = Callable[[str, str], Awaitable[Optional[IElement]]]
FindElements = Callable[[str, str], Awaitable[List[IElement]]]
