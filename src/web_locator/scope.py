"""
Scope - ``within`` blocks that narrow every lookup to one element.

Entering a scope resolves a container element, saves the session's bound
find functions and rebinds them to the container's own, so every
subsequent resolution searches only below it. Exiting restores exactly
what was saved. Scopes do not nest: entering while one is active is
rejected.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, TYPE_CHECKING
import logging

from web_locator.exceptions import ElementNotFoundError, ScopeError
from web_locator.interfaces.driver import FindElement, FindElements, IElement
from web_locator.locator import Locator, classify

if TYPE_CHECKING:
    from web_locator.session import LocatorSession

logger = logging.getLogger(__name__)


@dataclass
class ScopeFrame:
    """State of the active scope, including what to restore on exit."""
    locator: Locator
    element: IElement
    saved_find_element: FindElement
    saved_find_elements: FindElements
    saved_context: Any


class ScopeManager:
    """
    Enters and exits ``within`` scopes for one session.

    Example:
        >>> async with session.scope.within({"css": "form#login"}):
        ...     await helper.fill_field("Email", "user@example.com")
    """

    def __init__(self, session: "LocatorSession"):
        self._session = session
        self._frame: Optional[ScopeFrame] = None

    @property
    def is_active(self) -> bool:
        return self._frame is not None

    @property
    def active_root(self) -> Optional[IElement]:
        """The scoping element, or None when searching the whole document."""
        return self._frame.element if self._frame else None

    async def enter(self, raw: Any) -> IElement:
        """
        Narrow all lookups to the first element matching ``raw``.

        Fuzzy text is taken as a CSS selector here.

        Returns:
            The element now used as search root

        Raises:
            ScopeError: If a scope is already active
            ElementNotFoundError: If nothing matches ``raw``
        """
        if self._frame is not None:
            raise ScopeError(
                "Cannot enter a scope while another is active; exit it first",
                self._frame.locator,
            )

        session = self._session
        locator = classify(raw)
        query = locator.as_css() if locator.is_fuzzy else locator.to_query()
        element = await session.smart_wait.run(lambda: session.find_element(query.by, query.value))
        if element is None:
            raise ElementNotFoundError(raw, "Context element")

        self._frame = ScopeFrame(
            locator=locator,
            element=element,
            saved_find_element=session.find_element,
            saved_find_elements=session.find_elements,
            saved_context=session.context,
        )
        session.find_element = element.find_element
        session.find_elements = element.find_elements
        session.context = raw
        logger.debug(f"Within: entered {locator}")
        return element

    def exit(self) -> None:
        """Restore the saved find functions and the root context. No-op when unscoped."""
        frame = self._frame
        if frame is None:
            return
        session = self._session
        session.find_element = frame.saved_find_element
        session.find_elements = frame.saved_find_elements
        session.context = frame.saved_context
        self._frame = None
        logger.debug(f"Within: left {frame.locator}")

    @asynccontextmanager
    async def within(self, raw: Any) -> AsyncIterator[IElement]:
        """Scope the body of an ``async with`` block, exiting on every path."""
        element = await self.enter(raw)
        try:
            yield element
        finally:
            self.exit()
