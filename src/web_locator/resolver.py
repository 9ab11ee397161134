"""
Resolver - The single entry point that turns a raw locator into elements.

    raw locator -> classify -> (SmartWait) -> direct query or strategy chain

Explicit locators issue exactly one native query. Fuzzy text goes through
the chain of the requested capability. Lookups always run against the
session's current search root, so they honour an active ``within`` scope.
An empty result is returned as is; deciding that "nothing matched" is an
error belongs to the caller (see ``assert_element_exists``).
"""

from typing import Any, List, Optional, Tuple
import logging

from selenium.webdriver.common.by import By

from web_locator.exceptions import ElementNotFoundError
from web_locator.interfaces.driver import FindElements, IElement, ISearchRoot
from web_locator.locator import Locator, Query, classify
from web_locator.session import LocatorSession
from web_locator.strategies import Capability, StrategyResult, resolve

logger = logging.getLogger(__name__)

SCOPED_CONTAINMENT = Query(By.XPATH, ".//*")


class Resolver:
    """
    Locator resolution for one session.

    Example:
        >>> resolver = Resolver(session)
        >>> fields = await resolver.locate("Password", Capability.FIELD)
        >>> buttons = await resolver.locate({"css": "button.primary"}, smart_wait=True)
    """

    def __init__(self, session: LocatorSession):
        self.session = session

    async def locate(
        self,
        raw: Any,
        capability: Capability = Capability.ELEMENT,
        smart_wait: bool = False,
        root: Optional[ISearchRoot] = None,
    ) -> List[IElement]:
        """
        Find every element a locator points at.

        Args:
            raw: Locator as written by the caller
            capability: Which strategy chain interprets fuzzy text
            smart_wait: Bracket the lookup with the SmartWait window
            root: Search under this element instead of the session's root

        Returns:
            Matching elements, possibly empty
        """
        result = await self.resolve(raw, capability, smart_wait, root)
        return result.elements

    async def resolve(
        self,
        raw: Any,
        capability: Capability = Capability.ELEMENT,
        smart_wait: bool = False,
        root: Optional[ISearchRoot] = None,
    ) -> StrategyResult:
        """Like ``locate`` but also reports which strategy matched."""
        locator = classify(raw)
        find_elements = root.find_elements if root is not None else self.session.find_elements
        return await self.session.smart_wait.run(
            lambda: self._resolve(find_elements, locator, capability),
            enabled=smart_wait,
        )

    async def _resolve(
        self,
        find_elements: FindElements,
        locator: Locator,
        capability: Capability,
    ) -> StrategyResult:
        if locator.is_fuzzy:
            return await resolve(find_elements, capability, locator.value)

        query = locator.to_query()
        elements = await find_elements(query.by, query.value)
        return StrategyResult(
            elements=elements,
            strategy=locator.type.value if elements else None,
            attempted=[locator.type.value],
        )

    async def locate_context(
        self,
        context: Any = None,
        smart_wait: bool = False,
    ) -> Tuple[List[IElement], str]:
        """
        Find the node set whose text a containment check inspects.

        Args:
            context: Explicit context locator (fuzzy text is read as CSS)
            smart_wait: Bracket the lookup with the SmartWait window

        Returns:
            (elements, description) where description names what was searched
        """
        session = self.session
        if context is not None:
            locator = classify(context)
            description = f"element {locator}"
            query = locator.as_css() if locator.is_fuzzy else locator.to_query()
        elif session.is_scoped:
            description = f"current context {classify(session.context)}"
            query = SCOPED_CONTAINMENT
        else:
            description = "web application"
            root_locator = classify(session.root_element)
            query = root_locator.as_css() if root_locator.is_fuzzy else root_locator.to_query()

        elements = await session.smart_wait.run(
            lambda: session.find_elements(query.by, query.value),
            enabled=smart_wait,
        )
        return elements, description

    async def locate_one(
        self,
        raw: Any,
        capability: Capability = Capability.ELEMENT,
        smart_wait: bool = False,
        prefix: str = "Element",
        root: Optional[ISearchRoot] = None,
    ) -> IElement:
        """First match of ``raw``; raises ElementNotFoundError when there is none."""
        elements = await self.locate(raw, capability, smart_wait, root)
        assert_element_exists(elements, raw, prefix)
        return elements[0]


async def locate(
    session: LocatorSession,
    raw: Any,
    capability: Capability = Capability.ELEMENT,
    smart_wait: bool = False,
) -> List[IElement]:
    """Functional form of ``Resolver.locate``."""
    return await Resolver(session).locate(raw, capability, smart_wait)


def assert_element_exists(
    elements: List[IElement],
    locator: Any,
    prefix: str = "Element",
    suffix: Optional[str] = None,
) -> None:
    """
    Turn an empty match list into an ElementNotFoundError.

    Raises:
        ElementNotFoundError: If ``elements`` is empty
    """
    if elements:
        return
    if suffix is None:
        raise ElementNotFoundError(locator, prefix)
    raise ElementNotFoundError(locator, prefix, suffix)
