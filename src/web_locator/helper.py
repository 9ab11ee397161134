"""
WebHelper - Test-facing actions and assertions built on locator resolution.

Each method resolves its locator through the capability that fits the
action (fields for fill/grab value, clickables for click, checkables for
check boxes) and turns an empty match list into ElementNotFoundError.

Example:
    >>> helper = WebHelper(SeleniumDriver(webdriver.Firefox()))
    >>> async with helper.within("form#login"):
    ...     await helper.fill_field("Email", "user@example.com")
    ...     await helper.fill_field({"name": "password"}, "secret")
    ...     await helper.click("Sign in")
    >>> await helper.see("Welcome back")
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Union
import logging

from selenium.webdriver.common.by import By

from web_locator.assertions import empty, equals, includes, truth
from web_locator.config import get_settings
from web_locator.config.settings import LocatorSettings
from web_locator.interfaces.driver import IDriver, IElement, ISearchRoot
from web_locator.locator import classify, render_locator, xpath_literal
from web_locator.resolver import Resolver, assert_element_exists
from web_locator.session import LocatorSession
from web_locator.strategies import (
    Capability,
    option_by_value,
    option_by_visible_text,
    selected_option_by_value,
)

logger = logging.getLogger(__name__)


class WebHelper:
    """
    Locator-driven browser helper for one driver session.

    Attributes:
        session: Resolution state (search root, scope, SmartWait)
        resolver: Locator resolution facade bound to ``session``
    """

    def __init__(self, driver: IDriver, settings: Optional[LocatorSettings] = None):
        self.driver = driver
        self.settings = settings or get_settings().locator
        self.session = LocatorSession(driver, self.settings)
        self.resolver = Resolver(self.session)

    # =========================================================================
    # Resolution and scoping
    # =========================================================================

    async def locate(self, locator: Any, smart_wait: bool = False) -> List[IElement]:
        """
        Get elements by any locator type, including structured locators.

        Pass ``smart_wait=True`` to wait for the element to appear.
        """
        return await self.resolver.locate(locator, Capability.ELEMENT, smart_wait)

    async def within_begin(self, locator: Any) -> IElement:
        """Start scoping every lookup to the element matching ``locator``."""
        return await self.session.scope.enter(locator)

    def within_end(self) -> None:
        """Stop scoping; lookups search the whole document again."""
        self.session.scope.exit()

    @asynccontextmanager
    async def within(self, locator: Any) -> AsyncIterator[IElement]:
        """Scope the lookups in an ``async with`` block."""
        async with self.session.scope.within(locator) as element:
            yield element

    def failed(self) -> None:
        """Test-failure hook: leave a ``within`` block the failing test did not close."""
        if self.session.is_scoped:
            logger.debug("Closing within block left open by failed test")
            self.within_end()

    async def _context_root(self, context: Any) -> Optional[ISearchRoot]:
        if context is None:
            return None
        return await self.resolver.locate_one(context, smart_wait=True, prefix="Context element")

    async def _clickable(self, locator: Any, context: Any) -> IElement:
        root = await self._context_root(context)
        # An implicit wait would be paid once per empty strategy on fuzzy text
        smart_wait = not classify(locator).is_fuzzy
        elements = await self.resolver.locate(locator, Capability.CLICKABLE, smart_wait, root)
        assert_element_exists(elements, locator, "Clickable element")
        return elements[0]

    async def _fields(self, locator: Any, prefix: str = "Field") -> List[IElement]:
        elements = await self.resolver.locate(locator, Capability.FIELD)
        assert_element_exists(elements, locator, prefix)
        return elements

    async def _checkables(self, locator: Any, prefix: str, context: Any = None) -> List[IElement]:
        root = await self._context_root(context)
        elements = await self.resolver.locate(locator, Capability.CHECKABLE, root=root)
        assert_element_exists(elements, locator, prefix)
        return elements

    # =========================================================================
    # Actions
    # =========================================================================

    async def click(self, locator: Any, context: Any = None) -> None:
        """
        Click a link, button or submit input.

        Args:
            locator: Visible text, value, title or alt, or any explicit locator
            context: Optional container to search in
        """
        element = await self._clickable(locator, context)
        await element.click()

    async def double_click(self, locator: Any, context: Any = None) -> None:
        element = await self._clickable(locator, context)
        await self.driver.double_click(element)

    async def fill_field(self, field: Any, value: str) -> None:
        """Clear the first matching field and type ``value`` into it."""
        element = (await self._fields(field))[0]
        await element.clear()
        await element.send_keys(value)

    async def append_field(self, field: Any, value: str) -> None:
        element = (await self._fields(field))[0]
        await element.send_keys(value)

    async def clear_field(self, field: Any) -> None:
        element = (await self._fields(field))[0]
        await element.clear()

    async def select_option(self, select: Any, option: Union[str, List[str]]) -> None:
        """
        Select one or more options of a select box, by visible text or value.
        """
        field = (await self._fields(select, "Selectable field"))[0]
        options = option if isinstance(option, list) else [option]
        for opt in options:
            literal = xpath_literal(opt.strip())
            els = await field.find_elements(By.XPATH, option_by_visible_text(literal))
            if not els:
                els = await field.find_elements(By.XPATH, option_by_value(literal))
            for el in els:
                await el.click()

    async def check_option(self, field: Any, context: Any = None) -> None:
        """Tick a checkbox or radio button unless it is already selected."""
        element = (await self._checkables(field, "Checkbox or radio", context))[0]
        if not await element.is_selected():
            await element.click()

    # =========================================================================
    # Assertions
    # =========================================================================

    async def see(self, text: str, context: Any = None) -> None:
        """Check that ``text`` appears in the page, the current scope, or ``context``."""
        await self._proceed_see("assert_", text, context)

    async def dont_see(self, text: str, context: Any = None) -> None:
        await self._proceed_see("negate", text, context)

    async def _proceed_see(self, assert_type: str, text: str, context: Any) -> None:
        smart_wait = assert_type == "assert_"
        elements, description = await self.resolver.locate_context(context, smart_wait=smart_wait)
        source = await self._joined_text(elements)
        getattr(includes(description), assert_type)(text, source)

    async def _joined_text(self, elements: List[IElement]) -> str:
        source = ""
        for element in elements:
            source += "| " + await element.get_text()
        return source

    async def see_in_field(self, field: Any, value: str) -> None:
        """Check a field's value; for select boxes, the selected option's text."""
        await self._proceed_see_in_field("assert_", field, value)

    async def dont_see_in_field(self, field: Any, value: str) -> None:
        await self._proceed_see_in_field("negate", field, value)

    async def _proceed_see_in_field(self, assert_type: str, field: Any, value: str) -> None:
        element = (await self._fields(field))[0]
        tag = await element.get_tag_name()
        field_value = await element.get_attribute("value") or ""
        rendered = render_locator(field)
        if tag == "select":
            option = await element.find_element(
                By.XPATH, selected_option_by_value(xpath_literal(field_value))
            )
            text = await option.get_text() if option is not None else ""
            getattr(equals(f"select option by {rendered}"), assert_type)(value, text)
            return
        getattr(includes(f"field by {rendered}"), assert_type)(value, field_value)

    async def see_checkbox_is_checked(self, field: Any) -> None:
        """Check that at least one matching checkbox or radio is selected."""
        await self._proceed_is_checked("assert_", field)

    async def dont_see_checkbox_is_checked(self, field: Any) -> None:
        await self._proceed_is_checked("negate", field)

    async def _proceed_is_checked(self, assert_type: str, option: Any) -> None:
        elements = await self._checkables(option, "Option")
        # Any selected match is enough, even across unrelated groups sharing a name
        states = [await element.is_selected() for element in elements]
        selected = any(states)
        getattr(truth(f"checkable {render_locator(option)}", "to be checked"), assert_type)(selected)

    async def see_element(self, locator: Any) -> None:
        """Check that at least one matching element is visible."""
        visible = await self._visible(locator, smart_wait=True)
        empty("visible elements").negate(visible)

    async def dont_see_element(self, locator: Any) -> None:
        visible = await self._visible(locator)
        empty("visible elements").assert_(visible)

    async def see_element_in_dom(self, locator: Any) -> None:
        """Check that a matching element exists, visible or not."""
        elements = await self.resolver.locate(locator)
        empty("elements").negate(elements)

    async def dont_see_element_in_dom(self, locator: Any) -> None:
        elements = await self.resolver.locate(locator)
        empty("elements").assert_(elements)

    async def _visible(self, locator: Any, smart_wait: bool = False) -> List[IElement]:
        elements = await self.resolver.locate(locator, smart_wait=smart_wait)
        return [el for el in elements if await el.is_displayed()]

    # =========================================================================
    # Grabbers
    # =========================================================================

    async def grab_text_from(self, locator: Any) -> str:
        element = await self.resolver.locate_one(locator)
        return await element.get_text()

    async def grab_value_from(self, locator: Any) -> Optional[str]:
        element = (await self._fields(locator))[0]
        return await element.get_attribute("value")

    async def grab_attribute_from(self, locator: Any, attr: str) -> Optional[str]:
        element = await self.resolver.locate_one(locator)
        return await element.get_attribute(attr)

    # =========================================================================
    # Waits
    # =========================================================================

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self.settings.wait_for_timeout_ms if timeout_ms is None else timeout_ms

    async def wait_for_element(self, locator: Any, timeout_ms: Optional[int] = None) -> List[IElement]:
        """Wait until at least one element matches ``locator``."""
        timeout = self._timeout(timeout_ms)
        return await self.driver.wait_until(
            lambda: self.resolver.locate(locator),
            timeout,
            f"Element {render_locator(locator)} still not present after {timeout}ms",
        )

    async def wait_for_visible(self, locator: Any, timeout_ms: Optional[int] = None) -> List[IElement]:
        """Wait until at least one matching element is visible."""
        timeout = self._timeout(timeout_ms)
        return await self.driver.wait_until(
            lambda: self._visible(locator),
            timeout,
            f"Element {render_locator(locator)} still not visible after {timeout}ms",
        )

    async def wait_for_invisible(self, locator: Any, timeout_ms: Optional[int] = None) -> None:
        """Wait until no matching element is visible."""
        timeout = self._timeout(timeout_ms)

        async def hidden() -> bool:
            return not await self._visible(locator)

        await self.driver.wait_until(
            hidden,
            timeout,
            f"Element {render_locator(locator)} still visible after {timeout}ms",
        )

    async def wait_for_text(
        self,
        text: str,
        timeout_ms: Optional[int] = None,
        context: Any = None,
    ) -> None:
        """Wait until ``text`` appears in the page, the current scope, or ``context``."""
        timeout = self._timeout(timeout_ms)

        async def text_present() -> bool:
            elements, _ = await self.resolver.locate_context(context)
            return text in await self._joined_text(elements)

        await self.driver.wait_until(
            text_present,
            timeout,
            f'Text "{text}" did not appear after {timeout}ms',
        )
