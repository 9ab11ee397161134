"""
Tests for the strategy chains.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, call
from selenium.common.exceptions import InvalidSelectorException
from selenium.webdriver.common.by import By

from web_locator.exceptions import LocatorClassificationError
from web_locator.locator import Query
from web_locator.strategies import (
    Capability,
    Strategy,
    chain_for,
    describe_chain,
    first_non_empty,
    resolve,
)


LOGIN_FORM = """
<html><body>
  <form id="login">
    <label>Password <input name="pwd" type="password"></label>
    <label for="email-input">Email address</label>
    <input id="email-input" name="email" type="text">
    <input name="Password" type="text" class="decoy">
    <input name="username" placeholder="Your name">
    <input type="hidden" name="token" value="x">
    <input type="submit" value="Sign in">
  </form>
</body></html>
"""

LINKS = """
<html><body>
  <a href="/home">Home</a>
  <a href="/homepage">Go to homepage now</a>
  <button name="save-btn">Save draft</button>
  <a href="/cart"><img alt="Cart" src="cart.png"></a>
  <input type="button" value="Cancel">
  <button title="Close dialog">x</button>
</body></html>
"""

CHECKBOXES = """
<html><body>
  <label for="tos">I accept the terms</label>
  <input type="checkbox" id="tos" name="terms">
  <label><input type="radio" name="plan" value="pro"> Pro plan</label>
  <input type="checkbox" name="agree" checked>
  <input type="checkbox" name="agree">
</body></html>
"""


class TestChainOrder:
    """Test each capability's declared chain."""

    @pytest.mark.parametrize("capability,names", [
        (Capability.FIELD, ["label_equals", "label_contains", "by_name", "css"]),
        (Capability.CLICKABLE, ["narrow", "wide", "css"]),
        (Capability.CHECKABLE, ["by_text", "by_name", "css"]),
        (Capability.CONTAINMENT, ["css"]),
        (Capability.ELEMENT, ["css"]),
    ])
    def test_chain_names(self, capability, names):
        assert [s.name for s in chain_for(capability)] == names

    @pytest.mark.parametrize("capability", list(Capability))
    def test_every_chain_ends_with_literal_css(self, capability):
        """Test a valid selector always gets a last chance."""
        name, query = describe_chain(capability, "div.card")[-1]
        assert name == "css"
        assert query.by == By.CSS_SELECTOR
        assert query.value == "div.card"

    def test_describe_chain_quotes_text(self):
        """Test generated XPath embeds the text as a literal."""
        steps = describe_chain(Capability.FIELD, 'The "best" field')
        _, query = steps[0]
        assert query.by == By.XPATH
        assert "'The \"best\" field'" in query.value


class TestFirstNonEmpty:
    """Test the short-circuiting combinator."""

    @pytest.mark.asyncio
    async def test_stops_at_first_match(self):
        """Test later strategies are never built once one matches."""
        builds = [MagicMock(return_value=Query(By.XPATH, f"q{i}")) for i in range(3)]
        strategies = tuple(Strategy(f"s{i}", b) for i, b in enumerate(builds))
        found = [MagicMock()]
        find_elements = AsyncMock(side_effect=[[], found, [MagicMock()]])

        result = await first_non_empty(find_elements, strategies, "text")

        assert result.elements == found
        assert result.strategy == "s1"
        assert result.attempted == ["s0", "s1"]
        builds[2].assert_not_called()
        assert find_elements.await_args_list == [call(By.XPATH, "q0"), call(By.XPATH, "q1")]

    @pytest.mark.asyncio
    async def test_nothing_matches(self):
        """Test an exhausted chain returns an empty result, not an error."""
        strategies = chain_for(Capability.CHECKABLE)
        find_elements = AsyncMock(return_value=[])

        result = await first_non_empty(find_elements, strategies, "nope")

        assert result.elements == []
        assert result.strategy is None
        assert result.found is False
        assert result.attempted == ["by_text", "by_name", "css"]

    @pytest.mark.asyncio
    async def test_whole_result_set_returned(self):
        """Test the winning strategy's matches are not narrowed."""
        many = [MagicMock(), MagicMock(), MagicMock()]
        find_elements = AsyncMock(return_value=many)

        result = await first_non_empty(find_elements, chain_for(Capability.CLICKABLE), "Go")

        assert result.elements == many

    @pytest.mark.asyncio
    async def test_unembeddable_text_raises_before_querying(self):
        """Test text that cannot be quoted is surfaced, not retried."""
        find_elements = AsyncMock(return_value=[])

        with pytest.raises(LocatorClassificationError):
            await first_non_empty(find_elements, chain_for(Capability.FIELD), "bad\x01")
        find_elements.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_css_on_fallback_is_a_miss(self):
        """Test free text the driver rejects as CSS ends the chain empty."""
        find_elements = AsyncMock(side_effect=[[], [], [], InvalidSelectorException("invalid selector")])

        result = await first_non_empty(find_elements, chain_for(Capability.FIELD), "E-mail:")

        assert result.elements == []
        assert result.strategy is None
        assert result.attempted == ["label_equals", "label_contains", "by_name", "css"]

    @pytest.mark.asyncio
    async def test_invalid_selector_before_fallback_propagates(self):
        """Test only the literal CSS step swallows a rejected selector."""
        find_elements = AsyncMock(side_effect=InvalidSelectorException("invalid xpath"))

        with pytest.raises(InvalidSelectorException):
            await first_non_empty(find_elements, chain_for(Capability.CLICKABLE), "Go")
        assert find_elements.await_count == 1


class TestFieldChain:
    """Test field resolution against real markup."""

    @pytest.mark.asyncio
    async def test_label_wrapping_input_wins_over_name(self, make_driver):
        """Test label text beats a name attribute on another input."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "Password")

        assert result.strategy == "label_equals"
        assert result.attempted == ["label_equals"]
        assert [await el.get_attribute("name") for el in result.elements] == ["pwd", "Password"]

    @pytest.mark.asyncio
    async def test_label_for_association(self, make_driver):
        """Test <label for> finds the referenced input."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "Email address")

        assert result.strategy == "label_equals"
        assert await result.elements[0].get_attribute("id") == "email-input"

    @pytest.mark.asyncio
    async def test_label_contains(self, make_driver):
        """Test a partial label falls through to label_contains."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "Email")

        assert result.strategy == "label_contains"
        assert await result.elements[0].get_attribute("id") == "email-input"

    @pytest.mark.asyncio
    async def test_placeholder(self, make_driver):
        """Test placeholder text matches like a label."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "Your name")

        assert await result.elements[0].get_attribute("name") == "username"

    @pytest.mark.asyncio
    async def test_hidden_inputs_skipped_by_label_strategies(self, make_driver):
        """Test hidden inputs are only reachable by name."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "token")

        assert result.strategy == "by_name"

    @pytest.mark.asyncio
    async def test_css_fallback(self, make_driver):
        """Test a selector is honoured when no heuristic matches."""
        driver = make_driver(LOGIN_FORM)

        result = await resolve(driver.find_elements, Capability.FIELD, "input[type=submit]")

        assert result.strategy == "css"
        assert await result.elements[0].get_attribute("value") == "Sign in"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ['Say "hi"', "E-mail:", "Don't"])
    async def test_unmatched_text_that_is_not_css(self, make_driver, text):
        """Test a miss on text that is no valid selector returns nothing."""
        driver = make_driver("<html><body><input name='a'></body></html>")

        result = await resolve(driver.find_elements, Capability.FIELD, text)

        assert result.elements == []
        assert result.attempted[-1] == "css"


class TestClickableChain:
    """Test clickable resolution against real markup."""

    @pytest.mark.asyncio
    async def test_narrow_exact_text(self, make_driver):
        """Test exact link text is found by the narrow strategy only."""
        driver = make_driver(LINKS)

        result = await resolve(driver.find_elements, Capability.CLICKABLE, "Home")

        assert result.strategy == "narrow"
        assert len(result.elements) == 1
        assert await result.elements[0].get_attribute("href") == "/home"

    @pytest.mark.asyncio
    async def test_wide_partial_text(self, make_driver):
        """Test partial text needs the wide strategy."""
        driver = make_driver(LINKS)

        result = await resolve(driver.find_elements, Capability.CLICKABLE, "homepage")

        assert result.strategy == "wide"
        assert await result.elements[0].get_attribute("href") == "/homepage"

    @pytest.mark.asyncio
    async def test_image_alt(self, make_driver):
        """Test a link wrapping an image is found by alt text."""
        driver = make_driver(LINKS)

        result = await resolve(driver.find_elements, Capability.CLICKABLE, "Cart")

        assert result.strategy == "narrow"
        assert await result.elements[0].get_attribute("href") == "/cart"

    @pytest.mark.asyncio
    async def test_input_value_and_title(self, make_driver):
        """Test button inputs by value and buttons by title."""
        driver = make_driver(LINKS)

        cancel = await resolve(driver.find_elements, Capability.CLICKABLE, "Cancel")
        close = await resolve(driver.find_elements, Capability.CLICKABLE, "Close dialog")

        assert await cancel.elements[0].get_tag_name() == "input"
        assert await close.elements[0].get_attribute("title") == "Close dialog"

    @pytest.mark.asyncio
    async def test_button_name(self, make_driver):
        """Test a button's name attribute is a wide match."""
        driver = make_driver(LINKS)

        result = await resolve(driver.find_elements, Capability.CLICKABLE, "save-btn")

        assert result.strategy == "wide"

    @pytest.mark.asyncio
    async def test_double_quote_in_text(self, make_driver):
        """Test quotes in clickable text produce valid XPath."""
        driver = make_driver('<html><body><button>Say "hello"</button></body></html>')

        result = await resolve(driver.find_elements, Capability.CLICKABLE, 'Say "hello"')

        assert result.strategy == "narrow"


class TestCheckableChain:
    """Test checkable resolution against real markup."""

    @pytest.mark.asyncio
    async def test_label_for(self, make_driver):
        driver = make_driver(CHECKBOXES)

        result = await resolve(driver.find_elements, Capability.CHECKABLE, "accept the terms")

        assert result.strategy == "by_text"
        assert await result.elements[0].get_attribute("id") == "tos"

    @pytest.mark.asyncio
    async def test_wrapping_label(self, make_driver):
        driver = make_driver(CHECKBOXES)

        result = await resolve(driver.find_elements, Capability.CHECKABLE, "Pro plan")

        assert result.strategy == "by_text"
        assert await result.elements[0].get_attribute("value") == "pro"

    @pytest.mark.asyncio
    async def test_by_name_returns_all(self, make_driver):
        """Test same-named checkboxes are all returned."""
        driver = make_driver(CHECKBOXES)

        result = await resolve(driver.find_elements, Capability.CHECKABLE, "agree")

        assert result.strategy == "by_name"
        assert len(result.elements) == 2
