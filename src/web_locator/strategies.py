"""
Strategies - Ordered fallback chains for fuzzy locators.

Each UI capability has its own idea of what free text means:

FIELD (fillable inputs):
    1. label_equals   - label text, name or placeholder equals the text
    2. label_contains - label text contains the text
    3. by_name        - name attribute equals the text
    4. css            - the text itself as a CSS selector

CLICKABLE (links, buttons, submit inputs):
    1. narrow - exact visible text, value or image alt
    2. wide   - partial text, nested images, name attribute
    3. css

CHECKABLE (checkboxes and radios):
    1. by_text - label text contains the text
    2. by_name - name attribute equals the text
    3. css

CONTAINMENT and ELEMENT use the text as a CSS selector only.

Chains short-circuit: the first strategy that matches anything wins and
later queries are never even built. Every chain ends with the literal
CSS interpretation, so a valid selector always works; text that is not
valid CSS counts as a miss on that step.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple
import logging

from selenium.common.exceptions import InvalidSelectorException
from selenium.webdriver.common.by import By

from web_locator.interfaces.driver import FindElements, IElement
from web_locator.locator import Query, xpath_literal

logger = logging.getLogger(__name__)


class Capability(Enum):
    """What the caller wants to do with the element."""
    CLICKABLE = "clickable"
    FIELD = "field"
    CHECKABLE = "checkable"
    CONTAINMENT = "containment"
    ELEMENT = "element"


_BUTTON_INPUT = "./@type = 'submit' or ./@type = 'image' or ./@type = 'button'"
_FILLABLE = (
    "*[self::input | self::textarea | self::select]"
    "[not(./@type = 'submit' or ./@type = 'image' or ./@type = 'hidden')]"
)


def combine(paths: List[str]) -> str:
    """Union several XPath expressions."""
    return " | ".join(paths)


# -----------------------------------------------------------------------------
# XPath builders. Each takes an already quoted XPath literal.
# -----------------------------------------------------------------------------

def clickable_narrow(literal: str) -> str:
    return combine([
        f".//a[normalize-space(.)={literal}]",
        f".//button[normalize-space(.)={literal}]",
        f".//a/img[normalize-space(@alt)={literal}]/ancestor::a",
        f".//input[{_BUTTON_INPUT}][normalize-space(@value)={literal}]",
        f".//*[self::a | self::button | self::input][normalize-space(@title)={literal}]",
    ])


def clickable_wide(literal: str) -> str:
    return combine([
        f".//a[./@href][((contains(normalize-space(string(.)), {literal})) or .//img[contains(./@alt, {literal})])]",
        f".//input[{_BUTTON_INPUT}][contains(./@value, {literal})]",
        f".//input[./@type = 'image'][contains(./@alt, {literal})]",
        f".//button[contains(normalize-space(string(.)), {literal})]",
        f".//input[{_BUTTON_INPUT}][./@name = {literal}]",
        f".//button[./@name = {literal}]",
    ])


def field_label_equals(literal: str) -> str:
    return combine([
        f".//{_FILLABLE}[(((./@name = {literal}) or ./@id = //label[@for][normalize-space(string(.)) = {literal}]/@for) or ./@placeholder = {literal})]",
        f".//label[normalize-space(string(.)) = {literal}]//.//{_FILLABLE}",
    ])


def field_label_contains(literal: str) -> str:
    return combine([
        f".//{_FILLABLE}[(((./@name = {literal}) or ./@id = //label[@for][contains(string(.), {literal})]/@for) or ./@placeholder = {literal})]",
        f".//label[contains(normalize-space(string(.)), {literal})]//.//{_FILLABLE}",
    ])


def field_by_name(literal: str) -> str:
    return f".//*[self::input | self::textarea | self::select][@name = {literal}]"


def checkable_by_text(literal: str) -> str:
    return combine([
        f".//input[@type = 'checkbox' or @type = 'radio'][(@id = //label[contains(normalize-space(string(.)), {literal})]/@for) or @placeholder = {literal}]",
        f".//label[contains(normalize-space(string(.)), {literal})]//input[@type = 'radio' or @type = 'checkbox']",
    ])


def checkable_by_name(literal: str) -> str:
    return f".//input[@type = 'checkbox' or @type = 'radio'][@name = {literal}]"


def option_by_visible_text(literal: str) -> str:
    normalized = f"[normalize-space(.) = {literal}]"
    return f"./option{normalized}|./optgroup/option{normalized}"


def option_by_value(literal: str) -> str:
    normalized = f"[normalize-space(@value) = {literal}]"
    return f"./option{normalized}|./optgroup/option{normalized}"


def selected_option_by_value(literal: str) -> str:
    return f"./option[@value = {literal}]|./optgroup/option[@value = {literal}]"


# -----------------------------------------------------------------------------
# Chains
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Strategy:
    """One step of a chain: turns locator text into a native query."""
    name: str
    build: Callable[[str], Query]


def _xpath(builder: Callable[[str], str]) -> Callable[[str], Query]:
    def build(text: str) -> Query:
        return Query(By.XPATH, builder(xpath_literal(text)))
    return build


def _css(text: str) -> Query:
    return Query(By.CSS_SELECTOR, text)


CSS_FALLBACK = Strategy("css", _css)

CHAINS: Dict[Capability, Tuple[Strategy, ...]] = {
    Capability.FIELD: (
        Strategy("label_equals", _xpath(field_label_equals)),
        Strategy("label_contains", _xpath(field_label_contains)),
        Strategy("by_name", _xpath(field_by_name)),
        CSS_FALLBACK,
    ),
    Capability.CLICKABLE: (
        Strategy("narrow", _xpath(clickable_narrow)),
        Strategy("wide", _xpath(clickable_wide)),
        CSS_FALLBACK,
    ),
    Capability.CHECKABLE: (
        Strategy("by_text", _xpath(checkable_by_text)),
        Strategy("by_name", _xpath(checkable_by_name)),
        CSS_FALLBACK,
    ),
    Capability.CONTAINMENT: (CSS_FALLBACK,),
    Capability.ELEMENT: (CSS_FALLBACK,),
}


def chain_for(capability: Capability) -> Tuple[Strategy, ...]:
    """Get the ordered strategies for a capability."""
    return CHAINS[capability]


def describe_chain(capability: Capability, text: str) -> List[Tuple[str, Query]]:
    """Every query a chain would try for ``text``, in order."""
    return [(strategy.name, strategy.build(text)) for strategy in chain_for(capability)]


@dataclass
class StrategyResult:
    """
    Outcome of running a chain.

    Attributes:
        elements: Every element the winning strategy matched (empty if none did)
        strategy: Name of the winning strategy, None when nothing matched
        attempted: Names of the strategies that were queried, in order
    """
    elements: List[IElement] = field(default_factory=list)
    strategy: Optional[str] = None
    attempted: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.elements)


async def first_non_empty(
    find_elements: FindElements,
    strategies: Tuple[Strategy, ...],
    text: str,
) -> StrategyResult:
    """
    Run strategies in order until one matches something.

    The winning strategy's entire result set is returned; candidates are
    not ranked any further.

    Args:
        find_elements: Bound query function of the current search root
        strategies: Ordered chain
        text: Raw locator text

    Returns:
        StrategyResult with the matches (possibly empty)
    """
    result = StrategyResult()
    for strategy in strategies:
        query = strategy.build(text)
        result.attempted.append(strategy.name)
        try:
            elements = await find_elements(query.by, query.value)
        except InvalidSelectorException:
            # Text that is not a selector is a miss on the literal CSS step
            if strategy is not CSS_FALLBACK:
                raise
            logger.debug(f"{text!r} is not a valid CSS selector")
            elements = []
        if elements:
            logger.debug(f"Strategy '{strategy.name}' matched {len(elements)} element(s) for {text!r}")
            result.elements = elements
            result.strategy = strategy.name
            return result
    logger.debug(f"No strategy matched {text!r} (tried {', '.join(result.attempted)})")
    return result


async def resolve(
    find_elements: FindElements,
    capability: Capability,
    text: str,
) -> StrategyResult:
    """Run the chain for ``capability`` against a search root."""
    return await first_non_empty(find_elements, chain_for(capability), text)
