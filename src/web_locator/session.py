"""
Session - Per-driver resolution state.

Everything that changes while a test runs lives here: the find functions
currently bound as search root (swapped by ``within``), the textual
context used by text assertions, and the SmartWait controller that owns
the driver's implicit wait. There is no module-level state, so sessions
on different drivers are independent. A single session must not be used
by two tasks at once.
"""

from typing import Any, Optional

from web_locator.config.settings import LocatorSettings
from web_locator.interfaces.driver import FindElement, FindElements, IDriver
from web_locator.scope import ScopeManager
from web_locator.smart_wait import SmartWait


class LocatorSession:
    """
    Resolution context for one driver session.

    Attributes:
        driver: The driver queries go to
        settings: Resolution settings
        find_element: Bound single-element query of the current search root
        find_elements: Bound multi-element query of the current search root
        context: Root element selector, or the locator of the active scope
        smart_wait: Implicit-wait controller
        scope: ``within`` manager
    """

    def __init__(self, driver: IDriver, settings: Optional[LocatorSettings] = None):
        self.driver = driver
        self.settings = settings or LocatorSettings()
        self.find_element: FindElement = driver.find_element
        self.find_elements: FindElements = driver.find_elements
        self.context: Any = self.settings.root_element
        self.smart_wait = SmartWait(driver, self.settings.smart_wait_ms)
        self.scope = ScopeManager(self)

    @property
    def root_element(self) -> str:
        return self.settings.root_element

    @property
    def is_scoped(self) -> bool:
        return self.scope.is_active
