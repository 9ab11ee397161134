"""
Browsers module - Driver implementations.
"""

from web_locator.browsers.selenium_browser import SeleniumDriver, SeleniumElement

__all__ = [
    "SeleniumDriver",
    "SeleniumElement",
]
