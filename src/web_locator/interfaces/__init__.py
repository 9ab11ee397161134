"""
Interfaces module - Abstract base classes for pluggable components.

This module defines the driver contract the resolution engine consumes.
"""

from web_locator.interfaces.driver import (
    ISearchRoot,
    IElement,
    IDriver,
    FindElement,
    FindElements,
)

__all__ = [
    "ISearchRoot",
    "IElement",
    "IDriver",
    "FindElement",
    "FindElements",
]
