"""
Configuration module - Centralized settings management.

Usage:
    from web_locator.config import get_settings, load_config

    # Get global settings (loaded once)
    settings = get_settings()

    # Or load fresh settings with overrides
    settings = load_config(locator={"smart_wait_ms": 5000})

Environment Variables:
    WEB_LOCATOR__LOCATOR__SMART_WAIT_MS=5000
    WEB_LOCATOR__LOCATOR__ROOT_ELEMENT=main
    WEB_LOCATOR__LOGGING__LEVEL=DEBUG
"""

from web_locator.config.settings import (
    Settings,
    LocatorSettings,
    LoggingSettings,
)
from web_locator.config.loader import ConfigLoader, load_config

# Global settings singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    Settings are loaded once from environment variables and config files.
    Call reset_settings() to reload.
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (forces reload on next get_settings())."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "LocatorSettings",
    "LoggingSettings",
    "ConfigLoader",
    "load_config",
    "get_settings",
    "reset_settings",
]
