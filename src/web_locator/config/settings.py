"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from web_locator.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.locator.smart_wait_ms)
    0
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LocatorSettings(BaseModel):
    """
    Element resolution settings.

    Attributes:
        smart_wait_ms: Implicit wait applied around smart-wait lookups (0 disables SmartWait)
        wait_for_timeout_ms: Default timeout for wait_for_* helpers
        root_element: Selector of the node set searched by text assertions outside ``within``
    """
    smart_wait_ms: int = Field(default=0, ge=0, le=300000)
    wait_for_timeout_ms: int = Field(default=1000, ge=0, le=300000)
    root_element: str = "body"

    @property
    def smart_wait_enabled(self) -> bool:
        return self.smart_wait_ms > 0


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        format: Log format string
        file: Log file path (None for console only)
        json_format: Use JSON format for logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with WEB_LOCATOR__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(locator=LocatorSettings(smart_wait_ms=5000))  # Override
    """

    model_config = SettingsConfigDict(
        env_prefix="WEB_LOCATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    locator: LocatorSettings = Field(default_factory=LocatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Forces DEBUG logging in the CLI
    debug: bool = False

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
