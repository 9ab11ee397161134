"""
SmartWait - Bracket a lookup with a temporary implicit wait.

The driver's implicit wait is session-global: once set, every query on the
session waits that long for missing elements. SmartWait raises it only for
the duration of one lookup and always puts it back to zero, whether the
lookup returned or raised.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar
import logging

from web_locator.interfaces.driver import IDriver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SmartWait:
    """
    Controller for one session's implicit-wait window.

    Attributes:
        driver: Session whose implicit wait is managed
        timeout_ms: Configured wait; 0 disables SmartWait for the session
    """

    def __init__(self, driver: IDriver, timeout_ms: int = 0):
        if timeout_ms < 0:
            raise ValueError(f"SmartWait timeout must be >= 0, got {timeout_ms}")
        self.driver = driver
        self.timeout_ms = timeout_ms

    @property
    def enabled(self) -> bool:
        return self.timeout_ms > 0

    @asynccontextmanager
    async def window(
        self,
        enabled: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> AsyncIterator[int]:
        """
        Open the implicit-wait window for the body of an ``async with``.

        Yields the effective timeout (0 when the window stays closed).

        Args:
            enabled: Per-call switch; ignored when SmartWait is off globally
            timeout_ms: Per-call override of the configured timeout
        """
        timeout = self.timeout_ms if timeout_ms is None else timeout_ms
        if not self.enabled or not enabled or timeout <= 0:
            yield 0
            return

        logger.debug(f"SmartWait: implicit wait {timeout}ms")
        await self.driver.set_implicit_wait(timeout)
        try:
            yield timeout
        finally:
            await self.driver.set_implicit_wait(0)
            logger.debug("SmartWait: implicit wait reset")

    async def run(
        self,
        query_fn: Callable[[], Awaitable[T]],
        enabled: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> T:
        """
        Await ``query_fn`` inside the window and return its result as is.

        An empty result is not an error here.
        """
        async with self.window(enabled=enabled, timeout_ms=timeout_ms):
            return await query_fn()
