"""
Global pacing of outbound page fetches.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Keeps at least min_interval seconds between fetch starts.

    Callers are released one at a time in arrival order: the lock is held
    across the wait, so each caller computes its delay from the release time
    recorded by the caller before it.
    """

    def __init__(
        self,
        min_interval: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_release: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_release(self) -> Optional[float]:
        return self._last_release

    async def wait(self) -> None:
        """Suspend until min_interval has passed since the previous release."""
        async with self._lock:
            if self._last_release is not None:
                elapsed = self._clock() - self._last_release
                if elapsed < self.min_interval:
                    delay = self.min_interval - elapsed
                    logger.debug("Rate limiting: waiting %.0fms before next request", delay * 1000)
                    await self._sleep(delay)
            self._last_release = self._clock()
