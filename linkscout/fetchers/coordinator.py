"""
Request coordination: cache lookup, in-flight deduplication and pacing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Protocol

from linkscout.fetchers.cache import FetchCache
from linkscout.fetchers.throttle import RateLimiter

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class RequestCoordinator:
    """
    Front door for page fetches.

    - Fresh cache hits return immediately.
    - Concurrent requests for the same URL share one underlying fetch and
      all observe the same markup or the same error.
    - Everything else waits its turn on the rate limiter, is fetched, and
      is cached on success only.

    A caller that is cancelled while waiting does not cancel the shared
    fetch; other waiters still get its result.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        cache: FetchCache,
        limiter: RateLimiter,
    ):
        self.fetcher = fetcher
        self.cache = cache
        self.limiter = limiter
        self._pending: Dict[str, asyncio.Task] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_pending(self, url: str) -> bool:
        return url in self._pending

    async def fetch(self, url: str) -> str:
        """Return markup for url, fetching it at most once at a time."""
        cached = self.cache.get(url)
        if cached is not None:
            logger.debug("Returning cached result for URL: %s", url)
            return cached

        task = self._pending.get(url)
        if task is None:
            task = asyncio.get_running_loop().create_task(self._fetch_and_store(url))
            task.add_done_callback(self._consume_outcome)
            self._pending[url] = task
        else:
            logger.info("Deduplicating request for URL: %s", url)

        return await asyncio.shield(task)

    async def _fetch_and_store(self, url: str) -> str:
        try:
            await self.limiter.wait()
            markup = await self.fetcher.fetch(url)
            self.cache.put(url, markup)
            return markup
        finally:
            # A clear() may have already dropped us or replaced us with a newer fetch
            if self._pending.get(url) is asyncio.current_task():
                del self._pending[url]

    @staticmethod
    def _consume_outcome(task: asyncio.Task) -> None:
        # Every waiter may have been cancelled; mark the error as seen so it
        # isn't reported as "never retrieved".
        if not task.cancelled():
            task.exception()

    def clear(self) -> None:
        """Drop cached pages and forget in-flight bookkeeping."""
        self.cache.clear()
        self._pending.clear()
        logger.info("Cache and pending requests cleared")
