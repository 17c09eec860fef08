"""
Composition root for LinkScout.

Ties together the browser session, page fetcher, request coordinator and
LinkedIn extractor behind search() and fetch_detail().
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Optional
from urllib.parse import urlencode

from linkscout.config import Settings, get_settings
from linkscout.extract.linkedin import LinkedInExtractor, create_extractor
from linkscout.fetchers.browser import BrowserSession, PageFetcher
from linkscout.fetchers.cache import FetchCache
from linkscout.fetchers.coordinator import Fetcher, RequestCoordinator
from linkscout.fetchers.throttle import RateLimiter
from linkscout.models import CacheStats, JobRecord, SearchResultSet

logger = logging.getLogger(__name__)

SEARCH_BASE_URL = "https://www.linkedin.com/jobs/search"


def build_search_url(job_title: str, location: Optional[str] = None) -> str:
    """Build a guest job-search URL limited to the past week."""
    params = []
    if job_title:
        params.append(("keywords", job_title))
    if location:
        params.append(("location", location))
    params += [
        ("f_TPR", "r604800"),  # Posted in the last week
        ("position", "1"),
        ("pageNum", "0"),
    ]
    return f"{SEARCH_BASE_URL}?{urlencode(params)}"


class Pipeline:
    """
    One per process. Owns the browser connection, the cache and the rate
    limiter; call shutdown() (or use `async with`) to release the browser.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[Fetcher] = None,
        session: Optional[BrowserSession] = None,
    ):
        self.settings = settings or get_settings()
        self.session = session
        if fetcher is None:
            self.session = session or BrowserSession(self.settings)
            fetcher = PageFetcher(self.session, self.settings)
        self.coordinator = RequestCoordinator(
            fetcher=fetcher,
            cache=FetchCache(
                ttl_seconds=self.settings.cache_ttl_seconds,
                max_entries=self.settings.cache_max_entries,
            ),
            limiter=RateLimiter(min_interval=self.settings.min_request_interval_s),
        )
        self.extractor = LinkedInExtractor()
        self._main_task: Optional[asyncio.Task] = None
        self._shutdown_task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "Pipeline":
        return self

    async def __aexit__(self, *args) -> None:
        await self.shutdown()

    async def search(self, job_title: str, location: Optional[str] = None) -> SearchResultSet:
        """Search job listings by title and optional location."""
        if not job_title or not job_title.strip():
            raise ValueError("Job title is required")

        url = build_search_url(job_title.strip(), (location or "").strip() or None)
        logger.info("Searching jobs for %r (location=%r): %s", job_title, location, url)

        html = await self.coordinator.fetch(url)
        results = self.extractor.extract_listing(html)

        if not results.items:
            results.total_results = 0
        logger.info("Found %d job results for %r", len(results), job_title)
        return results

    async def fetch_detail(self, url: str) -> Optional[JobRecord]:
        """Fetch and extract a job detail page. None if the page holds no job."""
        if not url or not url.strip():
            raise ValueError("Job URL is required")
        url = url.strip()
        extractor = create_extractor(url)

        logger.info("Extracting job details from URL: %s", url)
        html = await self.coordinator.fetch(url)
        return extractor.extract_detail(html)

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self.coordinator.cache),
            ttl_seconds=self.coordinator.cache.ttl_seconds,
            pending_requests=self.coordinator.pending_count,
        )

    def clear_cache(self) -> None:
        self.coordinator.clear()

    async def shutdown(self) -> None:
        """Close the browser connection."""
        if self.session is not None:
            await self.session.close()

    def install_signal_handlers(self) -> None:
        """
        Close the browser when the process receives SIGINT or SIGTERM, then
        cancel the task that installed the handlers.
        """
        loop = asyncio.get_running_loop()
        self._main_task = asyncio.current_task()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except (NotImplementedError, RuntimeError):
                # Not supported on this platform/loop (e.g. Windows)
                logger.debug("Signal handlers unavailable for %s", sig)

    def _on_signal(self, sig: signal.Signals) -> None:
        logger.info("Received %s, shutting down browser", sig.name)
        loop = asyncio.get_running_loop()
        if self._shutdown_task is not None and not self._shutdown_task.done():
            return
        self._shutdown_task = loop.create_task(self.shutdown())
        self._shutdown_task.add_done_callback(self._cancel_main_task)

    def _cancel_main_task(self, _task: asyncio.Task) -> None:
        if self._main_task is not None and not self._main_task.done():
            self._main_task.cancel()
