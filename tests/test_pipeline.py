"""Tests for the Pipeline composition root."""

import asyncio
import os
import signal
import sys
from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from linkscout.errors import FetchError, UnsupportedSiteError
from linkscout.models import CacheStats, JobRecord
from linkscout.pipeline import Pipeline, build_search_url


class FakeFetcher:
    """Returns canned markup and records requested URLs."""

    def __init__(self, html: str = "", error: Exception = None):
        self.html = html
        self.error = error
        self.calls = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


class TestBuildSearchUrl:
    """Test build_search_url()."""

    def test_includes_keywords_location_and_filters(self):
        url = build_search_url("backend engineer", "Berlin, Germany")
        parsed = urlparse(url)
        query = parse_qs(parsed.query)

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://www.linkedin.com/jobs/search"
        )
        assert query == {
            "keywords": ["backend engineer"],
            "location": ["Berlin, Germany"],
            "f_TPR": ["r604800"],
            "position": ["1"],
            "pageNum": ["0"],
        }

    def test_location_omitted_when_absent(self):
        query = parse_qs(urlparse(build_search_url("dev")).query)
        assert "location" not in query
        assert query["keywords"] == ["dev"]


class TestPipelineSearch:
    """Test Pipeline.search()."""

    @pytest.mark.asyncio
    async def test_returns_extracted_items(self, settings, listing_html):
        fetcher = FakeFetcher(listing_html)
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        results = await pipeline.search("Backend Engineer", "Berlin")

        assert [item.title for item in results] == ["Backend Engineer"]
        assert results.total_results == 32000
        assert fetcher.calls == [build_search_url("Backend Engineer", "Berlin")]

    @pytest.mark.asyncio
    async def test_trims_inputs(self, settings, listing_html):
        fetcher = FakeFetcher(listing_html)
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        await pipeline.search("  dev  ", "   ")

        assert fetcher.calls == [build_search_url("dev")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   ", None])
    async def test_empty_title_rejected(self, settings, title):
        fetcher = FakeFetcher()
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        with pytest.raises(ValueError):
            await pipeline.search(title)
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_no_items_reports_zero_total(self, settings):
        """A header count without any usable cards still reports zero results."""
        html = '<span class="results-context-header__job-count">1,200</span>'
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher(html))

        results = await pipeline.search("dev")

        assert len(results) == 0
        assert results.total_results == 0

    @pytest.mark.asyncio
    async def test_repeated_search_served_from_cache(self, settings, listing_html):
        fetcher = FakeFetcher(listing_html)
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        await pipeline.search("dev")
        await pipeline.search("dev")

        assert len(fetcher.calls) == 1

    @pytest.mark.asyncio
    async def test_fetch_errors_propagate(self, settings):
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher(error=FetchError()))

        with pytest.raises(FetchError):
            await pipeline.search("dev")


class TestPipelineDetail:
    """Test Pipeline.fetch_detail()."""

    @pytest.mark.asyncio
    async def test_returns_record(self, settings, detail_html):
        url = "https://www.linkedin.com/jobs/view/123"
        fetcher = FakeFetcher(detail_html)
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        record = await pipeline.fetch_detail(url)

        assert isinstance(record, JobRecord)
        assert record.title == "Senior Backend Engineer"
        assert fetcher.calls == [url]

    @pytest.mark.asyncio
    async def test_page_without_job_returns_none(self, settings):
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher("<html></html>"))

        assert await pipeline.fetch_detail("https://www.linkedin.com/jobs/view/1") is None

    @pytest.mark.asyncio
    async def test_unsupported_site_rejected_before_fetching(self, settings):
        fetcher = FakeFetcher()
        pipeline = Pipeline(settings=settings, fetcher=fetcher)

        with pytest.raises(UnsupportedSiteError):
            await pipeline.fetch_detail("https://www.indeed.com/viewjob?jk=1")
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_empty_url_rejected(self, settings):
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher())

        with pytest.raises(ValueError):
            await pipeline.fetch_detail("  ")


class TestPipelineLifecycle:
    """Test cache introspection and shutdown."""

    @pytest.mark.asyncio
    async def test_stats_and_clear_cache(self, settings, listing_html):
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher(listing_html))
        assert pipeline.stats() == CacheStats(size=0, ttl_seconds=600, pending_requests=0)

        await pipeline.search("dev")
        assert pipeline.stats().size == 1

        pipeline.clear_cache()
        assert pipeline.stats().size == 0

    def test_builds_browser_fetcher_by_default(self, settings):
        pipeline = Pipeline(settings=settings)

        assert pipeline.session is not None
        assert pipeline.coordinator.fetcher.session is pipeline.session
        assert pipeline.coordinator.limiter.min_interval == 0

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, settings):
        session = MagicMock()
        session.close = AsyncMock()

        async with Pipeline(settings=settings, fetcher=FakeFetcher(), session=session):
            pass

        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_without_session(self, settings):
        await Pipeline(settings=settings, fetcher=FakeFetcher()).shutdown()

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="loop signal handlers are POSIX-only")
    async def test_sigterm_closes_session_and_cancels_main_task(self, settings):
        """SIGTERM closes the browser, then cancels the task that installed the handlers."""
        session = MagicMock()
        session.close = AsyncMock()
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher(), session=session)
        started = asyncio.Event()

        async def main():
            pipeline.install_signal_handlers()
            started.set()
            await asyncio.sleep(30)

        task = asyncio.create_task(main())
        await started.wait()

        try:
            os.kill(os.getpid(), signal.SIGTERM)

            with pytest.raises(asyncio.CancelledError):
                await asyncio.wait_for(task, timeout=5)
        finally:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)

        assert task.cancelled()
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_repeated_signal_shuts_down_once(self, settings):
        """A second signal while shutdown is running does not start another one."""
        session = MagicMock()
        session.close = AsyncMock()
        pipeline = Pipeline(settings=settings, fetcher=FakeFetcher(), session=session)

        pipeline._on_signal(signal.SIGINT)
        first = pipeline._shutdown_task
        pipeline._on_signal(signal.SIGINT)

        assert pipeline._shutdown_task is first
        await first
        session.close.assert_awaited_once()
