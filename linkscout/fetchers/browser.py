"""
Playwright-based page fetching over a shared remote browser.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from linkscout.config import Settings, get_settings
from linkscout.errors import (
    BrowserConnectionError,
    RateLimitSignaled,
    ScrapeError,
    classify_fetch_failure,
)
from linkscout.extract.selectors import CONTENT_MARKERS, COOKIE_ACCEPT_SELECTOR

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    Owns the single shared connection to the remote browser.

    The connection is opened lazily on the first acquire_page() call and
    re-opened whenever the previous one has dropped. Pages are never reused.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._playwright = None
        self._browser = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "BrowserSession":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def _start_playwright(self):
        return await async_playwright().start()

    async def connect(self) -> Any:
        """Return the live browser, connecting first if needed."""
        # Resolve before locking: a missing token is a configuration problem,
        # not a connection failure.
        cdp_url = self.settings.cdp_url

        async with self._lock:
            if self.is_connected:
                return self._browser

            logger.info("Creating new browser connection...")
            self._browser = None
            try:
                if self._playwright is None:
                    self._playwright = await self._start_playwright()
                browser = await self._playwright.chromium.connect_over_cdp(cdp_url)
            except Exception as e:
                self._browser = None
                logger.error("Failed to connect to browser: %s", e)
                raise BrowserConnectionError(f"Failed to connect to browser: {e}") from e

            browser.on("disconnected", self._on_disconnected)
            self._browser = browser
            logger.info("Browser connection established")
            return browser

    def _on_disconnected(self, browser: Any = None) -> None:
        # Only forget the handle if it is the one that dropped
        if browser is None or browser is self._browser:
            logger.info("Browser disconnected, resetting connection")
            self._browser = None

    async def acquire_page(self) -> Any:
        """Open a fresh page on the shared browser."""
        browser = await self.connect()
        return await browser.new_page()

    async def close(self) -> None:
        """Close the live connection, if any."""
        async with self._lock:
            browser, self._browser = self._browser, None
            playwright, self._playwright = self._playwright, None
        if browser is not None:
            try:
                await browser.close()
                logger.info("Browser connection closed")
            except Exception as e:
                logger.warning("Error while closing browser: %s", e)
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning("Error while stopping playwright: %s", e)


class PageFetcher:
    """
    Loads a URL in a fresh page and returns the rendered markup.

    LinkedIn often keeps rendering after the navigation event, so timeouts
    while navigating or waiting for job cards are not fatal: whatever markup
    is present afterwards is returned.
    """

    def __init__(self, session: BrowserSession, settings: Optional[Settings] = None):
        self.session = session
        self.settings = settings or session.settings

    @property
    def headers(self) -> dict:
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    async def fetch(self, url: str) -> str:
        """Fetch a page's rendered markup."""
        cfg = self.settings
        start_time = time.time()
        page = None

        try:
            page = await self.session.acquire_page()

            await page.set_extra_http_headers(self.headers)
            await page.set_viewport_size({"width": cfg.viewport_width, "height": cfg.viewport_height})

            logger.info("Scraping: %s", url)

            response = None
            try:
                response = await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=cfg.navigation_timeout_ms,
                )
            except Exception as e:
                if not _is_timeout(e):
                    raise
                logger.warning("Navigation timed out for %s, continuing", url)

            if response is not None and response.status == 429:
                raise RateLimitSignaled()

            await page.wait_for_timeout(cfg.settle_delay_ms)

            try:
                await page.wait_for_selector(CONTENT_MARKERS, timeout=cfg.content_wait_timeout_ms)
            except Exception as e:
                if not _is_timeout(e):
                    raise
                logger.warning("Job cards not found, continuing...")

            await self._dismiss_cookie_banner(page)

            html = await page.content()
            logger.info("Scraped %d characters in %.0fms", len(html), (time.time() - start_time) * 1000)

            self._dump(html)
            return html

        except ScrapeError:
            raise

        except Exception as e:
            logger.error("Scraping error for %s: %s", url, e)
            raise classify_fetch_failure(e) from e

        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception:
                    pass  # Page may already be gone with the connection

    async def _dismiss_cookie_banner(self, page: Any) -> None:
        """Click the cookie consent button if one shows up. Best-effort."""
        cfg = self.settings
        try:
            button = page.locator(COOKIE_ACCEPT_SELECTOR).first
            await button.wait_for(state="visible", timeout=cfg.cookie_probe_timeout_ms)
            await button.click()
            await page.wait_for_timeout(cfg.cookie_dismiss_delay_ms)
        except Exception:
            pass  # Cookie handling is optional

    def _dump(self, html: str) -> None:
        path = self.settings.debug_dump_path
        if not path:
            return
        try:
            Path(path).write_text(html, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write debug dump to %s: %s", path, e)


def _is_timeout(exc: BaseException) -> bool:
    return isinstance(exc, (PlaywrightTimeoutError, asyncio.TimeoutError))
