"""
Error kinds raised by the fetch pipeline.

Every fetch-path failure is a FetchError subclass so callers can catch the
whole family at once. A detail page that yields no record is not an error:
extract_detail() returns None for it.
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for all LinkScout errors."""

    default_message = "Scraping failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(ScrapeError):
    """A required setting (e.g. the browser token) is missing. Not retried."""

    default_message = "LINKSCOUT_BROWSERLESS_TOKEN is required in environment variables."


class UnsupportedSiteError(ScrapeError, ValueError):
    """No extractor knows how to read pages from this URL."""

    default_message = "No scraper available for URL"


class FetchError(ScrapeError):
    """Generic fetch failure."""

    default_message = "Failed to scrape the webpage"


class BrowserConnectionError(FetchError):
    """The remote browser could not be reached. The next fetch reconnects."""

    default_message = "Failed to connect to browser"


class NavigationError(FetchError):
    """Navigation timed out or was blocked."""

    default_message = "Request timed out. The site may be blocking automated access."


class RateLimitSignaled(FetchError):
    """The target site answered with a rate-limit signal (HTTP 429)."""

    default_message = "Rate limit exceeded. Please wait and try again."


def classify_fetch_failure(exc: BaseException) -> FetchError:
    """
    Map an arbitrary browser failure onto a FetchError kind.

    ScrapeErrors pass through untouched; everything else is sorted by the
    text of its message.
    """
    if isinstance(exc, FetchError):
        return exc
    text = str(exc)
    if "429" in text:
        return RateLimitSignaled()
    if "Timeout" in text:
        return NavigationError()
    return FetchError()
