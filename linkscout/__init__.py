"""
LinkScout: LinkedIn job listing fetcher and extractor.

Fetches pages through a shared remote browser, caches and deduplicates
those fetches, and extracts structured job records from LinkedIn's
inconsistent markup.
"""

__version__ = "1.0.0"

from linkscout.errors import (
    ScrapeError,
    ConfigurationError,
    FetchError,
    BrowserConnectionError,
    NavigationError,
    RateLimitSignaled,
    UnsupportedSiteError,
)
from linkscout.models import JobRecord, SearchResultItem, SearchResultSet, CacheStats
from linkscout.pipeline import Pipeline, build_search_url

__all__ = [
    "Pipeline",
    "build_search_url",
    "JobRecord",
    "SearchResultItem",
    "SearchResultSet",
    "CacheStats",
    "ScrapeError",
    "ConfigurationError",
    "FetchError",
    "BrowserConnectionError",
    "NavigationError",
    "RateLimitSignaled",
    "UnsupportedSiteError",
]
