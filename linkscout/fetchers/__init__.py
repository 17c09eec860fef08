"""
Fetcher layer for LinkScout.

Provides browser-based fetching with:
- A shared remote browser connection, re-established on disconnect
- Global rate limiting
- Time- and size-bounded response caching
- Deduplication of concurrent requests for the same URL
"""

from linkscout.fetchers.browser import BrowserSession, PageFetcher
from linkscout.fetchers.cache import CacheEntry, FetchCache
from linkscout.fetchers.coordinator import RequestCoordinator
from linkscout.fetchers.throttle import RateLimiter

__all__ = [
    "BrowserSession",
    "PageFetcher",
    "CacheEntry",
    "FetchCache",
    "RequestCoordinator",
    "RateLimiter",
]
