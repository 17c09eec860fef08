"""
Core data models for LinkScout.

Provides:
- JobRecord: one job read from a detail page
- SearchResultItem / SearchResultSet: job cards read from a listing page
- CacheStats: fetch cache introspection
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Unknown Location"
LOCATION_NOT_SPECIFIED = "Not specified"


# ----------------------------- Utilities -----------------------------

def now_utc() -> datetime:
    """Current UTC datetime."""
    return datetime.now(timezone.utc)


def _iso(dt: Optional[datetime]) -> str:
    return dt.isoformat() if dt else ""


# ----------------------------- Detail page -----------------------------

@dataclass
class JobRecord:
    """
    A single job as read from its detail page.

    title and company are never empty: missing values are replaced by the
    UNKNOWN_* sentinels.
    """

    title: str = UNKNOWN_TITLE
    company: str = UNKNOWN_COMPANY
    location: str = UNKNOWN_LOCATION
    description_html: str = ""
    salary_range: Optional[str] = None
    posted_time: Optional[str] = None
    applicants: Optional[str] = None
    job_url: Optional[str] = None
    company_id: Optional[str] = None
    title_id: Optional[str] = None
    extracted_at: datetime = field(default_factory=now_utc)

    def __post_init__(self):
        self.title = self.title or UNKNOWN_TITLE
        self.company = self.company or UNKNOWN_COMPANY
        self.location = self.location or UNKNOWN_LOCATION

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        d = asdict(self)
        d["extracted_at"] = _iso(self.extracted_at)
        return d


# ----------------------------- Listing page -----------------------------

@dataclass
class SearchResultItem:
    """One job card from a listing page."""

    title: str
    company: str
    location: str = LOCATION_NOT_SPECIFIED
    job_url: str = ""
    posted_time: Optional[str] = None
    job_type: Optional[str] = None
    salary_range: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        self.location = self.location or LOCATION_NOT_SPECIFIED

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SearchResultSet:
    """Job cards from a listing page, in document order."""

    items: List[SearchResultItem] = field(default_factory=list)
    total_results: Optional[int] = None
    extracted_at: datetime = field(default_factory=now_utc)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def add(self, item: SearchResultItem) -> bool:
        """
        Append an item if it carries both a title and a company.
        Returns True if the item was kept.
        """
        if not item.title or not item.company:
            return False
        self.items.append(item)
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "total_results": self.total_results,
            "extracted_at": _iso(self.extracted_at),
        }


# ----------------------------- Introspection -----------------------------

@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the fetch cache and in-flight requests."""

    size: int
    ttl_seconds: float
    pending_requests: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
