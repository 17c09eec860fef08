"""
LinkedIn page extraction.

LinkedIn serves several semi-randomized variants of its guest markup, so
every field is read through an ordered selector list with fallbacks.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from linkscout.errors import UnsupportedSiteError
from linkscout.extract import selectors as sel
from linkscout.extract.html import (
    extract_attr,
    extract_count,
    extract_first,
    extract_inner_html,
    meta_content,
    normalize_url,
    parse_document,
    sanitize,
)
from linkscout.models import (
    JobRecord,
    SearchResultItem,
    SearchResultSet,
    now_utc,
)

logger = logging.getLogger(__name__)

_POSTED_AT_RE = re.compile(r"Posted\s+[\d:]+\s+[AP]M")


def _optional(text: str) -> Optional[str]:
    return text or None


class LinkedInExtractor:
    """
    Reads LinkedIn listing and detail pages.

    Stateless; one instance can be shared across concurrent callers.
    """

    name = "linkedin"

    @staticmethod
    def handles(url: str) -> bool:
        return "linkedin.com" in (url or "").lower()

    # ----------------------------- Listing page -----------------------------

    def extract_listing(self, html: str) -> SearchResultSet:
        """Extract every complete job card from a search results page."""
        soup = parse_document(html)
        result = SearchResultSet(extracted_at=now_utc())

        cards = soup.select(", ".join(sel.CARD_SELECTORS))
        logger.debug("Found %d job card elements", len(cards))

        for card in cards:
            item = self._read_card(card)
            if item is not None:
                result.add(item)

        result.total_results = extract_count(self._total_results_text(soup))

        logger.info("Extracted %d jobs from %d cards", len(result), len(cards))

        if not result.items:
            similar = soup.select(sel.SIMILAR_CARD_SELECTOR)
            for card in similar:
                item = self._read_similar_card(card)
                if item is not None:
                    result.add(item)
            if similar:
                logger.info("No search results; extracted %d similar jobs", len(result))

        return result

    def _read_card(self, card: Tag) -> Optional[SearchResultItem]:
        title = (
            extract_first(card, sel.CARD_TITLE_SELECTORS)
            or extract_first(card, sel.CARD_TITLE_FALLBACK)
        )
        company = (
            extract_first(card, sel.CARD_COMPANY_SELECTORS)
            or extract_first(card, sel.CARD_COMPANY_FALLBACK)
        )
        if not title or not company:
            return None

        return SearchResultItem(
            title=title,
            company=company,
            location=extract_first(card, sel.CARD_LOCATION_SELECTORS),
            job_url=self._card_url(card, sel.CARD_LINK_SELECTORS),
            posted_time=_optional(extract_first(card, sel.CARD_POSTED_SELECTORS)),
            job_type=_optional(extract_first(card, sel.CARD_JOB_TYPE_SELECTORS)),
            salary_range=_optional(extract_first(card, sel.CARD_SALARY_SELECTORS)),
            description=_optional(extract_first(card, sel.CARD_SNIPPET_SELECTORS)),
        )

    def _read_similar_card(self, card: Tag) -> Optional[SearchResultItem]:
        title = extract_first(card, sel.SIMILAR_TITLE_SELECTORS)
        company = extract_first(card, sel.SIMILAR_COMPANY_SELECTORS)
        if not title or not company:
            return None

        return SearchResultItem(
            title=title,
            company=company,
            location=extract_first(card, sel.SIMILAR_LOCATION_SELECTORS),
            job_url=self._card_url(card, sel.SIMILAR_LINK_SELECTORS),
            posted_time=_optional(extract_first(card, sel.SIMILAR_POSTED_SELECTORS)),
            salary_range=_optional(extract_first(card, sel.SIMILAR_SALARY_SELECTORS)),
        )

    @staticmethod
    def _card_url(card: Tag, link_selectors) -> str:
        href = extract_attr(card, link_selectors, "href")
        # Some variants render the whole card as the link
        if not href and card.name == "a":
            href = (card.get("href") or "").strip()
        return normalize_url(href)

    @staticmethod
    def _total_results_text(soup: BeautifulSoup) -> str:
        parts: List[str] = []
        for element in soup.select(", ".join(sel.TOTAL_RESULTS_SELECTORS)):
            parts.append(element.get_text(" ", strip=True))
        return " ".join(p for p in parts if p)

    # ----------------------------- Detail page -----------------------------

    def extract_detail(self, html: str) -> Optional[JobRecord]:
        """
        Extract a single job from its detail page.

        Returns None when neither a title nor a company can be found, which
        usually means the page is not a job page at all.
        """
        soup = parse_document(html)

        title = extract_first(soup, sel.DETAIL_TITLE_SELECTORS) or self._document_title(soup)
        company = extract_first(soup, sel.DETAIL_COMPANY_SELECTORS) or self._og_company(soup)

        if not title and not company:
            logger.info("No title or company found; not a job detail page")
            return None

        return JobRecord(
            title=title,
            company=company,
            location=extract_first(soup, sel.DETAIL_LOCATION_SELECTORS),
            salary_range=_optional(extract_first(soup, sel.DETAIL_SALARY_SELECTORS)),
            description_html=extract_inner_html(soup, sel.DETAIL_DESCRIPTION_SELECTORS),
            posted_time=_optional(
                extract_first(soup, sel.DETAIL_POSTED_SELECTORS) or self._posted_from_meta(soup)
            ),
            applicants=_optional(extract_first(soup, sel.DETAIL_APPLICANTS_SELECTORS)),
            job_url=_optional(
                extract_attr(soup, sel.CANONICAL_LINK_SELECTORS, "href")
                or meta_content(soup, property="og:url")
            ),
            company_id=_optional(meta_content(soup, name="companyId")),
            title_id=_optional(meta_content(soup, name="titleId")),
            extracted_at=now_utc(),
        )

    @staticmethod
    def _document_title(soup: BeautifulSoup) -> str:
        if soup.title is None:
            return ""
        raw = soup.title.get_text()
        return sanitize(re.sub(sel.TITLE_SITE_SUFFIX, "", raw.strip()))

    @staticmethod
    def _og_company(soup: BeautifulSoup) -> str:
        og_title = meta_content(soup, property="og:title")
        if not og_title:
            return ""
        return sanitize(og_title.split(sel.OG_TITLE_SEPARATOR)[0])

    @staticmethod
    def _posted_from_meta(soup: BeautifulSoup) -> str:
        match = _POSTED_AT_RE.search(meta_content(soup, name="description"))
        return match.group(0) if match else ""


def create_extractor(url: str) -> LinkedInExtractor:
    """Pick the extractor for a URL's site."""
    if LinkedInExtractor.handles(url):
        return LinkedInExtractor()
    raise UnsupportedSiteError(f"No scraper available for URL: {url}")
