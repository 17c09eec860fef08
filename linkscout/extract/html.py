"""
HTML text cleanup and selector helpers.

Everything here is site-agnostic: the selectors themselves live in
linkscout.extract.selectors.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

SITE_ORIGIN = "https://www.linkedin.com"

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_ASTERISKS_RE = re.compile(r"\*+")
_DISALLOWED_RE = re.compile(r"[^\w\s\-.,!?()&$+]")
_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;:!?)])")
_ESCAPE_RE = re.compile(r'\\([nrt"\\])')
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "\\": "\\"}

# "32,000+" / "1,234" / "500+" / "1234"
_COUNT_RE = re.compile(r"(\d{1,3}(?:,\d{3})+|\d+)\+?")


def sanitize(text: Optional[str]) -> str:
    """
    Normalize scraped text: drop HTML comments and asterisks, strip
    characters outside word/whitespace/basic punctuation, collapse
    whitespace and trim.

    Idempotent: sanitize(sanitize(x)) == sanitize(x).
    """
    if not text:
        return ""
    text = _COMMENT_RE.sub("", text)
    text = _ASTERISKS_RE.sub("", text)
    # Filter before collapsing so removed characters can't leave double spaces
    text = _DISALLOWED_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def preprocess_html(html: Optional[str]) -> str:
    """Remove HTML comments and undo backslash escapes (\\n, \\", ...)."""
    if not html:
        return ""
    html = _COMMENT_RE.sub("", html)
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], html)


def parse_document(html: str) -> BeautifulSoup:
    """Preprocess raw page markup and parse it."""
    return BeautifulSoup(preprocess_html(html), "lxml")


def extract_first(node: Tag, selectors: Iterable[str]) -> str:
    """
    Return the sanitized text of the first selector whose first match is
    non-empty. Selectors are tried in order; "" when none match.
    """
    for selector in selectors:
        element = node.select_one(selector)
        if element is None:
            continue
        text = sanitize(element.get_text())
        if text:
            return text
    return ""


def extract_attr(node: Tag, selectors: Iterable[str], attr: str) -> str:
    """Return the first non-empty attribute value among the selectors' matches."""
    for selector in selectors:
        for element in node.select(selector):
            value = (element.get(attr) or "").strip()
            if value:
                return value
    return ""


def extract_inner_html(node: Tag, selectors: Iterable[str]) -> str:
    """Return the trimmed inner markup of the first non-empty match."""
    for selector in selectors:
        element = node.select_one(selector)
        if element is None:
            continue
        markup = element.decode_contents().strip()
        if markup:
            return markup
    return ""


def meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    """Content of the first <meta> tag matching attrs, or ""."""
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def normalize_url(url: Optional[str]) -> str:
    """Make site-relative URLs absolute; absolute URLs pass through."""
    if not url:
        return ""
    url = url.strip()
    if url.startswith("/"):
        return f"{SITE_ORIGIN}{url}"
    return url


def extract_count(text: Optional[str]) -> Optional[int]:
    """
    Parse the first number in text, e.g. "32,000+ results" -> 32000.
    Returns None if there is no number.
    """
    if not text:
        return None
    match = _COUNT_RE.search(text)
    if not match:
        return None
    return int(match.group(1).replace(",", ""))


def plain_text_from_description(html: Optional[str]) -> str:
    """Convert description markup to a single line of plain text."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(" ", strip=True)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    # Inline tags are split with a space; punctuation after them stays attached
    return _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
