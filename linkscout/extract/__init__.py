"""
Extraction utilities for LinkScout.

Provides:
- Text sanitizing and selector-fallback helpers
- LinkedIn listing and detail page extraction
"""

from linkscout.extract.html import (
    sanitize,
    extract_first,
    normalize_url,
    extract_count,
    plain_text_from_description,
)
from linkscout.extract.linkedin import LinkedInExtractor, create_extractor

__all__ = [
    "sanitize",
    "extract_first",
    "normalize_url",
    "extract_count",
    "plain_text_from_description",
    "LinkedInExtractor",
    "create_extractor",
]
