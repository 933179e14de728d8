"""
Input Sanitization Utilities

Provides validation and normalization for user-supplied words and text.

Usage:
    from utils.sanitize import sanitize_string, normalize_word

    key = normalize_word("  Serendipity ")  # -> "serendipity"
"""

import re
from typing import Optional

from utils.logging import get_logger

logger = get_logger(__name__)


# Collapses runs of whitespace inside a phrase
_WHITESPACE_RE = re.compile(r"\s+")

# Characters that never belong in a dictionary word or in a storage file name
_UNSAFE_CHARS_RE = re.compile(r"[<>\"`\\/\x00-\x1f]")


# =============================================================================
# String Sanitization
# =============================================================================

def sanitize_string(
    value: Optional[str],
    max_length: Optional[int] = 1000,
    allow_html: bool = False
) -> str:
    """
    Sanitize a string input.

    - Strips whitespace
    - Limits length
    - Optionally strips HTML tags

    Args:
        value: String to sanitize
        max_length: Maximum allowed length, None for no limit
        allow_html: Whether to allow HTML tags

    Returns:
        str: Sanitized string
    """
    if not value:
        return ""

    value = value.strip()

    if max_length is not None and len(value) > max_length:
        value = value[:max_length]

    if not allow_html:
        value = re.sub(r'<[^>]+>', '', value)

    return value


# =============================================================================
# Word Normalization
# =============================================================================

def clean_query(value: Optional[str]) -> str:
    """
    Clean a raw search query, keeping its case.

    Strips tags and unsafe characters and collapses inner whitespace.
    Never truncates; the resolvers reject queries over MAX_WORD_LENGTH.
    Returns "" for empty or whitespace-only input.
    """
    value = sanitize_string(value, max_length=None)
    value = _UNSAFE_CHARS_RE.sub("", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_word(value: Optional[str]) -> str:
    """
    Normalize a word into its store key (cleaned and lower-cased).

    Args:
        value: Raw or corrected word

    Returns:
        str: Lower-case key, "" if nothing usable remains
    """
    return clean_query(value).lower()


def safe_file_stem(value: str, max_length: int = 50) -> str:
    """Turn a word into a file-name-safe stem for stored audio."""
    stem = re.sub(r"[^a-z0-9]+", "_", normalize_word(value)).strip("_")
    return stem[:max_length] or "audio"
