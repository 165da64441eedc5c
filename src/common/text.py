"""Text cleaning and normalization helpers."""

from __future__ import annotations

import html
import re
from typing import Optional

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

# Typographic characters WordPress emits for straight quotes and dashes
_QUOTE_TRANSLATION = str.maketrans({
    "‘": "'",
    "’": "'",
    "`": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "…": "...",
    " ": " ",
})


def decode_entities(text: Optional[str]) -> str:
    """Decode HTML entities (``&#8217;``, ``&amp;`` ...) and collapse whitespace."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", html.unescape(text)).strip()


def clean_text(text: Optional[str]) -> Optional[str]:
    """Clean text by stripping HTML, decoding entities, and collapsing whitespace."""
    if not text:
        return None
    # Drop script and style bodies, then the remaining tags (keep text content)
    text = _SCRIPT_STYLE_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text if text else None


def truncate(text: Optional[str], limit: int) -> Optional[str]:
    """Cap text at ``limit`` characters."""
    if text is None:
        return None
    return text[:limit]


def count_words(text: Optional[str]) -> int:
    if not text:
        return 0
    return len(text.split())


def normalize_title(title: Optional[str]) -> str:
    """Normalize a title for exact comparison.

    Decodes entities, lowercases, folds curly quotes and dashes, collapses
    whitespace, and removes punctuation other than apostrophes and hyphens.
    """
    if not title:
        return ""
    normalized = html.unescape(title).translate(_QUOTE_TRANSLATION).lower()
    normalized = re.sub(r"[^\w\s'-]", "", normalized)
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def keywords(text: Optional[str], min_length: int) -> list[str]:
    """Lowercase whitespace tokens longer than ``min_length`` characters."""
    if not text:
        return []
    return [token for token in text.lower().split() if len(token) > min_length]


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally (escape char ``\\``)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
