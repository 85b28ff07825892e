"""Rule-based query intent classification.

Rules are checked in order and the first match wins:

1. pure news anchors at the start of the query
2. adoption tracker phrases anywhere
3. "explain" with a stablecoin mention
4. comparison keywords
5. everything else is generic
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional

from stablecoin_research.research.extractor import extract_symbols
from stablecoin_research.research.models import Intent


NEWS_ANCHORS = (
    "latest news",
    "breaking news",
    "headlines",
    "recent news",
    "news on",
    "news about",
    "today's news",
    "todays news",
    "stablecoin news",
    "top news",
)

ADOPTION_PHRASES = ("adoption tracker", "adoption metrics", "adoption data")

_EXPLAIN_RE = re.compile(r"\bexplain", re.IGNORECASE)
_STABLECOIN_RE = re.compile(r"\bstablecoin", re.IGNORECASE)
_COMPARISON_RE = re.compile(
    r"\bcompar(?:e|es|ed|ing|ison|isons)\b|\bversus\b|\bdifference between\b|(?<![a-z0-9])vs\b\.?",
    re.IGNORECASE,
)


def _normalize(text: str) -> str:
    return " ".join(text.replace("’", "'").lower().split())


def is_pure_news_query(text: str) -> bool:
    return _normalize(text).startswith(NEWS_ANCHORS)


def classify(text: str, symbols: Optional[List[str]] = None,
             extractor: Callable[[str], List[str]] = extract_symbols) -> Intent:
    """Assign exactly one intent to a query.

    `symbols` may be passed when the caller has already run extraction.
    """
    normalized = _normalize(text or "")
    if not normalized:
        return Intent.GENERIC

    if normalized.startswith(NEWS_ANCHORS):
        return Intent.NEWS

    if any(phrase in normalized for phrase in ADOPTION_PHRASES):
        return Intent.ADOPTION_TRACKING

    if _EXPLAIN_RE.search(normalized):
        found = symbols if symbols is not None else extractor(text)
        if _STABLECOIN_RE.search(normalized) or found:
            return Intent.EXPLANATION

    if _COMPARISON_RE.search(normalized):
        return Intent.COMPARISON

    return Intent.GENERIC
