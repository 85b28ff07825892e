"""Stablecoin symbol extraction from free text."""
from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple

from stablecoin_research.catalog.reference import ALIAS_TO_SYMBOL, ALIASES_BY_LENGTH


def _alias_pattern(alias: str) -> Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(alias) + r"(?![a-z0-9])")


# Longest first, so "paypal usd" claims its span before "paypal" is tried
_ALIAS_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (alias, _alias_pattern(alias)) for alias in ALIASES_BY_LENGTH
)

_TICKER_RE = re.compile(r"(?<![A-Za-z0-9$])\$?([A-Z][A-Z0-9]{2,9})(?![A-Za-z0-9])")

# Upper-case words that look like tickers but never are
_NOT_TICKERS = {
    "USD", "EUR", "GBP", "JPY", "API", "DEFI", "TVL", "APY", "APR", "CEO", "SEC",
    "ETF", "NFT", "FAQ", "AND", "THE", "FOR", "SHOW", "GET", "ADOPTION", "TRACKER",
    "METRICS", "DATA", "STABLECOIN", "STABLECOINS", "WHAT", "HOW", "NEWS",
}


def extract_symbols(text: str) -> List[str]:
    """Canonical symbols mentioned in `text`, in order of first appearance.

    Matching is case-insensitive on word boundaries; once an alias matches,
    its characters are unavailable to any shorter alias.
    """
    if not text:
        return []

    lowered = text.lower()
    consumed = [False] * len(lowered)
    hits: List[Tuple[int, str]] = []

    for alias, pattern in _ALIAS_PATTERNS:
        for match in pattern.finditer(lowered):
            start, end = match.span()
            if any(consumed[start:end]):
                continue
            consumed[start:end] = [True] * (end - start)
            hits.append((start, ALIAS_TO_SYMBOL[alias]))

    hits.sort(key=lambda hit: hit[0])
    return list(dict.fromkeys(symbol for _, symbol in hits))


def first_ticker_candidate(text: str) -> Optional[str]:
    """First upper-case, ticker-like token in the original text, if any."""
    for match in _TICKER_RE.finditer(text or ""):
        token = match.group(1)
        if token not in _NOT_TICKERS:
            return token
    return None
