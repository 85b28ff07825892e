"""Pre-flight checks applied to user queries before any provider is called."""
from __future__ import annotations

import logging
from typing import Set

from stablecoin_research.research.extractor import extract_symbols
from stablecoin_research.utils.errors import QueryValidationError


logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 2000

OFF_TOPIC_MESSAGE = (
    "I can only provide information about stablecoins. Please ask about stablecoin prices, "
    "mechanisms, comparisons, or other stablecoin-related topics."
)

TOPIC_KEYWORDS: Set[str] = {
    "stablecoin", "usdt", "usdc", "dai", "tether", "circle", "maker", "price", "market",
    "adoption", "compare", "explain", "news", "backing", "collateral", "mechanism", "yield",
    "protocol", "ethena", "usde", "pyusd", "paypal", "fdusd", "paxg", "xaut", "eurs", "eurc",
    "frax", "mim", "gho", "aave", "curve", "crvusd", "treasury", "reserves", "defi", "celsius",
    "terra", "anchor", "depeg", "peg",
}


def is_stablecoin_related(text: str) -> bool:
    lowered = text.lower()
    if any(keyword in lowered for keyword in TOPIC_KEYWORDS):
        return True
    return bool(extract_symbols(text))


def validate_query(text: str, enforce_topic_filter: bool = True) -> str:
    """Return the trimmed query or raise QueryValidationError."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise QueryValidationError("Query must not be empty")
    if len(cleaned) > MAX_QUERY_LENGTH:
        raise QueryValidationError(f"Query is too long (max {MAX_QUERY_LENGTH} characters)")
    if enforce_topic_filter and not is_stablecoin_related(cleaned):
        logger.info("Rejected off-topic query")
        raise QueryValidationError(OFF_TOPIC_MESSAGE)
    return cleaned
