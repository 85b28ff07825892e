"""Static stablecoin reference data exports."""

from .reference import (
    ALIAS_TO_SYMBOL,
    STABLECOIN_REFERENCE,
    RiskLevel,
    StablecoinRef,
    get_available_stablecoins,
    get_popular_stablecoins,
    get_stablecoin,
    resolve,
)
from .explanations import CachedExplanation, get_cached_explanation, get_transparency_report

__all__ = [
    "ALIAS_TO_SYMBOL",
    "STABLECOIN_REFERENCE",
    "RiskLevel",
    "StablecoinRef",
    "get_available_stablecoins",
    "get_popular_stablecoins",
    "get_stablecoin",
    "resolve",
    "CachedExplanation",
    "get_cached_explanation",
    "get_transparency_report",
]
