"""Text helpers shared by the composer and the outer surfaces."""
from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from stablecoin_research.research.models import ChainShare, PricePoint

URL_RE = re.compile(r"https?://[^\s)\]]+")


def strip_urls(text: str) -> Tuple[str, List[str]]:
    """Remove URLs from `text`, returning the cleaned text and the URLs found.

    A line left holding only a label such as "Transparency Report:" is dropped.
    """
    urls: List[str] = []
    kept: List[str] = []
    for line in text.splitlines():
        found = URL_RE.findall(line)
        if not found:
            kept.append(line)
            continue
        urls.extend(url.rstrip(".,;") for url in found)
        remainder = URL_RE.sub("", line).rstrip()
        if remainder.strip() and not remainder.endswith(":"):
            kept.append(remainder)

    cleaned = re.sub(r"\n{3,}", "\n\n", "\n".join(kept)).strip()
    return cleaned, list(dict.fromkeys(urls))


def format_usd(amount: float) -> str:
    """Compact dollar figure: $1.24B, $69.90M, $15.40K, $0.9985."""
    if amount is None:
        return "n/a"
    value = abs(amount)
    sign = "-" if amount < 0 else ""
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if value >= threshold:
            return f"{sign}${value / threshold:.2f}{suffix}"
    if value < 10:
        return f"{sign}${value:.4f}"
    return f"{sign}${value:,.2f}"


def chain_shares(total: float, percentages: Sequence[Tuple[str, float]]) -> Tuple[ChainShare, ...]:
    return tuple(
        ChainShare(chain=chain, percentage=float(percent), amount_usd=round(total * percent / 100, 2))
        for chain, percent in percentages
    )


def format_market_data(symbol: str, points: Sequence[PricePoint]) -> str:
    """Short market summary used as LLM context."""
    if not points:
        return ""
    prices = [point.price for point in points]
    latest = points[-1]
    lines = [
        f"{symbol} market data for the last {len(points)} days (CoinGecko):",
        f"- Latest price on {latest.date}: {format_usd(latest.price)}",
        f"- Range: {format_usd(min(prices))} to {format_usd(max(prices))}",
    ]
    if latest.volume is not None:
        lines.append(f"- Latest 24h volume: {format_usd(latest.volume)}")
    return "\n".join(lines)
