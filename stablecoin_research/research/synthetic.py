"""Deterministic placeholder adoption metrics for coins no table knows about.

Values are seeded from a hash of the symbol, so the same symbol always gets
the same numbers across runs and processes.
"""
from __future__ import annotations

import hashlib
import random
from typing import List, Optional, Sequence, Tuple

from stablecoin_research.catalog.fallback_metrics import FallbackAdoption

TOTAL_STABLECOIN_MARKET_CAP = 290e9

# Chains a coin is known to favour when it has no catalog entry
PREFERRED_CHAINS = {
    "USDT": ("TRON", "Ethereum"),
    "USDC": ("Solana", "Ethereum"),
    "PYUSD": ("Solana", "Ethereum"),
    "RLUSD": ("XRP Ledger", "Ethereum"),
    "USTC": ("Terra Classic",),
    "USN": ("NEAR",),
    "CUSD": ("Celo",),
    "CEUR": ("Celo",),
}

EVM_CHAINS = ("Polygon", "Arbitrum", "Optimism", "BSC", "Avalanche", "Base")


def seeded_random(symbol: str) -> random.Random:
    digest = hashlib.sha256(symbol.upper().encode("utf-8")).hexdigest()
    return random.Random(int(digest[:16], 16))


def split_percentages(chains: Sequence[str], rng: random.Random) -> List[Tuple[str, float]]:
    """Whole-number percentages over `chains` that sum to exactly 100."""
    if not chains:
        return []
    if len(chains) == 1:
        return [(chains[0], 100.0)]

    remaining = 100
    shares: List[Tuple[str, float]] = []
    for index, chain in enumerate(chains[:-1]):
        still_needed = len(chains) - index - 1
        if index == 0:
            low, high = 50, 90
        else:
            low, high = int(remaining * 0.3), int(remaining * 0.7)
        high = max(1, min(high, remaining - still_needed))
        low = max(1, min(low, high))
        percent = rng.randint(low, high)
        shares.append((chain, float(percent)))
        remaining -= percent
    shares.append((chains[-1], float(remaining)))
    return shares


def _default_chains(symbol: str, rng: random.Random) -> Tuple[str, ...]:
    if symbol in PREFERRED_CHAINS:
        return PREFERRED_CHAINS[symbol]
    extra = rng.randint(1, 3)
    return ("Ethereum",) + EVM_CHAINS[:extra]


def synthetic_adoption(
    symbol: str,
    chains: Optional[Sequence[str]] = None,
    supply: Optional[float] = None,
    volume: Optional[float] = None,
) -> FallbackAdoption:
    """Plausible adoption figures for `symbol`; known values override seeded ones."""
    symbol = symbol.upper()
    rng = seeded_random(symbol)

    if "USD" in symbol:
        seeded_supply = float(rng.randint(50_000_000, 2_000_000_000))
    else:
        seeded_supply = float(rng.randint(5_000_000, 250_000_000))
    turnover = rng.uniform(0.01, 0.15)
    growth = round(rng.uniform(0.1, 20.0), 1)
    direction = "up" if rng.random() > 0.4 else "down"
    chain_names = tuple(chains) if chains else _default_chains(symbol, rng)

    circulating = supply if supply and supply > 0 else seeded_supply
    daily_volume = volume if volume and volume > 0 else round(circulating * turnover, 2)

    return FallbackAdoption(
        circulating_supply=circulating,
        market_share_percent=round(circulating / TOTAL_STABLECOIN_MARKET_CAP * 100, 3),
        volume_24h=daily_volume,
        growth_percentage=growth,
        growth_direction=direction,
        chain_percentages=tuple(split_percentages(chain_names, rng)),
    )
