"""DefiLlama stablecoin registry adapter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx

from stablecoin_research.providers.base import BaseAdapter
from stablecoin_research.research.models import ChainDistribution, ChainShare
from stablecoin_research.utils.errors import DataNotFoundError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DistributionRequest:
    symbol: str


class ChainDistributionAdapter(BaseAdapter[DistributionRequest, ChainDistribution]):
    """Circulating supply and per-chain breakdown for one stablecoin.

    The registry is downloaded whole and filtered client-side by symbol.
    """

    NAME = "chain_distribution"
    DEFAULT_BASE_URL = "https://stablecoins.llama.fi"
    DEFAULT_TIMEOUT = 15.0

    async def _fetch(self, request: DistributionRequest) -> ChainDistribution:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/stablecoins",
                params={"includePrices": "true"},
            )
            self._check_status(response)
            data = response.json() or {}

        assets = data.get("peggedAssets")
        if not isinstance(assets, list):
            raise ValueError("Registry payload has no peggedAssets list")

        symbol = request.symbol.upper()
        asset = next((a for a in assets if str(a.get("symbol", "")).upper() == symbol), None)
        if asset is None:
            raise DataNotFoundError(f"{symbol} not listed in the stablecoin registry")

        distribution = parse_asset(symbol, asset, registry_total(assets))
        if distribution.total_circulating <= 0:
            raise DataNotFoundError(f"{symbol} reports no circulating supply")
        return distribution


def _pegged_amount(value: Any) -> float:
    """Read a DefiLlama amount, which is either a number or a {peggedXXX: n} map."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        if "current" in value:
            return _pegged_amount(value["current"])
        for key, amount in value.items():
            if key.startswith("pegged") and amount is not None:
                return float(amount)
    return 0.0


def registry_total(assets: List[Dict[str, Any]]) -> float:
    return sum(_pegged_amount(asset.get("circulating")) for asset in assets)


def _chain_amounts(asset: Dict[str, Any]) -> List[Tuple[str, float]]:
    """Resolve the three upstream shapes into (chain, amount) pairs.

    - per-chain array:   "chains": [{"chain": "Ethereum", "circulating": ...}]
    - chain-keyed map:   "chainCirculating": {"Ethereum": {"current": {...}}}
    - aggregate only:    neither present, or "chains" is a list of names
    """
    chains = asset.get("chains")
    if isinstance(chains, list) and chains and isinstance(chains[0], dict):
        return [
            (str(entry.get("chain") or entry.get("name")),
             _pegged_amount(entry.get("circulating", entry.get("amount"))))
            for entry in chains
        ]

    chain_map = asset.get("chainCirculating")
    if isinstance(chain_map, dict) and chain_map:
        return [(name, _pegged_amount(value)) for name, value in chain_map.items()]

    return []


def parse_asset(symbol: str, asset: Dict[str, Any], total_registry: float) -> ChainDistribution:
    pairs = [(chain, amount) for chain, amount in _chain_amounts(asset) if amount > 0]
    circulating = _pegged_amount(asset.get("circulating"))
    if circulating <= 0:
        circulating = sum(amount for _, amount in pairs)

    # Percentages are relative to the larger of the reported total and the chain sum
    denominator = max(circulating, sum(amount for _, amount in pairs))
    pairs.sort(key=lambda pair: pair[1], reverse=True)
    shares = tuple(
        ChainShare(chain=chain, percentage=round(amount / denominator * 100, 2), amount_usd=amount)
        for chain, amount in pairs
    ) if denominator > 0 else ()

    market_share: Optional[float] = None
    if total_registry > 0 and circulating > 0:
        market_share = round(circulating / total_registry * 100, 3)

    return ChainDistribution(
        symbol=symbol,
        total_circulating=circulating,
        chains=shares,
        market_share_percent=market_share,
    )
