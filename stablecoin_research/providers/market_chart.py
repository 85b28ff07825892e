"""CoinGecko market_chart/range adapter."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

import httpx

from stablecoin_research.providers.base import BaseAdapter
from stablecoin_research.research.models import PricePoint
from stablecoin_research.utils.errors import DataNotFoundError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)


COINGECKO_IDS: Mapping[str, str] = MappingProxyType({
    "USDT": "tether",
    "USDC": "usd-coin",
    "DAI": "dai",
    "USDE": "ethena-usde",
    "USDS": "usds",
    "USD1": "usd1-wlfi",
    "PYUSD": "paypal-usd",
    "FDUSD": "first-digital-usd",
    "RLUSD": "ripple-usd",
    "USDY": "ondo-us-dollar-yield",
    "TUSD": "true-usd",
    "USDD": "usdd",
    "GHO": "gho",
    "BUSD": "binance-usd",
    "CRVUSD": "crvusd",
    "USDP": "paxos-standard",
    "FRXUSD": "frax-usd",
    "MIM": "magic-internet-money",
    "LUSD": "liquity-usd",
    "SUSD": "nusd",
    "USTC": "terrausd",
    "GUSD": "gemini-dollar",
    "EURS": "stasis-eurs",
    "EURC": "euro-coin",
    "PAXG": "pax-gold",
    "XAUT": "tether-gold",
    "XSGD": "xsgd",
})


@dataclass(frozen=True)
class ChartRequest:
    symbol: str
    days: int = 30


class MarketChartAdapter(BaseAdapter[ChartRequest, List[PricePoint]]):
    """Trailing daily price and volume series for one stablecoin."""

    NAME = "market_chart"
    DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
    DEFAULT_TIMEOUT = 10.0

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout_seconds: Optional[float] = None):
        super().__init__(base_url=base_url, timeout_seconds=timeout_seconds)
        self.api_key = api_key or self.config.api_key(self.NAME)

    @staticmethod
    def provider_id(symbol: str) -> Optional[str]:
        return COINGECKO_IDS.get((symbol or "").upper())

    def _window(self, days: int, now: Optional[datetime] = None) -> Tuple[int, int]:
        end = now or datetime.now(timezone.utc)
        start = end - timedelta(days=days)
        return int(start.timestamp()), int(end.timestamp())

    async def _fetch(self, request: ChartRequest) -> List[PricePoint]:
        coin_id = self.provider_id(request.symbol)
        if coin_id is None:
            raise DataNotFoundError(f"No CoinGecko id mapped for {request.symbol}")

        from_ts, to_ts = self._window(request.days)
        params = {"vs_currency": "usd", "from": from_ts, "to": to_ts}
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/coins/{coin_id}/market_chart/range",
                params=params,
                headers=headers,
            )
            self._check_status(response)
            data = response.json() or {}

        points = parse_market_chart(data)
        if not points:
            raise DataNotFoundError(f"Empty price series for {request.symbol}")
        logger.debug(f"Fetched {len(points)} price points for {request.symbol}")
        return points


def parse_market_chart(data: dict) -> List[PricePoint]:
    """Collapse CoinGecko's `prices` / `total_volumes` pairs into one point per day.

    The last sample of each UTC day wins, which matches CoinGecko's daily close.
    """
    volumes: Dict[str, float] = {}
    for ts, volume in data.get("total_volumes") or []:
        volumes[_day(ts)] = float(volume)

    by_day: Dict[str, PricePoint] = {}
    for ts, price in data.get("prices") or []:
        if price is None:
            continue
        day = _day(ts)
        by_day[day] = PricePoint(date=day, price=float(price), volume=volumes.get(day), timestamp_ms=int(ts))

    return [by_day[day] for day in sorted(by_day)]


def _day(timestamp_ms) -> str:
    return datetime.fromtimestamp(float(timestamp_ms) / 1000, tz=timezone.utc).date().isoformat()
