from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Intent(Enum):
    """What kind of answer a query is asking for."""

    NEWS = "news"
    ADOPTION_TRACKING = "adoption_tracking"
    EXPLANATION = "explanation"
    COMPARISON = "comparison"
    GENERIC = "generic"


class TimeFilter(Enum):
    """Google News recency windows understood by SerpAPI's `tbs` parameter."""

    PAST_DAY = "qdr:d"
    PAST_WEEK = "qdr:w"
    PAST_MONTH = "qdr:m"


class DataSource(Enum):
    LIVE = "live"
    REFERENCE = "reference"
    SYNTHETIC = "synthetic"
    MIXED = "mixed"


def _new_request_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class QueryContext:
    """Everything the composer needs to know about one query."""

    raw_text: str
    intent: Intent
    extracted_symbols: Tuple[str, ...] = ()
    time_filter: TimeFilter = TimeFilter.PAST_WEEK
    location: str = "United States"
    request_id: str = field(default_factory=_new_request_id)

    @property
    def primary_symbol(self) -> Optional[str]:
        return self.extracted_symbols[0] if self.extracted_symbols else None


@dataclass(frozen=True)
class PricePoint:
    date: str  # ISO date, UTC
    price: float
    volume: Optional[float] = None
    timestamp_ms: Optional[int] = None


@dataclass(frozen=True)
class ChainShare:
    chain: str
    percentage: float
    amount_usd: float


@dataclass(frozen=True)
class ChainDistribution:
    """Circulating supply of one stablecoin split across chains."""

    symbol: str
    total_circulating: float
    chains: Tuple[ChainShare, ...] = ()
    market_share_percent: Optional[float] = None


@dataclass(frozen=True)
class NewsItem:
    title: str
    link: str
    snippet: str = ""
    date: str = ""
    source: str = ""
    thumbnail: Optional[str] = None


@dataclass(frozen=True)
class ComparisonRow:
    symbol: str
    name: str
    backing: str
    market_cap: Optional[float]
    chains: Tuple[str, ...]
    yield_info: str
    issuer: str
    regulation: str
    use_case: str
    risk_level: str


@dataclass(frozen=True)
class DepegEvent:
    timestamp: str
    deviation_percent: float
    price: float
    cause: Optional[str] = None


@dataclass(frozen=True)
class Growth:
    percentage: float
    direction: str  # up|down


@dataclass(frozen=True)
class AdoptionSnapshot:
    symbol: str
    circulating_supply: float
    market_share_percent: float
    chain_distribution: Tuple[ChainShare, ...]
    volume_24h: float
    depeg_events: Tuple[DepegEvent, ...] = ()
    growth_30d: Optional[Growth] = None
    data_source: DataSource = DataSource.REFERENCE

    @property
    def chain_percentage_total(self) -> float:
        return sum(share.percentage for share in self.chain_distribution)


@dataclass(frozen=True)
class ComposedResponse:
    """Unified answer handed to the presentation layer."""

    text: str
    intent: Intent
    request_id: str
    symbols: Tuple[str, ...] = ()
    sources: Tuple[str, ...] = ()
    chart_series: Optional[Tuple[PricePoint, ...]] = None
    news_items: Optional[Tuple[NewsItem, ...]] = None
    comparison_rows: Optional[Tuple[ComparisonRow, ...]] = None
    adoption_snapshot: Optional[AdoptionSnapshot] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-friendly representation (enums flattened to their values)."""
        return asdict(self, dict_factory=_enum_aware_dict)


def _enum_aware_dict(items) -> Dict[str, Any]:
    return {key: (value.value if isinstance(value, Enum) else value) for key, value in items}
