from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class PricePointResponse(BaseModel):
    date: str
    price: float
    volume: Optional[float] = None


class NewsItemResponse(BaseModel):
    title: str
    link: str
    snippet: str = ""
    date: str = ""
    source: str = ""
    thumbnail: Optional[str] = None


class ComparisonRowResponse(BaseModel):
    symbol: str
    name: str
    backing: str
    market_cap: Optional[float] = None
    chains: List[str]
    yield_info: str
    issuer: str
    regulation: str
    use_case: str
    risk_level: str


class ChainShareResponse(BaseModel):
    chain: str
    percentage: float
    amount_usd: float


class DepegEventResponse(BaseModel):
    timestamp: str
    deviation_percent: float
    price: float
    cause: Optional[str] = None


class GrowthResponse(BaseModel):
    percentage: float
    direction: str


class AdoptionSnapshotResponse(BaseModel):
    """Adoption metrics for a single stablecoin."""
    symbol: str
    circulating_supply: float
    market_share_percent: float
    chain_distribution: List[ChainShareResponse]
    volume_24h: float
    depeg_events: List[DepegEventResponse] = []
    growth_30d: Optional[GrowthResponse] = None
    data_source: str


class ResearchResponse(BaseModel):
    request_id: str
    intent: str
    text: str
    symbols: List[str] = []
    sources: List[str] = []
    chart_series: Optional[List[PricePointResponse]] = None
    news_items: Optional[List[NewsItemResponse]] = None
    comparison_rows: Optional[List[ComparisonRowResponse]] = None
    adoption_snapshot: Optional[AdoptionSnapshotResponse] = None


class StablecoinSummary(BaseModel):
    symbol: str
    name: str
    category: str
    issuer: str
    chains: List[str]
    risk_level: str
    peg_currency: str
    market_cap: Optional[float] = None
