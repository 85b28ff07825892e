"""SerpAPI Google News adapter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from stablecoin_research.providers.base import BaseAdapter
from stablecoin_research.research.models import NewsItem, TimeFilter
from stablecoin_research.utils.errors import DataNotFoundError, DataProviderError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

MAX_NEWS_RESULTS = 6


@dataclass(frozen=True)
class NewsRequest:
    query: str
    time_filter: TimeFilter = TimeFilter.PAST_WEEK
    location: str = "United States"
    num: int = 10


class NewsSearchAdapter(BaseAdapter[NewsRequest, List[NewsItem]]):
    """Google News results for a query, in upstream rank order."""

    NAME = "news_search"
    DEFAULT_BASE_URL = "https://serpapi.com"
    DEFAULT_TIMEOUT = 10.0

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout_seconds: Optional[float] = None, max_results: Optional[int] = None):
        super().__init__(base_url=base_url, timeout_seconds=timeout_seconds)
        self.api_key = api_key or self.config.api_key(self.NAME)
        configured = self.config.news_max_results
        self.max_results = min(max_results or configured, MAX_NEWS_RESULTS)

    async def _fetch(self, request: NewsRequest) -> List[NewsItem]:
        if not self.api_key:
            raise DataProviderError("SERPAPI_API_KEY is not configured")

        params = {
            "engine": "google",
            "tbm": "nws",
            "q": request.query,
            "location": request.location,
            "num": request.num,
            "tbs": request.time_filter.value,
            "api_key": self.api_key,
        }
        logger.info("SerpAPI news search", extra={"query": request.query, "tbs": request.time_filter.value})
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(f"{self.base_url}/search", params=params)
            self._check_status(response)
            data = response.json() or {}

        if data.get("error"):
            raise DataNotFoundError(str(data["error"]))

        items = [parse_news_item(raw) for raw in data.get("news_results") or []]
        items = [item for item in items if item.title and item.link][: self.max_results]
        if not items:
            raise DataNotFoundError(f"No news results for '{request.query}'")
        return items


def parse_news_item(raw: Dict[str, Any]) -> NewsItem:
    source = raw.get("source") or ""
    if isinstance(source, dict):
        source = source.get("name", "")
    return NewsItem(
        title=raw.get("title") or "",
        link=raw.get("link") or "",
        snippet=raw.get("snippet") or "",
        date=raw.get("date") or "",
        source=source,
        thumbnail=raw.get("thumbnail"),
    )
