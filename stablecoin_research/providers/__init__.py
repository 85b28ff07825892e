"""Provider adapter exports."""

from .base import BaseAdapter, ErrorKind, ProviderResult
from .chain_distribution import ChainDistributionAdapter, DistributionRequest
from .chat_completion import ChatCompletionAdapter, ChatRequest, strip_markdown
from .market_chart import ChartRequest, MarketChartAdapter
from .news_search import NewsRequest, NewsSearchAdapter


def get_adapter(name: str) -> BaseAdapter:
    """Get adapter by canonical name.

    Canonical names:
    - "chat_completion"
    - "market_chart"
    - "chain_distribution"
    - "news_search"
    """
    if name == "chat_completion":
        return ChatCompletionAdapter()
    if name == "market_chart":
        return MarketChartAdapter()
    if name == "chain_distribution":
        return ChainDistributionAdapter()
    if name == "news_search":
        return NewsSearchAdapter()
    raise ValueError(f"Unknown adapter: {name}")


__all__ = [
    "BaseAdapter",
    "ErrorKind",
    "ProviderResult",
    "ChainDistributionAdapter",
    "DistributionRequest",
    "ChatCompletionAdapter",
    "ChatRequest",
    "strip_markdown",
    "ChartRequest",
    "MarketChartAdapter",
    "NewsRequest",
    "NewsSearchAdapter",
    "get_adapter",
]
