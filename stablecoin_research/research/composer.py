"""Routes a classified query to the adapters it needs and merges the results.

Adapter failures never propagate: every kind of answer has a fallback built
from static tables, except chat text for generic and uncached explanation
queries, whose failure is the only thing that raises `ResearchError`.
"""
from __future__ import annotations

import asyncio
import random
import re
from typing import List, Optional, Sequence, Tuple

from stablecoin_research.catalog.explanations import get_cached_explanation, get_transparency_report
from stablecoin_research.catalog.fallback_metrics import (
    COMPARISON_FALLBACK,
    ENHANCED_FALLBACK,
    FallbackAdoption,
    yield_and_regulation,
)
from stablecoin_research.catalog.reference import get_stablecoin
from stablecoin_research.config import get_or_load_config
from stablecoin_research.providers.base import ProviderResult
from stablecoin_research.providers.chain_distribution import ChainDistributionAdapter, DistributionRequest
from stablecoin_research.providers.chat_completion import ChatCompletionAdapter, ChatRequest
from stablecoin_research.providers.market_chart import ChartRequest, MarketChartAdapter
from stablecoin_research.providers.news_search import NewsRequest, NewsSearchAdapter
from stablecoin_research.research.classifier import NEWS_ANCHORS
from stablecoin_research.research.depeg import detect_depeg_events, historical_depeg_events
from stablecoin_research.research.extractor import first_ticker_candidate
from stablecoin_research.research.formatting import chain_shares, format_market_data, format_usd, strip_urls
from stablecoin_research.research.models import (
    AdoptionSnapshot,
    ChainDistribution,
    ComparisonRow,
    ComposedResponse,
    DataSource,
    Growth,
    Intent,
    PricePoint,
    QueryContext,
)
from stablecoin_research.research.prompts import expand_single_word, get_explanation_prompt, get_system_prompt
from stablecoin_research.research.synthetic import synthetic_adoption
from stablecoin_research.utils.errors import MissingRequiredSymbolError, ResearchError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

TEMPORAL_KEYWORDS = (
    "news", "latest", "today", "recent", "recently", "this week", "yesterday",
    "update", "announce", "headline", "breaking", "current",
)

NEWS_QUERY_SUFFIXES = (
    "news",
    "latest news",
    "updates",
    "developments",
    "headlines",
)

_LEADING_FILLER_RE = re.compile(r"^(?:on|about|for|regarding|of|from)\s+", re.IGNORECASE)
_EDGE_PUNCTUATION = " ?!.:,;-"


def wants_news(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in TEMPORAL_KEYWORDS)


def news_topic(text: str) -> str:
    """The subject of a news request: `text` without its news anchor or leading preposition."""
    topic = " ".join(text.replace("’", "'").split())
    lowered = topic.lower()
    for anchor in sorted(NEWS_ANCHORS, key=len, reverse=True):
        if lowered.startswith(anchor):
            topic = topic[len(anchor):]
            break
    topic = _LEADING_FILLER_RE.sub("", topic.strip(_EDGE_PUNCTUATION))
    return topic.strip(_EDGE_PUNCTUATION)


def comparison_row(symbol: str) -> Optional[ComparisonRow]:
    """One comparison row from the catalog, or the hard-coded fallback table."""
    yield_info, regulation = yield_and_regulation(symbol)
    ref = get_stablecoin(symbol)
    if ref is not None:
        return ComparisonRow(
            symbol=ref.symbol,
            name=ref.name,
            backing=ref.backing_description,
            market_cap=ref.market_cap,
            chains=ref.chains,
            yield_info=yield_info,
            issuer=ref.issuer,
            regulation=regulation,
            use_case=ref.use_case,
            risk_level=ref.risk_level.value,
        )

    details = COMPARISON_FALLBACK.get(symbol.upper())
    if details is None:
        return None
    return ComparisonRow(
        symbol=symbol.upper(),
        name=details.name,
        backing=details.backing,
        market_cap=details.market_cap,
        chains=details.chains,
        yield_info=details.yield_info,
        issuer=details.issuer,
        regulation=details.regulation,
        use_case=details.use_case,
        risk_level=details.risk_level,
    )


def _baseline(symbol: str) -> Tuple[FallbackAdoption, DataSource]:
    if symbol in ENHANCED_FALLBACK:
        return ENHANCED_FALLBACK[symbol], DataSource.REFERENCE
    ref = get_stablecoin(symbol)
    if ref is not None:
        return synthetic_adoption(symbol, chains=ref.chains, supply=ref.market_cap,
                                  volume=ref.volume_24h), DataSource.REFERENCE
    return synthetic_adoption(symbol), DataSource.SYNTHETIC


def build_adoption_snapshot(
    symbol: str,
    distribution: Optional[ChainDistribution] = None,
    points: Optional[Sequence[PricePoint]] = None,
) -> AdoptionSnapshot:
    """Merge live data with the fallback tables, field by field."""
    symbol = symbol.upper()
    base, base_source = _baseline(symbol)

    circulating = distribution.total_circulating if distribution else base.circulating_supply
    if distribution and distribution.market_share_percent is not None:
        market_share = distribution.market_share_percent
    else:
        market_share = base.market_share_percent

    if distribution and distribution.chains:
        chains = distribution.chains
    else:
        chains = chain_shares(circulating, base.chain_percentages)

    latest_volume = points[-1].volume if points else None
    volume = latest_volume if latest_volume else base.volume_24h

    ref = get_stablecoin(symbol)
    usd_pegged = ref.is_usd_pegged if ref else "USD" in symbol
    if points and usd_pegged:
        depegs = detect_depeg_events(points)
    else:
        depegs = historical_depeg_events(symbol)

    live_parts = sum(1 for part in (distribution, points) if part)
    if live_parts == 2:
        source = DataSource.LIVE
    elif live_parts == 1:
        source = DataSource.MIXED
    else:
        source = base_source

    return AdoptionSnapshot(
        symbol=symbol,
        circulating_supply=circulating,
        market_share_percent=market_share,
        chain_distribution=tuple(chains),
        volume_24h=volume,
        depeg_events=depegs,
        growth_30d=Growth(percentage=base.growth_percentage, direction=base.growth_direction),
        data_source=source,
    )


def summarize_adoption(snapshot: AdoptionSnapshot) -> str:
    lines = [
        f"{snapshot.symbol} adoption snapshot",
        f"- Circulating supply: {format_usd(snapshot.circulating_supply)}",
        f"- Market share: {snapshot.market_share_percent:.2f}%",
        f"- 24h volume: {format_usd(snapshot.volume_24h)}",
    ]
    if snapshot.growth_30d:
        lines.append(f"- 30-day change: {snapshot.growth_30d.direction} {snapshot.growth_30d.percentage:.1f}%")
    if snapshot.chain_distribution:
        top = snapshot.chain_distribution[0]
        lines.append(f"- Largest chain: {top.chain} ({top.percentage:.1f}%)")
    lines.append(f"- Depeg events on record: {len(snapshot.depeg_events)}")
    return "\n".join(lines)


class ResponseComposer:
    """Turns a QueryContext into one ComposedResponse."""

    def __init__(
        self,
        chat: Optional[ChatCompletionAdapter] = None,
        market_chart: Optional[MarketChartAdapter] = None,
        chain_distribution: Optional[ChainDistributionAdapter] = None,
        news_search: Optional[NewsSearchAdapter] = None,
        rng: Optional[random.Random] = None,
    ):
        self.chat = chat or ChatCompletionAdapter()
        self.market_chart = market_chart or MarketChartAdapter()
        self.chain_distribution = chain_distribution or ChainDistributionAdapter()
        self.news_search = news_search or NewsSearchAdapter()
        self.rng = rng or random.Random()
        self.chart_days = get_or_load_config().chart_days

    async def compose(self, context: QueryContext) -> ComposedResponse:
        intent = context.intent
        symbols = context.extracted_symbols

        if intent is Intent.COMPARISON and len(symbols) < 2:
            logger.info("Comparison needs two symbols, answering as generic", extra={"symbols": symbols})
            intent = Intent.GENERIC
        if intent is Intent.EXPLANATION and not symbols:
            logger.info("Explanation without a symbol, answering as generic")
            intent = Intent.GENERIC

        if intent is Intent.NEWS:
            return await self._compose_news(context)
        if intent is Intent.ADOPTION_TRACKING:
            return await self._compose_adoption(context)
        if intent is Intent.EXPLANATION:
            return await self._compose_explanation(context)
        if intent is Intent.COMPARISON:
            response = self._compose_comparison(context)
            if response is not None:
                return response
        return await self._compose_generic(context)

    def _news_query(self, context: QueryContext) -> str:
        """Search text built around the user's topic; only the trailing wording varies."""
        topic = news_topic(context.raw_text)
        unnamed = [
            symbol for symbol in context.extracted_symbols
            if not re.search(rf"\b{re.escape(symbol)}\b", topic, re.IGNORECASE)
        ]
        subject = " ".join(unnamed + [topic]).strip()
        if not subject:
            subject = "stablecoin"
        elif not context.extracted_symbols and "stablecoin" not in subject.lower():
            subject = f"stablecoin {subject}"
        return f"{subject} {self.rng.choice(NEWS_QUERY_SUFFIXES)}"

    async def _compose_news(self, context: QueryContext) -> ComposedResponse:
        result = await self.news_search.call(NewsRequest(
            query=self._news_query(context),
            time_filter=context.time_filter,
            location=context.location,
        ))
        items = tuple(result.data) if result.ok else ()
        if not items:
            logger.info("No news available", extra={"request_id": context.request_id})
        return ComposedResponse(
            text="",
            intent=Intent.NEWS,
            request_id=context.request_id,
            symbols=context.extracted_symbols,
            sources=("Google News",) if items else (),
            news_items=items,
        )

    async def _compose_adoption(self, context: QueryContext) -> ComposedResponse:
        symbol = context.primary_symbol or first_ticker_candidate(context.raw_text)
        if not symbol:
            raise MissingRequiredSymbolError(
                "Please name the stablecoin to track, for example 'adoption metrics for USDC'."
            )

        distribution_result, chart_result = await asyncio.gather(
            self.chain_distribution.call(DistributionRequest(symbol=symbol)),
            self.market_chart.call(ChartRequest(symbol=symbol, days=self.chart_days)),
        )
        distribution = distribution_result.data if distribution_result.ok else None
        points = chart_result.data if chart_result.ok else None
        snapshot = build_adoption_snapshot(symbol, distribution, points)
        if snapshot.data_source is not DataSource.LIVE:
            logger.info(
                f"Adoption snapshot for {symbol} uses fallback data",
                extra={"data_source": snapshot.data_source.value},
            )

        sources: List[str] = []
        if distribution:
            sources.append("DefiLlama")
        if points:
            sources.append("CoinGecko")
        if snapshot.data_source in (DataSource.REFERENCE, DataSource.MIXED):
            sources.append("Reference data")

        return ComposedResponse(
            text=summarize_adoption(snapshot),
            intent=Intent.ADOPTION_TRACKING,
            request_id=context.request_id,
            symbols=(snapshot.symbol,),
            sources=tuple(sources),
            adoption_snapshot=snapshot,
        )

    async def _compose_explanation(self, context: QueryContext) -> ComposedResponse:
        symbol = context.extracted_symbols[0]
        report = get_transparency_report(symbol)
        cached = get_cached_explanation(symbol)

        if cached is not None:
            text, urls = strip_urls(cached.text)
            sources = list(urls)
            if report:
                sources.append(report)
            sources.extend(cached.sources)
            return ComposedResponse(
                text=text,
                intent=Intent.EXPLANATION,
                request_id=context.request_id,
                symbols=context.extracted_symbols,
                sources=tuple(dict.fromkeys(sources)),
                adoption_snapshot=build_adoption_snapshot(symbol),
            )

        ref = get_stablecoin(symbol)
        chat_result, chart_result = await asyncio.gather(
            self.chat.call(ChatRequest(prompt=get_explanation_prompt(symbol, ref), system=get_system_prompt())),
            self.market_chart.call(ChartRequest(symbol=symbol, days=self.chart_days)),
        )
        self._require_text(chat_result, context)

        text, urls = strip_urls(chat_result.data)
        sources = ["Claude"]
        if chart_result.ok:
            sources.append("CoinGecko")
        if report:
            sources.append(report)
        sources.extend(urls)
        return ComposedResponse(
            text=text,
            intent=Intent.EXPLANATION,
            request_id=context.request_id,
            symbols=context.extracted_symbols,
            sources=tuple(dict.fromkeys(sources)),
            chart_series=tuple(chart_result.data) if chart_result.ok else None,
        )

    def _compose_comparison(self, context: QueryContext) -> Optional[ComposedResponse]:
        rows = tuple(row for row in map(comparison_row, context.extracted_symbols) if row is not None)
        if len(rows) < 2:
            return None
        names = ", ".join(f"{row.name} ({row.symbol})" for row in rows)
        return ComposedResponse(
            text=f"Side-by-side comparison of {names}.",
            intent=Intent.COMPARISON,
            request_id=context.request_id,
            symbols=tuple(row.symbol for row in rows),
            sources=("Stablecoin reference catalog",),
            comparison_rows=rows,
        )

    async def _compose_generic(self, context: QueryContext) -> ComposedResponse:
        symbols = context.extracted_symbols
        single_symbol = symbols[0] if len(symbols) == 1 else None
        fetch_news = wants_news(context.raw_text)

        chart_result: Optional[ProviderResult] = None
        news_result: Optional[ProviderResult] = None
        calls = []
        if single_symbol:
            calls.append(self.market_chart.call(ChartRequest(symbol=single_symbol, days=self.chart_days)))
        if fetch_news:
            calls.append(self.news_search.call(NewsRequest(
                query=self._news_query(context),
                time_filter=context.time_filter,
                location=context.location,
            )))
        results = list(await asyncio.gather(*calls))
        if single_symbol:
            chart_result = results.pop(0)
        if fetch_news:
            news_result = results.pop(0)

        market_context = None
        if chart_result is not None and chart_result.ok:
            market_context = format_market_data(single_symbol, chart_result.data)

        chat_result = await self.chat.call(ChatRequest(
            prompt=expand_single_word(context.raw_text),
            context=market_context,
            system=get_system_prompt(),
        ))
        self._require_text(chat_result, context)

        sources = ["Claude"]
        chart_series = None
        if chart_result is not None and chart_result.ok:
            sources.append("CoinGecko")
            chart_series = tuple(chart_result.data)
        news_items = None
        if news_result is not None:
            news_items = tuple(news_result.data) if news_result.ok else ()
            if news_items:
                sources.append("Google News")

        return ComposedResponse(
            text=chat_result.data,
            intent=Intent.GENERIC,
            request_id=context.request_id,
            symbols=symbols,
            sources=tuple(sources),
            chart_series=chart_series,
            news_items=news_items,
        )

    @staticmethod
    def _require_text(result: ProviderResult, context: QueryContext) -> None:
        if result.ok and result.data:
            return
        logger.error(
            "Chat completion failed with no fallback",
            extra={"request_id": context.request_id, "error_kind": getattr(result.error_kind, "value", None)},
        )
        raise ResearchError("research error: the assistant could not produce an answer, please try again")
