import random

import pytest

from stablecoin_research.research.composer import (
    NEWS_QUERY_SUFFIXES,
    ResponseComposer,
    build_adoption_snapshot,
    comparison_row,
    news_topic,
)
from stablecoin_research.research.models import (
    ChainDistribution,
    ChainShare,
    DataSource,
    Intent,
    NewsItem,
    PricePoint,
    QueryContext,
    TimeFilter,
)
from stablecoin_research.utils.errors import MissingRequiredSymbolError, ResearchError


POINTS = [
    PricePoint(date="2025-01-01", price=1.0001, volume=4.0e9),
    PricePoint(date="2025-01-02", price=0.9850, volume=5.0e9),
]

NEWS = [
    NewsItem(title="USDC supply hits record", link="https://news.test/1", source="Reuters"),
    NewsItem(title="Circle files for IPO", link="https://news.test/2", source="CoinDesk"),
]

DISTRIBUTION = ChainDistribution(
    symbol="USDC",
    total_circulating=60.0e9,
    chains=(ChainShare("Ethereum", 75.0, 45.0e9), ChainShare("Solana", 25.0, 15.0e9)),
    market_share_percent=25.0,
)


@pytest.fixture
def adapters(failing_adapter):
    """Every adapter fails unless a test swaps in a succeeding one."""
    return {
        "chat": failing_adapter(),
        "market_chart": failing_adapter(),
        "chain_distribution": failing_adapter(),
        "news_search": failing_adapter(),
    }


def _composer(adapters):
    return ResponseComposer(rng=random.Random(7), **adapters)


def _context(text, intent, *symbols, time_filter=TimeFilter.PAST_WEEK):
    return QueryContext(raw_text=text, intent=intent, extracted_symbols=symbols, time_filter=time_filter)


def _total_calls(adapters):
    return sum(len(adapter.calls) for adapter in adapters.values())


@pytest.mark.asyncio
async def test_news_for_symbols(adapters, fake_adapter):
    adapters["news_search"] = fake_adapter(NEWS)
    context = _context("Latest news on USDC", Intent.NEWS, "USDC", time_filter=TimeFilter.PAST_DAY)

    response = await _composer(adapters).compose(context)

    assert response.intent is Intent.NEWS
    assert response.text == ""
    assert response.news_items == tuple(NEWS)
    assert response.sources == ("Google News",)
    assert response.request_id == context.request_id
    request = adapters["news_search"].calls[0]
    assert request.query.startswith("USDC ")
    assert request.query[len("USDC "):] in NEWS_QUERY_SUFFIXES
    assert request.time_filter is TimeFilter.PAST_DAY
    assert _total_calls(adapters) == 1


@pytest.mark.asyncio
async def test_news_without_topic_searches_stablecoins(adapters, fake_adapter):
    adapters["news_search"] = fake_adapter(NEWS)
    await _composer(adapters).compose(_context("Latest news", Intent.NEWS))
    query = adapters["news_search"].calls[0].query
    assert query.startswith("stablecoin ")
    assert query[len("stablecoin "):] in NEWS_QUERY_SUFFIXES


@pytest.mark.asyncio
async def test_news_query_keeps_the_topic(adapters, fake_adapter):
    adapters["news_search"] = fake_adapter(NEWS)
    await _composer(adapters).compose(
        _context("headlines about stablecoin regulation in the EU", Intent.NEWS)
    )
    query = adapters["news_search"].calls[0].query
    assert query.startswith("stablecoin regulation in the EU ")
    assert "headlines about" not in query


@pytest.mark.asyncio
async def test_news_query_keeps_symbol_topic_words(adapters, fake_adapter):
    adapters["news_search"] = fake_adapter(NEWS)
    await _composer(adapters).compose(
        _context("Latest news on USDC reserves audit", Intent.NEWS, "USDC")
    )
    assert adapters["news_search"].calls[0].query.startswith("USDC reserves audit ")


@pytest.mark.asyncio
async def test_repeated_symbol_news_varies_wording(adapters, fake_adapter):
    adapters["news_search"] = fake_adapter(NEWS)
    composer = _composer(adapters)
    for _ in range(12):
        await composer.compose(_context("Latest news on USDC", Intent.NEWS, "USDC"))
    queries = {request.query for request in adapters["news_search"].calls}
    assert len(queries) > 1
    assert all(query.startswith("USDC ") for query in queries)


@pytest.mark.parametrize("text, topic", [
    ("Latest news on USDC", "USDC"),
    ("Today’s news about PYUSD adoption?", "PYUSD adoption"),
    ("stablecoin news", ""),
    ("what happened recently with stablecoins", "what happened recently with stablecoins"),
])
def test_news_topic(text, topic):
    assert news_topic(text) == topic


@pytest.mark.asyncio
async def test_news_failure_gives_empty_list(adapters):
    response = await _composer(adapters).compose(_context("Latest news", Intent.NEWS))
    assert response.news_items == ()
    assert response.sources == ()
    assert adapters["chat"].calls == []


@pytest.mark.asyncio
async def test_adoption_live(adapters, fake_adapter):
    adapters["chain_distribution"] = fake_adapter(DISTRIBUTION)
    adapters["market_chart"] = fake_adapter(POINTS)
    context = _context("USDC adoption metrics", Intent.ADOPTION_TRACKING, "USDC")

    response = await _composer(adapters).compose(context)
    snapshot = response.adoption_snapshot

    assert snapshot.data_source is DataSource.LIVE
    assert snapshot.circulating_supply == 60.0e9
    assert snapshot.market_share_percent == 25.0
    assert snapshot.chain_distribution == DISTRIBUTION.chains
    assert snapshot.volume_24h == 5.0e9
    assert [event.timestamp for event in snapshot.depeg_events] == ["2025-01-02"]
    assert response.sources == ("DefiLlama", "CoinGecko")
    assert response.text.startswith("USDC adoption snapshot")
    assert adapters["chain_distribution"].calls[0].symbol == "USDC"
    assert adapters["market_chart"].calls[0].days == 30
    assert adapters["chat"].calls == []


@pytest.mark.asyncio
async def test_adoption_falls_back_to_reference_table(adapters):
    response = await _composer(adapters).compose(
        _context("USDT adoption tracker", Intent.ADOPTION_TRACKING, "USDT")
    )
    snapshot = response.adoption_snapshot

    assert snapshot.data_source is DataSource.REFERENCE
    assert snapshot.circulating_supply == 169e9
    assert snapshot.chain_percentage_total == pytest.approx(100.0)
    assert snapshot.growth_30d.direction == "up"
    assert len(snapshot.depeg_events) == 1
    assert response.sources == ("Reference data",)


@pytest.mark.asyncio
async def test_adoption_with_one_live_part_is_mixed(adapters, fake_adapter):
    adapters["chain_distribution"] = fake_adapter(DISTRIBUTION)
    response = await _composer(adapters).compose(
        _context("USDC adoption metrics", Intent.ADOPTION_TRACKING, "USDC")
    )
    snapshot = response.adoption_snapshot
    assert snapshot.data_source is DataSource.MIXED
    assert snapshot.volume_24h == 8.8e9
    assert response.sources == ("DefiLlama", "Reference data")


@pytest.mark.asyncio
async def test_adoption_for_unknown_ticker_is_synthetic(adapters):
    response = await _composer(adapters).compose(
        _context("adoption metrics for ZUSD", Intent.ADOPTION_TRACKING)
    )
    snapshot = response.adoption_snapshot
    assert snapshot.symbol == "ZUSD"
    assert snapshot.data_source is DataSource.SYNTHETIC
    assert snapshot.chain_percentage_total == 100.0
    assert response.sources == ()
    assert adapters["chain_distribution"].calls[0].symbol == "ZUSD"


@pytest.mark.asyncio
async def test_adoption_without_any_symbol(adapters):
    with pytest.raises(MissingRequiredSymbolError):
        await _composer(adapters).compose(_context("adoption metrics please", Intent.ADOPTION_TRACKING))


@pytest.mark.asyncio
async def test_cached_explanation_skips_adapters(adapters):
    response = await _composer(adapters).compose(
        _context("Explain USDC", Intent.EXPLANATION, "USDC")
    )

    assert response.intent is Intent.EXPLANATION
    assert "Backing Mechanism" in response.text
    assert "http" not in response.text
    assert "Transparency Report" not in response.text
    assert response.sources.count("https://www.circle.com/transparency") == 1
    assert "Circle Transparency" in response.sources
    assert response.adoption_snapshot.symbol == "USDC"
    assert _total_calls(adapters) == 0


@pytest.mark.asyncio
async def test_uncached_explanation_calls_chat_and_chart(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("Overview\n- TrueUSD is a dollar stablecoin.\nMore: https://tusd.test/about")
    adapters["market_chart"] = fake_adapter(POINTS)

    response = await _composer(adapters).compose(
        _context("Explain TUSD", Intent.EXPLANATION, "TUSD")
    )

    assert response.text == "Overview\n- TrueUSD is a dollar stablecoin."
    assert response.sources == ("Claude", "CoinGecko", "https://tusd.io/transparency", "https://tusd.test/about")
    assert response.chart_series == tuple(POINTS)
    assert "TrueUSD (TUSD)" in adapters["chat"].calls[0].prompt
    assert adapters["chat"].calls[0].system


@pytest.mark.asyncio
async def test_uncached_explanation_without_chat_raises(adapters):
    with pytest.raises(ResearchError, match="research error"):
        await _composer(adapters).compose(_context("Explain TUSD", Intent.EXPLANATION, "TUSD"))


@pytest.mark.asyncio
async def test_explanation_without_symbol_is_answered_generically(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("Stablecoins hold a peg.")
    response = await _composer(adapters).compose(_context("Explain stablecoins", Intent.EXPLANATION))
    assert response.intent is Intent.GENERIC
    assert response.text == "Stablecoins hold a peg."


@pytest.mark.asyncio
async def test_comparison_uses_static_rows(adapters):
    response = await _composer(adapters).compose(
        _context("Compare USDT and USDC", Intent.COMPARISON, "USDT", "USDC")
    )

    assert response.intent is Intent.COMPARISON
    assert [row.symbol for row in response.comparison_rows] == ["USDT", "USDC"]
    assert response.text == "Side-by-side comparison of Tether (USDT), USD Coin (USDC)."
    assert response.sources == ("Stablecoin reference catalog",)
    assert _total_calls(adapters) == 0


@pytest.mark.asyncio
async def test_comparison_with_one_symbol_is_generic(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("USDC is regulated.")
    response = await _composer(adapters).compose(_context("compare USDC", Intent.COMPARISON, "USDC"))
    assert response.intent is Intent.GENERIC
    assert response.comparison_rows is None


def test_comparison_row_sources():
    assert comparison_row("DAI").yield_info.startswith("Dai Savings Rate")
    assert comparison_row("GUSD").issuer == "Gemini Trust"
    assert comparison_row("NOPE") is None


@pytest.mark.asyncio
async def test_generic_single_symbol_adds_market_context(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("USDC is a regulated stablecoin.")
    adapters["market_chart"] = fake_adapter(POINTS)

    response = await _composer(adapters).compose(_context("What is USDC?", Intent.GENERIC, "USDC"))

    assert response.text == "USDC is a regulated stablecoin."
    assert response.sources == ("Claude", "CoinGecko")
    assert response.chart_series == tuple(POINTS)
    assert response.news_items is None
    assert "USDC market data" in adapters["chat"].calls[0].context
    assert adapters["news_search"].calls == []


@pytest.mark.asyncio
async def test_generic_expands_single_word(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("answer")
    await _composer(adapters).compose(_context("USDC", Intent.GENERIC, "USDC"))
    request = adapters["chat"].calls[0]
    assert request.prompt.startswith("What is USDC?")
    assert request.context is None


@pytest.mark.asyncio
async def test_generic_with_temporal_words_fetches_news(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("Stablecoin supply grew.")
    response = await _composer(adapters).compose(
        _context("what happened recently with stablecoins", Intent.GENERIC)
    )
    assert len(adapters["news_search"].calls) == 1
    assert response.news_items == ()
    assert response.sources == ("Claude",)
    assert adapters["market_chart"].calls == []


@pytest.mark.asyncio
async def test_generic_news_success(adapters, fake_adapter):
    adapters["chat"] = fake_adapter("Here is the latest.")
    adapters["news_search"] = fake_adapter(NEWS)
    response = await _composer(adapters).compose(
        _context("latest on USDT and USDC", Intent.GENERIC, "USDT", "USDC")
    )
    assert response.news_items == tuple(NEWS)
    assert adapters["news_search"].calls[0].query.startswith("latest on USDT and USDC ")
    assert response.sources == ("Claude", "Google News")
    assert adapters["market_chart"].calls == []


@pytest.mark.asyncio
async def test_generic_without_chat_raises(adapters):
    with pytest.raises(ResearchError):
        await _composer(adapters).compose(_context("What is USDC?", Intent.GENERIC, "USDC"))


def test_snapshot_for_gold_token_keeps_historical_depegs():
    points = [PricePoint(date="2025-01-01", price=2650.0)]
    snapshot = build_adoption_snapshot("PAXG", points=points)
    assert snapshot.depeg_events == ()
    assert snapshot.data_source is DataSource.MIXED


def test_static_snapshot():
    snapshot = build_adoption_snapshot("dai")
    assert snapshot.symbol == "DAI"
    assert snapshot.data_source is DataSource.REFERENCE
    assert len(snapshot.depeg_events) == 2
    assert snapshot.chain_percentage_total == pytest.approx(100.0)


def test_catalog_coin_without_table_entry_is_reference():
    snapshot = build_adoption_snapshot("TUSD")
    assert snapshot.data_source is DataSource.REFERENCE
    assert snapshot.circulating_supply == 493000000
    assert [share.chain for share in snapshot.chain_distribution] == ["Ethereum", "TRON", "BSC", "Avalanche"]
