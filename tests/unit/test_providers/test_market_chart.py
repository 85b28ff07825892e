from datetime import datetime, timezone

import httpx
import pytest

from stablecoin_research.providers.base import ErrorKind
from stablecoin_research.providers.market_chart import ChartRequest, MarketChartAdapter, parse_market_chart


DAY_ONE = 1735689600000  # 2025-01-01T00:00:00Z
HOUR = 3600 * 1000
DAY = 24 * HOUR


class DummyResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("error", request=None, response=None)


class DummyClient:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.requests = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None, headers=None):
        self.requests.append((url, params, headers))
        return DummyResponse(self.payload, status_code=self.status_code)


PAYLOAD = {
    "prices": [
        [DAY_ONE, 0.9990],
        [DAY_ONE + HOUR, 1.0010],
        [DAY_ONE + DAY, 0.9850],
    ],
    "total_volumes": [
        [DAY_ONE + HOUR, 5.0e9],
        [DAY_ONE + DAY, 6.0e9],
    ],
}


def test_parse_market_chart_one_point_per_day():
    points = parse_market_chart(PAYLOAD)
    assert [p.date for p in points] == ["2025-01-01", "2025-01-02"]
    assert points[0].price == 1.0010
    assert points[0].volume == 5.0e9
    assert points[1].timestamp_ms == DAY_ONE + DAY


def test_parse_market_chart_sorted_and_tolerant():
    payload = {"prices": [[DAY_ONE + DAY, 1.0], [DAY_ONE, None], [DAY_ONE - DAY, 0.99]]}
    points = parse_market_chart(payload)
    assert [p.date for p in points] == ["2024-12-31", "2025-01-02"]
    assert all(p.volume is None for p in points)
    assert parse_market_chart({}) == []


@pytest.mark.asyncio
async def test_call_hits_range_endpoint(monkeypatch):
    client = DummyClient(PAYLOAD)
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    result = await MarketChartAdapter().call(ChartRequest(symbol="usdc", days=30))
    assert result.ok
    assert len(result.data) == 2

    url, params, headers = client.requests[0]
    assert url == "https://api.coingecko.test/api/v3/coins/usd-coin/market_chart/range"
    assert params["vs_currency"] == "usd"
    assert params["to"] - params["from"] == 30 * 24 * 3600
    assert "x-cg-demo-api-key" not in headers


@pytest.mark.asyncio
async def test_call_sends_demo_key(monkeypatch):
    client = DummyClient(PAYLOAD)
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    await MarketChartAdapter(api_key="cg").call(ChartRequest(symbol="USDT"))
    assert client.requests[0][2]["x-cg-demo-api-key"] == "cg"


@pytest.mark.asyncio
async def test_unknown_symbol_is_empty_payload(monkeypatch):
    client = DummyClient(PAYLOAD)
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: client)

    result = await MarketChartAdapter().call(ChartRequest(symbol="NOTACOIN"))
    assert result.error_kind is ErrorKind.EMPTY_PAYLOAD
    assert client.requests == []


@pytest.mark.asyncio
async def test_empty_series(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: DummyClient({"prices": []}))
    result = await MarketChartAdapter().call(ChartRequest(symbol="USDT"))
    assert result.error_kind is ErrorKind.EMPTY_PAYLOAD


@pytest.mark.asyncio
async def test_malformed_series(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: DummyClient({"prices": [["x", "y"]]}))
    result = await MarketChartAdapter().call(ChartRequest(symbol="USDT"))
    assert result.error_kind is ErrorKind.PARSE_ERROR


@pytest.mark.asyncio
async def test_rate_limited(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout=None: DummyClient({}, status_code=429))
    result = await MarketChartAdapter().call(ChartRequest(symbol="USDT"))
    assert result.error_kind is ErrorKind.RATE_LIMITED


def test_window_spans_requested_days():
    now = datetime(2025, 1, 31, tzinfo=timezone.utc)
    start, end = MarketChartAdapter()._window(30, now=now)
    assert end == int(now.timestamp())
    assert datetime.fromtimestamp(start, tz=timezone.utc).date().isoformat() == "2025-01-01"
