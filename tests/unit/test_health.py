"""Tests for health check functionality."""
import pytest
from stablecoin_research.health import (
    check_adapter,
    check_config,
    get_health_status,
    HealthStatus
)


@pytest.mark.asyncio
async def test_check_config():
    """Test config health check."""
    result = await check_config()
    assert "status" in result
    assert "message" in result
    assert result["status"] == HealthStatus.HEALTHY
    assert "Test App" in result["message"]


@pytest.mark.asyncio
async def test_check_adapter_missing_key_is_degraded():
    result = await check_adapter("chat_completion")
    assert result["status"] == HealthStatus.DEGRADED
    assert "ANTHROPIC_API_KEY" in result["message"]
    assert "queries will fail" in result["message"]


@pytest.mark.asyncio
async def test_check_adapter_missing_news_key_message():
    result = await check_adapter("news_search")
    assert result["status"] == HealthStatus.DEGRADED
    assert result["message"].endswith("news results will be empty")


@pytest.mark.asyncio
async def test_check_adapter_with_key(monkeypatch):
    monkeypatch.setenv("SERPAPI_API_KEY", "k")
    result = await check_adapter("news_search")
    assert result["status"] == HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_check_adapter_public_endpoint():
    result = await check_adapter("chain_distribution")
    assert result["status"] == HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_get_health_status():
    """Test overall health status."""
    status = await get_health_status()

    assert "status" in status
    assert "timestamp" in status
    assert "components" in status

    for name in ("config", "chat_completion", "market_chart", "chain_distribution", "news_search"):
        assert name in status["components"]

    # No keys in the test environment
    assert status["status"] == HealthStatus.DEGRADED


@pytest.mark.asyncio
async def test_get_health_status_all_keys(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "a")
    monkeypatch.setenv("SERPAPI_API_KEY", "s")
    status = await get_health_status()
    assert status["status"] == HealthStatus.HEALTHY
