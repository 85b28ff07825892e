"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
import tempfile
import yaml

from stablecoin_research.config import load_config, reset_config
from stablecoin_research.providers.base import ErrorKind, ProviderResult


API_KEY_VARS = (
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
    "SERPAPI_API_KEY",
    "SERP_API_KEY",
    "COINGECKO_API_KEY",
    "LOG_LEVEL",
)


def build_config_data():
    return {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True
        },
        'research': {
            'enforce_topic_filter': True,
            'news_max_results': 6,
            'chart_days': 30,
            'request_timeout': 5,
            'news_location': 'United States'
        },
        'llm': {
            'model': 'claude-3-5-sonnet-20241022',
            'max_tokens': 500
        },
        'api': {
            'chat_completion': {'base_url': 'https://api.anthropic.test/v1', 'timeout': 2},
            'market_chart': {'base_url': 'https://api.coingecko.test/api/v3', 'timeout': 2},
            'chain_distribution': {'base_url': 'https://stablecoins.llama.test', 'timeout': 2},
            'news_search': {'base_url': 'https://serpapi.test', 'timeout': 2},
        },
        'logging': {
            'level': 'WARNING',
            'format': 'text'
        }
    }


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(build_config_data(), f)
        config_path = f.name

    yield config_path

    # Cleanup
    Path(config_path).unlink()


@pytest.fixture(autouse=True)
def loaded_config(temp_config_file, monkeypatch):
    """Load the temporary config as the global one, with no API keys set."""
    for var in API_KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    config = load_config(temp_config_file)
    yield config
    reset_config()


class FakeAdapter:
    """Stands in for a provider adapter; records every request it receives."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    async def call(self, request):
        self.calls.append(request)
        return self.result


@pytest.fixture
def fake_adapter():
    def factory(data=None, error_kind=None):
        if error_kind is not None:
            return FakeAdapter(ProviderResult.failure(error_kind, "fake failure"))
        return FakeAdapter(ProviderResult.success(data))
    return factory


@pytest.fixture
def failing_adapter(fake_adapter):
    return lambda: fake_adapter(error_kind=ErrorKind.NETWORK)
