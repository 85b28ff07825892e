"""Configuration management for the Stablecoin Research Assistant.

Settings come from a YAML file; credentials come from the environment
(optionally populated from a `.env` file).
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from stablecoin_research.utils.errors import ConfigurationError
from stablecoin_research.utils.logging import setup_logging

logger = logging.getLogger(__name__)


CONFIG_PATH_ENV = "STABLECOIN_RESEARCH_CONFIG"
DEFAULT_CONFIG_PATH = os.getenv(CONFIG_PATH_ENV, "config.yaml")

REQUIRED_SECTIONS = ("app", "research", "api")
ADAPTER_NAMES = ("chat_completion", "market_chart", "chain_distribution", "news_search")

# Environment variables holding provider credentials, primary name first
API_KEY_ENV_VARS: Dict[str, Tuple[str, ...]] = {
    "chat_completion": ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
    "news_search": ("SERPAPI_API_KEY", "SERP_API_KEY"),
    "market_chart": ("COINGECKO_API_KEY",),
}


@dataclass(frozen=True)
class AdapterSettings:
    base_url: str
    timeout: Optional[float] = None


class Config:
    """Application configuration."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Load and validate `config_path`, then configure logging from it.

        Raises:
            ConfigurationError: file missing, empty, unparsable or incomplete
        """
        self.config_path = Path(config_path)
        load_dotenv()
        self._config: Dict[str, Any] = self._read()
        self._validate()
        self._configure_logging()
        logger.info("Configuration loaded successfully", extra={"config_path": str(self.config_path)})

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")
        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e
        if not data:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {self.config_path} must be a mapping")
        return data

    def _validate(self) -> None:
        """Every required section present and every adapter given a base URL."""
        for section in REQUIRED_SECTIONS:
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        for adapter in ADAPTER_NAMES:
            if not self.get(f'api.{adapter}.base_url'):
                raise ConfigurationError(f"Missing api.{adapter}.base_url in config")

    def _configure_logging(self) -> None:
        setup_logging(
            level=os.getenv('LOG_LEVEL', self.get('logging.level', 'INFO')),
            log_file=self.get('logging.file'),
            format_type=self.get('logging.format', 'json'),
            enabled=self.get('logging.enabled', True),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "api.news_search.timeout")
            default: Returned when any part of the path is missing
        """
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def require_env(self, key: str) -> str:
        """Get required environment variable or raise error."""
        value = os.getenv(key)
        if value is None:
            raise ConfigurationError(f"Required environment variable not set: {key}")
        return value

    def api_key(self, adapter: str) -> Optional[str]:
        """First non-empty credential among the adapter's environment variables."""
        for var in API_KEY_ENV_VARS.get(adapter, ()):
            value = os.getenv(var)
            if value:
                return value
        return None

    def adapter_settings(self, adapter: str) -> AdapterSettings:
        timeout = self.get(f'api.{adapter}.timeout')
        return AdapterSettings(
            base_url=str(self.get(f'api.{adapter}.base_url', '')).rstrip('/'),
            timeout=float(timeout) if timeout is not None else None,
        )

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Stablecoin Research Assistant')

    @property
    def app_version(self) -> str:
        return self.get('app.version', '0.1.0')

    @property
    def debug(self) -> bool:
        return bool(self.get('app.debug', False))

    @property
    def request_timeout(self) -> float:
        """Upper bound for a whole research request, in seconds."""
        return float(self.get('research.request_timeout', 60))

    @property
    def enforce_topic_filter(self) -> bool:
        return bool(self.get('research.enforce_topic_filter', True))

    @property
    def chart_days(self) -> int:
        return int(self.get('research.chart_days', 30))

    @property
    def news_max_results(self) -> int:
        return int(self.get('research.news_max_results', 6))

    @property
    def news_location(self) -> str:
        return self.get('research.news_location', 'United States')

    @property
    def llm_model(self) -> Optional[str]:
        return self.get('llm.model')

    @property
    def llm_max_tokens(self) -> int:
        return int(self.get('llm.max_tokens', 2000))


# Global config instance
_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """Load the global configuration once; later calls return the same instance."""
    global _config
    if _config is None:
        _config = Config(config_path or os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))
    return _config


def get_config() -> Config:
    """Get global configuration instance."""
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config


def get_or_load_config() -> Config:
    """The global configuration, loading it from the default path if needed."""
    try:
        return get_config()
    except ConfigurationError:
        return load_config()


def reset_config() -> None:
    """Forget the global configuration so the next load_config() re-reads it."""
    global _config
    _config = None
