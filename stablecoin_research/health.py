"""System health check."""
from typing import Dict, Any
from datetime import datetime, timezone
import asyncio
from stablecoin_research.config import ADAPTER_NAMES, API_KEY_ENV_VARS, get_or_load_config
from stablecoin_research.utils.errors import ConfigurationError
from stablecoin_research.utils.logging import get_logger

logger = get_logger(__name__)

# Adapters that cannot work at all without a credential, and what is lost without them
KEY_REQUIRED = {
    "chat_completion": "generic and uncached explanation queries will fail",
    "news_search": "news results will be empty",
}


class HealthStatus:
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _component(status: str, message: str) -> Dict[str, Any]:
    return {"status": status, "message": message}


async def check_config() -> Dict[str, Any]:
    """Check that configuration loads and validates."""
    try:
        config = get_or_load_config()
    except ConfigurationError as e:
        logger.error(f"Config health check failed: {e}")
        return _component(HealthStatus.UNHEALTHY, f"Config error: {e}")
    return _component(HealthStatus.HEALTHY, f"Configuration loaded ({config.app_name} {config.app_version})")


async def check_adapter(name: str) -> Dict[str, Any]:
    """
    Report whether an adapter can be called.

    No network request is made: a configured base URL plus, for the chat and
    news adapters, an API key is taken as healthy. A missing key is reported
    as degraded, with what stops working in the message.
    """
    try:
        config = get_or_load_config()
    except ConfigurationError as e:
        return _component(HealthStatus.UNHEALTHY, str(e))

    if not config.adapter_settings(name).base_url:
        return _component(HealthStatus.UNHEALTHY, f"api.{name}.base_url not configured")
    if config.api_key(name):
        return _component(HealthStatus.HEALTHY, "API key present")
    if name in KEY_REQUIRED:
        env_names = " or ".join(API_KEY_ENV_VARS[name])
        return _component(HealthStatus.DEGRADED, f"Missing {env_names}; {KEY_REQUIRED[name]}")
    return _component(HealthStatus.HEALTHY, "Public endpoint, no key required")


def _overall(components: Dict[str, Dict[str, Any]]) -> str:
    statuses = {component["status"] for component in components.values()}
    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


async def get_health_status() -> Dict[str, Any]:
    """
    Get overall system health status.

    Returns:
        Dict containing overall status and per-component statuses keyed by
        "config" and each adapter name
    """
    results = await asyncio.gather(check_config(), *(check_adapter(name) for name in ADAPTER_NAMES))
    components = dict(zip(("config",) + ADAPTER_NAMES, results))

    return {
        "status": _overall(components),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": components,
    }
