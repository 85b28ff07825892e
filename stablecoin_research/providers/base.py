"""Adapter base class and the result contract shared by every data provider."""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

import httpx

from stablecoin_research.config import get_or_load_config
from stablecoin_research.utils.decorators import log_execution, timeout
from stablecoin_research.utils.errors import (
    DataNotFoundError,
    DataProviderError,
    RateLimitError,
)
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")
RequestT = TypeVar("RequestT")


class ErrorKind(Enum):
    NETWORK = "network"
    RATE_LIMITED = "rate_limited"
    EMPTY_PAYLOAD = "empty_payload"
    PARSE_ERROR = "parse_error"


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Outcome of one adapter call: parsed data, or the kind of failure."""

    ok: bool
    data: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, data: T) -> "ProviderResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error_kind: ErrorKind, message: str = "") -> "ProviderResult[T]":
        return cls(ok=False, error_kind=error_kind, message=message)


class BaseAdapter(ABC, Generic[RequestT, T]):
    """One third-party HTTP API behind a uniform call/parse/error contract.

    Subclasses implement `_fetch`, which may raise; `call` converts every
    failure into a `ProviderResult` so nothing escapes the adapter.
    """

    NAME: str = "base"
    DEFAULT_BASE_URL: str = ""
    DEFAULT_TIMEOUT: float = 10.0

    def __init__(self, base_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        self.config = get_or_load_config()
        settings = self.config.adapter_settings(self.NAME)
        self.base_url = (base_url or settings.base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = float(timeout_seconds or settings.timeout or self.DEFAULT_TIMEOUT)

    @abstractmethod
    async def _fetch(self, request: RequestT) -> T:
        """Perform the HTTP call and parse the payload; raise on any failure."""

    @log_execution(log_args=False, log_result=True)
    async def call(self, request: RequestT) -> ProviderResult[T]:
        """Single attempt, bounded by the adapter timeout; never raises."""
        try:
            bounded = timeout(self.timeout)(self._fetch)
            return ProviderResult.success(await bounded(request))
        except RateLimitError as e:
            return self._failed(ErrorKind.RATE_LIMITED, e)
        except DataNotFoundError as e:
            return self._failed(ErrorKind.EMPTY_PAYLOAD, e)
        except (httpx.HTTPError, TimeoutError, asyncio.TimeoutError, DataProviderError) as e:
            return self._failed(ErrorKind.NETWORK, e)
        except (ValueError, KeyError, TypeError, IndexError, AttributeError) as e:
            return self._failed(ErrorKind.PARSE_ERROR, e)
        except Exception as e:  # noqa: BLE001
            return self._failed(ErrorKind.NETWORK, e)

    def _failed(self, kind: ErrorKind, error: Exception) -> ProviderResult[T]:
        logger.warning(
            f"{self.NAME} call failed: {error}",
            extra={"adapter": self.NAME, "error_kind": kind.value},
        )
        return ProviderResult.failure(kind, str(error))

    def _check_status(self, response) -> None:
        """Raise RateLimitError on HTTP 429, otherwise defer to httpx."""
        if response.status_code == 429:
            raise RateLimitError(f"{self.NAME} rate limit exceeded")
        response.raise_for_status()

