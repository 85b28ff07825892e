"""Entry point that validates, classifies and answers one research query."""
from __future__ import annotations

import asyncio
import random
import re
import uuid
from typing import Optional

from stablecoin_research.config import get_or_load_config
from stablecoin_research.research.classifier import classify
from stablecoin_research.research.composer import ResponseComposer, wants_news
from stablecoin_research.research.extractor import extract_symbols
from stablecoin_research.research.models import ComposedResponse, Intent, QueryContext, TimeFilter
from stablecoin_research.research.validation import validate_query
from stablecoin_research.utils.errors import ResearchError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

_DAY_RE = re.compile(r"\b(today|24 ?h(ours)?|breaking|this morning)\b", re.IGNORECASE)
_WEEK_RE = re.compile(r"\b(this week|past week|last week|7 days)\b", re.IGNORECASE)
_MONTH_RE = re.compile(r"\b(this month|past month|last month|30 days)\b", re.IGNORECASE)


class ResearchService:
    """Validates a query, builds its context and hands it to the composer.

    The whole request is bounded by `research.request_timeout`.
    """

    def __init__(
        self,
        composer: Optional[ResponseComposer] = None,
        enforce_topic_filter: Optional[bool] = None,
        request_timeout: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        cfg = get_or_load_config()
        self.composer = composer or ResponseComposer()
        if enforce_topic_filter is None:
            enforce_topic_filter = cfg.enforce_topic_filter
        self.enforce_topic_filter = enforce_topic_filter
        self.request_timeout = float(request_timeout or cfg.request_timeout)
        self.location = cfg.news_location
        self.rng = rng or random.Random()

    def _time_filter(self, text: str, intent: Intent) -> TimeFilter:
        if _DAY_RE.search(text):
            return TimeFilter.PAST_DAY
        if _WEEK_RE.search(text):
            return TimeFilter.PAST_WEEK
        if _MONTH_RE.search(text):
            return TimeFilter.PAST_MONTH
        if intent is Intent.NEWS or wants_news(text):
            # Alternate windows so repeated news requests surface different stories
            return self.rng.choice((TimeFilter.PAST_DAY, TimeFilter.PAST_WEEK))
        return TimeFilter.PAST_WEEK

    def build_context(self, text: str, request_id: Optional[str] = None) -> QueryContext:
        symbols = extract_symbols(text)
        intent = classify(text, symbols=symbols)
        return QueryContext(
            raw_text=text,
            intent=intent,
            extracted_symbols=tuple(symbols),
            time_filter=self._time_filter(text, intent),
            location=self.location,
            request_id=request_id or uuid.uuid4().hex,
        )

    async def process_query(self, text: str, request_id: Optional[str] = None) -> ComposedResponse:
        """Answer `text`; raises ValidationError subclasses or ResearchError."""
        cleaned = validate_query(text, enforce_topic_filter=self.enforce_topic_filter)
        context = self.build_context(cleaned, request_id=request_id)
        logger.info(
            "Processing research query",
            extra={
                "request_id": context.request_id,
                "intent": context.intent.value,
                "symbols": list(context.extracted_symbols),
            },
        )
        try:
            return await asyncio.wait_for(self.composer.compose(context), timeout=self.request_timeout)
        except asyncio.TimeoutError:
            logger.error("Research request timed out", extra={"request_id": context.request_id})
            raise ResearchError(f"research error: request exceeded {self.request_timeout:.0f}s")


class ResearchSession:
    """One user's sequence of queries; only the latest request's answer is kept."""

    def __init__(self, service: Optional[ResearchService] = None):
        self.service = service or get_research_service()
        self._latest_request_id: Optional[str] = None

    @property
    def latest_request_id(self) -> Optional[str]:
        return self._latest_request_id

    async def submit(self, text: str) -> Optional[ComposedResponse]:
        """Process `text`; returns None if a newer request started meanwhile."""
        request_id = uuid.uuid4().hex
        self._latest_request_id = request_id
        response = await self.service.process_query(text, request_id=request_id)
        if response.request_id != self._latest_request_id:
            logger.info("Discarding stale response", extra={"request_id": response.request_id})
            return None
        return response


_service: Optional[ResearchService] = None


def get_research_service() -> ResearchService:
    global _service
    if _service is None:
        _service = ResearchService()
    return _service


async def process_query(text: str) -> ComposedResponse:
    return await get_research_service().process_query(text)
