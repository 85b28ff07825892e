"""Anthropic Messages API adapter."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import httpx

from stablecoin_research.providers.base import BaseAdapter
from stablecoin_research.utils.errors import DataNotFoundError, DataProviderError
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"


# Applied in order; bold must be removed before italic
_MARKDOWN_RULES = (
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),
    (re.compile(r"(?<![\*\w])\*(?!\s)(.+?)(?<!\s)\*(?![\*\w])"), r"\1"),
    (re.compile(r"__(.+?)__"), r"\1"),
    (re.compile(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)"), r"\1"),
    (re.compile(r"^[ \t]*#{1,6}[ \t]*", re.MULTILINE), ""),
    (re.compile(r"[ \t]+#{1,6}(?=[ \t])"), ""),
    (re.compile(r"\[([^\]]*)\]\([^)]*\)"), r"\1"),
    (re.compile(r"`{1,3}([^`]*)`{1,3}"), r"\1"),
    (re.compile(r"^[ \t]*[\*\-\+•][ \t]+", re.MULTILINE), "- "),
    (re.compile(r"^[ \t]*(\d+)\.[ \t]+", re.MULTILINE), r"\1. "),
)


def strip_markdown(text: str) -> str:
    """Reduce LLM markdown to plain text, keeping `- ` bullets and `1. ` lists."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


@dataclass(frozen=True)
class ChatRequest:
    prompt: str
    context: Optional[str] = None
    system: Optional[str] = None
    model_hint: Optional[str] = None


class ChatCompletionAdapter(BaseAdapter[ChatRequest, str]):
    """Sends one user turn to Claude and returns markdown-free text."""

    NAME = "chat_completion"
    DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
    DEFAULT_TIMEOUT = 45.0

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout_seconds: Optional[float] = None):
        super().__init__(base_url=base_url, timeout_seconds=timeout_seconds)
        self.api_key = api_key or self.config.api_key(self.NAME)
        self.model = self.config.llm_model or DEFAULT_MODEL
        self.max_tokens = self.config.llm_max_tokens

    def _build_payload(self, request: ChatRequest) -> dict:
        content = request.prompt
        if request.context:
            content = f"Context: {request.context}\n\nQuestion: {request.prompt}"

        payload = {
            "model": request.model_hint or self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        if request.system:
            payload["system"] = request.system
        return payload

    async def _fetch(self, request: ChatRequest) -> str:
        if not self.api_key:
            raise DataProviderError("ANTHROPIC_API_KEY is not configured")

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/messages",
                headers=headers,
                json=self._build_payload(request),
            )
            self._check_status(response)
            data = response.json()

        blocks = data.get("content") or []
        text = "".join(block.get("text", "") for block in blocks if block.get("type", "text") == "text")
        if not text.strip():
            raise DataNotFoundError("Claude returned no text content")

        usage = data.get("usage") or {}
        logger.debug(
            "Claude completion received",
            extra={"model": data.get("model"), "output_tokens": usage.get("output_tokens")},
        )
        return strip_markdown(text)
