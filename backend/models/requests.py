from __future__ import annotations

from pydantic import BaseModel, Field


class ResearchQuery(BaseModel):
    query: str = Field(..., description="e.g., 'Compare USDT and USDC'")
