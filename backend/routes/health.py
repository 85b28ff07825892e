from __future__ import annotations

from fastapi import APIRouter

from stablecoin_research.health import get_health_status


router = APIRouter()


@router.get("/health")
async def health():
    return await get_health_status()
