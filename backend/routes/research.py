from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_research_service
from backend.models.requests import ResearchQuery
from backend.models.responses import ResearchResponse, StablecoinSummary
from stablecoin_research.catalog.reference import get_available_stablecoins, get_popular_stablecoins
from stablecoin_research.utils.errors import ResearchError, ValidationError


router = APIRouter()


@router.post("/query", response_model=ResearchResponse)
async def research_query(payload: ResearchQuery, service=Depends(get_research_service)):
    try:
        response = await service.process_query(payload.query)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ResearchError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return ResearchResponse(**response.to_dict())


@router.get("/stablecoins", response_model=List[StablecoinSummary])
def list_stablecoins(popular: bool = Query(False, description="Only the most popular stablecoins")):
    refs = get_popular_stablecoins() if popular else get_available_stablecoins()
    return [
        StablecoinSummary(
            symbol=ref.symbol,
            name=ref.name,
            category=ref.category,
            issuer=ref.issuer,
            chains=list(ref.chains),
            risk_level=ref.risk_level.value,
            peg_currency=ref.peg_currency,
            market_cap=ref.market_cap,
        )
        for ref in refs
    ]
