from __future__ import annotations

from stablecoin_research.research import service
from stablecoin_research.research.service import ResearchService


def get_research_service() -> ResearchService:
    """Share the library's service so the API and `process_query` use one instance."""
    return service.get_research_service()
