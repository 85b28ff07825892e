from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routes import health, research
from stablecoin_research.config import load_config
from stablecoin_research.utils.logging import get_logger


logger = get_logger(__name__)

app = FastAPI(
    title="Stablecoin Research API",
    description="Answers stablecoin questions with charts, news, comparisons and adoption metrics",
    version="0.1.0",
)


@app.on_event("startup")
async def startup_event():
    """Load configuration once so the first request does not pay for it."""
    config = load_config()
    logger.info(f"{config.app_name} API started", extra={"version": config.app_version})


# CORS (broad for dev; tighten in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(research.router, prefix="/api/research", tags=["research"])
app.include_router(health.router, tags=["health"])
