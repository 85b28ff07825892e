from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from stablecoin_research.catalog.reference import (
    RiskLevel,
    get_available_stablecoins,
    get_popular_stablecoins,
    get_stablecoins_by_risk_level,
)
from stablecoin_research.cli.display import DisplayManager
from stablecoin_research.config import DEFAULT_CONFIG_PATH, load_config
from stablecoin_research.research.service import ResearchService
from stablecoin_research.utils.errors import ConfigurationError, ResearchError, ValidationError


app = typer.Typer(add_completion=False, help="Stablecoin Research Assistant CLI")


@app.command("ask")
def ask(
    query: str = typer.Argument(..., help="Question about stablecoins, e.g. 'Compare USDT and USDC'"),
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Path to config.yaml"),
    no_topic_filter: bool = typer.Option(False, "--no-topic-filter", help="Accept queries that do not mention stablecoins"),
):
    """Answer a research question and render text, tables, news and sources."""

    display = DisplayManager()
    try:
        load_config(config_path)
        service = ResearchService(enforce_topic_filter=False if no_topic_filter else None)
        response = asyncio.run(service.process_query(query))
    except ConfigurationError as e:
        display.show_error(f"Configuration problem: {e}")
        raise typer.Exit(code=2)
    except ValidationError as e:
        display.show_error(str(e))
        raise typer.Exit(code=1)
    except ResearchError as e:
        display.show_error(str(e))
        raise typer.Exit(code=1)

    display.show_response(response)


@app.command("list")
def list_stablecoins(
    popular: bool = typer.Option(False, "--popular", "-p", help="Only show the most popular stablecoins"),
    risk: Optional[str] = typer.Option(None, "--risk", "-r", help="Filter by risk level: Low, Medium or High"),
):
    """List stablecoins known to the reference catalog."""

    refs = get_popular_stablecoins() if popular else get_available_stablecoins()
    if risk:
        try:
            level = RiskLevel(risk.capitalize())
        except ValueError:
            raise typer.BadParameter("risk must be Low, Medium or High")
        allowed = set(get_stablecoins_by_risk_level(level))
        refs = [ref for ref in refs if ref in allowed]
    DisplayManager().show_stablecoins(refs, title="Popular stablecoins" if popular else "Available stablecoins")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart when backend or research code changes"),
):
    """Run the HTTP API (backend.main:app) under uvicorn."""

    root = Path(__file__).resolve().parents[2]
    uvicorn.run(
        "backend.main:app",
        host=host,
        port=port,
        reload=reload,
        app_dir=str(root),
        reload_dirs=[str(root / "backend"), str(root / "stablecoin_research")] if reload else None,
        log_level="info",
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
