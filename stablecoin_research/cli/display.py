"""
Rich rendering of composed research responses
"""

from typing import Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stablecoin_research.catalog.reference import StablecoinRef
from stablecoin_research.research.formatting import format_usd
from stablecoin_research.research.models import AdoptionSnapshot, ComposedResponse


class DisplayManager:
    """Renders ComposedResponse objects to the terminal"""

    def __init__(self, console: Console = None):
        self.console = console or Console(width=100)

    def show_response(self, response: ComposedResponse) -> None:
        title = f"{response.intent.value.replace('_', ' ').title()}"
        if response.symbols:
            title += f" - {', '.join(response.symbols)}"

        if response.text:
            self.console.print(Panel(response.text, title=title, border_style="blue", box=box.ROUNDED))

        if response.comparison_rows:
            self._show_comparison(response)
        if response.adoption_snapshot:
            self._show_adoption(response.adoption_snapshot)
        if response.chart_series:
            self._show_chart(response)
        if response.news_items is not None:
            self._show_news(response)
        if response.sources:
            self.console.print(f"[dim]Sources: {', '.join(response.sources)}[/dim]")

    def _show_comparison(self, response: ComposedResponse) -> None:
        table = Table(title="Comparison", box=box.SIMPLE_HEAVY)
        table.add_column("Field", style="bold")
        for row in response.comparison_rows:
            table.add_column(row.symbol)

        fields = (
            ("Name", lambda r: r.name),
            ("Backing", lambda r: r.backing),
            ("Market cap", lambda r: format_usd(r.market_cap) if r.market_cap else "n/a"),
            ("Chains", lambda r: ", ".join(r.chains)),
            ("Yield", lambda r: r.yield_info),
            ("Issuer", lambda r: r.issuer),
            ("Regulation", lambda r: r.regulation),
            ("Use case", lambda r: r.use_case),
            ("Risk", lambda r: r.risk_level),
        )
        for label, getter in fields:
            table.add_row(label, *(getter(row) for row in response.comparison_rows))
        self.console.print(table)

    def _show_adoption(self, snapshot: AdoptionSnapshot) -> None:
        table = Table(title=f"{snapshot.symbol} chain distribution ({snapshot.data_source.value})", box=box.SIMPLE)
        table.add_column("Chain")
        table.add_column("Share", justify="right")
        table.add_column("Amount", justify="right")
        for share in snapshot.chain_distribution:
            table.add_row(share.chain, f"{share.percentage:.1f}%", format_usd(share.amount_usd))
        self.console.print(table)

        if snapshot.depeg_events:
            self.console.print("[bold yellow]Depeg events:[/bold yellow]")
            for event in snapshot.depeg_events:
                cause = f" - {event.cause}" if event.cause else ""
                self.console.print(f"  • {event.timestamp}: {event.deviation_percent:.2f}% at ${event.price:.4f}{cause}")

    def _show_chart(self, response: ComposedResponse) -> None:
        points = response.chart_series
        prices = [p.price for p in points]
        self.console.print(
            f"[bold]Price ({len(points)} days):[/bold] latest {format_usd(points[-1].price)}, "
            f"low {format_usd(min(prices))}, high {format_usd(max(prices))}"
        )

    def _show_news(self, response: ComposedResponse) -> None:
        if not response.news_items:
            self.console.print("[yellow]No news found for this query.[/yellow]")
            return
        table = Table(title="News", box=box.SIMPLE, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Headline")
        table.add_column("Source")
        table.add_column("Date")
        for index, item in enumerate(response.news_items, 1):
            table.add_row(str(index), f"[link={item.link}]{item.title}[/link]", item.source, item.date)
        self.console.print(table)

    def show_stablecoins(self, refs: Iterable[StablecoinRef], title: str = "Stablecoins") -> None:
        table = Table(title=title, box=box.SIMPLE_HEAVY)
        table.add_column("Symbol", style="bold")
        table.add_column("Name")
        table.add_column("Category")
        table.add_column("Issuer")
        table.add_column("Market cap", justify="right")
        table.add_column("Risk")
        for ref in refs:
            table.add_row(
                ref.symbol,
                ref.name,
                ref.category,
                ref.issuer,
                format_usd(ref.market_cap) if ref.market_cap else "n/a",
                ref.risk_level.value,
            )
        self.console.print(table)

    def show_error(self, message: str) -> None:
        self.console.print(Panel(message, title="Error", border_style="red"))
