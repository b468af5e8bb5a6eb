"""CLI for browsing Mars real estate listings."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import get_api_settings, get_connectivity_settings, get_default_filter, load_config
from .connectivity import ConnectivityProbe, SocketConnectivityProbe, StaticConnectivityProbe
from .connectors import ListingsService, MarsApiConnector
from .models import ApiStatus, Listing, ListingsFilter
from .state import ListingsStore

app = typer.Typer(
    name="mars-estate",
    help="Browse Mars real estate listings - for rent and for sale",
)
console = Console()

_STATUS_MESSAGES = {
    ApiStatus.LOADING: "[dim]Loading listings...[/dim]",
    ApiStatus.DONE: "[green]Listings loaded.[/green]",
    ApiStatus.ERROR: "[red]Could not load listings.[/red]",
    ApiStatus.NO_CONNECTION: "[yellow]No network connection.[/yellow]",
}


def _setup_logging(verbose: bool, level_name: str | None) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(level_name or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _build_service(cfg: dict) -> ListingsService:
    """Default listings service from config."""
    api = get_api_settings(cfg)
    return MarsApiConnector(
        base_url=api.base_url,
        endpoint=api.endpoint,
        timeout_seconds=api.timeout_seconds,
    )


def _build_probe(cfg: dict, offline: bool) -> ConnectivityProbe:
    """Default connectivity probe from config."""
    if offline:
        return StaticConnectivityProbe(connected=False)
    conn = get_connectivity_settings(cfg)
    return SocketConnectivityProbe(host=conn.host, port=conn.port, timeout_seconds=conn.timeout_seconds)


def _display_listings(items: list[Listing], listings_filter: ListingsFilter | None) -> None:
    """Display listings table."""
    if not items:
        console.print("[yellow]No listings to display.[/yellow]")
        return

    label = listings_filter.value if listings_filter else "unfiltered"
    table = Table(title=f"Mars Listings ({label})")
    table.add_column("#", style="dim")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Price", justify="right", no_wrap=True)
    table.add_column("Image", style="dim", overflow="fold")

    for i, item in enumerate(items, 1):
        table.add_row(
            str(i),
            item.id,
            item.display_type,
            item.display_price,
            item.img_src_url,
        )

    console.print(table)


def _display_detail(item: Listing) -> None:
    """Detail screen for a selected listing."""
    body = f"[bold]{item.display_type}[/bold]\n{item.display_price}\n[dim]{item.img_src_url}[/dim]"
    console.print(Panel(body, title=f"Listing {item.id}"))


async def _run_listings(
    service: ListingsService,
    probe: ConnectivityProbe,
    listings_filter: ListingsFilter | None,
    select_id: str | None,
) -> ApiStatus | None:
    """Drive one store the way a screen does. Returns the final status."""
    try:
        async with ListingsStore(service, probe, default_filter=listings_filter) as store:

            def on_status(status: ApiStatus | None) -> None:
                if status is not None:
                    console.print(_STATUS_MESSAGES[status])

            def on_selected(item: Listing | None) -> None:
                if item is None:
                    return
                _display_detail(item)
                store.acknowledge_selection()

            store.status.subscribe(on_status)
            store.selected.subscribe(on_selected)
            await store.wait_idle()

            state = store.snapshot()
            if state.status == ApiStatus.DONE:
                _display_listings(state.items, listings_filter)
                if select_id:
                    match = next((item for item in state.items if item.id == select_id), None)
                    if match is None:
                        console.print(f"[red]Listing not found: {select_id}[/red]")
                        return ApiStatus.ERROR
                    store.select(match)
            return state.status
    finally:
        close = getattr(service, "aclose", None)
        if close is not None:
            await close()


@app.callback()
def main() -> None:
    """Mars real estate listings browser."""


@app.command()
def listings(
    filter_name: Optional[str] = typer.Option(None, "--filter", "-f", help="all, rent or buy (default from config)"),
    select_id: Optional[str] = typer.Option(None, "--select", "-s", help="Open the detail view for this listing ID"),
    offline: bool = typer.Option(False, "--offline", help="Treat the network as unavailable"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Fetch listings and display them."""
    cfg = load_config(config_path)
    _setup_logging(verbose, cfg.get("log_level"))

    try:
        listings_filter = ListingsFilter.parse(filter_name) if filter_name else get_default_filter(cfg)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    service = _build_service(cfg)
    # Blocking check; run it before the event loop starts.
    probe = StaticConnectivityProbe(_build_probe(cfg, offline).is_connected())
    status = asyncio.run(_run_listings(service, probe, listings_filter, select_id))

    if status != ApiStatus.DONE:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
