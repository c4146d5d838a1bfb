"""Ingestion commands: ``init``, ``update`` and ``geocode``."""

from __future__ import annotations

import asyncio
from operator import methodcaller
from typing import Awaitable, Callable

import click
from rich.console import Console

from boewatch.domain.models import ACTIVE_STATES, AuctionState
from boewatch.infrastructure.web.endpoints import ALL_AUCTIONS_URL, ONGOING_AUCTIONS_URL
from boewatch.services.ingest import IngestPipeline, IngestResult

from .context import CLIContext, cli_context_from, db_option

PipelineAction = Callable[[IngestPipeline], Awaitable[IngestResult]]


async def _run_pipeline(
    cli_context: CLIContext,
    action: PipelineAction,
    *,
    geocode: bool,
    max_concurrent: int | None = None,
) -> IngestResult:
    geocoder = cli_context.build_geocoder() if geocode else None
    fetcher = cli_context.build_fetcher(max_concurrent)
    try:
        async with fetcher:
            with cli_context.connect() as conn:
                pipeline = IngestPipeline(
                    conn,
                    fetcher,
                    geocoder=geocoder,
                    country=cli_context.geocoding["country"],
                    max_concurrent=fetcher.max_concurrent_requests,
                )
                return await action(pipeline)
    finally:
        fetcher.close()
        if geocoder is not None:
            geocoder.close()


def _print_result(console: Console, result: IngestResult, label: str) -> None:
    colour = {"success": "green", "failed": "red"}.get(result.status, "yellow")
    console.print(
        f"[{colour}]{label} {result.status}[/{colour}] (run #{result.run_id}): "
        f"ok={result.ok}, errors={result.errors}, total={result.total}, "
        f"previously processed={result.already_processed}"
    )
    if result.error_messages:
        console.print("[yellow]Errors:[/yellow]")
        for message in result.error_messages[:20]:
            console.print(f"  - {message}")
        if len(result.error_messages) > 20:
            console.print(f"  ... and {len(result.error_messages) - 20} more")


@click.command(name="init")
@db_option
@click.option(
    "--auction-id",
    default=None,
    help="Ingest only this auction (e.g. SUB-JA-2020-149474) instead of the whole listing.",
)
@click.option(
    "--listing-url",
    default=None,
    help="Listing to ingest from; defaults to the ongoing auctions search.",
)
@click.option(
    "--geocode/--no-geocode",
    default=None,
    help="Geocode properties while ingesting (defaults to geocoding.enabled).",
)
@click.option(
    "--max-concurrent",
    type=int,
    default=None,
    help="Maximum auctions scraped at once (defaults to http.max_concurrent_requests).",
)
@click.pass_context
def init(
    ctx: click.Context,
    db_path: str | None,
    auction_id: str | None,
    listing_url: str | None,
    geocode: bool | None,
    max_concurrent: int | None,
) -> None:
    """Scrape auctions from the BOE portal and store the new ones.

    Auctions already in the database are skipped, so the command can be
    re-run safely.
    """
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    use_geocoder = cli_context.geocoding["enabled"] if geocode is None else geocode

    if auction_id:
        action: PipelineAction = methodcaller("ingest_auction", auction_id)
        target = auction_id
    else:
        url = listing_url or ONGOING_AUCTIONS_URL
        action = methodcaller("ingest_all", url)
        target = url

    console.print(f"[bold]Ingesting[/bold] [blue]{target}[/blue] into {cli_context.db_path}...")
    with console.status("Scraping auctions..."):
        result = asyncio.run(
            _run_pipeline(
                cli_context, action, geocode=use_geocoder, max_concurrent=max_concurrent
            )
        )
    _print_result(console, result, "Ingestion")
    if result.status == "failed":
        ctx.exit(1)


@click.command(name="update")
@db_option
@click.option(
    "--listing-url",
    default=None,
    help="Listing to read states from; defaults to the all auctions search.",
)
@click.pass_context
def update(ctx: click.Context, db_path: str | None, listing_url: str | None) -> None:
    """Refresh the state of stored auctions that have not finished yet."""
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    url = listing_url or ALL_AUCTIONS_URL
    with console.status("Refreshing auction states..."):
        result = asyncio.run(
            _run_pipeline(
                cli_context, methodcaller("refresh_states", url), geocode=False
            )
        )
    _print_result(console, result, "Update")
    if result.status == "failed":
        ctx.exit(1)


@click.command(name="geocode")
@db_option
@click.option(
    "--state",
    "states",
    multiple=True,
    type=click.Choice([s.value for s in AuctionState]),
    help="Auction states whose properties are geocoded (repeatable; default: active states).",
)
@click.pass_context
def geocode(ctx: click.Context, db_path: str | None, states: tuple[str, ...]) -> None:
    """Add coordinates to stored properties that have none yet."""
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    selected = tuple(AuctionState(s) for s in states) or ACTIVE_STATES
    with console.status("Geocoding properties..."):
        result = asyncio.run(
            _run_pipeline(
                cli_context,
                methodcaller("enrich_properties", selected),
                geocode=True,
            )
        )
    _print_result(console, result, "Geocoding")
