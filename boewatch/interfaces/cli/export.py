"""Snapshot export and statistics commands."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from boewatch.domain.analytics import DatasetStatistics
from boewatch.domain.models import AuctionState
from boewatch.services.export import DEFAULT_EXPORT_STATES, export_auctions
from boewatch.services.statistics import collect_statistics, write_statistics

from .context import cli_context_from, db_option

_STATE_CHOICE = click.Choice([s.value for s in AuctionState])


@click.command(name="export")
@db_option
@click.option(
    "--state",
    "states",
    multiple=True,
    type=_STATE_CHOICE,
    help="Auction states to export (repeatable; default: ongoing).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Snapshot file to write (defaults to export_path from config.json).",
)
@click.pass_context
def export(
    ctx: click.Context, db_path: str | None, states: tuple[str, ...], output: str | None
) -> None:
    """Write stored auctions and their assets to a compressed snapshot."""
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    selected = tuple(AuctionState(s) for s in states) or DEFAULT_EXPORT_STATES
    target = output or cli_context.paths["export_path"]
    with cli_context.connect() as conn:
        result = export_auctions(conn, target, selected)
    console.print(
        f"[green]Exported[/green] {result.auction_count} auctions and "
        f"{result.asset_count} assets to {result.path}"
    )


def _counts_table(title: str, label: str, counts: dict[str, int]) -> Table:
    table = Table(title=title)
    table.add_column(label)
    table.add_column("Count", justify="right")
    for key, count in counts.items():
        table.add_row(key, str(count))
    return table


def _render_statistics(console: Console, stats: DatasetStatistics) -> None:
    console.print(
        f"[bold]{stats.auction_count}[/bold] auctions, [bold]{stats.asset_count}[/bold] assets"
    )
    console.print(_counts_table("Auctions by state", "State", stats.auctions_by_state))
    console.print(_counts_table("Auctions by kind", "Kind", stats.auctions_by_kind))

    categories = Table(title="Assets by category")
    categories.add_column("Kind")
    categories.add_column("Category")
    categories.add_column("Count", justify="right")
    for entry in stats.assets_by_category:
        categories.add_row(entry.kind, entry.category, str(entry.count))
    console.print(categories)

    console.print(
        _counts_table("Properties by province", "Province", stats.properties_by_province)
    )

    values = Table(title="Auction value by asset kind")
    values.add_column("Kind")
    values.add_column("Assets", justify="right")
    values.add_column("Total", justify="right")
    values.add_column("Average", justify="right")
    values.add_column("Maximum", justify="right")
    for summary in stats.values:
        row = summary.to_dict()
        values.add_row(
            summary.kind, str(summary.count), row["total"], row["average"], row["maximum"]
        )
    console.print(values)


@click.command(name="statistics")
@db_option
@click.option(
    "--state",
    "states",
    multiple=True,
    type=_STATE_CHOICE,
    help="Restrict to auctions in these states (repeatable; default: all).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Also write the statistics as JSON to this file.",
)
@click.pass_context
def statistics(
    ctx: click.Context, db_path: str | None, states: tuple[str, ...], output: str | None
) -> None:
    """Show aggregate counts of the stored auctions and assets."""
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    with cli_context.connect() as conn:
        stats = collect_statistics(conn, tuple(AuctionState(s) for s in states))
    _render_statistics(console, stats)
    if output:
        path = write_statistics(stats, output)
        console.print(f"Statistics written to {path}")
