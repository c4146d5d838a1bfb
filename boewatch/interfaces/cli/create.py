"""Schema creation command."""

from __future__ import annotations

import click
from rich.console import Console

from boewatch.infrastructure.db.schema import ensure_schema

from .context import cli_context_from, db_option


@click.command(name="create")
@db_option
@click.pass_context
def create(ctx: click.Context, db_path: str | None) -> None:
    """Create the database and apply every pending schema migration."""
    console = Console()
    cli_context = cli_context_from(ctx, db_path)
    with cli_context.connection_factory() as conn:
        version = ensure_schema(conn)
    console.print(
        f"[green]Database ready[/green] at {cli_context.db_path} (schema version {version})"
    )
