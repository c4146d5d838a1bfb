"""Entry point for running the boewatch CLI.

This module defines the top-level Click group that aggregates every
subcommand of the ``boewatch.interfaces.cli`` package. Executing
``python -m boewatch.interfaces.cli`` (or the ``boewatch`` console script)
invokes this group.
"""

import logging

import click

from boewatch.infrastructure.observability import configure_logging

from .create import create
from .export import export, statistics
from .ingest import geocode, init, update


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=str),
    default=None,
    help="Path to config.json (defaults to the one at the project root).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Log level for boewatch loggers.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str) -> None:
    """boewatch command-line interface."""
    configure_logging(level=getattr(logging, log_level.upper()))
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


cli.add_command(create)
cli.add_command(init)
cli.add_command(update)
cli.add_command(export)
cli.add_command(statistics)
cli.add_command(geocode)


if __name__ == "__main__":
    cli()
