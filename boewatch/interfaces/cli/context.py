"""Shared helpers for composing CLI command contexts.

This module centralises the CLI wiring: resolving configuration paths,
opening SQLite connections with the schema applied and building the HTTP
fetcher and geocoder from the ``http`` and ``geocoding`` config sections.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, ContextManager, Dict, Iterator

import click

from boewatch.infrastructure.db import (
    ensure_schema,
    get_connection,
    get_geocoding_config,
    get_http_config,
    get_path_config,
)
from boewatch.infrastructure.geocoding import NominatimResolver
from boewatch.infrastructure.http import HttpFetcher


@dataclass(frozen=True)
class CLIContext:
    """Container for CLI dependencies and configuration."""

    db_path: Path
    paths: dict[str, Path]
    connection_factory: Callable[[], ContextManager[sqlite3.Connection]]
    http: Dict[str, Any] = field(default_factory=dict)
    geocoding: Dict[str, Any] = field(default_factory=dict)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a configured SQLite connection and ensure the schema exists."""

        with self.connection_factory() as connection:
            ensure_schema(connection)
            yield connection

    def build_fetcher(self, max_concurrent: int | None = None) -> HttpFetcher:
        return HttpFetcher(
            max_concurrent_requests=max_concurrent or self.http["max_concurrent_requests"],
            retry_attempts=self.http["retry_attempts"],
            backoff_base_seconds=self.http["backoff_base_seconds"],
            timeout_seconds=self.http["timeout_seconds"],
        )

    def build_geocoder(self) -> NominatimResolver:
        return NominatimResolver(
            base_url=self.geocoding["base_url"],
            min_interval_seconds=self.geocoding["min_interval_seconds"],
            timeout_seconds=self.geocoding["timeout_seconds"],
        )


def build_cli_context(
    db_path: str | Path | None = None, config_path: str | Path | None = None
) -> CLIContext:
    """Build the CLI context with resolved configuration paths and connection factory."""

    paths = get_path_config(config_path)
    resolved_db_path = (
        Path(db_path).expanduser() if db_path is not None else paths["db_path"]
    )

    def connection_factory() -> ContextManager[sqlite3.Connection]:
        return get_connection(resolved_db_path, config_path=config_path)

    return CLIContext(
        db_path=resolved_db_path,
        paths=paths,
        connection_factory=connection_factory,
        http=get_http_config(config_path),
        geocoding=get_geocoding_config(config_path),
    )


def cli_context_from(ctx: click.Context, db_path: str | None) -> CLIContext:
    """Build the context for a command, honouring the group's ``--config``."""

    config_path = (ctx.obj or {}).get("config_path")
    return build_cli_context(db_path, config_path)


db_option = click.option(
    "--db",
    "db_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=str),
    help="Path to the SQLite database file (defaults to db_path from config.json).",
)
