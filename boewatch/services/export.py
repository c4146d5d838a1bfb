"""Export of stored auctions as a snapshot for the read-only front-ends."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from boewatch.domain.context import DatasetContext
from boewatch.domain.models import AuctionState
from boewatch.infrastructure.db import export_snapshot
from boewatch.infrastructure.db.repositories import AssetRepository, AuctionRepository

DEFAULT_EXPORT_STATES = (AuctionState.ONGOING,)


@dataclass
class ExportResult:
    path: Path
    auction_count: int
    asset_count: int


def load_dataset(
    conn: sqlite3.Connection, states: Iterable[AuctionState]
) -> DatasetContext:
    """Build the dataset context of stored auctions in ``states``."""
    states = tuple(states)
    auctions = AuctionRepository(conn).with_states(states)
    assets = AssetRepository(conn).assets_with_states(states)
    return DatasetContext.build(auctions, assets)


def export_auctions(
    conn: sqlite3.Connection,
    output: Path | str,
    states: Iterable[AuctionState] = DEFAULT_EXPORT_STATES,
) -> ExportResult:
    context = load_dataset(conn, states)
    path = export_snapshot(output, context.auctions, list(context.assets))
    return ExportResult(
        path=path,
        auction_count=len(context.auctions),
        asset_count=len(context.assets),
    )


__all__ = ["DEFAULT_EXPORT_STATES", "ExportResult", "export_auctions", "load_dataset"]
