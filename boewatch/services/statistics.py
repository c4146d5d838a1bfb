"""Aggregate statistics over the stored dataset."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from boewatch.domain.analytics import DatasetStatistics
from boewatch.domain.models import AuctionState
from boewatch.infrastructure.observability import get_logger

from .export import load_dataset

logger = get_logger(__name__)


def collect_statistics(
    conn: sqlite3.Connection, states: Optional[Iterable[AuctionState]] = None
) -> DatasetStatistics:
    """Statistics of stored auctions in ``states`` (every state by default)."""
    context = load_dataset(conn, tuple(states) if states else tuple(AuctionState))
    return DatasetStatistics.from_context(context)


def write_statistics(stats: DatasetStatistics, output: Path | str) -> Path:
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fp:
        json.dump(stats.to_dict(), fp, ensure_ascii=False, indent=2)
    logger.info("Statistics written to %s", path)
    return path


__all__ = ["collect_statistics", "write_statistics"]
