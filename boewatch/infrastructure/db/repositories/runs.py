from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from ..connection import iso_utcnow
from ..schema import ensure_schema
from .base import BaseRepository


class IngestRunRepository(BaseRepository):
    """Ledger of ingestion passes (``init``, ``update``, ``geocode`` ...)."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        ensure_schema(self.conn)

    def start(self, kind: str, notes: Optional[str] = None) -> int:
        run_id = self._execute_insert(
            "INSERT INTO ingest_runs (kind, started_at, status, notes) VALUES (?, ?, 'running', ?)",
            (kind, iso_utcnow(), notes),
        )
        self.conn.commit()
        return run_id

    def finish(
        self,
        run_id: int,
        *,
        status: str,
        ok: int = 0,
        errors: int = 0,
        total: int = 0,
        notes: Optional[str] = None,
    ) -> None:
        self._execute(
            """
            UPDATE ingest_runs
            SET finished_at = ?, status = ?, ok_count = ?, error_count = ?,
                total_count = ?, notes = COALESCE(?, notes)
            WHERE id = ?
            """,
            (iso_utcnow(), status, ok, errors, total, notes, run_id),
        )
        self.conn.commit()

    def recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        return self._fetch_all_as_dicts(
            "SELECT * FROM ingest_runs ORDER BY id DESC LIMIT ?", (limit,)
        )
