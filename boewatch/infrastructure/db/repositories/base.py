"""Base repository class with shared database query helpers."""

from __future__ import annotations

import sqlite3
from typing import Any, Iterable


class BaseRepository:
    """Base class for all repository implementations.

    Wraps a :class:`sqlite3.Connection` and offers the cursor to dict
    conversions every repository needs.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch_all_as_dicts(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Execute query and return all rows as dictionaries keyed by column."""
        cur = self.conn.execute(query, params or ())
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]

    def _fetch_one_as_dict(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Execute query and return the first row as a dictionary, or None."""
        cur = self.conn.execute(query, params or ())
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))

    def _fetch_scalar(self, query: str, params: tuple[Any, ...] | None = None) -> Any:
        """Execute query and return the first column of the first row."""
        cur = self.conn.execute(query, params or ())
        row = cur.fetchone()
        return row[0] if row else None

    def _execute_insert(self, query: str, params: tuple[Any, ...] | None = None) -> int:
        """Execute an INSERT and return the new row id."""
        cur = self.conn.execute(query, params or ())
        return cur.lastrowid or 0

    def _execute(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> sqlite3.Cursor:
        """Execute query and return the cursor for custom processing."""
        return self.conn.execute(query, params or ())


def state_filter(column: str, states: Iterable[Any]) -> tuple[str, tuple[str, ...]]:
    """Build ``column IN (?, ...)`` for a collection of str enums.

    An empty collection matches nothing.
    """
    values = tuple(getattr(state, "value", state) for state in states)
    if not values:
        return "0", ()
    placeholders = ", ".join("?" for _ in values)
    return f"{column} IN ({placeholders})", values
