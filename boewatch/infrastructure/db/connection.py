"""SQLite connections to the boewatch database."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from .config import get_default_timeout, get_path_config, load_config


class DatabaseError(Exception):
    """The database could not be opened or configured."""


def iso_utcnow() -> str:
    """Return an ISO-8601 timestamp in UTC with ``Z`` suffix."""

    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _wal_enabled(config_path: Path | str | None) -> bool:
    db_cfg = load_config(config_path).get("db", {})
    if not isinstance(db_cfg, dict):
        return True
    return bool(db_cfg.get("enable_wal", True))


@contextmanager
def get_connection(
    db_path: Path | str | None = None,
    *,
    timeout: float | None = None,
    config_path: Path | str | None = None,
) -> Iterator[sqlite3.Connection]:
    """Yield a connection to the auction database, closed on exit.

    Foreign keys are always enforced; WAL journaling follows ``db.enable_wal``
    in the config file. The parent directory of the file is created when
    missing.

    Raises:
        DatabaseError: the file cannot be opened or a PRAGMA fails.
    """

    if db_path is not None:
        path = Path(db_path)
    else:
        path = get_path_config(config_path)["db_path"]
    path.parent.mkdir(parents=True, exist_ok=True)
    timeout_value = timeout if timeout is not None else get_default_timeout(config_path)
    try:
        conn = sqlite3.connect(path, timeout=timeout_value)
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to connect to {path}: {exc}") from exc
    try:
        try:
            conn.execute("PRAGMA foreign_keys=ON;")
            conn.execute(f"PRAGMA busy_timeout={int(timeout_value * 1000)};")
            if _wal_enabled(config_path):
                conn.execute("PRAGMA journal_mode=WAL;")
        except sqlite3.Error as exc:
            raise DatabaseError(f"Failed to configure {path}: {exc}") from exc
        yield conn
    finally:
        conn.close()
