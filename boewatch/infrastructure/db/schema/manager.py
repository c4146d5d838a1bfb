from __future__ import annotations

from boewatch.infrastructure.observability import get_logger

from .migrations import CURRENT_SCHEMA_VERSION, SchemaMigrator
from .tables import CORE_SCHEMA_SQL, SCHEMA_INGEST_RUNS_SQL

logger = get_logger(__name__)

# Applied in order; names are recorded in schema_migrations.
MIGRATIONS: tuple[tuple[str, str], ...] = (
    ("0001_core_tables", "".join(CORE_SCHEMA_SQL)),
    ("0002_ingest_runs", SCHEMA_INGEST_RUNS_SQL),
)


def ensure_schema(conn) -> int:
    """Apply every pending migration and return the resulting schema version.

    Safe to call on every start: already applied migrations are skipped.
    """

    migrator = SchemaMigrator(conn)
    migrator.ensure_table()
    for name, sql in MIGRATIONS:
        if migrator.apply_sql(name, sql):
            logger.info("Applied migration %s", name)
    migrator.ensure_current_version()
    conn.commit()
    return migrator.get_version() or CURRENT_SCHEMA_VERSION
