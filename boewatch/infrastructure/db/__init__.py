from .config import (DEFAULT_DB_TIMEOUT, get_default_timeout, get_geocoding_config,
                     get_http_config, get_path_config, load_config)
from .connection import DatabaseError, get_connection, iso_utcnow
from .schema import CURRENT_SCHEMA_VERSION, SchemaMigrator, ensure_schema
from .snapshots import Snapshot, SnapshotError, export_snapshot, load_snapshot

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "DEFAULT_DB_TIMEOUT",
    "DatabaseError",
    "Snapshot",
    "SnapshotError",
    "export_snapshot",
    "get_connection",
    "get_default_timeout",
    "get_geocoding_config",
    "get_http_config",
    "get_path_config",
    "iso_utcnow",
    "load_config",
    "load_snapshot",
    "SchemaMigrator",
    "ensure_schema",
]
