from .manager import MIGRATIONS, ensure_schema
from .migrations import CURRENT_SCHEMA_VERSION, SchemaMigrator

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "MIGRATIONS",
    "SchemaMigrator",
    "ensure_schema",
]
