"""SQLite engine, schema, and ID counters via SQLAlchemy Core."""

from careride.infrastructure.database.counters import next_sequential_id
from careride.infrastructure.database.engine import create_db_engine, init_database
from careride.infrastructure.database.schema import (
    conversations,
    doctors,
    entitlements,
    id_counters,
    messages,
    metadata,
)

__all__ = [
    "conversations",
    "create_db_engine",
    "doctors",
    "entitlements",
    "id_counters",
    "init_database",
    "messages",
    "metadata",
    "next_sequential_id",
]
