"""SQLite database engine, schema, and ID counters via SQLAlchemy Core."""

from dthread.infrastructure.database.counters import reserve_numbers
from dthread.infrastructure.database.engine import create_db_engine, init_database
from dthread.infrastructure.database.schema import (
    app_config,
    id_counters,
    item_children,
    items,
    metadata,
    relationships,
)

__all__ = [
    "app_config",
    "create_db_engine",
    "id_counters",
    "init_database",
    "item_children",
    "items",
    "metadata",
    "relationships",
    "reserve_numbers",
]
