"""Database engine setup for SQLite with WAL mode.

The DB is stored at {project_root}/.dthread/dthread.db.

SQLAlchemy Core (not ORM) is used: rows map straight onto frozen domain
entities, so there is no benefit from an identity map.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from dthread.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(project_root: Path) -> Engine:
    """Initialize the database at ``{project_root}/.dthread/dthread.db``.

    Creates the ``.dthread/`` directory and all tables from
    :data:`schema.metadata`. Idempotent; safe to call on an existing
    project.
    """
    data_dir = project_root / ".dthread"
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / "dthread.db")
    metadata.create_all(engine)
    return engine
