"""EntityStore: repository for items, child links, relationships, and config.

The store is the single dependency injected into every service. It owns
the database engine; :meth:`EntityStore.transaction` yields a
:class:`StoreTransaction` whose helpers consolidate the data-access
patterns the services need. DB writes commit when the block exits
normally and roll back on any exception.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from dthread.domain.entities import Entity
from dthread.domain.ids import sequence_number
from dthread.infrastructure.database.engine import init_database
from dthread.infrastructure.database.schema import (
    CONFIG_ROW_ID,
    app_config,
    item_children,
    items,
    relationships,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from dthread.config.settings import DThreadSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredConfig:
    """The persisted domain policy."""

    domain_order: list[str]
    allow_only_adjacent_connections: bool
    updated: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain_order": list(self.domain_order),
            "allow_only_adjacent_connections": self.allow_only_adjacent_connections,
            "updated": self.updated,
        }


# ---------------------------------------------------------------------------
# StoreTransaction, yielded by EntityStore.transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Active transaction context with a DB connection and query helpers."""

    conn: Connection

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def item_exists(self, domain: str, item_id: str) -> bool:
        row = self.conn.execute(
            select(items.c.id).where(items.c.domain == domain, items.c.id == item_id)
        ).first()
        return row is not None

    def insert_item(
        self,
        domain: str,
        item_id: str,
        title: str,
        now: str,
        *,
        description: str | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> None:
        self.conn.execute(
            insert(items).values(
                domain=domain,
                id=item_id,
                title=title,
                description=description,
                attributes=json.dumps(attributes) if attributes else None,
                created=now,
                modified=now,
            )
        )

    def highest_number(self, domain: str, prefix: str) -> int:
        """Highest top-level sequence number in use for *prefix* (0 if none)."""
        rows = self.conn.execute(
            select(items.c.id).where(items.c.domain == domain, items.c.id.like(f"{prefix}%"))
        )
        numbers = [n for n in (sequence_number(r.id, prefix) for r in rows) if n is not None]
        return max(numbers, default=0)

    def parent_of(self, domain: str, child_id: str) -> str | None:
        row = self.conn.execute(
            select(item_children.c.parent_id).where(
                item_children.c.domain == domain, item_children.c.child_id == child_id
            )
        ).first()
        return None if row is None else str(row.parent_id)

    def add_child(self, domain: str, parent_id: str, child_id: str) -> None:
        """Append *child_id* to the end of *parent_id*'s children."""
        last = self.conn.execute(
            select(func.max(item_children.c.position)).where(
                item_children.c.domain == domain, item_children.c.parent_id == parent_id
            )
        ).scalar()
        position = 0 if last is None else int(last) + 1
        self.conn.execute(
            insert(item_children).values(
                domain=domain, parent_id=parent_id, child_id=child_id, position=position
            )
        )

    def list_items(self, domain: str) -> list[Entity]:
        """All items of *domain* ordered by id, with children and outgoing links."""
        children: dict[str, list[str]] = {}
        for row in self.conn.execute(
            select(item_children.c.parent_id, item_children.c.child_id)
            .where(item_children.c.domain == domain)
            .order_by(item_children.c.parent_id, item_children.c.position)
        ):
            children.setdefault(row.parent_id, []).append(row.child_id)

        targets: dict[str, dict[str, set[str]]] = {}
        for row in self.conn.execute(
            select(
                relationships.c.source_id,
                relationships.c.target_domain,
                relationships.c.target_id,
            ).where(relationships.c.source_domain == domain)
        ):
            by_domain = targets.setdefault(row.source_id, {})
            by_domain.setdefault(row.target_domain, set()).add(row.target_id)

        entities: list[Entity] = []
        for row in self.conn.execute(
            select(items).where(items.c.domain == domain).order_by(items.c.id)
        ):
            entities.append(
                Entity(
                    id=row.id,
                    title=row.title,
                    domain=domain,
                    description=row.description,
                    child_ids=tuple(children.get(row.id, ())),
                    cross_domain_target_ids={
                        d: frozenset(ids) for d, ids in targets.get(row.id, {}).items()
                    },
                    attributes=json.loads(row.attributes) if row.attributes else {},
                )
            )
        return entities

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def upsert_relationship(
        self,
        source_domain: str,
        source_id: str,
        target_domain: str,
        target_id: str,
        relationship_type: str,
        now: str,
    ) -> bool:
        """Insert the relationship unless it already exists.

        Returns True if a row was written, False for an existing triple.
        """
        stmt = (
            sqlite_insert(relationships)
            .values(
                source_domain=source_domain,
                source_id=source_id,
                target_domain=target_domain,
                target_id=target_id,
                relationship_type=relationship_type,
                created=now,
            )
            .on_conflict_do_nothing(
                index_elements=[
                    "source_domain",
                    "source_id",
                    "relationship_type",
                    "target_domain",
                    "target_id",
                ]
            )
        )
        result = self.conn.execute(stmt)
        return bool(result.rowcount)

    def count_relationships(self, source_domain: str, source_id: str) -> int:
        return int(
            self.conn.execute(
                select(func.count())
                .select_from(relationships)
                .where(
                    relationships.c.source_domain == source_domain,
                    relationships.c.source_id == source_id,
                )
            ).scalar_one()
        )

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    def read_config(self) -> StoredConfig | None:
        row = self.conn.execute(select(app_config).where(app_config.c.id == CONFIG_ROW_ID)).first()
        if row is None:
            return None
        return StoredConfig(
            domain_order=list(json.loads(row.domain_order)),
            allow_only_adjacent_connections=bool(row.allow_only_adjacent_connections),
            updated=row.updated,
        )

    def write_config(
        self,
        domain_order: Sequence[str],
        allow_only_adjacent_connections: bool,
        now: str,
    ) -> StoredConfig:
        """Create or replace the singleton config row."""
        logger.debug(
            "Writing config: order=%s adjacent_only=%s",
            list(domain_order),
            allow_only_adjacent_connections,
        )
        values = {
            "domain_order": json.dumps(list(domain_order)),
            "allow_only_adjacent_connections": int(allow_only_adjacent_connections),
            "updated": now,
        }
        stmt = sqlite_insert(app_config).values(id=CONFIG_ROW_ID, **values)
        self.conn.execute(stmt.on_conflict_do_update(index_elements=["id"], set_=values))
        return StoredConfig(
            domain_order=list(domain_order),
            allow_only_adjacent_connections=allow_only_adjacent_connections,
            updated=now,
        )


# ---------------------------------------------------------------------------
# EntityStore
# ---------------------------------------------------------------------------


class EntityStore:
    """Repository over the dthread SQLite database.

    Constructed once per CLI invocation (or API process) from
    :class:`DThreadSettings`. Services receive it via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: DThreadSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)

    @property
    def root(self) -> Path:
        """The project root directory."""
        return self._settings.project_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> DThreadSettings:
        return self._settings

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Atomic unit of work: commit on success, roll back on exception.

        Usage::

            with store.transaction() as txn:
                txn.insert_item("Mission", "MIS-001", "Reach orbit", now)
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def list_items(self, domain: str) -> list[Entity]:
        """Read-only listing of one domain."""
        with self.transaction() as txn:
            return txn.list_items(domain)

