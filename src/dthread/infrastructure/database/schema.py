"""SQLAlchemy Core table definitions for the dthread database.

Items are keyed by ``(domain, id)``: ids are unique within a domain only.
Child links and cross-domain relationships reference items by that pair,
so the same child/relationship schema serves every domain.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

items = Table(
    "items",
    metadata,
    Column("domain", Text, nullable=False),
    Column("id", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("description", Text),
    Column("attributes", Text),  # JSON object (unit, value_type, function_type)
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    PrimaryKeyConstraint("domain", "id"),
)

item_children = Table(
    "item_children",
    metadata,
    Column("domain", Text, nullable=False),
    Column("parent_id", Text, nullable=False),
    Column("child_id", Text, nullable=False),
    Column("position", Integer, nullable=False, default=0, server_default="0"),
    ForeignKeyConstraint(["domain", "parent_id"], ["items.domain", "items.id"]),
    ForeignKeyConstraint(["domain", "child_id"], ["items.domain", "items.id"]),
    # One parent per child keeps each domain a forest.
    UniqueConstraint("domain", "child_id"),
)

relationships = Table(
    "relationships",
    metadata,
    Column("source_domain", Text, nullable=False),
    Column("source_id", Text, nullable=False),
    Column("target_domain", Text, nullable=False),
    Column("target_id", Text, nullable=False),
    Column("relationship_type", Text, nullable=False),
    Column("created", Text, nullable=False),
    ForeignKeyConstraint(["source_domain", "source_id"], ["items.domain", "items.id"]),
    ForeignKeyConstraint(["target_domain", "target_id"], ["items.domain", "items.id"]),
    UniqueConstraint(
        "source_domain",
        "source_id",
        "relationship_type",
        "target_domain",
        "target_id",
        name="uq_relationships_triple",
    ),
)

app_config = Table(
    "app_config",
    metadata,
    Column("id", Text, primary_key=True),
    Column("domain_order", Text, nullable=False),  # JSON array
    Column("allow_only_adjacent_connections", Integer, nullable=False),
    Column("updated", Text, nullable=False),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("type_prefix", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_item_children_parent", item_children.c.domain, item_children.c.parent_id)
Index("ix_relationships_source", relationships.c.source_domain, relationships.c.source_id)
Index("ix_relationships_target", relationships.c.target_domain, relationships.c.target_id)

CONFIG_ROW_ID = "singleton"
