"""Atomic sequential ID numbers per domain prefix.

Uses the ``id_counters`` table. A prefix's counter row is created on first
use, starting after the highest number already in use (``start``), so
items imported or created before the counter existed are never reissued.

The caller owns the transaction; pass a ``Connection`` obtained from
``engine.begin()`` so the counter increment participates in the same
atomic transaction as the surrounding writes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from dthread.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection

_PREFIX_PATTERN = re.compile(r"^[A-Z]{3}-$")


def reserve_numbers(conn: Connection, type_prefix: str, count: int = 1, *, start: int = 1) -> int:
    """Claim *count* consecutive numbers for *type_prefix*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        type_prefix: A three-letter prefix with trailing dash, e.g. ``"MIS-"``.
        count: How many numbers to claim.
        start: First number to hand out if the counter does not exist yet.

    Returns:
        The first claimed number.

    Raises:
        ValueError: If *type_prefix* is malformed or *count* < 1.
    """
    if not _PREFIX_PATTERN.match(type_prefix):
        msg = f"Unknown sequential type prefix: {type_prefix!r}. Expected e.g. 'MIS-'"
        raise ValueError(msg)
    if count < 1:
        msg = f"count must be >= 1, got {count}"
        raise ValueError(msg)

    row = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.type_prefix == type_prefix)
    ).first()

    if row is None:
        current_value = max(1, start)
        conn.execute(
            insert(id_counters).values(type_prefix=type_prefix, next_value=current_value + count)
        )
        return current_value

    current_value = max(int(row.next_value), start)
    conn.execute(
        update(id_counters)
        .where(id_counters.c.type_prefix == type_prefix)
        .values(next_value=current_value + count)
    )
    return current_value
