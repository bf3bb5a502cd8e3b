"""Small helpers shared by the item and relationship services."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from dthread.domain.errors import NotFoundError

if TYPE_CHECKING:
    from dthread.infrastructure.store import StoreTransaction


def now_iso() -> str:
    """Current UTC time as ISO 8601."""
    return datetime.now(UTC).isoformat()


def require_item(txn: StoreTransaction, domain: str, item_id: str, *, role: str = "Item") -> None:
    """Raise NOT_FOUND unless *item_id* exists in *domain*."""
    if not txn.item_exists(domain, item_id):
        msg = f"{role} {item_id!r} not found in {domain}"
        raise NotFoundError(msg, domain=domain, id=item_id)
