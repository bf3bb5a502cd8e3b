"""ItemService: create, nest, generate, and list domain items.

Pipeline for creation: VALIDATE → GENERATE ID → PERSIST → RESPOND.
Sequential ids come from the ``id_counters`` table; a collision with an
existing item is reported, never retried.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from dthread.domain.errors import (
    ConflictError,
    ThreadError,
    ValidationError,
)
from dthread.domain.generation import VALUE_TYPES, plan_bulk, singular, validate_bounds
from dthread.domain.ids import format_id, prefix_for
from dthread.domain.types import Domain
from dthread.infrastructure.database.counters import reserve_numbers
from dthread.services._helpers import now_iso, require_item
from dthread.services.base import BaseService
from dthread.services.config import ConfigService
from dthread.services.result import ServiceResult
from dthread.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from dthread.infrastructure.store import StoreTransaction


class ItemService(BaseService):
    """Handles item creation and listing for every domain."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def create_item(
        self,
        domain: str,
        title: str,
        *,
        description: str | None = None,
        parent_id: str | None = None,
        unit: str | None = None,
        value_type: str | None = None,
        function_type: str | None = None,
    ) -> ServiceResult:
        """Create one item, optionally as the last child of *parent_id*."""
        op = "create_item"
        warnings: list[str] = []
        try:
            with trace_span("validate"):
                if not title or not title.strip():
                    raise ValidationError(f"{singular(domain)} title is required", domain=domain)
                attributes = self._attributes(domain, unit, value_type, function_type, warnings)

            with self._store.transaction() as txn:
                prefix = self._checked_prefix(txn, domain)

                with trace_span("generate_id"):
                    start = txn.highest_number(domain, prefix) + 1
                    item_id = format_id(prefix, reserve_numbers(txn.conn, prefix, start=start))
                    if txn.item_exists(domain, item_id):
                        msg = f"{singular(domain)} ID {item_id} already exists. Please try again."
                        raise ConflictError(msg, domain=domain, id=item_id)

                with trace_span("persist"):
                    if parent_id is not None:
                        require_item(txn, domain, parent_id, role="Parent")
                    txn.insert_item(
                        domain,
                        item_id,
                        title.strip(),
                        now_iso(),
                        description=description or None,
                        attributes=attributes,
                    )
                    if parent_id is not None:
                        txn.add_child(domain, parent_id, item_id)
        except ThreadError as exc:
            return self._failure(op, exc, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": item_id,
                "domain": domain,
                "title": title.strip(),
                "description": description or None,
                "parent_id": parent_id,
                "attributes": attributes,
            },
            warnings=warnings,
        )

    @traced
    def bulk_generate(
        self,
        domain: str,
        *,
        count: int,
        min_subs: int,
        max_subs: int,
        seed: int | None = None,
    ) -> ServiceResult:
        """Create *count* top-level items with ``min_subs..max_subs`` children each.

        All-or-nothing: the whole batch is written in one transaction.
        """
        op = "bulk_generate"
        try:
            validate_bounds(count, min_subs, max_subs)
            with self._store.transaction() as txn:
                prefix = self._checked_prefix(txn, domain)
                start = txn.highest_number(domain, prefix) + 1
                first = reserve_numbers(txn.conn, prefix, count, start=start)
                plan = plan_bulk(
                    domain,
                    prefix,
                    first,
                    count=count,
                    min_subs=min_subs,
                    max_subs=max_subs,
                    rng=random.Random(seed),
                )

                now = now_iso()
                children_created = 0
                with trace_span("persist") as span:
                    for parent in plan:
                        for planned in (parent, *parent.children):
                            if txn.item_exists(domain, planned.id):
                                msg = f"{singular(domain)} ID {planned.id} already exists."
                                raise ConflictError(msg, domain=domain, id=planned.id)
                            txn.insert_item(
                                domain,
                                planned.id,
                                planned.title,
                                now,
                                description=planned.description,
                                attributes=planned.attributes,
                            )
                        for child in parent.children:
                            txn.add_child(domain, parent.id, child.id)
                            children_created += 1
                    if span:
                        span.annotate("items", count + children_created)
        except ThreadError as exc:
            return self._failure(op, exc)

        label = singular(domain).lower()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": (
                    f"Successfully generated {count} top-level {label} items "
                    f"with {min_subs}-{max_subs} sub-items each."
                ),
                "domain": domain,
                "generated_count": count,
                "children_count": children_created,
                "ids": [p.id for p in plan],
            },
        )

    @traced
    def list_items(self, domain: str) -> ServiceResult:
        """List every item in *domain*, ordered by id."""
        op = "list_items"
        try:
            with self._store.transaction() as txn:
                ConfigService(self._store).load_policy(txn).index_of(domain)
        except ThreadError as exc:
            return self._failure(op, exc)

        entities = self._store.list_items(domain)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": domain,
                "count": len(entities),
                "items": [e.to_dict() for e in entities],
            },
        )

    @traced
    def nest(self, domain: str, parent_id: str, child_id: str) -> ServiceResult:
        """Make *child_id* the last child of *parent_id* (same domain).

        Rejects a second parent and any link that would close a cycle.
        """
        op = "nest_item"
        try:
            with self._store.transaction() as txn:
                ConfigService(self._store).load_policy(txn).index_of(domain)
                for item_id in (parent_id, child_id):
                    require_item(txn, domain, item_id)

                current = txn.parent_of(domain, child_id)
                if current is not None:
                    msg = f"{child_id} is already nested under {current}"
                    raise ValidationError(msg, domain=domain, id=child_id, parent_id=current)

                if self._is_ancestor(txn, domain, child_id, parent_id):
                    msg = f"Nesting {child_id} under {parent_id} would create a cycle"
                    raise ValidationError(
                        msg, domain=domain, id=child_id, parent_id=parent_id, rule="acyclic"
                    )

                txn.add_child(domain, parent_id, child_id)
        except ThreadError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"domain": domain, "parent_id": parent_id, "child_id": child_id},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _checked_prefix(self, txn: StoreTransaction, domain: str) -> str:
        """Domain must be configured and have an id prefix."""
        ConfigService(self._store).load_policy(txn).index_of(domain)
        try:
            return prefix_for(domain)
        except KeyError:
            msg = f"No ID prefix registered for domain {domain!r}"
            raise ValidationError(msg, domain=domain) from None

    @staticmethod
    def _is_ancestor(txn: StoreTransaction, domain: str, candidate: str, item_id: str) -> bool:
        """True if *candidate* is *item_id* or one of its ancestors."""
        seen: set[str] = set()
        current: str | None = item_id
        while current is not None and current not in seen:
            if current == candidate:
                return True
            seen.add(current)
            current = txn.parent_of(domain, current)
        return False

    @staticmethod
    def _attributes(
        domain: str,
        unit: str | None,
        value_type: str | None,
        function_type: str | None,
        warnings: list[str],
    ) -> dict[str, Any]:
        attributes: dict[str, Any] = {}
        if domain == Domain.PARAMETER.value:
            if value_type is not None and value_type not in VALUE_TYPES:
                msg = f"Invalid value type {value_type!r}. Expected one of: {', '.join(VALUE_TYPES)}"
                raise ValidationError(msg, value_type=value_type)
            if unit:
                attributes["unit"] = unit
            if value_type:
                attributes["value_type"] = value_type
        elif unit or value_type:
            warnings.append(f"unit/value_type only apply to {Domain.PARAMETER.value}; ignored")

        if domain == Domain.FUNCTIONS.value:
            if function_type:
                attributes["function_type"] = function_type
        elif function_type:
            warnings.append(f"function_type only applies to {Domain.FUNCTIONS.value}; ignored")
        return attributes
