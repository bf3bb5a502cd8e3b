"""ConfigService: read and update the persisted domain policy.

The first read creates the config row from the ``[thread]`` settings
section; afterwards the database copy is authoritative. Updates are
partial: only the fields passed are changed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from dthread.domain.errors import ThreadError, ValidationError
from dthread.domain.policy import ConfigPolicy
from dthread.services._helpers import now_iso
from dthread.services.base import BaseService
from dthread.services.result import ServiceResult
from dthread.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from dthread.infrastructure.store import StoredConfig, StoreTransaction


class ConfigService(BaseService):
    """Handles the domain order and adjacency flag."""

    def load_policy(self, txn: StoreTransaction) -> ConfigPolicy:
        """Build the policy from the stored config (seeding it if absent)."""
        stored = self._read_or_seed(txn)
        return ConfigPolicy(
            stored.domain_order,
            stored.allow_only_adjacent_connections,
            allow_backward=self._store.settings.links.allow_backward,
        )

    @traced
    def get(self) -> ServiceResult:
        """Return ``{domain_order, allow_only_adjacent_connections}``."""
        try:
            with self._store.transaction() as txn:
                stored = self._read_or_seed(txn)
        except ThreadError as exc:
            return self._failure("get_config", exc)
        return ServiceResult(ok=True, op="get_config", data=stored.to_dict())

    @traced
    def update(
        self,
        *,
        domain_order: Sequence[str] | None = None,
        allow_only_adjacent_connections: bool | None = None,
    ) -> ServiceResult:
        """Apply a partial update and return the merged, persisted config."""
        op = "update_config"
        if domain_order is None and allow_only_adjacent_connections is None:
            return self._failure(
                op, ValidationError("No valid configuration fields provided for update.")
            )

        try:
            with self._store.transaction() as txn:
                policy = self.load_policy(txn)
                with trace_span("apply"):
                    if domain_order is not None:
                        policy.set_domain_order(domain_order)
                    if allow_only_adjacent_connections is not None:
                        policy.set_adjacency_only(allow_only_adjacent_connections)
                stored = self._persist(txn, policy)
        except ThreadError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data=stored.to_dict())

    @traced
    def move_domain(self, domain: str, offset: int) -> ServiceResult:
        """Swap *domain* with its neighbour (``-1`` moves it up, ``+1`` down)."""
        op = "move_domain"
        warnings: list[str] = []
        try:
            with self._store.transaction() as txn:
                policy = self.load_policy(txn)
                before = policy.get_domain_order()
                policy.move_domain(domain, offset)
                if policy.get_domain_order() == before:
                    warnings.append(f"{domain} is already at the edge of the order")
                stored = self._persist(txn, policy)
        except ThreadError as exc:
            return self._failure(op, exc)

        return ServiceResult(ok=True, op=op, data=stored.to_dict(), warnings=warnings)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_or_seed(self, txn: StoreTransaction) -> StoredConfig:
        stored = txn.read_config()
        if stored is not None:
            return stored
        seed = self._store.settings.thread
        # Validates the seed (no duplicates) before it is persisted.
        policy = ConfigPolicy(seed.domain_order, seed.allow_only_adjacent_connections)
        return self._persist(txn, policy)

    @staticmethod
    def _persist(txn: StoreTransaction, policy: ConfigPolicy) -> StoredConfig:
        return txn.write_config(
            policy.get_domain_order(),
            policy.get_adjacency_only(),
            now_iso(),
        )
