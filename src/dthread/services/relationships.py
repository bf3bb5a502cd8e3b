"""RelationshipGatekeeper: validate and commit cross-domain links.

Pipeline: REQUIRE → POLICY → TYPE → EXISTENCE → UPSERT.

Every check runs before anything is written; a rejected link leaves the
store untouched. Committing an existing triple is a successful no-op.
"""

from __future__ import annotations

from dthread.domain.errors import ThreadError, ValidationError
from dthread.domain.relationships import resolve_relationship_type
from dthread.services._helpers import now_iso, require_item
from dthread.services.base import BaseService
from dthread.services.config import ConfigService
from dthread.services.result import ServiceResult
from dthread.services.telemetry import trace_span, traced


class RelationshipGatekeeper(BaseService):
    """The single entry point for writing cross-domain relationships."""

    @traced
    def create_relationship(
        self,
        from_id: str,
        to_id: str,
        from_domain: str,
        to_domain: str,
        relationship_type: str,
    ) -> ServiceResult:
        op = "create_relationship"
        try:
            with trace_span("require"):
                fields = {
                    "fromId": from_id,
                    "toId": to_id,
                    "fromDomain": from_domain,
                    "toDomain": to_domain,
                    "relationshipType": relationship_type,
                }
                missing = [name for name, value in fields.items() if not (value or "").strip()]
                if missing:
                    raise ValidationError(
                        "Missing required fields for relationship creation.",
                        missing=missing,
                    )

            with self._store.transaction() as txn:
                with trace_span("policy"):
                    policy = ConfigService(self._store).load_policy(txn)
                    policy.check_link(from_domain, to_domain)

                with trace_span("type"):
                    rel_type = resolve_relationship_type(
                        relationship_type, from_domain, to_domain
                    )

                with trace_span("existence"):
                    require_item(txn, from_domain, from_id)
                    require_item(txn, to_domain, to_id)

                with trace_span("upsert"):
                    created = txn.upsert_relationship(
                        from_domain, from_id, to_domain, to_id, rel_type.value, now_iso()
                    )
        except ThreadError as exc:
            return self._failure(op, exc)

        message = (
            "Relationship created successfully."
            if created
            else "Relationship already exists."
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": message,
                "from": from_id,
                "to": to_id,
                "from_domain": from_domain,
                "to_domain": to_domain,
                "relationship_type": rel_type.value,
                "created": created,
            },
        )
