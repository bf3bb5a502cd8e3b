"""Error taxonomy for policy, store, and layout failures.

Every error carries a stable ``code`` (surfaced as ``ServiceError.code``)
and a ``detail`` dict naming the rule and ids involved, so a rejection can
be shown to the end user as-is.
"""

from __future__ import annotations

from typing import Any


class ThreadError(Exception):
    """Base class for all expected dthread failures."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(ThreadError):
    """Malformed or incomplete input."""

    code = "VALIDATION_ERROR"


class UnknownDomainError(ValidationError):
    """A domain name that is not part of the configured order."""

    code = "UNKNOWN_DOMAIN"


class PolicyViolation(ThreadError):
    """A cross-domain link that breaks the configured ordering policy."""

    code = "POLICY_VIOLATION"


class NotFoundError(ThreadError):
    """A referenced entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(ThreadError):
    """An id collision on creation."""

    code = "ID_COLLISION"


class CycleDetectedError(ThreadError):
    """The child-reference graph of a domain is not a forest."""

    code = "CYCLE_DETECTED"

    def __init__(self, entity_id: str, *, domain: str | None = None) -> None:
        where = f" in domain {domain!r}" if domain else ""
        super().__init__(
            f"Cycle detected at entity {entity_id!r}{where}",
            entity_id=entity_id,
            domain=domain,
        )
        self.entity_id = entity_id
        self.domain = domain
