"""BaseService: shared plumbing for the dthread services.

A service wraps one :class:`EntityStore`, opens its own transactions, and
never lets a :class:`ThreadError` escape; rejections come back as failed
:class:`ServiceResult` objects.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dthread.services.result import ServiceResult

if TYPE_CHECKING:
    from dthread.domain.errors import ThreadError
    from dthread.infrastructure.store import EntityStore

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the store; subclasses add ``@traced`` operations."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, exc: ThreadError, warnings: list[str] | None = None) -> ServiceResult:
        """Log the rejection and turn it into a failed result."""
        logger.info("%s rejected: %s (%s)", op, exc.message, exc.code)
        return ServiceResult.failed(op, exc, warnings)
