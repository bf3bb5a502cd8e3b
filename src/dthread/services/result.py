"""ServiceResult and ServiceError, the return type of every service call.

The CLI renders a result (or dumps it with ``--json``); the HTTP API turns
:meth:`ServiceResult.payload` into a response body and maps
``error.code`` to a status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from dthread.domain.errors import ThreadError


class ServiceError(BaseModel):
    """A rejected operation: stable ``code``, human ``message``, structured ``detail``."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ThreadError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"create_item"``, ``"compute_layout"``, ...).
        data: Operation-specific payload on success.
        warnings: Non-fatal notes, e.g. ignored attributes.
        error: Set when ``ok`` is False.
        meta: Telemetry span tree when tracing is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failed(
        cls, op: str, exc: ThreadError, warnings: list[str] | None = None
    ) -> ServiceResult:
        """Wrap a domain error raised while running *op*."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=warnings or [],
        )

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    def payload(self) -> dict[str, Any]:
        """Response body: ``data`` (+ ``warnings``) on success, the error otherwise."""
        if self.ok:
            body = dict(self.data)
            if self.warnings:
                body["warnings"] = list(self.warnings)
            return body
        if self.error is None:
            return {"error": "Unknown error", "code": "ERROR", "detail": {}}
        return {
            "error": self.error.message,
            "code": self.error.code,
            "detail": dict(self.error.detail),
        }
