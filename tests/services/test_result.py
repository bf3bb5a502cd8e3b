"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from dthread.domain.errors import NotFoundError, PolicyViolation
from dthread.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_item", data={"id": "MIS-001"})
        assert result.ok is True
        assert result.data == {"id": "MIS-001"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Item 'X' not found", detail={"id": "X"})
        result = ServiceResult(ok=False, op="nest_item", error=error)
        assert result.error is not None
        assert result.error.detail == {"id": "X"}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="get_config", data={"domain_order": ["Mission"]})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["domain_order"] == ["Mission"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestFailedAndPayload:
    def test_failed_from_domain_error(self) -> None:
        exc = PolicyViolation("not adjacent", rule="adjacent_only")
        result = ServiceResult.failed("create_relationship", exc, ["w"])
        assert result.ok is False
        assert result.error_code == "POLICY_VIOLATION"
        assert result.error is not None
        assert result.error.detail == {"rule": "adjacent_only"}
        assert result.warnings == ["w"]

    def test_success_payload_includes_warnings(self) -> None:
        result = ServiceResult(ok=True, op="create_item", data={"id": "PAR-001"}, warnings=["x"])
        assert result.payload() == {"id": "PAR-001", "warnings": ["x"]}

    def test_success_payload_without_warnings(self) -> None:
        result = ServiceResult(ok=True, op="get_config", data={"a": 1})
        assert result.payload() == {"a": 1}
        assert result.error_code is None

    def test_error_payload(self) -> None:
        result = ServiceResult.failed("nest_item", NotFoundError("gone", id="MIS-9"))
        assert result.payload() == {
            "error": "gone",
            "code": "NOT_FOUND",
            "detail": {"id": "MIS-9"},
        }
