"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from dthread.infrastructure.store import EntityStore
from dthread.services.items import ItemService
from dthread.services.result import ServiceResult
from dthread.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_to_dict_omits_empty_keys(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotate(self) -> None:
        span = Span(name="test")
        span.annotate("rows", 42)
        assert span.to_dict()["annotations"] == {"rows": 42}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_no_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None


class TestTraced:
    def test_disabled_passthrough(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult(ok=True, op="op")

        assert op().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("step") as span:
                assert span is not None
                span.annotate("n", 1)
            return ServiceResult(ok=True, op="op")

        result = op()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"].endswith("op")
        assert tree["children"][0]["name"] == "step"
        assert tree["children"][0]["annotations"] == {"n": 1}

    def test_non_result_return_untouched(self) -> None:
        enable_telemetry()

        @traced
        def plain() -> int:
            return 7

        assert plain() == 7

    def test_service_method_spans(self, store: EntityStore) -> None:
        enable_telemetry()
        result = ItemService(store).create_item("Mission", "Traced")
        assert result.meta is not None
        names = [c["name"] for c in result.meta["telemetry"]["children"]]
        assert names == ["validate", "generate_id", "persist"]
