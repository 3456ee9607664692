"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest

from careride.infrastructure.store import Store
from careride.services.result import ServiceResult
from careride.services.search import SearchService
from careride.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
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

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_annotations_and_children(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        root.children.append(child)
        child.annotate("rows", 8)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["annotations"] == {"rows": 8}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_enabled_without_parent_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_child_attached_to_parent(self) -> None:
        enable_telemetry()
        parent = Span(name="parent")
        token = _current_span.set(parent)
        try:
            with trace_span("child") as span:
                assert span is not None
                assert get_current_span() is span
        finally:
            _current_span.reset(token)
        assert [c.name for c in parent.children] == ["child"]


class TestTraced:
    def test_passthrough_when_disabled(self) -> None:
        @traced
        def op() -> ServiceResult:
            return ServiceResult.success("op")

        assert op().meta is None

    def test_injects_telemetry_meta(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            with trace_span("inner"):
                pass
            return ServiceResult.success("op")

        result = op()
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"].endswith("op")
        assert [c["name"] for c in telemetry["children"]] == ["inner"]

    def test_non_result_returned_unchanged(self) -> None:
        enable_telemetry()

        @traced
        def op() -> int:
            return 7

        assert op() == 7

    def test_exception_propagates(self) -> None:
        enable_telemetry()

        @traced
        def op() -> ServiceResult:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            op()
        assert _current_span.get() is None

    def test_search_service_span_tree(self, store: Store) -> None:
        enable_telemetry()
        result = SearchService(store).search("cardiology")
        assert result.meta is not None
        children = result.meta["telemetry"]["children"]
        assert children[0]["name"] == "load_doctors"
        assert children[0]["annotations"] == {"candidates": 8}
