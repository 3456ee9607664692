"""Per-call timing for ``-v``: Span, trace_span and the @traced decorator.

With telemetry off (the default) @traced is one ContextVar lookup and
trace_span yields None. With it on, each traced service call becomes a
root span; ``trace_span`` blocks inside it become children, and the
finished tree lands in ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from careride.services.result import ServiceResult

log = structlog.get_logger("careride.telemetry")

_telemetry_on: ContextVar[bool] = ContextVar("_telemetry_on", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """A named, timed region with annotations and nested child regions."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started_ns: int = field(default_factory=time.perf_counter_ns)
    ended_ns: int | None = None

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds; 0.0 until :meth:`end` is called."""
        if self.ended_ns is None:
            return 0.0
        return (self.ended_ns - self.started_ns) / 1_000_000

    def end(self) -> None:
        self.ended_ns = time.perf_counter_ns()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the active span.

    Yields None when telemetry is off or no traced call is running, so
    callers guard annotations with ``if span:``.
    """
    parent = _current_span.get() if _telemetry_on.get() else None
    if parent is None:
        yield None
        return
    child = Span(name=name, parent=parent)
    parent.children.append(child)
    with _activate(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Time a service method; attach the span tree to its ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _telemetry_on.get():
            return func(*args, **kwargs)

        with _activate(Span(name=func.__qualname__)) as span:
            try:
                result = func(*args, **kwargs)
            except Exception:
                log.debug("span.failed", span_name=span.name)
                raise

        if not isinstance(result, ServiceResult):
            return result
        if not result.ok:
            span.annotate("ok", False)
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=result.ok,
        )
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on for the current context (``-v``)."""
    _telemetry_on.set(True)


def disable_telemetry() -> None:
    _telemetry_on.set(False)


def get_current_span() -> Span | None:
    """The innermost active span, or None when telemetry is off."""
    return _current_span.get() if _telemetry_on.get() else None
