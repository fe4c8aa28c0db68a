"""Tests for frames, traces and lazy traces."""

from __future__ import annotations

from collections import deque
from types import MappingProxyType

import pytest

from engine.errors import MalformedTrace
from engine.frame import (
    Family,
    Frame,
    LazyTrace,
    SearchKind,
    SortKind,
    StepKind,
    Trace,
    TraceBuilder,
    TraversalKind,
    append_frame,
    finalize,
)


def test_frame_freezes_its_inputs() -> None:
    values = [3, 1, 2]
    extra = {"sorted": [0]}
    frame = Frame.of(SortKind.COMPARE, [0, 1], values, **extra)
    values.append(99)
    extra["sorted"].append(5)

    assert frame.snapshot == (3, 1, 2)
    assert frame.subjects == (0, 1)
    assert isinstance(frame.auxiliary, MappingProxyType)
    assert frame.auxiliary["sorted"] == (0,)
    assert frame.family is Family.SORTING


def test_frame_to_dict_is_json_friendly() -> None:
    frame = Frame.of(SearchKind.FOUND, [(1, 2)], {(1, 2): float("inf"), (0, 0): 0})
    data = frame.to_dict()

    assert data["kind"] == "found"
    assert data["family"] == "searching"
    assert data["subjects"] == [[1, 2]]
    assert data["snapshot"] == {"1,2": None, "0,0": 0}


def test_frame_copies_deques() -> None:
    queue = deque(["A", "B"])
    frame = Frame.of(TraversalKind.PROCESS, ["A"], ["A"], queue=queue)
    queue.clear()

    assert frame.auxiliary["queue"] == ("A", "B")
    assert frame.to_dict()["auxiliary"]["queue"] == ["A", "B"]


def test_append_frame_leaves_input_untouched() -> None:
    empty = Trace(operation="x")
    one = append_frame(empty, Frame.of(SortKind.COMPLETE))

    assert len(empty) == 0
    assert len(one) == 1
    assert one.operation == "x"


def test_finalize_rejects_empty_trace() -> None:
    with pytest.raises(MalformedTrace):
        finalize(Trace(operation="empty"))


def test_finalize_rejects_missing_terminal() -> None:
    trace = Trace([Frame.of(SortKind.COMPARE, [0, 1])])
    with pytest.raises(MalformedTrace):
        finalize(trace)


def test_finalize_rejects_early_terminal() -> None:
    trace = Trace([Frame.of(SearchKind.NOT_FOUND), Frame.of(SearchKind.FOUND, [0])])
    with pytest.raises(MalformedTrace):
        finalize(trace)


def test_builder_builds_finalized_trace() -> None:
    builder = TraceBuilder("demo")
    builder.append(Frame.of(SortKind.COMPARE, [0, 1]))
    builder.extend([Frame.of(SortKind.COMPLETE)])
    trace = builder.build()

    assert trace.operation == "demo"
    assert trace.terminal is trace[-1]
    assert trace.fetch(5) is None


def test_lazy_trace_runs_generator_one_frame_per_fetch() -> None:
    log: list[str] = []

    def steps():
        log.append("first")
        yield Frame.of(StepKind.PROBE, [0])
        log.append("second")
        yield Frame.of(StepKind.COMPLETE)

    lazy = LazyTrace(steps(), operation="demo")
    assert log == []

    assert lazy.fetch(0).kind is StepKind.PROBE
    assert log == ["first"]
    assert not lazy.exhausted

    assert lazy.fetch(1).kind is StepKind.COMPLETE
    assert log == ["first", "second"]
    assert lazy.exhausted
    assert lazy.fetch(2) is None


def test_lazy_trace_close_drops_pending_work() -> None:
    log: list[str] = []

    def steps():
        yield Frame.of(StepKind.SELECT, [0])
        log.append("mutated")
        yield Frame.of(StepKind.COMPLETE)

    lazy = LazyTrace(steps())
    lazy.fetch(0)
    lazy.close()

    assert lazy.fetch(1) is None
    assert log == []
    assert lazy.exhausted


def test_lazy_trace_without_terminal_is_malformed() -> None:
    lazy = LazyTrace(iter([Frame.of(StepKind.PROBE, [0])]), operation="broken")
    lazy.fetch(0)
    with pytest.raises(MalformedTrace):
        lazy.fetch(1)


def test_lazy_trace_to_trace() -> None:
    lazy = LazyTrace(iter([Frame.of(StepKind.PROBE, [0]), Frame.of(StepKind.COMPLETE)]), "op")
    trace = lazy.to_trace()

    assert isinstance(trace, Trace)
    assert [f.kind for f in trace] == [StepKind.PROBE, StepKind.COMPLETE]
