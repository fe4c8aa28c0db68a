"""Tests for the searching recorders."""

from __future__ import annotations

import pytest

from algorithms import searching
from engine.frame import SearchKind, TraceBuilder

DATA = [1, 3, 5, 7, 9, 11]
SEARCHES = [
    searching.linear_search,
    searching.binary_search,
    searching.jump_search,
    searching.interpolation_search,
]


def _trace(search, values, target):
    builder = TraceBuilder(search.__name__)
    builder.extend(search(values, target))
    return builder.build()


def _probes(trace) -> list:
    return [f.subjects[0] for f in trace if f.kind is SearchKind.COMPARE]


@pytest.mark.parametrize("search", SEARCHES, ids=lambda fn: fn.__name__)
@pytest.mark.parametrize("target", DATA)
def test_finds_every_present_value(search, target) -> None:
    trace = _trace(search, DATA, target)
    assert trace[-1].kind is SearchKind.FOUND
    assert DATA[trace[-1].subjects[0]] == target


@pytest.mark.parametrize("search", SEARCHES, ids=lambda fn: fn.__name__)
@pytest.mark.parametrize("target", [0, 4, 12])
def test_missing_value_is_not_found(search, target) -> None:
    trace = _trace(search, DATA, target)
    assert trace[-1].kind is SearchKind.NOT_FOUND


@pytest.mark.parametrize("search", SEARCHES, ids=lambda fn: fn.__name__)
def test_empty_array_is_immediately_not_found(search) -> None:
    trace = _trace(search, [], 3)
    assert [f.kind for f in trace] == [SearchKind.NOT_FOUND]


def test_binary_search_found_frames() -> None:
    trace = _trace(searching.binary_search, DATA, 7)

    assert [(f.kind, f.subjects) for f in trace] == [
        (SearchKind.RANGE, (0, 2, 5)),
        (SearchKind.COMPARE, (2,)),
        (SearchKind.RANGE, (3, 4, 5)),
        (SearchKind.COMPARE, (4,)),
        (SearchKind.RANGE, (3, 3, 3)),
        (SearchKind.COMPARE, (3,)),
        (SearchKind.FOUND, (3,)),
    ]
    assert trace[1].auxiliary["window"] == (0, 2, 5)
    assert trace[5].auxiliary["window"] == (3, 3, 3)


def test_binary_search_not_found_probes() -> None:
    trace = _trace(searching.binary_search, DATA, 4)
    assert _probes(trace) == [2, 0, 1]
    assert trace[-1].kind is SearchKind.NOT_FOUND


def test_binary_search_bounds_check() -> None:
    trace = _trace(searching.binary_search, DATA, 100)
    assert [(f.kind, f.subjects) for f in trace] == [
        (SearchKind.COMPARE, (0,)),
        (SearchKind.COMPARE, (5,)),
        (SearchKind.NOT_FOUND, ()),
    ]


def test_jump_search_bounds_check_both_ends() -> None:
    above = _trace(searching.jump_search, DATA, 50)
    below = _trace(searching.jump_search, DATA, -5)

    assert _probes(above) == [5]
    assert _probes(below) == [0]


def test_jump_search_jumps_in_sqrt_blocks() -> None:
    values = list(range(0, 18, 2))          # 9 values, block of 3
    trace = _trace(searching.jump_search, values, 14)

    assert _probes(trace) == [2, 5, 6, 7]
    assert trace[-1].subjects == (7,)


def test_interpolation_search_flat_run() -> None:
    hit = _trace(searching.interpolation_search, [4, 4, 4, 4], 4)
    assert [(f.kind, f.subjects) for f in hit] == [
        (SearchKind.COMPARE, (0,)),
        (SearchKind.FOUND, (0,)),
    ]


def test_interpolation_search_single_element() -> None:
    trace = _trace(searching.interpolation_search, [8], 8)
    assert trace[-1].kind is SearchKind.FOUND


def test_linear_search_probes_in_order() -> None:
    trace = _trace(searching.linear_search, [9, 8, 7], 7)
    assert _probes(trace) == [0, 1, 2]
