"""
projector.py — Highlight Projector
===================================
Pure mapping  Frame (+ the frame before it)  →  HighlightState.

The view never inspects frames directly; it colours elements from the
HighlightState returned here:

    active    – the element(s) the algorithm is looking at right now
    compared  – the pair / element being compared
    settled   – final elements: sorted bars, visited vertices / cells
    pivot     – quicksort pivot
    window    – [lo, mid, hi] of binary search / mergesort divide
    found     – the hit of a search
    path      – reconstructed shortest path
    edge      – (from, to) edge being traversed
    queue     – BFS queue contents      stack – DFS stack contents
    swapped   – True when a swap frame actually changed the snapshot

Every kind of every family has an entry in HANDLERS.  Anything else maps
to an empty HighlightState: highlights are advisory and must never break
rendering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from engine.frame import (
    Frame,
    PathKind,
    SearchKind,
    SortKind,
    StepKind,
    TraversalKind,
    thaw,
)


@dataclass(frozen=True)
class HighlightState:
    kind:      Optional[str]             = None
    active:    Tuple[Any, ...]           = ()
    compared:  Tuple[Any, ...]           = ()
    settled:   Tuple[Any, ...]           = ()
    pivot:     Tuple[Any, ...]           = ()
    window:    Tuple[Any, ...]           = ()
    found:     Tuple[Any, ...]           = ()
    path:      Tuple[Any, ...]           = ()
    edge:      Optional[Tuple[Any, Any]] = None
    queue:     Tuple[Any, ...]           = ()
    stack:     Tuple[Any, ...]           = ()
    swapped:   bool                      = False

    def to_dict(self) -> dict:
        return {
            "kind":     self.kind,
            "active":   thaw(self.active),
            "compared": thaw(self.compared),
            "settled":  thaw(self.settled),
            "pivot":    thaw(self.pivot),
            "window":   thaw(self.window),
            "found":    thaw(self.found),
            "path":     thaw(self.path),
            "edge":     thaw(self.edge) if self.edge else None,
            "queue":    thaw(self.queue),
            "stack":    thaw(self.stack),
            "swapped":  self.swapped,
        }


Handler = Callable[[Frame, Optional[Frame]], HighlightState]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------
def _sorted_so_far(frame: Frame) -> Tuple[Any, ...]:
    return tuple(frame.auxiliary.get("sorted", ()))


def _sort_compare(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="compare", compared=frame.subjects, settled=_sorted_so_far(frame))


def _sort_swap(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    changed = previous is not None and previous.snapshot != frame.snapshot
    return HighlightState(
        kind="swap",
        compared=frame.subjects,
        settled=_sorted_so_far(frame),
        swapped=changed,
    )


def _sort_pivot(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="pivot", pivot=frame.subjects, settled=_sorted_so_far(frame))


def _sort_active(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind=frame.kind.value, active=frame.subjects, settled=_sorted_so_far(frame))


def _sort_divide(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind="divide",
        active=frame.subjects,
        window=frame.subjects,
        settled=_sorted_so_far(frame),
    )


def _sort_settled(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind=frame.kind.value, settled=_sorted_so_far(frame))


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------
def _search_compare(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind="compare",
        compared=frame.subjects,
        window=tuple(frame.auxiliary.get("window", ())),
    )


def _search_range(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    lo_mid_hi = frame.subjects
    return HighlightState(kind="range", window=lo_mid_hi, compared=lo_mid_hi[1:2])


def _search_found(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="found", found=frame.subjects)


def _search_not_found(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="not-found")


# ---------------------------------------------------------------------------
# Graph traversal
# ---------------------------------------------------------------------------
def _frontier(frame: Frame) -> Dict[str, Tuple[Any, ...]]:
    return {
        "queue": tuple(frame.auxiliary.get("queue", ())),
        "stack": tuple(frame.auxiliary.get("stack", ())),
    }


def _traversal_vertex(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind=frame.kind.value,
        active=frame.subjects,
        settled=tuple(frame.snapshot or ()),
        **_frontier(frame),
    )


def _traversal_edge(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    source, target = frame.subjects
    return HighlightState(
        kind=frame.kind.value,
        active=(source,),
        compared=(target,),
        edge=(source, target),
        settled=tuple(frame.snapshot or ()),
        **_frontier(frame),
    )


def _traversal_complete(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="complete", settled=tuple(frame.snapshot or ()))


# ---------------------------------------------------------------------------
# Pathfinding
# ---------------------------------------------------------------------------
def _path_visit(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind="visit",
        active=frame.subjects,
        settled=tuple(frame.auxiliary.get("visited", ())),
        queue=tuple(frame.auxiliary.get("queue", ())),
    )


def _path_path(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind="path",
        active=frame.subjects,
        settled=tuple(frame.auxiliary.get("visited", ())),
        path=tuple(frame.auxiliary.get("path", ())),
    )


def _path_terminal(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind=frame.kind.value,
        found=frame.subjects,
        settled=tuple(frame.auxiliary.get("visited", ())),
        path=tuple(frame.auxiliary.get("path", ())),
    )


# ---------------------------------------------------------------------------
# Structure mutators
# ---------------------------------------------------------------------------
def _step_active(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind=frame.kind.value,
        active=frame.subjects,
        settled=tuple(frame.auxiliary.get("visited", ())),
    )


def _step_found(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(kind="found", found=frame.subjects)


def _step_plain(frame: Frame, previous: Optional[Frame]) -> HighlightState:
    return HighlightState(
        kind=frame.kind.value,
        settled=tuple(frame.auxiliary.get("visited", ())),
    )


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------
HANDLERS: Dict[Enum, Handler] = {
    SortKind.COMPARE:        _sort_compare,
    SortKind.SWAP:           _sort_swap,
    SortKind.INSERT:         _sort_active,
    SortKind.PIVOT:          _sort_pivot,
    SortKind.DIVIDE:         _sort_divide,
    SortKind.POSITION:       _sort_active,
    SortKind.SORTED:         _sort_settled,
    SortKind.COMPLETE:       _sort_settled,

    SearchKind.COMPARE:      _search_compare,
    SearchKind.RANGE:        _search_range,
    SearchKind.FOUND:        _search_found,
    SearchKind.NOT_FOUND:    _search_not_found,

    TraversalKind.START:     _traversal_vertex,
    TraversalKind.PROCESS:   _traversal_vertex,
    TraversalKind.VISIT:     _traversal_edge,
    TraversalKind.REVISIT:   _traversal_edge,
    TraversalKind.BACKTRACK: _traversal_vertex,
    TraversalKind.COMPLETE:  _traversal_complete,

    PathKind.VISIT:          _path_visit,
    PathKind.PATH:           _path_path,
    PathKind.FOUND:          _path_terminal,
    PathKind.NOT_FOUND:      _path_terminal,

    StepKind.PROBE:          _step_active,
    StepKind.SHIFT:          _step_active,
    StepKind.SELECT:         _step_active,
    StepKind.INSERT:         _step_active,
    StepKind.REMOVE:         _step_active,
    StepKind.PUSH:           _step_active,
    StepKind.POP:            _step_active,
    StepKind.PEEK:           _step_active,
    StepKind.CLEAR:          _step_active,
    StepKind.VISIT:          _step_active,
    StepKind.FOUND:          _step_found,
    StepKind.NOT_FOUND:      _step_plain,
    StepKind.COMPLETE:       _step_plain,
}


def project(frame: Optional[Frame], previous: Optional[Frame] = None) -> HighlightState:
    """Render hints for `frame`; `previous` is only used to tell a real swap from a no-op."""
    if frame is None:
        return HighlightState()
    handler = HANDLERS.get(frame.kind)
    if handler is None:
        return HighlightState()
    return handler(frame, previous)
