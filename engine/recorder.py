"""
recorder.py — Trace Recorder & Summary
=======================================
Runs a registered algorithm to completion against the caller's data and
returns the finished, immutable Trace.  No timers, no I/O: the whole run
happens before playback starts, which is what lets the speed change later
without re-running anything.

Usage:
    trace = record("binary_search", [1, 3, 5, 7], {"target": 5})
    trace, summary = record_with_summary("grid_astar", grid)
    summary.outcome          # "found"

The algorithm family decides what `structure` must be:

    SORTING / SEARCHING   a list of numbers (or "3, 1, 2")
    TRAVERSAL             a Graph            params: {"start": "A"}
    PATHFINDING           a Grid             (start / end come from the grid)
"""

import logging
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from algorithms import AlgoInfo, get_algorithm
from engine.errors import InvalidInput
from engine.frame import Family, Frame, LazyTrace, Trace, TraceBuilder
from engine.validation import parse_number, parse_values
from structures.graph import Graph
from structures.grid import Grid

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Summary dataclass: what the analytics card renders
# ---------------------------------------------------------------------------
@dataclass
class TraceSummary:
    operation:     str             = ""
    label:         str             = ""
    total_frames:  int             = 0
    kind_counts:   Dict[str, int]  = field(default_factory=dict)
    outcome:       Optional[str]   = None     # terminal kind, None while a lazy trace is open
    wall_time_ms:  float           = 0.0      # time to record, not to play

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(trace: Union[Trace, LazyTrace], wall_time_ms: float = 0.0) -> TraceSummary:
    frames = trace.frames
    info   = get_algorithm(trace.operation)
    last   = frames[-1] if frames else None
    return TraceSummary(
        operation=trace.operation,
        label=info.label if info else trace.operation,
        total_frames=len(frames),
        kind_counts=dict(Counter(f.kind.value for f in frames)),
        outcome=last.kind.value if last is not None and last.is_terminal else None,
        wall_time_ms=round(wall_time_ms, 2),
    )


# ---------------------------------------------------------------------------
# Per-family argument plumbing
# ---------------------------------------------------------------------------
Runner = Callable[[AlgoInfo, Any, Dict[str, Any]], Iterator[Frame]]


def _run_sorting(info: AlgoInfo, structure: Any, params: Dict[str, Any]) -> Iterator[Frame]:
    return info.fn(parse_values(structure))


def _run_searching(info: AlgoInfo, structure: Any, params: Dict[str, Any]) -> Iterator[Frame]:
    values = parse_values(structure)
    if "target" not in params:
        raise InvalidInput("Please enter a valid target", "target")
    return info.fn(values, parse_number(params["target"], "target"))


def _run_traversal(info: AlgoInfo, structure: Any, params: Dict[str, Any]) -> Iterator[Frame]:
    if not isinstance(structure, Graph):
        raise InvalidInput(f"{info.label} needs a graph", "structure")
    if not len(structure):
        raise InvalidInput("Graph has no vertices", "start")
    start = params.get("start", structure.vertices[0])
    return info.fn(structure, start)


def _run_pathfinding(info: AlgoInfo, structure: Any, params: Dict[str, Any]) -> Iterator[Frame]:
    if not isinstance(structure, Grid):
        raise InvalidInput(f"{info.label} needs a grid", "structure")
    return info.fn(structure)


_RUNNERS: Dict[Family, Runner] = {
    Family.SORTING:     _run_sorting,
    Family.SEARCHING:   _run_searching,
    Family.TRAVERSAL:   _run_traversal,
    Family.PATHFINDING: _run_pathfinding,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def record(operation: str, structure: Any, params: Optional[Mapping[str, Any]] = None) -> Trace:
    """
    Run `operation` once and return its finalized Trace.

    Raises:
        InvalidInput   : unknown operation or bad user-supplied data.
        MalformedTrace : the algorithm broke the terminal-frame rule.
    """
    info = get_algorithm(operation)
    if info is None:
        raise InvalidInput(f"Unknown algorithm: {operation}", "operation")

    frames = _RUNNERS[info.family](info, structure, dict(params or {}))
    builder = TraceBuilder(operation)
    builder.extend(frames)
    return builder.build()


def record_with_summary(
    operation: str,
    structure: Any,
    params: Optional[Mapping[str, Any]] = None,
) -> Tuple[Trace, TraceSummary]:
    started = time.monotonic()
    trace = record(operation, structure, params)
    summary = summarize(trace, (time.monotonic() - started) * 1000)
    logger.debug(
        "Recorded %s: %d frames, outcome %s, %.2f ms",
        operation, summary.total_frames, summary.outcome, summary.wall_time_ms,
    )
    return trace, summary
