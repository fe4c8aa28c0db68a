"""
frame.py — Frames & Traces
===========================
A Frame is a frozen-in-time record of ONE observable algorithmic event:

    • kind       – closed tag from the family's vocabulary (SortKind, …)
    • subjects   – the element ids the event is about (indices, vertex
                   labels, (row, col) cells, tree values)
    • snapshot   – an independent copy of the container's value state at
                   the instant the event happened
    • auxiliary  – family-specific extras (queue, stack, [lo, mid, hi]
                   window, running visited order, cumulative sorted set)

A Trace is the finite ordered sequence of Frames of one algorithm run.
It ends in exactly one terminal Frame (found / not-found / complete).

Design decisions:
  - Frames deep-freeze what they are given: lists become tuples, dicts
    become read-only mappings.  Replaying frame i after frame i+5 therefore
    always sees the same data.
  - Algorithms are generators of Frames.  TraceBuilder drains one eagerly
    (Recorders); LazyTrace pulls one Frame at a time (Structure Mutators).
    The Player treats both the same way through fetch() / exhausted.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from engine.errors import MalformedTrace

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Families & kind vocabularies
# ---------------------------------------------------------------------------
class Family(Enum):
    SORTING     = "sorting"
    SEARCHING   = "searching"
    TRAVERSAL   = "traversal"
    PATHFINDING = "pathfinding"
    STRUCTURE   = "structure"


class SortKind(Enum):
    COMPARE  = "compare"     # {i, j}
    SWAP     = "swap"        # {i, j}   snapshot is AFTER the swap
    INSERT   = "insert"      # {i}      merge placement / insertion-sort shift
    PIVOT    = "pivot"       # {i}      quicksort
    DIVIDE   = "divide"      # {lo, mid, hi}  mergesort
    POSITION = "position"    # {i}      selection / insertion current slot
    SORTED   = "sorted"      # {…}      indices that are now final
    COMPLETE = "complete"


class SearchKind(Enum):
    COMPARE   = "compare"    # {i}
    RANGE     = "range"      # {lo, mid, hi}
    FOUND     = "found"      # {i}
    NOT_FOUND = "not-found"


class TraversalKind(Enum):
    START     = "start"      # {vertex}
    PROCESS   = "process"    # {vertex}
    VISIT     = "visit"      # {from, to}  to was unvisited
    REVISIT   = "revisit"    # {from, to}  to was already visited
    BACKTRACK = "backtrack"  # {vertex}    DFS only
    COMPLETE  = "complete"


class PathKind(Enum):
    VISIT     = "visit"      # {(row, col)}
    PATH      = "path"       # {(row, col)}
    FOUND     = "found"      # {end}
    NOT_FOUND = "not-found"


class StepKind(Enum):
    PROBE     = "probe"      # scan / traversal cursor on an element
    SHIFT     = "shift"      # element moving to make room
    SELECT    = "select"     # element about to be removed
    INSERT    = "insert"
    REMOVE    = "remove"
    PUSH      = "push"
    POP       = "pop"
    PEEK      = "peek"
    CLEAR     = "clear"
    VISIT     = "visit"      # tree traversal order
    FOUND     = "found"
    NOT_FOUND = "not-found"
    COMPLETE  = "complete"


FAMILY_OF_KIND = {
    SortKind:      Family.SORTING,
    SearchKind:    Family.SEARCHING,
    TraversalKind: Family.TRAVERSAL,
    PathKind:      Family.PATHFINDING,
    StepKind:      Family.STRUCTURE,
}

TERMINAL_VALUES = frozenset({"found", "not-found", "complete"})


def is_terminal_kind(kind: Enum) -> bool:
    return kind.value in TERMINAL_VALUES


# ---------------------------------------------------------------------------
# Deep freeze / thaw
# ---------------------------------------------------------------------------
def freeze(value: Any) -> Any:
    """Return an immutable deep copy of lists / tuples / deques / dicts / sets."""
    if isinstance(value, (list, tuple, deque)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (dict, MappingProxyType)):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """JSON-friendly view: tuples → lists, tuple keys → "r,c", ±inf → None."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list, deque)):
        return [thaw(v) for v in value]
    if isinstance(value, frozenset):
        return sorted(thaw(v) for v in value)
    if isinstance(value, Mapping):
        return {_key(k): thaw(v) for k, v in value.items()}
    if isinstance(value, float) and value in (float("inf"), float("-inf")):
        return None
    return value


def _key(k: Any) -> str:
    if isinstance(k, tuple):
        return ",".join(str(p) for p in k)
    return str(k)


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        kind      : Member of one of the *Kind enums above.
        subjects  : Tuple of element ids this event concerns.
        snapshot  : Frozen copy of the container state at this instant.
        auxiliary : Read-only mapping of family-specific extras.
    """

    kind:       Enum
    subjects:   Tuple[Any, ...]      = ()
    snapshot:   Any                  = None
    auxiliary:  Mapping[str, Any]    = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(
        cls,
        kind: Enum,
        subjects: Iterable[Any] = (),
        snapshot: Any = None,
        **auxiliary: Any,
    ) -> "Frame":
        """Build a Frame, freezing copies of everything passed in."""
        return cls(
            kind=kind,
            subjects=freeze(list(subjects)),
            snapshot=freeze(snapshot),
            auxiliary=freeze(auxiliary),
        )

    @property
    def family(self) -> Optional[Family]:
        return FAMILY_OF_KIND.get(type(self.kind))

    @property
    def is_terminal(self) -> bool:
        return is_terminal_kind(self.kind)

    def to_dict(self) -> dict:
        family = self.family
        return {
            "family":    family.value if family else None,
            "kind":      self.kind.value,
            "subjects":  thaw(self.subjects),
            "snapshot":  thaw(self.snapshot),
            "auxiliary": thaw(self.auxiliary),
        }


# ---------------------------------------------------------------------------
# Trace  (eager, immutable)
# ---------------------------------------------------------------------------
class Trace:
    """
    Immutable, 0-indexed sequence of Frames.

    Attributes:
        operation : Registry key of the operation that produced it ("bubble_sort").
    """

    __slots__ = ("_frames", "operation")

    def __init__(self, frames: Iterable[Frame] = (), operation: str = ""):
        self._frames:   Tuple[Frame, ...] = tuple(frames)
        self.operation: str               = operation

    def __len__(self) -> int:
        return len(self._frames)

    def __getitem__(self, idx):
        return self._frames[idx]

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __repr__(self) -> str:
        return f"Trace(operation={self.operation!r}, frames={len(self._frames)})"

    @property
    def frames(self) -> Tuple[Frame, ...]:
        return self._frames

    @property
    def terminal(self) -> Optional[Frame]:
        if self._frames and self._frames[-1].is_terminal:
            return self._frames[-1]
        return None

    # -- the Player's view of a frame source --
    @property
    def exhausted(self) -> bool:
        return True

    def fetch(self, idx: int) -> Optional[Frame]:
        if 0 <= idx < len(self._frames):
            return self._frames[idx]
        return None

    def appended(self, frame: Frame) -> "Trace":
        return Trace(self._frames + (frame,), operation=self.operation)


def append_frame(trace: Trace, frame: Frame) -> Trace:
    """Return a NEW Trace with `frame` appended.  The input is untouched."""
    return trace.appended(frame)


def finalize(trace: Trace) -> Trace:
    """
    Assert the terminal-frame invariant and hand the Trace back.

    Raises MalformedTrace if the trace is empty, does not end in a terminal
    frame, or has a terminal frame anywhere but last.
    """
    frames = trace.frames
    if not frames:
        raise MalformedTrace(f"Trace for {trace.operation or '?'} is empty")
    for idx, frame in enumerate(frames[:-1]):
        if frame.is_terminal:
            raise MalformedTrace(
                f"Trace for {trace.operation or '?'} has terminal frame "
                f"'{frame.kind.value}' at {idx} of {len(frames)}"
            )
    if not frames[-1].is_terminal:
        raise MalformedTrace(
            f"Trace for {trace.operation or '?'} ends in non-terminal "
            f"'{frames[-1].kind.value}'"
        )
    return trace


# ---------------------------------------------------------------------------
# TraceBuilder  (Recorder-private buffer)
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Mutable buffer only the Recorder sees.  The Player only ever gets the
    finalized Trace returned by build().

    Usage:
        tb = TraceBuilder("bubble_sort")
        tb.extend(bubble_sort(values))
        trace = tb.build()
    """

    def __init__(self, operation: str = ""):
        self.operation: str         = operation
        self._buffer:   List[Frame] = []

    def append(self, frame: Frame) -> None:
        self._buffer.append(frame)

    def extend(self, frames: Iterable[Frame]) -> None:
        for frame in frames:
            self.append(frame)

    def __len__(self) -> int:
        return len(self._buffer)

    def build(self) -> Trace:
        trace = finalize(Trace(self._buffer, operation=self.operation))
        logger.debug("Built trace %s with %d frames", self.operation, len(trace))
        return trace


# ---------------------------------------------------------------------------
# LazyTrace  (online-generated frames for Structure Mutators)
# ---------------------------------------------------------------------------
class LazyTrace:
    """
    Frame source that synthesizes frame i only when the Player asks for it.

    The wrapped generator is advanced exactly once per fetch, so any
    structural mutation coded just before a `yield` happens at the moment
    the Player displays that frame, never earlier.  Frames already pulled
    are buffered, so reset() + replay does not re-run the mutation.
    """

    def __init__(self, frames: Iterator[Frame], operation: str = ""):
        self.operation:  str                      = operation
        self._frames:    Optional[Iterator[Frame]] = iter(frames)
        self._buffer:    List[Frame]              = []
        self._exhausted: bool                     = False

    def __len__(self) -> int:
        return len(self._buffer)

    def __getitem__(self, idx):
        return self._buffer[idx]

    def __repr__(self) -> str:
        state = "done" if self._exhausted else "open"
        return f"LazyTrace(operation={self.operation!r}, frames={len(self._buffer)}, {state})"

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def frames(self) -> Tuple[Frame, ...]:
        return tuple(self._buffer)

    def fetch(self, idx: int) -> Optional[Frame]:
        while idx >= len(self._buffer) and not self._exhausted:
            self._pull()
        if 0 <= idx < len(self._buffer):
            return self._buffer[idx]
        return None

    def close(self) -> None:
        """Drop the generator; frames not yet synthesized never happen."""
        if self._frames is not None and hasattr(self._frames, "close"):
            self._frames.close()
        self._frames = None
        self._exhausted = True

    def to_trace(self) -> Trace:
        """Pull everything and return the equivalent finalized Trace."""
        while not self._exhausted:
            self._pull()
        return finalize(Trace(self._buffer, operation=self.operation))

    # ------------------------------------------------------------------
    def _pull(self) -> None:
        if self._frames is None:
            self._exhausted = True
            return
        try:
            frame = next(self._frames)
        except StopIteration:
            self._frames = None
            self._exhausted = True
            if not self._buffer or not self._buffer[-1].is_terminal:
                raise MalformedTrace(
                    f"Lazy trace for {self.operation or '?'} ended without a terminal frame"
                ) from None
            return

        self._buffer.append(frame)
        if frame.is_terminal:
            self._expect_end()

    def _expect_end(self) -> None:
        try:
            extra = next(self._frames)
        except StopIteration:
            self._frames = None
            self._exhausted = True
            return
        self.close()
        raise MalformedTrace(
            f"Lazy trace for {self.operation or '?'} produced "
            f"'{extra.kind.value}' after its terminal frame"
        )
