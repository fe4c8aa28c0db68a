"""
tape.py — Frame Builders for Array Algorithms
==============================================
Convenience builders so sorting / searching generators don't have to
spell out snapshot and auxiliary on every Frame.

Usage inside an algorithm generator:
    tape = SortTape(values)          # works on tape.array, a private copy
    tape.array[0], tape.array[1] = tape.array[1], tape.array[0]
    yield tape.frame(SortKind.SWAP, 0, 1)
    yield tape.settle(1)             # sorted{1}, remembered cumulatively
"""

from typing import Any, List, Optional, Sequence

from engine.frame import Frame, SearchKind, SortKind
from engine.validation import Number


class SortTape:
    """
    Attributes:
        array  : Working copy the sort mutates in place.
        sorted : Indices announced final so far, in announcement order.
    """

    def __init__(self, values: Sequence[Number]):
        self.array:  List[Number] = list(values)
        self.sorted: List[int]    = []

    def frame(self, kind: SortKind, *subjects: int) -> Frame:
        return Frame.of(kind, subjects, snapshot=self.array, sorted=self.sorted)

    def settle(self, *indices: int) -> Frame:
        self.sorted.extend(indices)
        return self.frame(SortKind.SORTED, *indices)


class SearchTape:
    """
    Search never mutates its input, so every frame shares the same snapshot
    content.  `window` is [lo, mid, hi] for range-based searches.
    """

    def __init__(self, values: Sequence[Number]):
        self.array:  List[Number]          = list(values)
        self.window: Optional[List[int]]   = None

    def frame(self, kind: SearchKind, *subjects: int) -> Frame:
        extra: dict = {}
        if self.window is not None:
            extra["window"] = self.window
        return Frame.of(kind, subjects, snapshot=self.array, **extra)

    def compare(self, idx: int) -> Frame:
        return self.frame(SearchKind.COMPARE, idx)

    def found(self, idx: int) -> Frame:
        return self.frame(SearchKind.FOUND, idx)

    def not_found(self) -> Frame:
        return self.frame(SearchKind.NOT_FOUND)

    def value(self, idx: int) -> Any:
        return self.array[idx]
