"""
array.py — Array Mutator
=========================
    create(values)          replace the contents
    insert_at(index, value) scan to index, shift the tail right, insert
    remove_at(index)        select, then remove
    search(value)           probe each index in turn
"""

from typing import Any, Iterable, List

from engine.errors import EmptyStructure
from engine.frame import LazyTrace, StepKind
from engine.validation import Number, parse_index, parse_number, parse_values
from mutators.base import Steps, StructureMutator


class ArrayMutator(StructureMutator):
    name       = "array"
    OPERATIONS = ("create", "insert_at", "remove_at", "search")

    def __init__(self, values: Iterable[Number] = ()):
        self.values: List[Number] = list(values)

    def snapshot(self) -> List[Number]:
        return list(self.values)

    # ------------------------------------------------------------------
    def create(self, values: Any) -> LazyTrace:
        parsed = parse_values(values)
        return self.lazy("create", self._create(parsed))

    def _create(self, parsed: List[Number]) -> Steps:
        self.values = list(parsed)
        yield self.frame(StepKind.INSERT, *range(len(parsed)))
        yield self.done("Array created successfully")

    # ------------------------------------------------------------------
    def insert_at(self, index: Any, value: Any) -> LazyTrace:
        idx = parse_index(index, 0, len(self.values), "index")
        val = parse_number(value, "value")
        return self.lazy("insert_at", self._insert_at(idx, val))

    def _insert_at(self, idx: int, val: Number) -> Steps:
        for i in range(idx):
            yield self.frame(StepKind.PROBE, i)
        for i in range(len(self.values) - 1, idx - 1, -1):
            yield self.frame(StepKind.SHIFT, i)
        self.values.insert(idx, val)
        yield self.frame(StepKind.INSERT, idx)
        yield self.done(f"Inserted {val} at index {idx}")

    # ------------------------------------------------------------------
    def remove_at(self, index: Any) -> LazyTrace:
        if not self.values:
            raise EmptyStructure("Array is empty", "index")
        idx = parse_index(index, 0, len(self.values) - 1, "index")
        return self.lazy("remove_at", self._remove_at(idx))

    def _remove_at(self, idx: int) -> Steps:
        yield self.frame(StepKind.SELECT, idx)
        removed = self.values.pop(idx)
        yield self.frame(StepKind.REMOVE, idx, value=removed)
        yield self.done(f"Deleted value {removed} from index {idx}")

    # ------------------------------------------------------------------
    def search(self, value: Any) -> LazyTrace:
        if not self.values:
            raise EmptyStructure("Array is empty", "value")
        target = parse_number(value, "search value")
        return self.lazy("search", self._search(target))

    def _search(self, target: Number) -> Steps:
        for i, v in enumerate(self.values):
            yield self.frame(StepKind.PROBE, i)
            if v == target:
                yield self.frame(StepKind.FOUND, i, message=f"Found {target} at index {i}")
                return
        yield self.frame(StepKind.NOT_FOUND, message=f"Value {target} not found in array")
