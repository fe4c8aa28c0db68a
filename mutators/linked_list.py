"""
linked_list.py — Linked List Mutator
=====================================
Every operation walks the list from the head the way a singly linked list
has to, probing one node per frame, before the link change happens.
"""

from typing import Any, Iterable, List

from engine.errors import EmptyStructure, InvalidInput
from engine.frame import LazyTrace, StepKind
from engine.validation import Number, parse_int, parse_number
from mutators.base import Steps, StructureMutator
from structures.linked_list import LinkedList


class LinkedListMutator(StructureMutator):
    name       = "linked_list"
    OPERATIONS = ("append", "prepend", "insert_at", "remove_at", "search")

    def __init__(self, values: Iterable[Number] = ()):
        self.list = LinkedList(values)

    def snapshot(self) -> List[Any]:
        return self.list.to_list()

    # ------------------------------------------------------------------
    def append(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        return self.lazy("append", self._append(val))

    def _append(self, val: Number) -> Steps:
        for i in range(len(self.list)):
            yield self.frame(StepKind.PROBE, i)
        self.list.append(val)
        yield self.frame(StepKind.INSERT, len(self.list) - 1)
        yield self.done(f"Appended {val} to the end of the list")

    # ------------------------------------------------------------------
    def prepend(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        return self.lazy("prepend", self._prepend(val))

    def _prepend(self, val: Number) -> Steps:
        if len(self.list):
            yield self.frame(StepKind.PROBE, 0)
        self.list.prepend(val)
        yield self.frame(StepKind.INSERT, 0)
        yield self.done(f"Prepended {val} to the beginning of the list")

    # ------------------------------------------------------------------
    def insert_at(self, value: Any, position: Any) -> LazyTrace:
        val = parse_number(value, "number")
        pos = parse_int(position, "position")
        if pos < 0 or pos > len(self.list):
            raise InvalidInput(
                f"Position out of bounds. Valid range: 0 to {len(self.list)}", "position"
            )
        return self.lazy("insert_at", self._insert_at(val, pos))

    def _insert_at(self, val: Number, pos: int) -> Steps:
        for i in range(min(pos + 1, len(self.list))):
            yield self.frame(StepKind.PROBE, i)
        self.list.insert_at(val, pos)
        yield self.frame(StepKind.INSERT, pos)
        yield self.done(f"Inserted {val} at position {pos}")

    # ------------------------------------------------------------------
    def remove_at(self, position: Any) -> LazyTrace:
        if not len(self.list):
            raise EmptyStructure("List is empty", "position")
        pos = parse_int(position, "position")
        if pos < 0 or pos >= len(self.list):
            raise InvalidInput(
                f"Position out of bounds. Valid range: 0 to {len(self.list) - 1}", "position"
            )
        return self.lazy("remove_at", self._remove_at(pos))

    def _remove_at(self, pos: int) -> Steps:
        for i in range(pos):
            yield self.frame(StepKind.PROBE, i)
        yield self.frame(StepKind.SELECT, pos)
        removed = self.list.remove_at(pos)
        yield self.frame(StepKind.REMOVE, pos, value=removed)
        yield self.done(f"Removed value {removed} from position {pos}")

    # ------------------------------------------------------------------
    def search(self, value: Any) -> LazyTrace:
        if not len(self.list):
            raise EmptyStructure("List is empty", "value")
        target = parse_number(value, "search value")
        return self.lazy("search", self._search(target))

    def _search(self, target: Number) -> Steps:
        for i, v in enumerate(self.list):
            yield self.frame(StepKind.PROBE, i)
            if v == target:
                yield self.frame(StepKind.FOUND, i, message=f"Found value {target} at position {i}")
                return
        yield self.frame(StepKind.NOT_FOUND, message=f"Value {target} not found in the list")
