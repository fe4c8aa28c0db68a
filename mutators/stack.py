"""
stack.py — Stack Mutator
=========================
LIFO over a Python list; the top is the last index.
"""

from typing import Any, Iterable, List

from engine.errors import EmptyStructure
from engine.frame import LazyTrace, StepKind
from engine.validation import Number, parse_number
from mutators.base import Steps, StructureMutator


class StackMutator(StructureMutator):
    name       = "stack"
    OPERATIONS = ("push", "pop", "peek", "clear")

    def __init__(self, values: Iterable[Number] = ()):
        self.items: List[Number] = list(values)

    def snapshot(self) -> List[Number]:
        return list(self.items)

    @property
    def top(self) -> int:
        return len(self.items) - 1

    def push(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        return self.lazy("push", self._push(val))

    def _push(self, val: Number) -> Steps:
        self.items.append(val)
        yield self.frame(StepKind.PUSH, self.top)
        yield self.done(f"Pushed {val} to the stack")

    def pop(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Stack is empty, cannot pop", "stack")
        return self.lazy("pop", self._pop())

    def _pop(self) -> Steps:
        idx = self.top
        yield self.frame(StepKind.SELECT, idx)
        popped = self.items.pop()
        yield self.frame(StepKind.POP, idx, value=popped)
        yield self.done(f"Popped {popped} from the stack", value=popped)

    def peek(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Stack is empty, nothing to peek", "stack")
        return self.lazy("peek", self._peek())

    def _peek(self) -> Steps:
        yield self.frame(StepKind.PEEK, self.top)
        top_value = self.items[-1]
        yield self.done(f"Top element is {top_value}", value=top_value)

    def clear(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Stack is already empty", "stack")
        return self.lazy("clear", self._clear())

    def _clear(self) -> Steps:
        yield self.frame(StepKind.SELECT, *range(len(self.items)))
        self.items.clear()
        yield self.frame(StepKind.CLEAR)
        yield self.done("Stack cleared")
