"""
queue.py — Queue Mutator
=========================
FIFO over a deque; the front is index 0, the rear the last index.
"""

from collections import deque
from typing import Any, Deque, Iterable, List

from engine.errors import EmptyStructure
from engine.frame import LazyTrace, StepKind
from engine.validation import Number, parse_number
from mutators.base import Steps, StructureMutator


class QueueMutator(StructureMutator):
    name       = "queue"
    OPERATIONS = ("enqueue", "dequeue", "front", "rear", "clear")

    def __init__(self, values: Iterable[Number] = ()):
        self.items: Deque[Number] = deque(values)

    def snapshot(self) -> List[Number]:
        return list(self.items)

    def enqueue(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        return self.lazy("enqueue", self._enqueue(val))

    def _enqueue(self, val: Number) -> Steps:
        self.items.append(val)
        yield self.frame(StepKind.INSERT, len(self.items) - 1)
        yield self.done(f"Enqueued {val} to the queue")

    def dequeue(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Queue is empty, cannot dequeue", "queue")
        return self.lazy("dequeue", self._dequeue())

    def _dequeue(self) -> Steps:
        yield self.frame(StepKind.SELECT, 0)
        value = self.items.popleft()
        yield self.frame(StepKind.REMOVE, 0, value=value)
        yield self.done(f"Dequeued {value} from the queue", value=value)

    def front(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Queue is empty, no front element", "queue")
        return self.lazy("front", self._peek_at(0, "Front"))

    def rear(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Queue is empty, no rear element", "queue")
        return self.lazy("rear", self._peek_at(len(self.items) - 1, "Rear"))

    def _peek_at(self, idx: int, label: str) -> Steps:
        yield self.frame(StepKind.PEEK, idx)
        value = self.items[idx]
        yield self.done(f"{label} element is {value}", value=value)

    def clear(self) -> LazyTrace:
        if not self.items:
            raise EmptyStructure("Queue is already empty", "queue")
        return self.lazy("clear", self._clear())

    def _clear(self) -> Steps:
        yield self.frame(StepKind.SELECT, *range(len(self.items)))
        self.items.clear()
        yield self.frame(StepKind.CLEAR)
        yield self.done("Queue cleared")
