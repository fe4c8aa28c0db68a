"""
linked_list.py — Singly Linked List
====================================
Arena-backed list: nodes live in `_nodes` keyed by an integer id and
point at each other through `next` ids, never through object references.

    ll = LinkedList([3, 1, 4])
    ll.insert_at(9, 1)          # [3, 9, 1, 4]
    ll.remove_at(0)             # → 3
    ll.search(4)                # → 2
"""

import itertools
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from engine.errors import EmptyStructure, InvalidInput


@dataclass
class ListNode:
    value: Any
    next:  Optional[int] = None


class LinkedList:
    """
    Attributes:
        head : id of the first node, or None.
        size : Number of nodes.
    """

    def __init__(self, values: Iterable[Any] = ()):
        self._nodes: Dict[int, ListNode] = {}
        self._ids   = itertools.count()
        self.head:  Optional[int] = None
        self.size:  int           = 0
        for v in values:
            self.append(v)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def append(self, value: Any) -> None:
        self._link_after(self._id_at(self.size - 1) if self.size else None, value)

    def prepend(self, value: Any) -> None:
        self._link_after(None, value)

    def insert_at(self, value: Any, position: int) -> None:
        if position < 0 or position > self.size:
            raise InvalidInput(
                f"Position out of bounds. Valid range: 0 to {self.size}", "position"
            )
        self._link_after(self._id_at(position - 1) if position else None, value)

    def remove_at(self, position: int) -> Any:
        if not self.size:
            raise EmptyStructure("List is empty", "position")
        if position < 0 or position >= self.size:
            raise InvalidInput(
                f"Position out of bounds. Valid range: 0 to {self.size - 1}", "position"
            )
        if position == 0:
            node_id = self.head
            self.head = self._nodes[node_id].next
        else:
            prev = self._nodes[self._id_at(position - 1)]
            node_id = prev.next
            prev.next = self._nodes[node_id].next

        node = self._nodes.pop(node_id)
        self.size -= 1
        return node.value

    def clear(self) -> None:
        self._nodes.clear()
        self.head = None
        self.size = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def search(self, value: Any) -> int:
        """Index of the first node holding `value`, or -1."""
        for idx, v in enumerate(self):
            if v == value:
                return idx
        return -1

    def to_list(self) -> List[Any]:
        return list(self)

    def __iter__(self) -> Iterator[Any]:
        cur = self.head
        while cur is not None:
            node = self._nodes[cur]
            yield node.value
            cur = node.next

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return " -> ".join(str(v) for v in self) or "LinkedList()"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _id_at(self, position: int) -> int:
        cur = self.head
        for _ in range(position):
            cur = self._nodes[cur].next
        return cur

    def _link_after(self, prev_id: Optional[int], value: Any) -> None:
        node_id = next(self._ids)
        if prev_id is None:
            self._nodes[node_id] = ListNode(value, self.head)
            self.head = node_id
        else:
            prev = self._nodes[prev_id]
            self._nodes[node_id] = ListNode(value, prev.next)
            prev.next = node_id
        self.size += 1
