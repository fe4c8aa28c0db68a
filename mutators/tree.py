"""
tree.py — Binary Search Tree Mutator
=====================================
Frame subjects are node values (values are unique in the tree).  The
snapshot is the tree's drawing layout, so each frame can be rendered on
its own.

    insert(v)         probe the root → leaf path, then link v
    remove(v)         probe down to v, select it, then unlink it
    search(v)         probe the path; found / not-found
    traverse(order)   visit every node in in / pre / post order
    find_min/max      walk the left / right spine
"""

from typing import Any, Iterable, List

from engine.errors import EmptyStructure, InvalidInput
from engine.frame import LazyTrace, StepKind
from engine.validation import Number, parse_number
from mutators.base import Steps, StructureMutator
from structures.bst import TRAVERSAL_ORDERS, BinarySearchTree

ORDER_MESSAGES = {
    "in_order":   "In-order traversal: Left -> Root -> Right",
    "pre_order":  "Pre-order traversal: Root -> Left -> Right",
    "post_order": "Post-order traversal: Left -> Right -> Root",
}


class TreeMutator(StructureMutator):
    name       = "tree"
    OPERATIONS = ("insert", "remove", "search", "traverse", "find_min", "find_max")

    def __init__(self, values: Iterable[Number] = ()):
        self.tree = BinarySearchTree(values)

    def snapshot(self) -> List[dict]:
        return self.tree.layout()

    def to_dict(self) -> dict:
        return {
            "kind":     self.name,
            "contents": self.tree.layout(),
            "in_order": self.tree.in_order(),
        }

    # ------------------------------------------------------------------
    def insert(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        if val in self.tree:
            raise InvalidInput(f"Value {val} already exists in the tree", "value")
        return self.lazy("insert", self._insert(val))

    def _insert(self, val: Number) -> Steps:
        was_empty = not len(self.tree)
        for v in self.tree.search_path(val):
            yield self.frame(StepKind.PROBE, v)
        self.tree.insert(val)
        yield self.frame(StepKind.INSERT, val)
        if was_empty:
            yield self.done(f"Inserted {val} as the root node")
        else:
            yield self.done(f"Inserted {val} into the tree")

    # ------------------------------------------------------------------
    def remove(self, value: Any) -> LazyTrace:
        val = parse_number(value, "number")
        if val not in self.tree:
            raise InvalidInput(f"Value {val} does not exist in the tree", "value")
        return self.lazy("remove", self._remove(val))

    def _remove(self, val: Number) -> Steps:
        for v in self.tree.search_path(val)[:-1]:
            yield self.frame(StepKind.PROBE, v)
        yield self.frame(StepKind.SELECT, val)
        self.tree.remove(val)
        yield self.frame(StepKind.REMOVE, val)
        yield self.done(f"Removed {val} from the tree")

    # ------------------------------------------------------------------
    def search(self, value: Any) -> LazyTrace:
        if not len(self.tree):
            raise EmptyStructure("Tree is empty", "value")
        val = parse_number(value, "search value")
        return self.lazy("search", self._search(val))

    def _search(self, val: Number) -> Steps:
        path = self.tree.search_path(val)
        for v in path:
            yield self.frame(StepKind.PROBE, v)
        if path and path[-1] == val:
            yield self.frame(StepKind.FOUND, val, message=f"Found value {val} in the tree")
        else:
            yield self.frame(StepKind.NOT_FOUND, message=f"Value {val} not found in the tree")

    # ------------------------------------------------------------------
    def traverse(self, order: Any = "in_order") -> LazyTrace:
        if order not in TRAVERSAL_ORDERS:
            raise InvalidInput(
                f"Unknown traversal order {order!r}; choose one of {', '.join(TRAVERSAL_ORDERS)}",
                "order",
            )
        if not len(self.tree):
            raise EmptyStructure("Tree is empty", "order")
        return self.lazy("traverse", self._traverse(order))

    def _traverse(self, order: str) -> Steps:
        visited: List[Number] = []
        for v in self.tree.traverse(order):
            visited.append(v)
            yield self.frame(StepKind.VISIT, v, visited=visited)
        yield self.done(ORDER_MESSAGES[order], visited=visited)

    # ------------------------------------------------------------------
    def find_min(self) -> LazyTrace:
        if not len(self.tree):
            raise EmptyStructure("Tree is empty", "tree")
        return self.lazy("find_min", self._extreme(self.tree.min_path(), "Minimum"))

    def find_max(self) -> LazyTrace:
        if not len(self.tree):
            raise EmptyStructure("Tree is empty", "tree")
        return self.lazy("find_max", self._extreme(self.tree.max_path(), "Maximum"))

    def _extreme(self, path: List[Number], label: str) -> Steps:
        for v in path:
            yield self.frame(StepKind.PROBE, v)
        yield self.frame(StepKind.FOUND, path[-1], message=f"{label} value is {path[-1]}")
