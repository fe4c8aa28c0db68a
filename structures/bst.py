"""
bst.py — Binary Search Tree
============================
Arena-backed BST: nodes live in `_nodes` keyed by an integer id, and
`left` / `right` are ids.  Duplicate values are rejected, so a value
identifies its node and traversals report values.

layout() produces the drawing rows the view needs, breadth-first:
    {"value", "level", "position", "parent_position", "parent_level"}
where a left child sits at position*2 - 1 and a right child at position*2 + 1.
"""

import itertools
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from engine.errors import EmptyStructure, InvalidInput

TRAVERSAL_ORDERS = ("in_order", "pre_order", "post_order")


@dataclass
class TreeNode:
    value: Any
    left:  Optional[int] = None
    right: Optional[int] = None


class BinarySearchTree:

    def __init__(self, values: Iterable[Any] = ()):
        self._nodes: Dict[int, TreeNode] = {}
        self._ids   = itertools.count()
        self.root:  Optional[int] = None
        for v in values:
            self.insert(v)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, value: Any) -> bool:
        path = self.search_path(value)
        return bool(path) and path[-1] == value

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, value: Any) -> None:
        if value in self:
            raise InvalidInput(f"Value {value} already exists in the tree", "value")
        node_id = next(self._ids)
        self._nodes[node_id] = TreeNode(value)
        if self.root is None:
            self.root = node_id
            return

        cur = self._nodes[self.root]
        while True:
            side = "left" if value < cur.value else "right"
            child = getattr(cur, side)
            if child is None:
                setattr(cur, side, node_id)
                return
            cur = self._nodes[child]

    def remove(self, value: Any) -> None:
        """Delete `value`; a node with two children takes its in-order successor's value."""
        if value not in self:
            raise InvalidInput(f"Value {value} does not exist in the tree", "value")
        self.root = self._remove(self.root, value)

    def clear(self) -> None:
        self._nodes.clear()
        self.root = None

    def _remove(self, node_id: Optional[int], value: Any) -> Optional[int]:
        if node_id is None:
            return None
        node = self._nodes[node_id]
        if value < node.value:
            node.left = self._remove(node.left, value)
            return node_id
        if value > node.value:
            node.right = self._remove(node.right, value)
            return node_id

        if node.left is None or node.right is None:
            del self._nodes[node_id]
            return node.right if node.left is None else node.left

        succ = self._nodes[node.right]
        while succ.left is not None:
            succ = self._nodes[succ.left]
        node.value = succ.value
        node.right = self._remove(node.right, succ.value)
        return node_id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def search_path(self, value: Any) -> List[Any]:
        """Values on the way from the root towards `value`; ends in `value` if present."""
        path = []
        cur = self.root
        while cur is not None:
            node = self._nodes[cur]
            path.append(node.value)
            if value == node.value:
                break
            cur = node.left if value < node.value else node.right
        return path

    def min(self) -> Any:
        return self._extreme("left")[-1]

    def max(self) -> Any:
        return self._extreme("right")[-1]

    def min_path(self) -> List[Any]:
        return self._extreme("left")

    def max_path(self) -> List[Any]:
        return self._extreme("right")

    def _extreme(self, side: str) -> List[Any]:
        if self.root is None:
            raise EmptyStructure("Tree is empty", "tree")
        path = []
        cur: Optional[int] = self.root
        while cur is not None:
            node = self._nodes[cur]
            path.append(node.value)
            cur = getattr(node, side)
        return path

    def in_order(self) -> List[Any]:
        return self._walk(self.root, "in_order", [])

    def pre_order(self) -> List[Any]:
        return self._walk(self.root, "pre_order", [])

    def post_order(self) -> List[Any]:
        return self._walk(self.root, "post_order", [])

    def traverse(self, order: str) -> List[Any]:
        if order not in TRAVERSAL_ORDERS:
            raise InvalidInput(
                f"Unknown traversal order {order!r}; choose one of {', '.join(TRAVERSAL_ORDERS)}",
                "order",
            )
        return getattr(self, order)()

    def _walk(self, node_id: Optional[int], order: str, out: List[Any]) -> List[Any]:
        if node_id is None:
            return out
        node = self._nodes[node_id]
        if order == "pre_order":
            out.append(node.value)
        self._walk(node.left, order, out)
        if order == "in_order":
            out.append(node.value)
        self._walk(node.right, order, out)
        if order == "post_order":
            out.append(node.value)
        return out

    def layout(self) -> List[dict]:
        if self.root is None:
            return []
        rows = []
        queue = deque([(self.root, 0, 0, None)])
        while queue:
            node_id, level, position, parent = queue.popleft()
            node = self._nodes[node_id]
            rows.append({
                "value":           node.value,
                "level":           level,
                "position":        position,
                "parent_position": parent[1] if parent else None,
                "parent_level":    parent[0] if parent else None,
            })
            if node.left is not None:
                queue.append((node.left, level + 1, position * 2 - 1, (level, position)))
            if node.right is not None:
                queue.append((node.right, level + 1, position * 2 + 1, (level, position)))
        return rows
