"""
graph.py — Graph Container
===========================
Vertex-labelled adjacency-list graph for the BFS / DFS screen.

Responsibilities:
  1. CRUD on vertices & edges                (add / remove / has_edge)
  2. Adjacency queries                       (neighbours, edges)
  3. Random-graph factory                    (generate_random)
  4. Import from an adjacency-list text      (from_adjacency_list)
  5. Serialisation round-trip                (to_dict / from_dict)

Design decisions:
  - Vertices keep insertion order in `vertices`; `_adj[v]` is the ordered
    neighbour list.  Traversals walk it in that order, so the list order IS
    the tie-break rule.
  - For undirected graphs add_edge updates both lists, so adjacency is
    symmetric by construction.
  - Labels are upper-cased strings ("A", "B", …).
"""

import random
from typing import Dict, List, Optional, Tuple

from engine.errors import InvalidInput
from engine.validation import parse_vertex


class Graph:
    """
    Attributes:
        vertices : Ordered vertex labels.
        directed : Graph-level directedness.
        _adj     : {vertex: [neighbour, …]} in insertion order.
    """

    def __init__(self, directed: bool = False):
        self.vertices: List[str]            = []
        self.directed: bool                 = directed
        self._adj:     Dict[str, List[str]] = {}

    # ==================================================================
    # VERTEX CRUD
    # ==================================================================
    def add_vertex(self, vertex: str) -> str:
        label = parse_vertex(vertex)
        if label in self._adj:
            raise InvalidInput(f"Vertex {label} already exists", "vertex")
        self.vertices.append(label)
        self._adj[label] = []
        return label

    def remove_vertex(self, vertex: str) -> None:
        label = parse_vertex(vertex)
        if label not in self._adj:
            raise InvalidInput(f"Vertex {label} does not exist", "vertex")
        for v in self.vertices:
            self._adj[v] = [n for n in self._adj[v] if n != label]
        self.vertices.remove(label)
        del self._adj[label]

    def has_vertex(self, vertex: str) -> bool:
        return vertex in self._adj

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, a: str, b: str) -> Tuple[str, str]:
        """Connect a → b (and b → a when undirected).  Missing endpoints are created."""
        v1, v2 = parse_vertex(a, "vertex"), parse_vertex(b, "vertex")
        for v in (v1, v2):
            if v not in self._adj:
                self.add_vertex(v)
        if v2 in self._adj[v1]:
            raise InvalidInput(f"Edge {v1}-{v2} already exists", "edge")

        self._adj[v1].append(v2)
        if not self.directed and v1 not in self._adj[v2]:
            self._adj[v2].append(v1)
        return v1, v2

    def remove_edge(self, a: str, b: str) -> None:
        v1, v2 = parse_vertex(a, "vertex"), parse_vertex(b, "vertex")
        if not self.has_edge(v1, v2):
            raise InvalidInput(f"Edge {v1}-{v2} does not exist", "edge")
        self._adj[v1].remove(v2)
        if not self.directed and v1 in self._adj[v2]:
            self._adj[v2].remove(v1)

    def has_edge(self, a: str, b: str) -> bool:
        return a in self._adj and b in self._adj[a]

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, vertex: str) -> List[str]:
        return list(self._adj.get(vertex, []))

    def edges(self) -> List[Tuple[str, str]]:
        """Each undirected edge once (a < b); every directed edge as stored."""
        result = []
        for v in self.vertices:
            for n in self._adj[v]:
                if self.directed or v < n:
                    result.append((v, n))
        return result

    def adjacency(self) -> Dict[str, List[str]]:
        return {v: list(self._adj[v]) for v in self.vertices}

    def clear(self) -> None:
        self.vertices.clear()
        self._adj.clear()

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, vertices={len(self.vertices)}, edges={len(self.edges())})"

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed":  self.directed,
            "vertices":  list(self.vertices),
            "edges":     [list(e) for e in self.edges()],
            "adjacency": self.adjacency(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=bool(data.get("directed", False)))
        for v in data.get("vertices", []):
            g.add_vertex(v)
        for edge in data.get("edges", []):
            if not isinstance(edge, (list, tuple)) or len(edge) != 2:
                raise InvalidInput("Each edge needs exactly two vertices", "edge")
            g.add_edge(*edge)
        return g

    # ==================================================================
    # GENERATORS
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_vertices: int = 6,
        edge_probability: float = 0.4,
        directed: bool = False,
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph on vertices A, B, C, …
        Each possible edge is included with probability `edge_probability`.
        """
        if not 1 <= num_vertices <= 26:
            raise InvalidInput("Number of vertices must be between 1 and 26", "vertices")
        rng = random.Random(seed)

        g = cls(directed=directed)
        labels = [chr(65 + i) for i in range(num_vertices)]
        for label in labels:
            g.add_vertex(label)

        for i in range(num_vertices):
            for j in range(0 if directed else i + 1, num_vertices):
                if i != j and rng.random() < edge_probability:
                    g.add_edge(labels[i], labels[j])
        return g

    @classmethod
    def from_adjacency_list(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a simple text adjacency list, one vertex per line:

            A: B C D
            B -> C
            # comments and blank lines are ignored
        """
        g = cls(directed=directed)
        for raw_line in text.strip().splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                src, _, rest = line.partition(":")
            elif "->" in line:
                src, _, rest = line.partition("->")
            else:
                raise InvalidInput(f"Cannot parse adjacency line: {line!r}", "adjacency")

            src_label = parse_vertex(src)
            if not g.has_vertex(src_label):
                g.add_vertex(src_label)
            for token in rest.replace(",", " ").split():
                target = parse_vertex(token)
                if not g.has_edge(src_label, target):
                    g.add_edge(src_label, target)
        return g
