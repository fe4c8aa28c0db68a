"""
traversal.py — Graph Traversal Recorders
=========================================
Generator-based BFS and DFS over a Graph's adjacency lists.

Yields:
    start{v}             traversal begins at v
    process{v}           v is being expanded (dequeued / entered)
    visit{v, w}          w was unvisited: BFS enqueues it, DFS recurses into it
    revisit{v, w}        w was already visited (still shown, for continuity)
    backtrack{v}         DFS only: every neighbour of v is exhausted
    complete{}           terminal

snapshot is the visited order so far; auxiliary["queue"] (BFS) or
auxiliary["stack"] (DFS) holds the frontier.  A vertex enters the visited
order exactly once.

The start vertex is checked when bfs() / dfs() is called, before the
first frame is pulled.
"""

from collections import deque
from typing import Generator, List

from engine.errors import InvalidInput
from engine.frame import Frame, TraversalKind
from engine.validation import parse_vertex
from structures.graph import Graph

TraversalGen = Generator[Frame, None, None]


def _require_start(graph: Graph, start: str) -> str:
    label = parse_vertex(start, "start vertex")
    if not graph.has_vertex(label):
        raise InvalidInput(f"Start vertex {label} is not in the graph", "start")
    return label


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
def bfs(graph: Graph, start: str) -> TraversalGen:
    """
    Breadth-first: FIFO queue, neighbours in adjacency-list order.
    A vertex is marked visited when enqueued, not when dequeued.
    """
    return _bfs(graph, _require_start(graph, start))


def _bfs(graph: Graph, source: str) -> TraversalGen:
    visited: List[str] = [source]
    queue   = deque([source])

    yield Frame.of(TraversalKind.START, [source], visited, queue=list(queue))

    while queue:
        vertex = queue.popleft()
        yield Frame.of(TraversalKind.PROCESS, [vertex], visited, queue=list(queue))

        for nbr in graph.neighbours(vertex):
            if nbr not in visited:
                visited.append(nbr)
                queue.append(nbr)
                yield Frame.of(TraversalKind.VISIT, [vertex, nbr], visited, queue=list(queue))
            else:
                yield Frame.of(TraversalKind.REVISIT, [vertex, nbr], visited, queue=list(queue))

    yield Frame.of(TraversalKind.COMPLETE, [], visited, queue=[])


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------
def dfs(graph: Graph, start: str) -> TraversalGen:
    """
    Recursive depth-first: process(v), then for each neighbour in list order
    either visit + recurse or revisit, then backtrack(v).

    auxiliary["stack"] is the recursion path from the start vertex to the
    vertex currently being expanded.
    """
    return _dfs(graph, _require_start(graph, start))


def _dfs(graph: Graph, source: str) -> TraversalGen:
    visited: List[str] = []

    yield Frame.of(TraversalKind.START, [source], visited, stack=[source])
    yield from _dfs_visit(graph, source, [source], visited)
    yield Frame.of(TraversalKind.COMPLETE, [], visited, stack=[])


def _dfs_visit(graph: Graph, vertex: str, stack: List[str], visited: List[str]) -> TraversalGen:
    visited.append(vertex)
    yield Frame.of(TraversalKind.PROCESS, [vertex], visited, stack=stack)

    for nbr in graph.neighbours(vertex):
        if nbr not in visited:
            deeper = stack + [nbr]
            yield Frame.of(TraversalKind.VISIT, [vertex, nbr], visited, stack=deeper)
            yield from _dfs_visit(graph, nbr, deeper, visited)
        else:
            yield Frame.of(TraversalKind.REVISIT, [vertex, nbr], visited, stack=stack)

    yield Frame.of(TraversalKind.BACKTRACK, [vertex], visited, stack=stack[:-1])
