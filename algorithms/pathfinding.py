"""
pathfinding.py — Grid Pathfinding Recorders
============================================
Dijkstra, A* and BFS on a Grid, 4-connected (N, E, S, W).

Yields:
    visit{(r, c)}    a node was settled, in visitedNodesInOrder order
    path{(r, c)}     one node of the shortest path, start → end
    found{end}       terminal, a path exists
    not-found{}      terminal, no path (or start == end)

Every frame carries:
    snapshot              {(r, c): distance} for every finite distance
    auxiliary["visited"]  settled nodes so far, in order
    auxiliary["path"]     path nodes shown so far
    auxiliary["queue"]    BFS only: the FIFO queue

Search state lives in an arena of _SearchNode keyed by coordinate;
`previous` is a key, not a reference, and the Grid is never touched.

Dijkstra / A*:
    The unvisited list is re-sorted every iteration (stable: ties keep
    their current order) by distance, or by distance + Manhattan heuristic
    for A*.  Stop when the closest node is at +inf or is the end node; the
    end node itself is therefore never in the visited list.  Entering a
    neighbour costs that neighbour's weight.

BFS:
    FIFO queue, start marked visited up front, stops as soon as the end is
    discovered.  Ignores weights, so it is only a shortest path on uniform
    grids.
"""

import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Generator, List, Optional

from engine.frame import Frame, PathKind
from structures.grid import Coord, Grid

PathGen = Generator[Frame, None, None]

INF = math.inf


@dataclass
class _SearchNode:
    coord:     Coord
    distance:  float           = INF
    heuristic: float           = INF
    visited:   bool            = False
    previous:  Optional[Coord] = None

    @property
    def total_distance(self) -> float:
        return self.distance + self.heuristic


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ---------------------------------------------------------------------------
# Run state shared by the three searches
# ---------------------------------------------------------------------------
class _Run:
    def __init__(self, grid: Grid):
        self.grid  = grid
        self.start = grid.start
        self.end   = grid.end
        self.arena: Dict[Coord, _SearchNode] = {
            (c.row, c.col): _SearchNode((c.row, c.col)) for c in grid
        }
        self.visited: List[Coord] = []
        self.path:    List[Coord] = []

    def unvisited_neighbours(self, coord: Coord) -> List[_SearchNode]:
        return [
            self.arena[n] for n in self.grid.neighbours(coord)
            if not self.arena[n].visited
        ]

    def distances(self) -> Dict[Coord, float]:
        return {k: n.distance for k, n in self.arena.items() if n.distance != INF}

    def frame(self, kind: PathKind, *subjects: Coord, **extra) -> Frame:
        return Frame.of(
            kind, subjects, self.distances(),
            visited=self.visited, path=self.path, **extra,
        )

    def settle(self, node: _SearchNode, **extra) -> Frame:
        node.visited = True
        self.visited.append(node.coord)
        return self.frame(PathKind.VISIT, node.coord, **extra)

    def shortest_path(self) -> List[Coord]:
        """Walk `previous` keys back from the end.  Empty when the end was never reached."""
        end = self.arena[self.end]
        if end.previous is None:
            return []
        path: List[Coord] = []
        cur: Optional[Coord] = self.end
        while cur is not None:
            path.append(cur)
            cur = self.arena[cur].previous
        path.reverse()
        return path

    def finish(self) -> PathGen:
        for coord in self.shortest_path():
            self.path.append(coord)
            yield self.frame(PathKind.PATH, coord)
        if self.path:
            yield self.frame(PathKind.FOUND, self.end)
        else:
            yield self.frame(PathKind.NOT_FOUND)


# ---------------------------------------------------------------------------
# Dijkstra / A*
# ---------------------------------------------------------------------------
def _best_first(
    grid: Grid,
    priority: Callable[[_SearchNode], float],
    heuristic: Optional[Callable[[Coord], float]] = None,
) -> PathGen:
    run = _Run(grid)
    if run.start == run.end:
        yield run.frame(PathKind.NOT_FOUND)
        return

    origin = run.arena[run.start]
    origin.distance = 0
    if heuristic is not None:
        origin.heuristic = heuristic(origin.coord)

    unvisited = list(run.arena.values())
    while unvisited:
        unvisited.sort(key=priority)
        closest = unvisited.pop(0)

        # trapped: everything left is unreachable
        if closest.distance == INF:
            break
        if closest.coord == run.end:
            break

        yield run.settle(closest)

        for nbr in run.unvisited_neighbours(closest.coord):
            new_distance = closest.distance + grid.cells[nbr.coord].weight
            if new_distance < nbr.distance:
                nbr.distance = new_distance
                if heuristic is not None:
                    nbr.heuristic = heuristic(nbr.coord)
                nbr.previous = closest.coord

    yield from run.finish()


def dijkstra(grid: Grid) -> PathGen:
    return _best_first(grid, priority=lambda n: n.distance)


def astar(grid: Grid) -> PathGen:
    goal = grid.end
    return _best_first(
        grid,
        priority=lambda n: n.total_distance,
        heuristic=lambda coord: manhattan(coord, goal),
    )


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------
def bfs(grid: Grid) -> PathGen:
    run = _Run(grid)
    if run.start == run.end:
        yield run.frame(PathKind.NOT_FOUND)
        return

    origin = run.arena[run.start]
    origin.distance = 0
    queue = deque([origin])
    yield run.settle(origin, queue=[origin.coord])

    while queue:
        current = queue.popleft()
        if current.coord == run.end:
            break

        reached_end = False
        for nbr in run.unvisited_neighbours(current.coord):
            nbr.previous = current.coord
            nbr.distance = current.distance + 1
            queue.append(nbr)
            yield run.settle(nbr, queue=[n.coord for n in queue])
            if nbr.coord == run.end:
                reached_end = True
                break
        if reached_end:
            break

    yield from run.finish()
