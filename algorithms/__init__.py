"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every recordable algorithm.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, family, fn, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The recorder and the web layer both
consume it, so adding an algorithm is: write the generator, add one entry
here.  The family decides which structure and parameters the recorder
hands to `fn`:

    SORTING      fn(values)
    SEARCHING    fn(values, target)
    TRAVERSAL    fn(graph, start)
    PATHFINDING  fn(grid)
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from algorithms import pathfinding, searching, sorting, traversal
from engine.frame import Family


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                # registry key, e.g. "bubble_sort"
    label:            str                # human label, e.g. "Bubble Sort"
    family:           Family
    fn:               Callable           # the generator function
    description:      str  = ""          # one-liner for the UI card
    time_best:        str  = ""
    time_average:     str  = ""
    time_worst:       str  = ""
    space:            str  = ""
    requires_sorted:  bool = False       # binary / jump / interpolation

    def to_dict(self) -> dict:
        return {
            "key":             self.key,
            "label":           self.label,
            "family":          self.family.value,
            "description":     self.description,
            "complexity": {
                "best":    self.time_best,
                "average": self.time_average,
                "worst":   self.time_worst,
                "space":   self.space,
            },
            "requires_sorted": self.requires_sorted,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # ---------- sorting ----------
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", family=Family.SORTING, fn=sorting.bubble_sort,
        time_best="O(n)", time_average="O(n²)", time_worst="O(n²)", space="O(1)",
        description="Repeatedly swaps adjacent elements that are in the wrong order.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", family=Family.SORTING, fn=sorting.selection_sort,
        time_best="O(n²)", time_average="O(n²)", time_worst="O(n²)", space="O(1)",
        description="Selects the smallest unsorted element and moves it to the sorted region.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", family=Family.SORTING, fn=sorting.insertion_sort,
        time_best="O(n)", time_average="O(n²)", time_worst="O(n²)", space="O(1)",
        description="Builds the sorted array one item at a time by inserting each element in place.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", family=Family.SORTING, fn=sorting.merge_sort,
        time_best="O(n log n)", time_average="O(n log n)", time_worst="O(n log n)", space="O(n)",
        description="Divides the array in halves, sorts them recursively and merges the results.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", family=Family.SORTING, fn=sorting.quick_sort,
        time_best="O(n log n)", time_average="O(n log n)", time_worst="O(n²)", space="O(log n)",
        description="Partitions around a pivot so smaller elements go left and larger go right.",
    ),

    # ---------- searching ----------
    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", family=Family.SEARCHING, fn=searching.linear_search,
        time_best="O(1)", time_average="O(n)", time_worst="O(n)", space="O(1)",
        description="Checks every element one by one until the target is found.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", family=Family.SEARCHING, fn=searching.binary_search,
        time_best="O(1)", time_average="O(log n)", time_worst="O(log n)", space="O(1)",
        requires_sorted=True,
        description="Halves the search interval of a sorted array on every comparison.",
    ),

    "jump_search": AlgoInfo(
        key="jump_search", label="Jump Search", family=Family.SEARCHING, fn=searching.jump_search,
        time_best="O(1)", time_average="O(√n)", time_worst="O(√n)", space="O(1)",
        requires_sorted=True,
        description="Jumps ahead in √n blocks, then scans linearly inside the right block.",
    ),

    "interpolation_search": AlgoInfo(
        key="interpolation_search", label="Interpolation Search", family=Family.SEARCHING,
        fn=searching.interpolation_search,
        time_best="O(1)", time_average="O(log log n)", time_worst="O(n)", space="O(1)",
        requires_sorted=True,
        description="Estimates the target's position from its value on uniformly distributed data.",
    ),

    # ---------- graph traversal ----------
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", family=Family.TRAVERSAL, fn=traversal.bfs,
        time_best="O(V + E)", time_average="O(V + E)", time_worst="O(V + E)", space="O(V)",
        description="Explores layer by layer from the start vertex using a queue.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", family=Family.TRAVERSAL, fn=traversal.dfs,
        time_best="O(V + E)", time_average="O(V + E)", time_worst="O(V + E)", space="O(V)",
        description="Dives as deep as possible along each branch before backtracking.",
    ),

    # ---------- grid pathfinding ----------
    "grid_dijkstra": AlgoInfo(
        key="grid_dijkstra", label="Dijkstra's Algorithm", family=Family.PATHFINDING,
        fn=pathfinding.dijkstra,
        time_best="O(V²)", time_average="O(V²)", time_worst="O(V²)", space="O(V)",
        description="Settles the closest unvisited cell first. Optimal for non-negative weights.",
    ),

    "grid_astar": AlgoInfo(
        key="grid_astar", label="A* Search", family=Family.PATHFINDING, fn=pathfinding.astar,
        time_best="O(V²)", time_average="O(V²)", time_worst="O(V²)", space="O(V)",
        description="Dijkstra guided by the Manhattan distance to the goal.",
    ),

    "grid_bfs": AlgoInfo(
        key="grid_bfs", label="Breadth-First Search", family=Family.PATHFINDING, fn=pathfinding.bfs,
        time_best="O(V)", time_average="O(V)", time_worst="O(V)", space="O(V)",
        description="Floods the grid ring by ring. Shortest path only when every weight is 1.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: Family) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
]
