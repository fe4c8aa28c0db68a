"""
structures/
-----------
Live data structures the screens edit.  Public API:

    from structures import Graph, Grid, LinkedList, BinarySearchTree
"""

from structures.bst         import BinarySearchTree
from structures.graph       import Graph
from structures.grid        import Grid
from structures.linked_list import LinkedList

__all__ = [
    "BinarySearchTree",
    "Graph",
    "Grid",
    "LinkedList",
]
