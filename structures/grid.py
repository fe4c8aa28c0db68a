"""
grid.py — Pathfinding Grid
===========================
rows × cols arena of cells keyed by (row, col).  The grid only holds what
the user edits (walls, weights, start / end).  Per-run search state
(distance, visited, previous) lives in the pathfinding recorder, never here,
so recording a trace leaves the grid exactly as it was.

Edit rules:
  - Walls are never placed on the start or end cell.
  - Start / end never move onto a wall or onto each other.
  - Rejected edits are no-ops and report False, so a drag-paint gesture
    crossing an endpoint keeps going.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from engine.errors import InvalidInput
from engine.validation import parse_coord, parse_int

Coord = Tuple[int, int]

DEFAULT_ROWS  = 15
DEFAULT_COLS  = 25
DEFAULT_START = (5, 5)
DEFAULT_END   = (5, 15)

# North, East, South, West
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


@dataclass
class Cell:
    row:     int
    col:     int
    is_wall: bool = False
    weight:  int  = 1

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col, "is_wall": self.is_wall, "weight": self.weight}


class Grid:
    """
    Attributes:
        rows, cols : Dimensions.
        start, end : (row, col) of the endpoints.
        cells      : {(row, col): Cell}
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        start: Coord = DEFAULT_START,
        end: Coord = DEFAULT_END,
    ):
        if rows < 1 or cols < 1:
            raise InvalidInput("Grid needs at least one row and one column", "grid")
        self.rows:  int = rows
        self.cols:  int = cols
        self.cells: Dict[Coord, Cell] = {
            (r, c): Cell(r, c) for r in range(rows) for c in range(cols)
        }
        self.start: Coord = parse_coord(start, rows, cols, "start")
        self.end:   Coord = parse_coord(end, rows, cols, "end")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __contains__(self, coord: Any) -> bool:
        return coord in self.cells

    def __iter__(self) -> Iterator[Cell]:
        """Row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield self.cells[(r, c)]

    def cell(self, coord: Any) -> Cell:
        return self.cells[parse_coord(coord, self.rows, self.cols)]

    def is_wall(self, coord: Coord) -> bool:
        return self.cells[coord].is_wall

    def neighbours(self, coord: Coord) -> List[Coord]:
        """In-bounds, non-wall neighbours in N, E, S, W order."""
        row, col = coord
        result = []
        for dr, dc in DIRECTIONS:
            nxt = (row + dr, col + dc)
            if nxt in self.cells and not self.cells[nxt].is_wall:
                result.append(nxt)
        return result

    def walls(self) -> List[Coord]:
        return [(c.row, c.col) for c in self if c.is_wall]

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def toggle_wall(self, coord: Any) -> bool:
        key = parse_coord(coord, self.rows, self.cols)
        if key in (self.start, self.end):
            return False
        cell = self.cells[key]
        cell.is_wall = not cell.is_wall
        return True

    def move_start(self, coord: Any) -> bool:
        key = parse_coord(coord, self.rows, self.cols, "start")
        if key == self.end or self.cells[key].is_wall:
            return False
        self.start = key
        return True

    def move_end(self, coord: Any) -> bool:
        key = parse_coord(coord, self.rows, self.cols, "end")
        if key == self.start or self.cells[key].is_wall:
            return False
        self.end = key
        return True

    def set_weight(self, coord: Any, weight: Any) -> None:
        value = parse_int(weight, "weight")
        if value < 1:
            raise InvalidInput("Weight must be at least 1", "weight")
        self.cells[parse_coord(coord, self.rows, self.cols)].weight = value

    def clear_walls(self) -> None:
        for cell in self.cells.values():
            cell.is_wall = False

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "rows":    self.rows,
            "cols":    self.cols,
            "start":   list(self.start),
            "end":     list(self.end),
            "walls":   [list(w) for w in self.walls()],
            "weights": [
                {"row": c.row, "col": c.col, "weight": c.weight}
                for c in self if c.weight != 1
            ],
        }

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.cols}, start={self.start}, end={self.end})"
