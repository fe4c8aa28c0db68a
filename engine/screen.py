"""
screen.py — Screens & Workspace
================================
A Screen pairs exactly one live structure with at most one PlaybackSession
and the scheduler that drives it.  The Workspace owns one Screen per view
of the application.

    ws = Workspace(load_config(), seed=7)
    sorting = ws.get("sorting")
    sorting.record("quick_sort")
    sorting.play()
    …
    sorting.state()          # pumps due ticks, then reports

Two kinds of screens:

    algorithm screens   sorting, searching, graph, pathfinding
                        record(operation, params) builds a Trace up front
    structure screens   array, linked_list, stack, queue, tree
                        mutate(operation, params) hands a LazyTrace to the
                        session and starts playing it

Every public method takes the screen's lock.  A host with several request
threads therefore still drives each session from one thread at a time.
"""

import logging
import random
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

from algorithms import get_algorithm
from engine.errors import InvalidInput
from engine.frame import Family
from engine.player import (
    DEFAULT_SPEED,
    FrameSource,
    PlaybackSession,
    clamp_speed,
    create_session,
)
from engine.recorder import TraceSummary, record_with_summary
from engine.scheduler import PolledScheduler
from engine.validation import parse_int, parse_number, parse_values
from mutators import MUTATORS, StructureMutator
from settings import AppConfig
from structures.graph import Graph
from structures.grid import Grid

logger = logging.getLogger(__name__)

ALGORITHM_SCREENS: Dict[str, Family] = {
    "sorting":     Family.SORTING,
    "searching":   Family.SEARCHING,
    "graph":       Family.TRAVERSAL,
    "pathfinding": Family.PATHFINDING,
}
STRUCTURE_SCREENS = ("array", "linked_list", "stack", "queue", "tree")


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------
class Screen:
    """
    Attributes:
        name      : Screen key ("sorting", "stack", …).
        family    : Algorithm family for algorithm screens, None otherwise.
        structure : The live data: a list of numbers, a Graph, a Grid or a
                    StructureMutator.
        scheduler : Ticks for this screen's session only.
        session   : The current PlaybackSession, None until the first
                    record / mutate.
        summary   : TraceSummary of the last recorded Trace.
        speed     : Speed handed to the next session.
    """

    def __init__(
        self,
        name: str,
        structure: Any,
        family: Optional[Family] = None,
        speed: int = DEFAULT_SPEED,
        scheduler: Optional[PolledScheduler] = None,
    ):
        self.name:      str                       = name
        self.family:    Optional[Family]          = family
        self.structure: Any                       = structure
        self.scheduler: PolledScheduler           = scheduler or PolledScheduler()
        self.session:   Optional[PlaybackSession] = None
        self.summary:   Optional[TraceSummary]    = None
        self.speed:     int                       = clamp_speed(parse_int(speed, "speed"))
        self.lock                                 = threading.RLock()

    @property
    def is_structure_screen(self) -> bool:
        return isinstance(self.structure, StructureMutator)

    # ------------------------------------------------------------------
    # Starting an operation
    # ------------------------------------------------------------------
    def record(self, operation: str, params: Optional[Mapping[str, Any]] = None) -> dict:
        """Record `operation` against the structure and bind a fresh IDLE session."""
        with self.lock:
            if self.family is None:
                raise InvalidInput(
                    f"The {self.name} screen has no algorithms to record", "operation"
                )
            info = get_algorithm(operation)
            if info is None or info.family != self.family:
                raise InvalidInput(
                    f"Unknown {self.family.value} algorithm: {operation}", "operation"
                )
            trace, summary = record_with_summary(operation, self.structure, params)
            self._bind(trace)
            self.summary = summary
            return self.state()

    def mutate(
        self,
        operation: str,
        params: Optional[Mapping[str, Any]] = None,
        autoplay: bool = True,
    ) -> dict:
        """
        Run a structure operation.  Arguments are validated before the old
        session is touched, so a refused operation leaves the screen as it was.
        """
        with self.lock:
            if not self.is_structure_screen:
                raise InvalidInput(
                    f"The {self.name} screen has no structure operations", "operation"
                )
            lazy = self.structure.apply(operation, dict(params or {}))
            self._bind(lazy)
            self.summary = None
            if autoplay:
                self.session.play()
            return self.state()

    def replace_structure(self, structure: Any) -> dict:
        """Swap in new data; any session over the old data is dropped."""
        with self.lock:
            self._drop_session()
            self.structure = structure
            logger.debug("%s: structure replaced", self.name)
            return self.state()

    def edit(self, change: Callable[[Any], bool]) -> bool:
        """
        Apply an in-place edit to the structure (grid walls, endpoints…).
        `change` returns whether anything changed; a change drops the session.
        """
        with self.lock:
            changed = change(self.structure)
            if changed:
                self._drop_session()
            return changed

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def play(self) -> dict:
        with self.lock:
            self._require_session().play()
            return self.state()

    def pause(self) -> dict:
        with self.lock:
            self.scheduler.pump()
            self._require_session().pause()
            return self.state()

    def resume(self) -> dict:
        with self.lock:
            self._require_session().resume()
            return self.state()

    def reset(self) -> dict:
        with self.lock:
            self._require_session().reset()
            return self.state()

    def step(self) -> dict:
        with self.lock:
            self._require_session().step()
            return self.state()

    def set_speed(self, speed: Any) -> dict:
        """Without a session the speed is simply stored for the next one."""
        with self.lock:
            if self.session is None:
                self.speed = clamp_speed(parse_int(speed, "speed"))
            else:
                self.speed = self.session.set_speed(speed)
            return self.state()

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def pump(self) -> int:
        with self.lock:
            return self.scheduler.pump()

    def state(self) -> dict:
        with self.lock:
            self.scheduler.pump()
            return {
                "screen":    self.name,
                "family":    self.family.value if self.family else None,
                "structure": self._structure_dict(),
                "speed":     self.speed,
                "session":   self.session.to_dict() if self.session else None,
                "summary":   self.summary.to_dict() if self.summary else None,
            }

    def close(self) -> None:
        with self.lock:
            self._drop_session()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _bind(self, trace: FrameSource) -> None:
        self._drop_session()
        self.session = create_session(trace, speed=self.speed, scheduler=self.scheduler)
        logger.debug("%s: bound %s", self.name, trace.operation)

    def _drop_session(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None
            self.summary = None

    def _require_session(self) -> PlaybackSession:
        if self.session is None:
            verb = "Run an operation" if self.is_structure_screen else "Record an algorithm"
            raise InvalidInput(f"{verb} on the {self.name} screen first", "session")
        return self.session

    def _structure_dict(self) -> dict:
        if isinstance(self.structure, list):
            return {"values": list(self.structure)}
        return self.structure.to_dict()


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------
class Workspace:
    """
    One Screen per view, each with its own scheduler on a shared clock.

    Attributes:
        config  : AppConfig the default contents are sized from.
        screens : {name: Screen}
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config: AppConfig        = config or AppConfig()
        self.rng:    random.Random    = random.Random(seed)
        self.clock                    = clock
        self.screens: Dict[str, Screen] = {}

        for name, family in ALGORITHM_SCREENS.items():
            self.screens[name] = self._screen(name, self.build_structure(name, {}), family)
        for name in STRUCTURE_SCREENS:
            self.screens[name] = self._screen(name, self.build_structure(name, {}))

    def get(self, name: str) -> Optional[Screen]:
        return self.screens.get(name)

    @property
    def names(self) -> List[str]:
        return list(self.screens)

    def close(self) -> None:
        for screen in self.screens.values():
            screen.close()

    def to_dict(self) -> dict:
        return {
            name: {
                "family":     screen.family.value if screen.family else None,
                "operations": list(screen.structure.OPERATIONS)
                              if screen.is_structure_screen else None,
            }
            for name, screen in self.screens.items()
        }

    # ------------------------------------------------------------------
    # Structure factories
    # ------------------------------------------------------------------
    def build_structure(self, name: str, payload: Mapping[str, Any]) -> Any:
        """
        Build the data for screen `name` from a request payload.  An empty
        payload gives the screen's default (random) contents.
        """
        if name == "sorting":
            return self._array(payload, self.config.sort_array_size, sort=False)
        if name == "searching":
            return self._array(payload, self.config.search_array_size, sort=True)
        if name == "graph":
            return self._graph(payload)
        if name == "pathfinding":
            return self._grid(payload)
        if name in MUTATORS:
            values = parse_values(payload.get("values", []))
            return MUTATORS[name](values)
        raise InvalidInput(f"Unknown screen: {name}", "screen")

    def random_values(self, size: int, sort: bool = False) -> List[int]:
        if sort:
            return sorted(self.rng.randrange(100) for _ in range(size))
        return [self.rng.randrange(100) + 5 for _ in range(size)]

    def _array(self, payload: Mapping[str, Any], default_size: int, sort: bool) -> List[Any]:
        if "values" in payload:
            values = parse_values(payload["values"])
            return sorted(values) if sort else values
        size = parse_int(payload.get("size", default_size), "size")
        if not 1 <= size <= 100:
            raise InvalidInput("Array size must be between 1 and 100", "size")
        return self.random_values(size, sort=sort)

    def _graph(self, payload: Mapping[str, Any]) -> Graph:
        directed = bool(payload.get("directed", False))
        if "adjacency" in payload:
            return Graph.from_adjacency_list(str(payload["adjacency"]), directed=directed)
        if "vertices" in payload and isinstance(payload["vertices"], list):
            return Graph.from_dict(dict(payload))
        probability = parse_number(
            payload.get("edge_probability", self.config.edge_probability), "edge_probability"
        )
        if not 0 <= probability <= 1:
            raise InvalidInput("Edge probability must be between 0 and 1", "edge_probability")
        return Graph.generate_random(
            num_vertices=parse_int(
                payload.get("num_vertices", self.config.graph_vertices), "num_vertices"
            ),
            edge_probability=probability,
            directed=directed,
            seed=payload.get("seed", self.rng.randrange(2 ** 32)),
        )

    def _grid(self, payload: Mapping[str, Any]) -> Grid:
        rows = parse_int(payload.get("rows", self.config.grid_rows), "rows")
        cols = parse_int(payload.get("cols", self.config.grid_cols), "cols")
        if rows < 2 or cols < 2:
            raise InvalidInput("Grid needs at least two rows and two columns", "rows")
        start, end = self.config.grid_start, self.config.grid_end
        if not _fits(start, rows, cols) or not _fits(end, rows, cols):
            start, end = (0, 0), (rows - 1, cols - 1)
        grid = Grid(rows, cols, payload.get("start", start), payload.get("end", end))
        # Request input is refused here. Recorders handed a grid whose start
        # equals its end still answer with a not-found frame.
        if grid.start == grid.end:
            raise InvalidInput("Start and end must be different cells", "end")
        return grid

    def _screen(self, name: str, structure: Any, family: Optional[Family] = None) -> Screen:
        return Screen(
            name,
            structure,
            family=family,
            speed=self.config.default_speed,
            scheduler=PolledScheduler(self.clock),
        )


def _fits(coord: Any, rows: int, cols: int) -> bool:
    row, col = coord
    return 0 <= row < rows and 0 <= col < cols
