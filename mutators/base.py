"""
base.py — Structure Mutator Base
=================================
A Structure Mutator owns one live structure and turns each user action
(insert_at, pop, search, …) into a LazyTrace: a short chain of frames
synthesized one at a time as the Player asks for them.

Contract for every operation:
  1. Validate all arguments immediately, raising InvalidInput /
     EmptyStructure before any frame exists.
  2. Return a LazyTrace over a private generator.  The generator applies
     the structural change right before yielding the frame that shows it,
     so a paused session never reflects a change the user has not seen.
  3. The chain ends in one terminal frame: complete (with a message), or
     found / not-found for searches.
"""

import inspect
import logging
from typing import Any, Dict, Iterator, Tuple

from engine.errors import InvalidInput
from engine.frame import Frame, LazyTrace, StepKind

logger = logging.getLogger(__name__)

Steps = Iterator[Frame]


class StructureMutator:
    """
    Subclasses set `name` and `OPERATIONS` and implement snapshot().
    """

    name:       str             = "structure"
    OPERATIONS: Tuple[str, ...] = ()

    def snapshot(self) -> Any:
        raise NotImplementedError

    def to_dict(self) -> dict:
        return {"kind": self.name, "contents": self.snapshot()}

    # ------------------------------------------------------------------
    # Dispatch by name (the web layer's entry point)
    # ------------------------------------------------------------------
    def apply(self, operation: str, params: Dict[str, Any]) -> LazyTrace:
        if operation not in self.OPERATIONS:
            raise InvalidInput(
                f"Unknown {self.name} operation {operation!r}; "
                f"choose one of {', '.join(self.OPERATIONS)}",
                "operation",
            )
        method = getattr(self, operation)
        try:
            inspect.signature(method).bind(**params)
        except TypeError:
            expected = ", ".join(inspect.signature(method).parameters) or "no parameters"
            raise InvalidInput(
                f"{operation} expects: {expected}", "params"
            ) from None
        return method(**params)

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------
    def frame(self, kind: StepKind, *subjects: Any, **auxiliary: Any) -> Frame:
        return Frame.of(kind, subjects, self.snapshot(), **auxiliary)

    def done(self, message: str, **auxiliary: Any) -> Frame:
        return self.frame(StepKind.COMPLETE, message=message, **auxiliary)

    def lazy(self, operation: str, steps: Steps) -> LazyTrace:
        logger.debug("%s.%s queued", self.name, operation)
        return LazyTrace(steps, operation=f"{self.name}.{operation}")
