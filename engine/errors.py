"""
errors.py — Engine Error Taxonomy
==================================
Two kinds of failure exist in the engine:

  • InvalidInput    – the user typed something we cannot act on (a word
                      where a number belongs, an index past the end, a
                      vertex that does not exist).  Recovered locally: the
                      caller shows `message` and no Trace / session is made.
  • MalformedTrace  – a Recorder or Mutator broke the terminal-frame
                      invariant.  This is a programmer error and is never
                      caught inside the engine.

Degenerate-but-legal inputs (searching outside the array bounds, start ==
end on the grid) are NOT errors: they end in a `not-found` terminal frame.
"""


class EngineError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidInput(EngineError):
    """
    Attributes:
        message : User-facing text, e.g. "Index out of bounds. Valid range: 0 to 4".
        field   : Name of the offending input ("index", "value", …) or None.
    """

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field   = field


class EmptyStructure(InvalidInput):
    """Pop / peek / dequeue / clear / search requested on an empty structure."""


class MalformedTrace(EngineError):
    """A Trace violated the single-terminal-frame-at-the-end invariant."""
