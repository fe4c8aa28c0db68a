"""
engine/
-------
Frame model, playback and highlight projection.

    from engine import Frame, Trace, PlaybackSession, project

Recording (engine.recorder) and screens (engine.screen) depend on the
algorithm registry and are imported from their own modules.
"""

from engine.errors    import EmptyStructure, EngineError, InvalidInput, MalformedTrace
from engine.frame     import (
    Family,
    Frame,
    LazyTrace,
    PathKind,
    SearchKind,
    SortKind,
    StepKind,
    Trace,
    TraceBuilder,
    TraversalKind,
    append_frame,
    finalize,
)
from engine.player    import (
    DEFAULT_SPEED,
    PlaybackSession,
    PlaybackStatus,
    create_session,
    delay,
    pause,
    play,
    reset,
    resume,
    set_speed,
)
from engine.projector import HighlightState, project
from engine.scheduler import PolledScheduler, TimerHandle

__all__ = [
    "EngineError",
    "InvalidInput",
    "EmptyStructure",
    "MalformedTrace",
    "Family",
    "Frame",
    "Trace",
    "TraceBuilder",
    "LazyTrace",
    "SortKind",
    "SearchKind",
    "TraversalKind",
    "PathKind",
    "StepKind",
    "append_frame",
    "finalize",
    "PlaybackSession",
    "PlaybackStatus",
    "DEFAULT_SPEED",
    "create_session",
    "delay",
    "play",
    "pause",
    "resume",
    "reset",
    "set_speed",
    "HighlightState",
    "project",
    "PolledScheduler",
    "TimerHandle",
]
