"""
player.py — Stepped Playback Engine
====================================
A PlaybackSession owns a cursor into one frame source (an eager Trace or
a LazyTrace fed by a Structure Mutator) and advances it on a timer.

State machine:
    IDLE     →  play()            →  PLAYING
    PLAYING  →  pause()           →  PAUSED
    PAUSED   →  resume() / play() →  PLAYING
    PLAYING  →  (last frame shown) → COMPLETED
    any      →  reset()           →  IDLE   (cursor = 0)

Cursor semantics:
    cursor is the number of frames shown so far, 0 ≤ cursor ≤ len(trace).
    The frame on screen is trace[cursor - 1] (nothing when cursor == 0).
    COMPLETED  ⇔  cursor == len(trace).

Timing:
    delay(speed) = clamp(1000 − 9·speed, 10, 991) ms, speed ∈ [1, 100].
    Exactly one tick is pending while PLAYING; pause() / reset() cancel it
    synchronously so a late timer is a no-op.

Thread safety:
  Not thread-safe.  All calls, including the scheduler's pump(), must come
  from one thread.  Screen wraps each request in a lock for the web host.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Union

from engine.errors import MalformedTrace
from engine.frame import Frame, LazyTrace, Trace, finalize
from engine.projector import HighlightState, project
from engine.scheduler import PolledScheduler, TimerHandle
from engine.validation import parse_int

logger = logging.getLogger(__name__)

FrameSource = Union[Trace, LazyTrace]

MIN_SPEED     = 1
MAX_SPEED     = 100
DEFAULT_SPEED = 50


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackStatus(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    PAUSED    = "paused"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Speed → delay
# ---------------------------------------------------------------------------
def clamp_speed(speed: int) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, speed))


def delay(speed: int) -> int:
    """Milliseconds between ticks: higher speed, shorter delay."""
    return max(10, min(991, 1000 - 9 * clamp_speed(speed)))


# ---------------------------------------------------------------------------
# PlaybackSession
# ---------------------------------------------------------------------------
class PlaybackSession:
    """
    Attributes:
        trace     : The bound frame source.
        cursor    : Frames shown so far.
        status    : Current PlaybackStatus.
        speed     : 1-100.
        scheduler : Where ticks are scheduled.
        on_frame  : Optional callback(frame, highlight) fired after every
                    cursor change.  The view hooks its re-render here.
    """

    def __init__(
        self,
        trace: FrameSource,
        scheduler: PolledScheduler,
        speed: int = DEFAULT_SPEED,
        on_frame: Optional[Callable[[Optional[Frame], HighlightState], None]] = None,
    ):
        _check_source(trace)
        self.trace:     FrameSource      = trace
        self.scheduler: PolledScheduler  = scheduler
        self.speed:     int              = clamp_speed(parse_int(speed, "speed"))
        self.on_frame                    = on_frame
        self.cursor:    int              = 0
        self.status:    PlaybackStatus   = PlaybackStatus.IDLE
        self._pending:  Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.status in (PlaybackStatus.PLAYING, PlaybackStatus.COMPLETED):
            return
        logger.debug("%s: %s -> playing at speed %d", self._name, self.status.value, self.speed)
        self.status = PlaybackStatus.PLAYING
        self._schedule()

    def resume(self) -> None:
        self.play()

    def pause(self) -> None:
        if self.status != PlaybackStatus.PLAYING:
            return
        self._cancel()
        self.status = PlaybackStatus.PAUSED
        logger.debug("%s: paused at %d", self._name, self.cursor)

    def reset(self, trace: Optional[FrameSource] = None) -> None:
        """Back to a fresh IDLE session, optionally bound to a new trace."""
        self._cancel()
        if trace is not None and trace is not self.trace:
            _check_source(trace)
            self._discard_source()
            self.trace = trace
        if self.cursor or self.status != PlaybackStatus.IDLE:
            logger.debug("%s: reset from %s", self._name, self.status.value)
        self.cursor = 0
        self.status = PlaybackStatus.IDLE
        self._notify()

    def close(self) -> None:
        """Cancel everything and drop an unfinished lazy source (view unmount)."""
        self._cancel()
        self._discard_source()

    def set_speed(self, speed: Any) -> int:
        """Clamp to [1, 100].  Ignored while PLAYING.  Returns the speed in effect."""
        value = clamp_speed(parse_int(speed, "speed"))
        if self.status == PlaybackStatus.PLAYING:
            logger.debug("%s: speed change to %d ignored while playing", self._name, value)
            return self.speed
        self.speed = value
        return self.speed

    def step(self) -> bool:
        """Advance one frame by hand (only while IDLE or PAUSED)."""
        if self.status in (PlaybackStatus.PLAYING, PlaybackStatus.COMPLETED):
            return False
        advanced = self._advance()
        if advanced and self.status == PlaybackStatus.IDLE and not self.is_complete:
            self.status = PlaybackStatus.PAUSED
        return advanced

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_frame(self) -> Optional[Frame]:
        if self.cursor <= 0:
            return None
        return self.trace.fetch(self.cursor - 1)

    @property
    def previous_frame(self) -> Optional[Frame]:
        if self.cursor <= 1:
            return None
        return self.trace.fetch(self.cursor - 2)

    @property
    def highlight(self) -> HighlightState:
        return project(self.current_frame, self.previous_frame)

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    @property
    def is_complete(self) -> bool:
        return self.status == PlaybackStatus.COMPLETED

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    @property
    def total_frames(self) -> Optional[int]:
        """Length of the trace, or None while a lazy source is still open."""
        return len(self.trace) if self.trace.exhausted else None

    def to_dict(self) -> dict:
        frame = self.current_frame
        return {
            "operation":    self.trace.operation,
            "status":       self.status.value,
            "cursor":       self.cursor,
            "total_frames": self.total_frames,
            "speed":        self.speed,
            "delay_ms":     delay(self.speed),
            "frame":        frame.to_dict() if frame else None,
            "highlight":    self.highlight.to_dict(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @property
    def _name(self) -> str:
        return self.trace.operation or "session"

    def _schedule(self) -> None:
        self._cancel()
        self._pending = self.scheduler.call_later(delay(self.speed), self._tick)

    def _cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _tick(self) -> None:
        self._pending = None
        if self.status != PlaybackStatus.PLAYING:
            return
        self._advance()
        if self.status == PlaybackStatus.PLAYING:
            self._schedule()

    def _advance(self) -> bool:
        frame = self.trace.fetch(self.cursor)
        if frame is None:
            self._complete()
            return False
        self.cursor += 1
        if self.trace.exhausted and self.cursor >= len(self.trace):
            self._complete()
        self._notify()
        return True

    def _complete(self) -> None:
        self._cancel()
        self.status = PlaybackStatus.COMPLETED
        logger.debug("%s: completed after %d frame(s)", self._name, self.cursor)

    def _discard_source(self) -> None:
        if isinstance(self.trace, LazyTrace) and not self.trace.exhausted:
            self.trace.close()

    def _notify(self) -> None:
        if self.on_frame is not None:
            self.on_frame(self.current_frame, self.highlight)


def _check_source(trace: FrameSource) -> None:
    if isinstance(trace, Trace):
        finalize(trace)
    elif not isinstance(trace, LazyTrace):
        raise MalformedTrace(f"Cannot play {type(trace).__name__}; expected Trace or LazyTrace")


# ---------------------------------------------------------------------------
# Module-level transport (the view layer's boundary)
# ---------------------------------------------------------------------------
def create_session(
    trace: FrameSource,
    speed: int = DEFAULT_SPEED,
    scheduler: Optional[PolledScheduler] = None,
    on_frame: Optional[Callable[[Optional[Frame], HighlightState], None]] = None,
) -> PlaybackSession:
    return PlaybackSession(trace, scheduler or PolledScheduler(), speed=speed, on_frame=on_frame)


def play(session: PlaybackSession) -> None:
    session.play()


def pause(session: PlaybackSession) -> None:
    session.pause()


def resume(session: PlaybackSession) -> None:
    session.resume()


def reset(session: PlaybackSession, trace: Optional[FrameSource] = None) -> None:
    session.reset(trace)


def set_speed(session: PlaybackSession, speed: Any) -> int:
    return session.set_speed(speed)


__all__ = [
    "PlaybackStatus",
    "PlaybackSession",
    "FrameSource",
    "delay",
    "clamp_speed",
    "create_session",
    "play",
    "pause",
    "resume",
    "reset",
    "set_speed",
    "MIN_SPEED",
    "MAX_SPEED",
    "DEFAULT_SPEED",
]
