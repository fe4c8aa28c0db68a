"""Tests for the playback session state machine."""

from __future__ import annotations

import pytest

from engine import player
from engine.errors import InvalidInput, MalformedTrace
from engine.frame import Frame, LazyTrace, SortKind, StepKind, Trace
from engine.player import PlaybackSession, PlaybackStatus, delay
from engine.scheduler import PolledScheduler


def _trace(n: int = 3) -> Trace:
    frames = [Frame.of(SortKind.COMPARE, [i, i + 1], [1, 2, 3]) for i in range(n - 1)]
    frames.append(Frame.of(SortKind.COMPLETE, [], [1, 2, 3]))
    return Trace(frames, operation="demo")


def test_delay_mapping() -> None:
    assert delay(1) == 991
    assert delay(50) == 550
    assert delay(100) == 100
    assert delay(0) == 991
    assert delay(500) == 100


def test_new_session_is_idle(scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(), scheduler)

    assert session.status is PlaybackStatus.IDLE
    assert session.cursor == 0
    assert session.current_frame is None
    assert session.highlight.kind is None


def test_empty_trace_is_refused(scheduler: PolledScheduler) -> None:
    with pytest.raises(MalformedTrace):
        PlaybackSession(Trace(), scheduler)


def test_play_advances_one_frame_per_delay(clock, scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(3), scheduler, speed=50)
    session.play()
    assert session.has_pending_tick

    clock.advance_ms(549)
    scheduler.pump()
    assert session.cursor == 0

    clock.advance_ms(1)
    scheduler.pump()
    assert session.cursor == 1
    assert session.current_frame.subjects == (0, 1)

    clock.advance_ms(1200)
    scheduler.pump()
    assert session.cursor == 3
    assert session.status is PlaybackStatus.COMPLETED
    assert not session.has_pending_tick


def test_cursor_never_passes_trace_length(clock, scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(2), scheduler, speed=100)
    session.play()
    seen = []
    for _ in range(10):
        clock.advance_ms(100)
        scheduler.pump()
        seen.append(session.cursor)

    assert seen == sorted(seen)
    assert max(seen) == 2


def test_pause_cancels_pending_tick(clock, scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(3), scheduler, speed=100)
    session.play()
    clock.advance_ms(100)
    scheduler.pump()
    session.pause()

    clock.advance_ms(1000)
    scheduler.pump()
    assert session.cursor == 1
    assert session.status is PlaybackStatus.PAUSED
    assert scheduler.pending == 0


def test_pause_and_reset_are_idempotent(clock, scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(3), scheduler, speed=100)
    session.play()
    clock.advance_ms(100)
    scheduler.pump()

    session.pause()
    first = session.to_dict()
    session.pause()
    assert session.to_dict() == first

    session.reset()
    after_reset = session.to_dict()
    session.reset()
    assert session.to_dict() == after_reset
    assert after_reset["cursor"] == 0
    assert after_reset["status"] == "idle"


def test_speed_ignored_while_playing(scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(), scheduler, speed=10)
    session.play()

    assert session.set_speed(90) == 10
    session.pause()
    assert session.set_speed(90) == 90
    assert session.set_speed(1000) == 100


def test_speed_change_while_paused_applies_on_resume(clock, scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(3), scheduler, speed=1)
    session.play()
    session.pause()
    session.set_speed(100)
    session.resume()

    clock.advance_ms(100)
    scheduler.pump()
    assert session.cursor == 1


def test_bad_speed_is_invalid_input(scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(), scheduler)
    with pytest.raises(InvalidInput):
        session.set_speed("fast")


def test_step_advances_by_hand(scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(2), scheduler)

    assert session.step() is True
    assert session.status is PlaybackStatus.PAUSED
    assert session.step() is True
    assert session.status is PlaybackStatus.COMPLETED
    assert session.step() is False


def test_reset_binds_new_trace(scheduler: PolledScheduler) -> None:
    session = PlaybackSession(_trace(2), scheduler)
    session.step()
    replacement = _trace(4)
    session.reset(replacement)

    assert session.trace is replacement
    assert session.cursor == 0
    assert session.total_frames == 4


def test_on_frame_callback_sees_every_cursor_change(clock, scheduler: PolledScheduler) -> None:
    seen: list = []
    session = PlaybackSession(
        _trace(2), scheduler, speed=100, on_frame=lambda f, h: seen.append(h.kind)
    )
    session.play()
    clock.advance_ms(300)
    scheduler.pump()

    assert seen == ["compare", "complete"]


def test_lazy_source_mutation_happens_at_display_time(clock, scheduler: PolledScheduler) -> None:
    items = [1, 2]

    def steps():
        yield Frame.of(StepKind.SELECT, [1], list(items))
        items.pop()
        yield Frame.of(StepKind.POP, [1], list(items))
        yield Frame.of(StepKind.COMPLETE, [], list(items))

    session = PlaybackSession(LazyTrace(steps(), "stack.pop"), scheduler, speed=100)
    assert session.total_frames is None
    session.play()

    clock.advance_ms(100)
    scheduler.pump()
    assert items == [1, 2]

    clock.advance_ms(100)
    scheduler.pump()
    assert items == [1]

    clock.advance_ms(150)
    scheduler.pump()
    assert session.is_complete
    assert session.total_frames == 3


def test_close_discards_unfinished_lazy_source(scheduler: PolledScheduler) -> None:
    items = [1, 2]

    def steps():
        yield Frame.of(StepKind.SELECT, [1], list(items))
        items.pop()
        yield Frame.of(StepKind.COMPLETE, [], list(items))

    session = PlaybackSession(LazyTrace(steps()), scheduler)
    session.step()
    session.close()

    assert items == [1, 2]


def test_module_level_transport(clock) -> None:
    scheduler = PolledScheduler(clock)
    session = player.create_session(_trace(2), speed=100, scheduler=scheduler)
    player.play(session)
    player.pause(session)
    assert session.status is PlaybackStatus.PAUSED
    assert player.set_speed(session, 40) == 40
    player.resume(session)
    clock.advance_ms(delay(40))
    scheduler.pump()
    assert session.cursor == 1
    player.reset(session)
    assert session.cursor == 0
