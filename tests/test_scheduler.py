"""Tests for the polled scheduler."""

from __future__ import annotations

import pytest

from engine.scheduler import PolledScheduler


def test_nothing_fires_before_deadline(clock, scheduler: PolledScheduler) -> None:
    fired: list[str] = []
    scheduler.call_later(100, lambda: fired.append("a"))

    clock.advance_ms(99)
    assert scheduler.pump() == 0
    assert fired == []

    clock.advance_ms(1)
    assert scheduler.pump() == 1
    assert fired == ["a"]
    assert scheduler.pending == 0


def test_fires_in_deadline_order(clock, scheduler: PolledScheduler) -> None:
    fired: list[str] = []
    scheduler.call_later(30, lambda: fired.append("late"))
    scheduler.call_later(10, lambda: fired.append("early"))
    scheduler.call_later(10, lambda: fired.append("early-2"))

    clock.advance_ms(50)
    scheduler.pump()

    assert fired == ["early", "early-2", "late"]


def test_cancelled_handle_never_runs(clock, scheduler: PolledScheduler) -> None:
    fired: list[str] = []
    handle = scheduler.call_later(10, lambda: fired.append("x"))
    clock.advance_ms(20)
    handle.cancel()

    assert scheduler.pump() == 0
    assert fired == []
    assert scheduler.next_deadline() is None


def test_rescheduling_callback_catches_up_after_late_poll(clock, scheduler: PolledScheduler) -> None:
    ticks: list[float] = []

    def tick() -> None:
        ticks.append(scheduler.now())
        if len(ticks) < 5:
            scheduler.call_later(100, tick)

    scheduler.call_later(100, tick)
    clock.advance_ms(350)
    scheduler.pump()

    assert ticks == pytest.approx([0.1, 0.2, 0.3])
    assert scheduler.next_deadline() == pytest.approx(0.4)
