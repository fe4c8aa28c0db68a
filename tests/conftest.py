"""Pytest configuration: a hand-cranked clock so playback never sleeps."""

from __future__ import annotations

import pytest

from engine.scheduler import PolledScheduler


class FakeClock:
    """Counts whole milliseconds so deadlines compare exactly."""

    def __init__(self) -> None:
        self.ms = 0

    def __call__(self) -> float:
        return self.ms / 1000.0

    def advance_ms(self, ms: int) -> None:
        self.ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> PolledScheduler:
    return PolledScheduler(clock)
