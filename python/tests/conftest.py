"""Shared fixtures: a hand-cranked scheduler and an in-memory host."""

import datetime as dt

import pytest

from hexfield.host import MemoryHost

PLANNER_HEADER = "---\ntype: hexfield-planner\n---\n"


class ManualTimer:
    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls ``advance``."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay, callback):
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self):
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire due timers; returns how many fired."""
        self.now += seconds
        fired = 0
        for timer in sorted(self.live, key=lambda t: t.due):
            if timer.due <= self.now and not timer.cancelled:
                timer.cancelled = True
                timer.callback()
                fired += 1
        return fired


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def host():
    return MemoryHost()


@pytest.fixture
def today():
    return dt.date(2025, 1, 3)
