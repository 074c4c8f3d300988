"""Deterministic stand-ins for the wall clock and the host's timers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeTimer:
    def __init__(
        self, interval: float, callback: Callable[[], None], due: float, repeat: bool
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.due = due
        self.repeat = repeat
        self.stopped = False
        self.fired = 0

    def stop(self) -> None:
        self.stopped = True


class FakeTimers:
    """
    Manual timer host with the set_interval / set_timer shape of textual's App.

    advance() fires due timers in order and moves the attached clock along.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock
        self.time = 0.0
        self.timers: list[FakeTimer] = []

    def set_interval(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback, self.time + interval, repeat=True)
        self.timers.append(timer)
        return timer

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback, self.time + delay, repeat=False)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped and (t.repeat or not t.fired)]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = [t for t in self.live if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self._move_to(timer.due)
            timer.fired += 1
            if timer.repeat:
                timer.due += timer.interval
            timer.callback()
        self._move_to(target)

    def _move_to(self, when: float) -> None:
        if self.clock is not None:
            self.clock.advance(when - self.time)
        self.time = when
