"""
Cancellable timers for the interactive loop.

The scheduler does not run anything itself: it wraps the host's
``set_interval`` / ``set_timer`` (textual's App methods in production, a fake
clock in tests) and remembers every handle so teardown can cancel them all.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class TimerHandle(Protocol):
    def stop(self) -> Any:
        ...


SetTimer = Callable[[float, Callable[[], None]], TimerHandle]


class Scheduler:
    """Owns recurring and one-shot timer handles."""

    def __init__(self, set_interval: SetTimer, set_timer: SetTimer) -> None:
        self._set_interval = set_interval
        self._set_timer = set_timer
        self._handles: set[TimerHandle] = set()

    @property
    def pending(self) -> int:
        return len(self._handles)

    def every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        handle = self._set_interval(interval, callback)
        self._handles.add(handle)
        return handle

    def once(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle: TimerHandle | None = None

        def fire() -> None:
            self._handles.discard(handle)
            callback()

        handle = self._set_timer(delay, fire)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        if handle is None or handle not in self._handles:
            return
        self._handles.discard(handle)
        handle.stop()

    def cancel_all(self) -> None:
        handles, self._handles = self._handles, set()
        for handle in handles:
            handle.stop()
