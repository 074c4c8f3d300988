"""
Interactive control loop for the tracker view.

The controller holds the navigation state (selection, input buffer, flash
message, cursor blink) and turns decoded keys into lifecycle calls. It knows
nothing about the terminal: keys arrive already decoded, frames leave through
the ``render`` callback and timers go through a Scheduler. Every handler runs
to completion before the next one is dispatched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..config import DEFAULT_BLINK_INTERVAL, DEFAULT_REFRESH_INTERVAL
from ..errors import TimetrackError
from ..lifecycle import Tracker
from ..models import STOPPED, Task, utc_now
from ..queries import ById, TaskQueries, TaskSummary, parse_ref, summarize
from .keys import Backspace, Char, Down, Enter, Escape, Interrupt, KeyEvent, Up
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

# How long flash messages stay on screen, in seconds
SUCCESS_SECONDS = 1.5
NOTICE_SECONDS = 2.0


@dataclass(frozen=True)
class Flash:
    """Transient feedback line."""

    text: str
    level: str = "success"  # success | warning | error


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs to draw one screen."""

    tasks: tuple[TaskSummary, ...]
    selected_index: int
    input_buffer: str
    message: Flash | None
    cursor_visible: bool
    running: TaskSummary | None = None


def clamp_index(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


class TrackerController:
    """Keystroke and timer driven loop over the today view."""

    def __init__(
        self,
        tracker: Tracker,
        queries: TaskQueries,
        scheduler: Scheduler,
        render: Callable[[Frame], None],
        on_exit: Callable[[bool], None],
        *,
        clock: Callable[[], datetime] = utc_now,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        blink_interval: float = DEFAULT_BLINK_INTERVAL,
    ) -> None:
        self._tracker = tracker
        self._queries = queries
        self._scheduler = scheduler
        self._render = render
        self._on_exit = on_exit
        self._clock = clock
        self._refresh_interval = refresh_interval
        self._blink_interval = blink_interval

        self.tasks: list[Task] = []
        self.selected_index = 0
        self.input_buffer = ""
        self.active = False
        self.message: Flash | None = None
        self.cursor_visible = True
        self._running: Task | None = None
        self._message_timer: TimerHandle | None = None

    # ---- lifecycle of the loop ----

    def start(self) -> None:
        self.refresh_tasks()
        self.active = True
        self.selected_index = 0
        for index, task in enumerate(self.tasks):
            if task.is_running:
                self.selected_index = index
                break

        self._scheduler.every(self._refresh_interval, self._on_refresh_tick)
        self._scheduler.every(self._blink_interval, self._on_blink_tick)
        logger.info("Interactive view started with %d task(s)", len(self.tasks))
        self.render()

    def close(self) -> None:
        """Cancel every pending timer. Safe to call more than once."""
        self.active = False
        self._message_timer = None
        if self._scheduler.pending:
            logger.debug("Cancelling %d pending timer(s)", self._scheduler.pending)
        self._scheduler.cancel_all()

    def exit(self, interrupted: bool = False) -> None:
        if not self.active:
            return
        self.close()
        logger.info("Interactive view closed%s", " (interrupted)" if interrupted else "")
        self._on_exit(interrupted)

    # ---- view state ----

    def refresh_tasks(self) -> None:
        """Re-fetch the today view and keep the selection in bounds."""
        self.tasks = [t for t in self._queries.today() if t.status != STOPPED]
        self._running = self._queries.running_one()
        self.selected_index = clamp_index(self.selected_index, len(self.tasks))

    def frame(self) -> Frame:
        now = self._clock()
        return Frame(
            tasks=tuple(summarize(task, now) for task in self.tasks),
            selected_index=self.selected_index,
            input_buffer=self.input_buffer,
            message=self.message,
            cursor_visible=self.cursor_visible,
            running=summarize(self._running, now) if self._running else None,
        )

    def render(self) -> None:
        if self.active:
            self._render(self.frame())

    def show_message(
        self, text: str, level: str = "success", duration: float | None = None
    ) -> None:
        self._scheduler.cancel(self._message_timer)
        self.message = Flash(text, level)
        if duration is None:
            duration = SUCCESS_SECONDS if level == "success" else NOTICE_SECONDS
        self._message_timer = self._scheduler.once(duration, self._expire_message)

    # ---- timers ----

    def _on_refresh_tick(self) -> None:
        if not self.active or self._running is None:
            return
        self.refresh_tasks()
        self.render()

    def _on_blink_tick(self) -> None:
        if not self.active:
            return
        self.cursor_visible = not self.cursor_visible
        self.render()

    def _expire_message(self) -> None:
        self._message_timer = None
        if not self.active:
            return
        self.message = None
        self.render()

    # ---- keys ----

    def handle(self, key: KeyEvent) -> None:
        if not self.active:
            return

        if isinstance(key, Interrupt):
            self.exit(interrupted=True)
            return

        if isinstance(key, Up):
            if self.tasks:
                self.selected_index = clamp_index(self.selected_index - 1, len(self.tasks))
        elif isinstance(key, Down):
            if self.tasks:
                self.selected_index = clamp_index(self.selected_index + 1, len(self.tasks))
        elif isinstance(key, Enter):
            line = self.input_buffer.strip()
            self.input_buffer = ""
            if line:
                self.execute(line)
            elif self.tasks:
                self._guarded(self.toggle_selected)
        elif isinstance(key, Backspace):
            self.input_buffer = self.input_buffer[:-1]
        elif isinstance(key, Escape):
            if self.input_buffer:
                self.input_buffer = ""
            else:
                self.exit()
        elif isinstance(key, Char):
            self.input_buffer += key.char

        self.render()

    # ---- commands ----

    def execute(self, line: str) -> None:
        """Run one committed input line."""
        parts = line.split(maxsplit=1)
        command = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if command in ("exit", "quit"):
            self.exit()
            return
        if command == "start":
            if arg:
                self._guarded(self.start_by_ref, arg)
            else:
                self._guarded(self.resume_last)
            return
        if command == "stop":
            self._guarded(self.pause_running)
            return
        self._guarded(self.create_and_start, line)

    def _guarded(self, action: Callable[..., None], *args: str) -> None:
        try:
            action(*args)
        except TimetrackError as e:
            logger.warning("Command failed: %s", e)
            self.show_message(f"Error: {e}", "error")
        self.refresh_tasks()

    def toggle_selected(self) -> None:
        if not 0 <= self.selected_index < len(self.tasks):
            return
        task = self.tasks[self.selected_index]
        if task.is_running:
            self._pause(task)
        else:
            started = self._tracker.start(task.id)
            self.show_message(f"✓ Started: {started.name}")

    def start_by_ref(self, text: str) -> None:
        task = self._queries.resolve(text)
        if task is None:
            if isinstance(parse_ref(text), ById):
                self.show_message(f"Task with ID {text} not found", "warning")
                return
            self.create_and_start(text)
            return
        started = self._tracker.start(task.id)
        self.show_message(f"✓ Started: {started.name}")

    def resume_last(self) -> None:
        last = self._tracker.last_active()
        if last is None:
            self.show_message("No previous task found", "warning")
            return
        if last.status == STOPPED:
            self.show_message(
                f'Last task "{last.name}" is stopped. Please specify task name.',
                "warning",
            )
            return
        started = self._tracker.start(last.id)
        self.show_message(f"✓ Resumed: {started.name}")

    def pause_running(self) -> None:
        running = self._queries.running_one()
        if running is None:
            self.show_message("No task is currently running", "warning")
            return
        self._pause(running)

    def create_and_start(self, name: str) -> None:
        task = self._tracker.create_task(name)
        self._tracker.start(task.id)
        self.show_message(f"✓ Created and started: {task.name}")

    def _pause(self, task: Task) -> None:
        paused = self._tracker.pause(task.id)
        elapsed = summarize(paused, self._clock()).elapsed
        self.show_message(
            f"⏸ Paused: {paused.name} ({elapsed})", "warning", SUCCESS_SECONDS
        )
