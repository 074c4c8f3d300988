"""
Read-only views over the record store.

Nothing here writes to the store. The running task is always derived by
scanning the records instead of being cached, so the records stay the single
source of truth.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from .errors import MultipleRunningError
from .lifecycle import session_seconds
from .models import RUNNING, STOPPED, Task, task_from_dict, utc_now
from .store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ById:
    task_id: int


@dataclass(frozen=True)
class ByName:
    text: str


TaskRef = Union[ById, ByName]


def parse_ref(text: str) -> TaskRef:
    """Decide once whether user input names a task id or a task name."""
    text = text.strip()
    if text.isdigit() and text.isascii():
        return ById(int(text))
    return ByName(text)


def format_duration(seconds: int) -> str:
    """Format seconds as '1h 2m 3s', '2m 3s' or '3s'."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    elif minutes > 0:
        return f"{minutes}m {secs}s"
    else:
        return f"{secs}s"


def elapsed_seconds(task: Task, now: datetime) -> int:
    """Tracked seconds including the live part of an open session."""
    if task.status != RUNNING or task.last_started is None:
        return task.total_time
    return task.total_time + session_seconds(task.last_started, now)


@dataclass(frozen=True)
class TaskSummary:
    """Display view of a task."""

    id: int
    name: str
    url: str
    status: str
    elapsed: str
    elapsed_seconds: int
    total_time: str
    total_time_seconds: int
    session_count: int
    created_at: datetime | None = None
    last_started: datetime | None = None
    last_paused: datetime | None = None
    stopped_at: datetime | None = None

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING


def summarize(task: Task, now: datetime) -> TaskSummary:
    elapsed = elapsed_seconds(task, now)
    return TaskSummary(
        id=task.id,
        name=task.name,
        url=task.url,
        status=task.status,
        elapsed=format_duration(elapsed),
        elapsed_seconds=elapsed,
        total_time=format_duration(task.total_time),
        total_time_seconds=task.total_time,
        session_count=len(task.sessions),
        created_at=task.created_at,
        last_started=task.last_started,
        last_paused=task.last_paused,
        stopped_at=task.stopped_at,
    )


def local_day_start(now: datetime) -> datetime:
    """Local midnight of the calendar day containing ``now``."""
    local = now.astimezone()
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def active_since(task: Task, since: datetime) -> bool:
    for stamp in (task.last_started, task.last_paused):
        if stamp is not None and stamp >= since:
            return True
    return any(
        session.start_time >= since
        or (session.end_time is not None and session.end_time >= since)
        for session in task.sessions
    )


class TaskQueries:
    """Filtered views and lookups over the records of a RecordStore."""

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    def all(self) -> list[Task]:
        return [task_from_dict(t) for t in self._store.all()]

    def by_status(self, status: str) -> list[Task]:
        return [task_from_dict(t) for t in self._store.by_status(status)]

    def running_one(self) -> Task | None:
        running = sorted(self.by_status(RUNNING), key=lambda t: t.id)
        if not running:
            return None
        if len(running) > 1:
            logger.warning(
                "%d tasks marked running (%s); using the lowest id",
                len(running),
                ", ".join(str(t.id) for t in running),
            )
        return running[0]

    def require_single_running(self) -> Task | None:
        """Like running_one(), but raise if the store holds several running tasks."""
        running = sorted(self.by_status(RUNNING), key=lambda t: t.id)
        if len(running) > 1:
            raise MultipleRunningError([t.id for t in running])
        return running[0] if running else None

    def today(self) -> list[Task]:
        """Non-stopped tasks with any activity since local midnight."""
        since = local_day_start(self._clock())
        return [
            task
            for task in self.all()
            if task.status != STOPPED and active_since(task, since)
        ]

    def summarize(self, task: Task) -> TaskSummary:
        return summarize(task, self._clock())

    def resolve(self, text: str, include_stopped: bool = False) -> Task | None:
        """
        Map user input to a task.

        Digits match the id exactly; anything else is a case-insensitive
        substring of the name. Stopped tasks are skipped unless asked for.
        Several name matches resolve to the first one in store order.
        """
        ref = parse_ref(text)
        candidates = [
            task
            for task in self.all()
            if include_stopped or task.status != STOPPED
        ]

        if isinstance(ref, ById):
            return next((t for t in candidates if t.id == ref.task_id), None)

        needle = ref.text.lower()
        if not needle:
            return None
        return next(
            (
                t
                for t in candidates
                if needle in t.name.lower() or t.name.lower() == needle
            ),
            None,
        )
