"""
Immutable snapshots of persisted task records.

The store works on plain dicts (the JSON document); everything handed to
callers outside the store is converted into these dataclasses first.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

CREATED = "created"
RUNNING = "running"
PAUSED = "paused"
STOPPED = "stopped"

STATUSES = (CREATED, RUNNING, PAUSED, STOPPED)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    return dt.isoformat()


def parse_timestamp(s: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not s:
        return None
    try:
        parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Session:
    """One contiguous start-to-pause interval."""

    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: int = 0

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class Task:
    """Immutable snapshot of a task record."""

    id: int
    name: str
    status: str
    url: str = ""
    sessions: tuple[Session, ...] = ()
    total_time: int = 0
    created_at: datetime | None = None
    last_started: datetime | None = None
    last_paused: datetime | None = None
    stopped_at: datetime | None = None

    @property
    def open_session(self) -> Session | None:
        if self.sessions and self.sessions[-1].is_open:
            return self.sessions[-1]
        return None

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING


def _session_from_dict(data: dict) -> Session:
    return Session(
        start_time=parse_timestamp(data.get("startTime")) or utc_now(),
        end_time=parse_timestamp(data.get("endTime")),
        duration_seconds=int(data.get("durationSeconds", 0)),
    )


def task_from_dict(data: dict) -> Task:
    """Convert a persisted task record to a Task."""
    return Task(
        id=int(data["id"]),
        name=data.get("name", ""),
        status=data.get("status", CREATED),
        url=data.get("url") or "",
        sessions=tuple(_session_from_dict(s) for s in data.get("sessions", [])),
        total_time=int(data.get("totalTime", 0)),
        created_at=parse_timestamp(data.get("createdAt")),
        last_started=parse_timestamp(data.get("lastStarted")),
        last_paused=parse_timestamp(data.get("lastPaused")),
        stopped_at=parse_timestamp(data.get("stoppedAt")),
    )
