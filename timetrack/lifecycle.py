"""
Task lifecycle engine.

State machine over task records plus the time accounting that goes with it:

    created/paused --start--> running --pause--> paused
    running/paused --stop--> stopped --unstop--> paused

Every public method is one read-modify-write against the store. Starting a
task pauses whichever task is currently running inside the same write, so at
most one task is ever running. Durations are computed when a session closes;
the live figure for a running task is derived on demand by the query layer.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime

from .errors import (
    AlreadyRunningError,
    EmptyNameError,
    NoOpenSessionError,
    NotRunningError,
    NotStoppedError,
    TaskNotFoundError,
    TaskStoppedError,
)
from .models import (
    PAUSED,
    RUNNING,
    STOPPED,
    Task,
    format_timestamp,
    parse_timestamp,
    task_from_dict,
    utc_now,
)
from .store import RecordStore, add_task, find_task

logger = logging.getLogger(__name__)


def _require(data: dict, task_id: int) -> dict:
    task = find_task(data, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def session_seconds(start: datetime, end: datetime) -> int:
    """Whole seconds between two instants, never negative."""
    return max(0, math.floor((end - start).total_seconds()))


class Tracker:
    """Applies lifecycle transitions to records held by a RecordStore."""

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def store(self) -> RecordStore:
        return self._store

    def create_task(self, name: str, url: str = "") -> Task:
        name = (name or "").strip()
        if not name:
            raise EmptyNameError()

        with self._store.transaction() as data:
            task = add_task(data, name, (url or "").strip(), self._clock())

        logger.info("Created task %s: %s", task["id"], task["name"])
        return task_from_dict(task)

    def get(self, task_id: int) -> Task:
        task = self._store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task_from_dict(task)

    def last_active(self) -> Task | None:
        data = self._store.load()
        last_id = data.get("lastActiveTaskId")
        if last_id is None:
            return None
        task = find_task(data, last_id)
        return task_from_dict(task) if task else None

    def start(self, task_id: int) -> Task:
        with self._store.transaction() as data:
            task = self._start(data, task_id, self._clock())
        return task_from_dict(task)

    def pause(self, task_id: int) -> Task:
        with self._store.transaction() as data:
            task = self._pause(data, task_id, self._clock())
        return task_from_dict(task)

    def stop(self, task_id: int) -> Task:
        with self._store.transaction() as data:
            now = self._clock()
            task = _require(data, task_id)
            if task["status"] == RUNNING:
                self._pause(data, task_id, now)
            task["status"] = STOPPED
            task["stoppedAt"] = format_timestamp(now)
        logger.info("Stopped task %s (%ss total)", task_id, task["totalTime"])
        return task_from_dict(task)

    def unstop(self, task_id: int) -> Task:
        with self._store.transaction() as data:
            task = _require(data, task_id)
            if task["status"] != STOPPED:
                raise NotStoppedError(task_id)
            task["status"] = PAUSED
            task["stoppedAt"] = None
        logger.info("Unstopped task %s", task_id)
        return task_from_dict(task)

    def _start(self, data: dict, task_id: int, now: datetime) -> dict:
        task = _require(data, task_id)
        if task["status"] == RUNNING:
            raise AlreadyRunningError(task_id)

        # Stopped tasks never appear in the interactive list; the CLI can still
        # name them.
        if task["status"] == STOPPED:
            raise TaskStoppedError(task_id)

        for other in data["tasks"]:
            if other["status"] == RUNNING and other["id"] != task_id:
                self._pause(data, other["id"], now)

        stamp = format_timestamp(now)
        task["sessions"].append(
            {"startTime": stamp, "endTime": None, "durationSeconds": 0}
        )
        task["status"] = RUNNING
        task["lastStarted"] = stamp
        data["lastActiveTaskId"] = task_id
        logger.info("Started task %s: %s", task_id, task["name"])
        return task

    def _pause(self, data: dict, task_id: int, now: datetime) -> dict:
        task = _require(data, task_id)
        if task["status"] != RUNNING:
            raise NotRunningError(task_id)

        sessions = task["sessions"]
        if not sessions or sessions[-1].get("endTime") is not None:
            raise NoOpenSessionError(task_id)

        current = sessions[-1]
        started = parse_timestamp(current["startTime"]) or now
        duration = session_seconds(started, now)
        current["endTime"] = format_timestamp(now)
        current["durationSeconds"] = duration

        task["totalTime"] = task.get("totalTime", 0) + duration
        task["status"] = PAUSED
        task["lastPaused"] = current["endTime"]
        data["lastActiveTaskId"] = task_id
        logger.info("Paused task %s after %ss", task_id, duration)
        return task
