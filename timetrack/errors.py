"""Exceptions raised by the store, the lifecycle engine and the query layer."""

from __future__ import annotations


class TimetrackError(Exception):
    """Base class for every error the tracker reports to the user."""


class ValidationError(TimetrackError):
    """Input rejected before touching the store."""


class EmptyNameError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Task name is required")


class NotFoundError(TimetrackError):
    """No task matches the given id or name."""


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int | str) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class InvalidTransitionError(TimetrackError):
    """The task's current status does not allow the requested transition."""


class AlreadyRunningError(InvalidTransitionError):
    def __init__(self, task_id: int) -> None:
        super().__init__("Task is already running")
        self.task_id = task_id


class NotRunningError(InvalidTransitionError):
    def __init__(self, task_id: int) -> None:
        super().__init__("Task is not currently running")
        self.task_id = task_id


class NotStoppedError(InvalidTransitionError):
    def __init__(self, task_id: int) -> None:
        super().__init__("Task is not currently stopped")
        self.task_id = task_id


class TaskStoppedError(InvalidTransitionError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} is stopped; unstop it first")
        self.task_id = task_id


class NoOpenSessionError(InvalidTransitionError):
    def __init__(self, task_id: int) -> None:
        super().__init__("No active session found")
        self.task_id = task_id


class MultipleRunningError(TimetrackError):
    """More than one record is marked running; the store was edited externally."""

    def __init__(self, task_ids: list[int]) -> None:
        ids = ", ".join(str(tid) for tid in task_ids)
        super().__init__(f"Multiple tasks are marked running: {ids}")
        self.task_ids = task_ids


class StorageError(TimetrackError):
    """Reading or writing the data file failed."""
