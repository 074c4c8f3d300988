"""
Record store for task data.

The whole document lives in one JSON file. Every public call reads the file,
applies its change and writes the full document back; the tracker assumes a
single process owns the file at a time.
"""

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Iterator
from datetime import datetime
from functools import lru_cache
from pathlib import Path

import jsonschema

from .errors import StorageError
from .models import CREATED, format_timestamp, utc_now

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).resolve().parent / "schemas" / "timetrack-data.schema.json"


def initial_data() -> dict:
    return {"tasks": [], "nextId": 1, "lastActiveTaskId": None}


@lru_cache(maxsize=1)
def load_schema() -> dict:
    return json.loads(SCHEMA_FILE.read_text(encoding="utf-8"))


def validate_data(data: dict) -> tuple[bool, str]:
    """Validate a data document against the schema. Returns (valid, error_message)."""
    try:
        jsonschema.validate(instance=data, schema=load_schema())
        return True, ""
    except jsonschema.SchemaError as e:
        return False, f"Invalid schema: {e.message}"
    except jsonschema.ValidationError as e:
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return False, f"Validation error at '{path}': {e.message}"


def find_task(data: dict, task_id: int) -> dict | None:
    for task in data["tasks"]:
        if task["id"] == task_id:
            return task
    return None


def add_task(data: dict, name: str, url: str = "", now: datetime | None = None) -> dict:
    """Append a new record to the document and advance nextId."""
    task = {
        "id": data["nextId"],
        "name": name,
        "url": url,
        "status": CREATED,
        "sessions": [],
        "totalTime": 0,
        "createdAt": format_timestamp(now or utc_now()),
        "lastStarted": None,
        "lastPaused": None,
        "stoppedAt": None,
    }
    data["tasks"].append(task)
    data["nextId"] += 1
    return task


class RecordStore:
    """Durable key-value collection of task records backed by a JSON file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise StorageError(f"Data file {self._path} is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {self._path}: {e}") from e

        valid, error = validate_data(data)
        if not valid:
            raise StorageError(f"Corrupt data file {self._path}: {error}")
        data.setdefault("lastActiveTaskId", None)
        return data

    def load(self) -> dict:
        """Load the full document; an unreadable file yields an empty state."""
        if not self._path.exists():
            data = initial_data()
            # save() has already logged the failure; keep going in memory.
            with contextlib.suppress(StorageError):
                self.save(data)
            return data

        try:
            return self._read()
        except StorageError as e:
            logger.error("Error loading data, starting from an empty state: %s", e)
            return initial_data()

    def save(self, data: dict) -> None:
        """Write the full document back to disk."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Error saving data to %s: %s", self._path, e)
            raise StorageError(f"Error saving data: {e}") from e

    @contextlib.contextmanager
    def transaction(self) -> Iterator[dict]:
        """Read-modify-write: the document is saved only if the block succeeds."""
        data = self.load()
        yield data
        self.save(data)

    def create(self, name: str, url: str = "", now: datetime | None = None) -> dict:
        with self.transaction() as data:
            task = add_task(data, name, url, now)
        return task

    def get(self, task_id: int) -> dict | None:
        return find_task(self.load(), task_id)

    def update(self, task_id: int, changes: dict) -> dict | None:
        data = self.load()
        task = find_task(data, task_id)
        if task is None:
            return None
        task.update(changes)
        self.save(data)
        return task

    def all(self) -> list[dict]:
        return self.load()["tasks"]

    def by_status(self, status: str) -> list[dict]:
        return [task for task in self.all() if task["status"] == status]

    def set_last_active(self, task_id: int | None) -> None:
        with self.transaction() as data:
            data["lastActiveTaskId"] = task_id

    def last_active_id(self) -> int | None:
        return self.load().get("lastActiveTaskId")
