from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from timetrack.lifecycle import Tracker
from timetrack.queries import TaskQueries
from timetrack.store import RecordStore

from .fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """A clock fixed at local noon today, so tests never cross midnight."""
    noon = datetime.now().astimezone().replace(hour=12, minute=0, second=0, microsecond=0)
    return FakeClock(noon.astimezone(timezone.utc))


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "timetracker-data.json"


@pytest.fixture
def store(data_file: Path) -> RecordStore:
    return RecordStore(data_file)


@pytest.fixture
def tracker(store: RecordStore, clock: FakeClock) -> Tracker:
    return Tracker(store, clock=clock)


@pytest.fixture
def queries(store: RecordStore, clock: FakeClock) -> TaskQueries:
    return TaskQueries(store, clock=clock)
