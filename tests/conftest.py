# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from timekeep.cli.bootstrap import create_initial_state
from timekeep.config import Settings
from timekeep.core.clock import FixedClock
from timekeep.core.state import AppState
from timekeep.tasks.current_task import CurrentTaskSlot
from timekeep.tasks.lifecycle import TaskLifecycle
from timekeep.tasks.task_store import TaskStore

# Wednesday, 13 March 2024
T0 = datetime(2024, 3, 13, 10, 0, tzinfo=UTC)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Real Settings object pointed at a per-test directory."""
    data_dir = tmp_path / "data"
    return Settings(
        log_level="WARNING",
        log_to_file=False,
        data_dir=data_dir,
        current_task_path=data_dir / "current_task.json",
        database_path=data_dir / "timekeep.sqlite3",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture()
def slot(settings: Settings) -> CurrentTaskSlot:
    return CurrentTaskSlot(settings.current_task_path)


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    return TaskStore(settings.database_path)


@pytest.fixture()
def lifecycle(slot: CurrentTaskSlot, store: TaskStore, clock: FixedClock) -> TaskLifecycle:
    """
    Lifecycle wired to the real file slot and SQLite store.

    Their behaviour is part of what the scenarios check.
    """
    return TaskLifecycle(slot=slot, store=store, clock=clock)


@pytest.fixture()
def state(settings: Settings, clock: FixedClock) -> AppState:
    return create_initial_state(settings=settings, clock=clock)
