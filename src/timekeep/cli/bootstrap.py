# src/timekeep/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the slot, the store and the clock into a TaskLifecycle.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.clock import SystemClock
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.current_task import CurrentTaskSlot
from ..tasks.lifecycle import TaskLifecycle
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.current_task_path.parent.mkdir(parents=True, exist_ok=True)
    settings.database_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings: Settings | None = None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and clock injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if clock is None:
        clock = SystemClock()

    _ensure_local_dirs(settings)

    store = TaskStore(settings.database_path)
    lifecycle = TaskLifecycle(
        slot=CurrentTaskSlot(settings.current_task_path),
        store=store,
        clock=clock,
    )
    logger.debug(
        "State ready current_task=%s database=%s total=%s",
        settings.current_task_path,
        settings.database_path,
        store.count(),
    )
    return AppState(settings=settings, clock=clock, lifecycle=lifecycle)
