# src/timekeep/tasks/lifecycle.py

from __future__ import annotations

"""
Task lifecycle.

    Idle --start--> Running --end--> Idle
                       |               ^
                       +--end(discard)-+

The running task lives in the slot (OpenTaskRepo); finished tasks go to the
store (ClosedTaskRepo). Values move between the two by copy: both task
types are frozen dataclasses.
"""

import logging
from datetime import datetime

from ..core.ports import ClosedTaskRepo, Clock, OpenTaskRepo
from .task_models import ClosedTask, OpenTask
from .windows import ViewShortcut, resolve_window

logger = logging.getLogger(__name__)


class TaskLifecycle:
    def __init__(self, slot: OpenTaskRepo, store: ClosedTaskRepo, clock: Clock) -> None:
        self.slot = slot
        self.store = store
        self.clock = clock

    # ---- transitions ----

    def start(
        self,
        project_name: str,
        start_time: datetime | None = None,
        description: str | None = None,
    ) -> OpenTask:
        """
        Start a task, OVERWRITING any task that is already running.

        The replaced task is dropped: it is not ended and never reaches the
        store. Use switch() to end the running task first.
        """
        task = OpenTask(
            project_name,
            start_time if start_time is not None else self.clock.now(),
            description,
        )
        if self.slot.exists():
            logger.info("Overwriting running task with project=%s", task.project_name)
        self.slot.save(task)
        logger.info("Task started project=%s at=%s", task.project_name, task.start_time.isoformat())
        return task

    def switch(
        self,
        project_name: str,
        start_time: datetime | None = None,
        description: str | None = None,
    ) -> tuple[ClosedTask | None, OpenTask]:
        """
        End the running task (if any) and start a new one.

        The previous task is closed now, whatever start_time the new task
        is given, so a backdated start does not cut the previous task short.
        """
        at = start_time if start_time is not None else self.clock.now()
        # Validate before touching the slot so a bad name does not end anything.
        OpenTask(project_name, at, description)
        ended = self.end()
        return ended, self.start(project_name, at, description)

    def end(self, end_time: datetime | None = None, discard: bool = False) -> ClosedTask | None:
        """
        Close the running task.

        Returns None when nothing is running. If end_time precedes the
        task's start, EndBeforeStartError is raised and the slot is kept.
        """
        if not self.slot.exists():
            logger.debug("End requested but no task is running")
            return None

        current = self.slot.load()
        closed = current.close(end_time if end_time is not None else self.clock.now())

        if not discard:
            self.store.append(closed)
        self.slot.clear()

        logger.info(
            "Task %s project=%s duration=%s",
            "discarded" if discard else "ended",
            closed.project_name,
            closed.duration(),
        )
        return closed

    def add(
        self,
        project_name: str,
        start_time: datetime,
        end_time: datetime,
        description: str | None = None,
    ) -> ClosedTask:
        """Record a finished task directly, ignoring any running task."""
        task = ClosedTask(project_name, start_time, end_time, description)
        self.store.append(task)
        logger.info("Task added project=%s duration=%s", task.project_name, task.duration())
        return task

    # ---- views ----

    def view_current(self) -> OpenTask:
        return self.slot.load()

    def view_range(self, start: datetime, end: datetime) -> list[ClosedTask]:
        return self.store.query_range(start, end)

    def view_all(self) -> list[ClosedTask]:
        return self.store.query_all()

    def window(self, shortcut: ViewShortcut) -> tuple[datetime, datetime] | None:
        return resolve_window(shortcut, self.clock.today(), self.clock.local_midnight)

    def view_filtered(self, shortcut: ViewShortcut) -> list[ClosedTask] | OpenTask:
        if shortcut is ViewShortcut.CURRENT:
            return self.view_current()

        bounds = self.window(shortcut)
        if bounds is None:
            return self.view_all()
        return self.view_range(*bounds)
