# src/timekeep/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskLifecycle depends on these Protocols instead of concrete implementations,
so tests can swap in a fixed clock or in-memory repositories.
"""

from datetime import date, datetime
from typing import Protocol

from ..tasks.task_models import ClosedTask, OpenTask


class Clock(Protocol):
    """Source of "now" and of local calendar boundaries."""

    def now(self) -> datetime: ...  # aware, UTC
    def today(self) -> date: ...  # local calendar date
    def from_local(self, naive: datetime) -> datetime: ...  # local wall time -> UTC
    def to_local(self, instant: datetime) -> datetime: ...
    def local_midnight(self, day: date) -> datetime: ...  # aware, UTC


class OpenTaskRepo(Protocol):
    """Single-slot storage for the running task."""

    def save(self, task: OpenTask) -> OpenTask: ...
    def load(self) -> OpenTask: ...
    def exists(self) -> bool: ...
    def clear(self) -> None: ...


class ClosedTaskRepo(Protocol):
    """Append-only log of finished tasks."""

    def append(self, task: ClosedTask) -> None: ...
    def query_range(self, start: datetime, end: datetime) -> list[ClosedTask]: ...
    def query_all(self) -> list[ClosedTask]: ...
