# src/timekeep/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from ..errors import EndBeforeStartError, ValidationError

# Fixed width, offset-normalized: lexical order == chronological order.
_CANONICAL_FMT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


def to_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to UTC. Naive values are rejected."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"instant must be timezone-aware: {value!r}")
    return value.astimezone(UTC)


def encode_instant(value: datetime) -> str:
    return to_utc(value).strftime(_CANONICAL_FMT)


def decode_instant(raw: str) -> datetime:
    """
    Parse a stored instant.

    Accepts the canonical form as well as any ISO-8601 / RFC 3339 string
    carrying an offset (including a trailing "Z").
    Raises ValueError for anything else.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"empty instant: {raw!r}")
    parsed = datetime.fromisoformat(raw.strip())
    if parsed.tzinfo is None:
        raise ValueError(f"instant without offset: {raw!r}")
    return parsed.astimezone(UTC)


def _clean_project(project_name: str) -> str:
    if not isinstance(project_name, str):
        raise ValidationError(f"project name must be text: {project_name!r}")
    name = project_name.strip()
    if not name:
        raise ValidationError("project name is required")
    return name


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError(f"description must be text: {description!r}")
    text = description.strip()
    return text or None


@dataclass(frozen=True, slots=True)
class OpenTask:
    """
    Task which started at a certain time but is still ongoing.

    See ClosedTask for finished tasks.
    The constructor validates and normalizes: names and descriptions are
    stripped (an empty description becomes None), instants become UTC.
    """

    project_name: str
    start_time: datetime
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_name", _clean_project(self.project_name))
        object.__setattr__(self, "start_time", to_utc(self.start_time))
        object.__setattr__(self, "description", _clean_description(self.description))

    def close(self, end_time: datetime) -> ClosedTask:
        """Turn this task into a ClosedTask ending at end_time (>= start_time)."""
        return ClosedTask(self.project_name, self.start_time, end_time, self.description)

    def duration(self, now: datetime) -> timedelta:
        return to_utc(now) - self.start_time


@dataclass(frozen=True, slots=True)
class ClosedTask:
    """Task which started at a certain time and has already finished."""

    project_name: str
    start_time: datetime
    end_time: datetime
    description: str | None = None

    def __post_init__(self) -> None:
        start = to_utc(self.start_time)
        end = to_utc(self.end_time)
        if end < start:
            raise EndBeforeStartError(start, end)
        object.__setattr__(self, "project_name", _clean_project(self.project_name))
        object.__setattr__(self, "start_time", start)
        object.__setattr__(self, "end_time", end)
        object.__setattr__(self, "description", _clean_description(self.description))

    def duration(self) -> timedelta:
        return self.end_time - self.start_time
