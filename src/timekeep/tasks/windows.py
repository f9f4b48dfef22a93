# src/timekeep/tasks/windows.py

from __future__ import annotations

"""
Named view windows.

A shortcut is resolved against the local calendar date into a half-open
[start, end) pair of UTC instants. Local dates are turned into instants by
an injected callable (normally Clock.local_midnight), so DST and the host
timezone stay out of the arithmetic here.
"""

from collections.abc import Callable
from datetime import date, datetime, timedelta
from enum import StrEnum

from ..errors import ValidationError

LocalMidnight = Callable[[date], datetime]


class ViewShortcut(StrEnum):
    CURRENT = "current"
    ALL = "all"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, raw: str) -> ViewShortcut:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValidationError(f"unknown view {raw!r} (expected one of: {choices})") from None


def first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def date_bounds(shortcut: ViewShortcut, today: date) -> tuple[date, date] | None:
    """Calendar-date bounds for a shortcut; None means unbounded."""
    match shortcut:
        case ViewShortcut.CURRENT:
            raise ValidationError("the current task is not a range view")
        case ViewShortcut.ALL:
            return None
        case ViewShortcut.DAY:
            return today, today + timedelta(days=1)
        case ViewShortcut.WEEK:
            monday = today - timedelta(days=today.weekday())
            return monday, monday + timedelta(days=7)
        case ViewShortcut.MONTH:
            first = today.replace(day=1)
            return first, first_of_next_month(first)
        case ViewShortcut.YEAR:
            return date(today.year, 1, 1), date(today.year + 1, 1, 1)


def resolve_window(
    shortcut: ViewShortcut,
    today: date,
    local_midnight: LocalMidnight,
) -> tuple[datetime, datetime] | None:
    bounds = date_bounds(shortcut, today)
    if bounds is None:
        return None
    lo, hi = bounds
    return local_midnight(lo), local_midnight(hi)
