# src/timekeep/core/clock.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo


class SystemClock:
    """Wall clock in the host's local timezone."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def today(self) -> date:
        return datetime.now().date()

    def from_local(self, naive: datetime) -> datetime:
        # astimezone() on a naive value interprets it in host local time,
        # using the UTC offset in effect on that date.
        return naive.astimezone(UTC)

    def to_local(self, instant: datetime) -> datetime:
        return instant.astimezone()

    def local_midnight(self, day: date) -> datetime:
        return self.from_local(datetime.combine(day, time.min))


@dataclass(slots=True)
class FixedClock:
    """
    Clock pinned to a given instant, observed from a given timezone.

    Used by tests and by callers that need reproducible windows.
    """

    instant: datetime
    tz: tzinfo = UTC

    def now(self) -> datetime:
        return self.instant.astimezone(UTC)

    def today(self) -> date:
        return self.instant.astimezone(self.tz).date()

    def from_local(self, naive: datetime) -> datetime:
        return naive.replace(tzinfo=self.tz).astimezone(UTC)

    def to_local(self, instant: datetime) -> datetime:
        return instant.astimezone(self.tz)

    def local_midnight(self, day: date) -> datetime:
        return self.from_local(datetime.combine(day, time.min))

    def advance(self, **delta: float) -> None:
        self.instant = self.instant + timedelta(**delta)
