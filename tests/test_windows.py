# tests/test_windows.py

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from timekeep.core.clock import FixedClock
from timekeep.errors import ValidationError
from timekeep.tasks.windows import ViewShortcut, date_bounds, first_of_next_month, resolve_window


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        (date(2024, 12, 31), (date(2024, 12, 1), date(2025, 1, 1))),
        (date(2023, 12, 1), (date(2023, 12, 1), date(2024, 1, 1))),
        (date(2024, 2, 29), (date(2024, 2, 1), date(2024, 3, 1))),
        (date(2023, 2, 28), (date(2023, 2, 1), date(2023, 3, 1))),
        (date(2024, 1, 15), (date(2024, 1, 1), date(2024, 2, 1))),
    ],
)
def test_month_bounds_roll_over(today: date, expected: tuple[date, date]) -> None:
    assert date_bounds(ViewShortcut.MONTH, today) == expected


def test_december_month_window_ends_on_new_year() -> None:
    clock = FixedClock(datetime(2024, 12, 15, 9, 30, tzinfo=UTC))
    lo, hi = resolve_window(ViewShortcut.MONTH, clock.today(), clock.local_midnight)

    assert lo == datetime(2024, 12, 1, tzinfo=UTC)
    assert hi == datetime(2025, 1, 1, tzinfo=UTC)
    assert hi.year == lo.year + 1


@pytest.mark.parametrize(
    ("today", "days"),
    [(date(2024, 6, 1), 366), (date(2023, 6, 1), 365), (date(2100, 6, 1), 365), (date(2000, 6, 1), 366)],
)
def test_year_bounds_cover_leap_and_common_years(today: date, days: int) -> None:
    lo, hi = date_bounds(ViewShortcut.YEAR, today)
    assert lo == date(today.year, 1, 1)
    assert hi == date(today.year + 1, 1, 1)
    assert (hi - lo).days == days


@pytest.mark.parametrize(
    "today",
    [date(2024, 3, 11), date(2024, 3, 13), date(2024, 3, 17)],  # Monday, Wednesday, Sunday
)
def test_week_starts_on_monday(today: date) -> None:
    lo, hi = date_bounds(ViewShortcut.WEEK, today)
    assert lo == date(2024, 3, 11)
    assert hi == date(2024, 3, 18)


def test_week_spanning_year_end() -> None:
    lo, hi = date_bounds(ViewShortcut.WEEK, date(2025, 1, 1))  # Wednesday
    assert lo == date(2024, 12, 30)
    assert hi == date(2025, 1, 6)


def test_day_bounds() -> None:
    assert date_bounds(ViewShortcut.DAY, date(2024, 2, 28)) == (date(2024, 2, 28), date(2024, 2, 29))
    assert date_bounds(ViewShortcut.DAY, date(2024, 12, 31)) == (date(2024, 12, 31), date(2025, 1, 1))


def test_all_is_unbounded_and_current_is_not_a_range() -> None:
    assert date_bounds(ViewShortcut.ALL, date(2024, 1, 1)) is None
    with pytest.raises(ValidationError):
        date_bounds(ViewShortcut.CURRENT, date(2024, 1, 1))


def test_windows_are_anchored_at_local_midnight() -> None:
    # 23:30 UTC on the 13th is already the 14th in UTC+2.
    clock = FixedClock(datetime(2024, 3, 13, 23, 30, tzinfo=UTC), tz=timezone(timedelta(hours=2)))
    lo, hi = resolve_window(ViewShortcut.DAY, clock.today(), clock.local_midnight)

    assert lo == datetime(2024, 3, 13, 22, 0, tzinfo=UTC)
    assert hi == datetime(2024, 3, 14, 22, 0, tzinfo=UTC)


def test_day_window_across_dst_change_is_23_hours() -> None:
    try:
        berlin = ZoneInfo("Europe/Berlin")
    except ZoneInfoNotFoundError:
        pytest.skip("no tz database on this host")
    clock = FixedClock(datetime(2024, 3, 31, 12, 0, tzinfo=UTC), tz=berlin)
    lo, hi = resolve_window(ViewShortcut.DAY, clock.today(), clock.local_midnight)

    assert hi - lo == timedelta(hours=23)


def test_first_of_next_month() -> None:
    assert first_of_next_month(date(2024, 12, 31)) == date(2025, 1, 1)
    assert first_of_next_month(date(2024, 1, 31)) == date(2024, 2, 1)


@pytest.mark.parametrize("raw", ["day", "WEEK", " month "])
def test_parse_shortcut(raw: str) -> None:
    assert ViewShortcut.parse(raw).value == raw.strip().lower()


def test_parse_unknown_shortcut() -> None:
    with pytest.raises(ValidationError):
        ViewShortcut.parse("fortnight")
