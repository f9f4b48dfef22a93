# src/timekeep/cli/parsing.py

"""
Text <-> time helpers for the CLI.

The core only accepts aware datetimes; everything that reads or prints
wall-clock text lives here.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ..core.ports import Clock
from ..errors import ValidationError

_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M")
_DISPLAY_FORMAT = "%H:%M %d-%b-%Y"


def parse_local_datetime(text: str, clock: Clock) -> datetime:
    """
    Parse a local date/time without timezone into a UTC instant.

    Accepts "YYYY-MM-DD HH:MM[:SS]" or "HH:MM[:SS]"; a bare time means today.
    """
    raw = " ".join((text or "").split())

    for fmt in _DATETIME_FORMATS:
        try:
            return clock.from_local(datetime.strptime(raw, fmt))
        except ValueError:
            continue

    for fmt in _TIME_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt).time()
        except ValueError:
            continue
        return clock.from_local(datetime.combine(clock.today(), parsed))

    raise ValidationError(
        f"cannot parse date/time {text!r} (expected 'YYYY-MM-DD HH:MM[:SS]' or 'HH:MM[:SS]')"
    )


def format_local(instant: datetime, clock: Clock) -> str:
    return clock.to_local(instant).strftime(_DISPLAY_FORMAT)


def rounded_div(numerator: int, denominator: int) -> int:
    """
    Divide and round to the nearest integer, halves rounding up.

    >>> rounded_div(3, 2), rounded_div(2, 3), rounded_div(1, 3)
    (2, 1, 0)
    """
    return (numerator + denominator // 2) // denominator


def human_duration(d: timedelta) -> str:
    """
    Format a duration using its two most significant units.

    >>> human_duration(timedelta(milliseconds=947))
    '947 milliseconds'
    >>> human_duration(timedelta(milliseconds=1947))
    '2 seconds'
    >>> human_duration(timedelta(seconds=157))
    '2 minutes 37 seconds'
    >>> human_duration(timedelta(seconds=4734))
    '1 hours 19 minutes'
    >>> human_duration(timedelta(seconds=92750))
    '1 days 2 hours'
    """
    milli = d // timedelta(milliseconds=1)
    if milli < 1000:
        return f"{milli} milliseconds"

    seconds = rounded_div(milli, 1000)
    if seconds < 60:
        return f"{seconds} seconds"

    minutes = seconds // 60
    seconds -= minutes * 60
    if minutes < 60:
        return f"{minutes} minutes {seconds} seconds"

    # Rounding does not carry: 1h59m30s reads "1 hours 60 minutes".
    hours = minutes // 60
    minutes = minutes - hours * 60 + rounded_div(seconds, 60)
    if hours < 24:
        return f"{hours} hours {minutes} minutes"

    days = hours // 24
    hours = hours - days * 24 + rounded_div(minutes, 60)
    return f"{days} days {hours} hours"
