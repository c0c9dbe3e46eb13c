"""Calendar math for schedule date and duration literals.

All helpers are pure. Instants are naive ``datetime`` objects interpreted as
UTC with whole-second resolution; durations are ``int`` seconds.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from numbers import Integral
from types import MappingProxyType

from stepaxis.utils.exceptions import (
    InvalidDateError,
    InvalidDurationError,
    InvalidUnitError,
    MalformedTimeError,
    UnknownMonthError,
)

EPOCH = datetime(1970, 1, 1)
ONE_SECOND = timedelta(seconds=1)

# Deck month abbreviations; JLY is an accepted alias for July.
MONTH_INDICES: MappingProxyType[str, int] = MappingProxyType(
    {
        "JAN": 1,
        "FEB": 2,
        "MAR": 3,
        "APR": 4,
        "MAY": 5,
        "JUN": 6,
        "JUL": 7,
        "JLY": 7,
        "AUG": 8,
        "SEP": 9,
        "OCT": 10,
        "NOV": 11,
        "DEC": 12,
    }
)

MONTH_NAMES: tuple[str, ...] = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)  # fmt: skip

_UNIT_SECONDS: MappingProxyType[str, int] = MappingProxyType(
    {
        "DAYS": 86_400,
        "DAY": 86_400,
        "D": 86_400,
        "HOURS": 3_600,
        "HOUR": 3_600,
        "HR": 3_600,
        "H": 3_600,
        "MINUTES": 60,
        "MINUTE": 60,
        "MIN": 60,
        "SECONDS": 1,
        "SECOND": 1,
        "SEC": 1,
        "S": 1,
    }
)

_TIME_OF_DAY = re.compile(r"^(\d{1,2}):(\d{1,2}):(\d{1,2})(?:\.(\d*))?$")


def as_instant(value: datetime | int) -> datetime:
    """Normalize a datetime or POSIX epoch seconds to a naive UTC instant.

    Sub-second precision is truncated.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.replace(microsecond=0)
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"Expected datetime or integer epoch seconds, got {type(value).__name__}")
    return from_epoch(value)


def from_epoch(seconds: int) -> datetime:
    """Return the instant ``seconds`` after 1970-01-01T00:00:00 UTC."""
    return EPOCH + timedelta(seconds=int(seconds))


def to_epoch(t: datetime) -> int:
    """Return POSIX epoch seconds for an instant."""
    return (as_instant(t) - EPOCH) // ONE_SECOND


def mkdate(year: int, month: int, day: int) -> datetime:
    """Return midnight of the given calendar date.

    Raises:
        InvalidDateError: If the date does not exist (month 13, 30 February...).
    """
    try:
        return datetime(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date {year:04d}-{month:02d}-{day:02d}: {exc}") from exc


def month_index(month_name: str) -> int:
    """Look up a deck month abbreviation (case sensitive), returning 1-12."""
    try:
        return MONTH_INDICES[month_name]
    except KeyError:
        raise UnknownMonthError(f"Unknown month name {month_name!r}") from None


def parse_time_of_day(text: str) -> timedelta:
    """Parse an ``HH:MM:SS[.fff]`` literal into an offset from midnight.

    The fractional part is validated but dropped.
    """
    match = _TIME_OF_DAY.match(text.strip())
    if match is None:
        raise MalformedTimeError(f"Time of day {text!r} is not of the form HH:MM:SS[.fff]")
    hours, minutes, seconds = (int(g) for g in match.groups()[:3])
    if hours > 23 or minutes > 59 or seconds > 59:
        raise MalformedTimeError(f"Time of day {text!r} is out of range")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def parse_date_literal(
    day: int,
    month_name: str,
    year: int,
    time_of_day: str = "00:00:00.000",
) -> datetime:
    """Convert a DATES record ``(day, month, year, time)`` into an instant.

    Args:
        day: Day of month.
        month_name: Three-letter upper-case month abbreviation, e.g. ``"JAN"``.
        year: Four-digit year.
        time_of_day: ``HH:MM:SS[.fff]``; fractional seconds are truncated.

    Raises:
        UnknownMonthError: Month abbreviation not recognized.
        MalformedTimeError: Time of day does not parse.
        InvalidDateError: The calendar date does not exist.
    """
    month = month_index(month_name)
    offset = parse_time_of_day(time_of_day)
    return mkdate(year, month, day) + offset


def to_date_literal(t: datetime) -> tuple[int, str, int, str]:
    """Decompose an instant into ``(day, month_name, year, "HH:MM:SS.000")``."""
    t = as_instant(t)
    return t.day, MONTH_NAMES[t.month - 1], t.year, f"{t:%H:%M:%S}.000"


def unit_seconds(unit: str) -> int:
    """Number of seconds in one ``unit`` (case insensitive tag)."""
    try:
        return _UNIT_SECONDS[unit.strip().upper()]
    except KeyError:
        raise InvalidUnitError(f"Unknown time unit {unit!r}") from None


def parse_duration(value: float, unit: str = "DAYS") -> int:
    """Convert a numeric literal and unit tag into whole seconds.

    The product is rounded to the nearest second so that values such as
    ``0.7`` days do not lose a second to floating point error. The sign is
    preserved; rejecting non-positive steps is left to the caller.

    Raises:
        InvalidUnitError: Unknown unit tag.
        InvalidDurationError: ``value`` is NaN or infinite.
    """
    seconds = float(value) * unit_seconds(unit)
    if not math.isfinite(seconds):
        raise InvalidDurationError(f"Time step must be finite, got {value!r} {unit}")
    return int(round(seconds))


def forward(t: datetime, *args: int | float) -> datetime:
    """Step an instant forward with calendar-correct arithmetic.

    ``forward(t, seconds)`` or ``forward(t, hours, minutes, seconds)``.
    Leap years and month lengths are handled by ``datetime`` arithmetic.

    Raises:
        InvalidDurationError: The offset is not finite or the result falls
            outside the years 1-9999.
    """
    if len(args) == 1:
        seconds = args[0]
    elif len(args) == 3:
        hours, minutes, secs = args
        seconds = hours * 3_600 + minutes * 60 + secs
    else:
        raise TypeError(
            f"forward() takes (t, seconds) or (t, hours, minutes, seconds), got {len(args)} offsets"
        )
    if not math.isfinite(seconds):
        raise InvalidDurationError(f"Time offset must be finite, got {seconds!r} seconds")
    t = as_instant(t)
    try:
        return t + timedelta(seconds=int(seconds))
    except OverflowError as exc:
        raise InvalidDurationError(
            f"Stepping {t.isoformat()} by {seconds} seconds leaves the calendar range"
        ) from exc
