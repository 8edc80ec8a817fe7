"""Calendar helpers: day keys, Monday-aligned weeks, month bounds."""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta, tzinfo

from walkwage.core.exceptions import InvalidRangeError, InvalidRecordError

DAYS_PER_WEEK = 7


def to_day(value: date | datetime | str, tz: tzinfo | None = None) -> date:
    """Normalize a record's day to a calendar date.

    Aware datetimes are converted to ``tz`` (the local zone when omitted)
    before the time component is dropped; naive datetimes are taken as
    already local.  Strings must be ISO dates or datetimes.
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            value = date.fromisoformat(text) if len(text) == 10 else datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidRecordError(f"Unparseable day {text!r}: {e}") from e

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                value = value.astimezone(tz)
            except (OverflowError, ValueError) as e:
                raise InvalidRecordError(f"Day {value!r} is outside the representable calendar: {e}") from e
        return value.date()

    if isinstance(value, date):
        return value

    raise InvalidRecordError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def week_start_for(day: date) -> date:
    """Monday on or before ``day`` (a Sunday steps back six days)."""
    try:
        return day - timedelta(days=day.weekday())
    except OverflowError as e:
        raise InvalidRangeError(f"No representable Monday before {day}") from e


def week_end_for(day: date) -> date:
    """Sunday on or after ``day``."""
    try:
        return day + timedelta(days=6 - day.weekday())
    except OverflowError as e:
        raise InvalidRangeError(f"No representable Sunday after {day}") from e


def aligned_range(start: date, end: date) -> tuple[date, date]:
    """Widen ``[start, end]`` to whole calendar weeks."""
    if start > end:
        raise InvalidRangeError(f"Range start {start} is after range end {end}")
    return week_start_for(start), week_end_for(end)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month (``month`` is 1-12)."""
    if not 1 <= month <= 12:
        raise InvalidRangeError(f"Month must be 1-12, got {month}")
    try:
        last = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last)
    except ValueError as e:
        raise InvalidRangeError(f"Cannot build month {year}-{month:02d}: {e}") from e


def iter_days(start: date, count: int = DAYS_PER_WEEK) -> Iterator[date]:
    for offset in range(count):
        yield start + timedelta(days=offset)
