"""
Range aggregator.

Widens a date range to whole Monday–Sunday weeks, classifies every day of
every week with a fresh ``WeekState`` per week, and folds the results into
week and month totals.  Pure: no I/O, no state kept between calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, timedelta, tzinfo

from loguru import logger

from walkwage.core.exceptions import InvalidRangeError, InvalidRecordError

from .classifier import classify
from .dates import DAYS_PER_WEEK, aligned_range, iter_days, to_day
from .models import DEFAULT_RULES, MonthResult, RuleSet, WalkKind, WalkRecord, WeekResult, WeekState


def index_records(records: Iterable[WalkRecord], tz: tzinfo | None = None) -> dict[date, WalkRecord]:
    """Key records by calendar day, merging same-day entries.

    Durations of records that land on the same day are summed.  An OFF tag
    on any of them marks the merged record OFF.
    """
    by_day: dict[date, WalkRecord] = {}
    for record in records:
        day = to_day(record.day, tz)
        duration = int(record.duration_minutes)
        if duration < 0:
            raise InvalidRecordError(f"Negative duration {duration} for {record.owner_id} on {day}")

        existing = by_day.get(day)
        if existing is None:
            by_day[day] = replace(record, day=day, duration_minutes=duration)
            continue

        kind = WalkKind.OFF if existing.is_off or record.is_off else existing.explicit_kind
        by_day[day] = replace(existing, duration_minutes=existing.duration_minutes + duration, explicit_kind=kind)
        logger.debug(f"Merged duplicate record for {day}: {existing.duration_minutes}+{duration} min")
    return by_day


def classify_week(
    week_start: date,
    by_day: dict[date, WalkRecord],
    reference_date: date,
    rules: RuleSet = DEFAULT_RULES,
) -> WeekResult:
    """Fold the seven days starting at ``week_start`` into a WeekResult."""
    state = WeekState()
    days = []
    for day in iter_days(week_start, DAYS_PER_WEEK):
        result, state = classify(by_day.get(day), day, reference_date, state, rules)
        days.append(result)

    week = WeekResult(
        days=days,
        week_earnings=sum(d.earnings_delta for d in days),
        off_days_used=state.off_days_used,
        super_used=state.super_used,
        max_off_days=rules.max_off_days_per_week,
    )
    if week.off_days_over_limit:
        logger.warning(
            f"Week of {week_start} has {week.off_days_used} OFF days "
            f"(allowance {rules.max_off_days_per_week}); counting all of them"
        )
    return week


def aggregate(
    records: Iterable[WalkRecord],
    range_start: date,
    range_end: date,
    reference_date: date,
    rules: RuleSet = DEFAULT_RULES,
    tz: tzinfo | None = None,
) -> MonthResult:
    """Compute week-aligned earnings for ``[range_start, range_end]``.

    Args:
        records: Raw records; should cover the week-aligned range.
        range_start: First requested day.
        range_end: Last requested day (inclusive).
        reference_date: "Today" — unlogged days after it are not penalized.
        rules: Thresholds and payouts.
        tz: Zone used to bucket aware datetimes (local zone by default).

    Raises:
        InvalidRangeError: ``range_start`` is after ``range_end`` or a bound is unusable.
        InvalidRecordError: A record has a negative duration or unusable day.
    """
    # Bounds and records must share one calendar
    try:
        range_start = to_day(range_start, tz)
        range_end = to_day(range_end, tz)
        reference_date = to_day(reference_date, tz)
    except InvalidRecordError as e:
        raise InvalidRangeError(f"Unusable range bound: {e}") from e
    if range_start > range_end:
        raise InvalidRangeError(f"Range start {range_start} is after range end {range_end}")

    weeks_from, weeks_to = aligned_range(range_start, range_end)
    by_day = index_records(records, tz)

    result = MonthResult(range_start=range_start, range_end=range_end, reference_date=reference_date)
    week_start = weeks_from
    while week_start <= weeks_to:
        result.weeks.append(classify_week(week_start, by_day, reference_date, rules))
        if week_start + timedelta(days=DAYS_PER_WEEK - 1) >= weeks_to:
            break
        week_start += timedelta(days=DAYS_PER_WEEK)

    result.total_earnings = sum(w.week_earnings for w in result.weeks)
    logger.debug(
        f"Aggregated {len(by_day)} day(s) of records over {len(result.weeks)} week(s) "
        f"{weeks_from}..{weeks_to}: total {result.total_earnings}"
    )
    return result
