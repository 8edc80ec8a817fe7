"""Day classifier — one step of the weekly fold.

Rules, first match wins:

1. no paid record, day after ``today``   -> NONE, 0
2. no paid record, day on/before today   -> PENALTY
3. record tagged OFF                     -> OFF, 0, one more OFF day used
4. duration >= super_minutes, SUPER free -> SUPER, week's SUPER slot taken
5. duration >= standard_minutes          -> STANDARD
6. shorter walks count as no record (rule 1 or 2)

The weekly counters are never mutated; the updated ``WeekState`` is
returned next to the ``DayResult``.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from walkwage.core.exceptions import InvalidRecordError

from .models import DEFAULT_RULES, DayCategory, DayResult, RuleSet, WalkRecord, WeekState


def _unlogged(day: date, today: date, duration: int, rules: RuleSet) -> DayResult:
    if day > today:
        return DayResult(day=day, category=DayCategory.NONE, earnings_delta=0, duration_minutes=duration)
    return DayResult(day=day, category=DayCategory.PENALTY, earnings_delta=rules.penalty, duration_minutes=duration)


def classify(
    record: WalkRecord | None,
    day: date,
    today: date,
    state: WeekState,
    rules: RuleSet = DEFAULT_RULES,
) -> tuple[DayResult, WeekState]:
    """Classify one calendar day.

    Args:
        record: The (already merged) record for ``day``, or None.
        day: The calendar day being classified.
        today: Reference date; days after it are never penalized.
        state: Counters accumulated earlier in the same week.
        rules: Thresholds and payouts.

    Returns:
        ``(DayResult, WeekState)`` with the counters after this day.
    """
    if record is None:
        return _unlogged(day, today, 0, rules), state

    duration = int(record.duration_minutes)
    if duration < 0:
        raise InvalidRecordError(f"Negative duration {duration} for {record.owner_id} on {day}")

    if record.is_off:
        result = DayResult(day=day, category=DayCategory.OFF, earnings_delta=0, duration_minutes=duration)
        return result, replace(state, off_days_used=state.off_days_used + 1)

    if duration >= rules.super_minutes and not state.super_used:
        result = DayResult(
            day=day, category=DayCategory.SUPER, earnings_delta=rules.super_earnings, duration_minutes=duration
        )
        return result, replace(state, super_used=True)

    if duration >= rules.standard_minutes:
        result = DayResult(
            day=day, category=DayCategory.STANDARD, earnings_delta=rules.standard_earnings, duration_minutes=duration
        )
        return result, state

    # Short walk: no protection against the penalty
    return _unlogged(day, today, duration, rules), state
