"""Plain-data and text views of computed ledgers."""

from __future__ import annotations

from typing import Any

from .models import DayCategory, DayResult, MonthResult, WeekResult

_SYMBOLS = {
    DayCategory.SUPER: "S",
    DayCategory.STANDARD: "W",
    DayCategory.OFF: "O",
    DayCategory.PENALTY: "X",
    DayCategory.NONE: "-",
}


def day_to_dict(day: DayResult) -> dict[str, Any]:
    return {
        "date": day.day.isoformat(),
        "walked": day.has_qualifying_activity,
        "duration": day.duration_minutes,
        "earnings": day.earnings_delta,
        "type": day.category.value,
    }


def week_to_dict(week: WeekResult) -> dict[str, Any]:
    return {
        "totalEarnings": week.week_earnings,
        "offDaysUsed": week.off_days_used,
        "superWalkUsed": week.super_used,
        "days": [day_to_dict(d) for d in week.days],
    }


def to_dict(stats: MonthResult) -> dict[str, Any]:
    """JSON-ready view of a MonthResult."""
    return {
        "totalEarnings": stats.total_earnings,
        "rangeStart": stats.range_start.isoformat(),
        "rangeEnd": stats.range_end.isoformat(),
        "referenceDate": stats.reference_date.isoformat(),
        "weeks": [week_to_dict(w) for w in stats.weeks],
    }


def _cell(day: DayResult, year: int | None, month: int | None) -> str:
    if year is not None and month is not None and (day.day.year, day.day.month) != (year, month):
        return f"{'·':^9}"
    return f"{day.day.day:>2} {_SYMBOLS[day.category]} {day.earnings_delta:>+4}"


def format_month(stats: MonthResult, year: int | None = None, month: int | None = None, balance: int | None = None) -> str:
    """Format a MonthResult as a week-per-row text table.

    When ``year`` and ``month`` are given, days outside that month are
    blanked out (their earnings still count toward the week total).
    """
    width = 7 * 10 + 22
    lines = []
    lines.append("=" * width)
    if year is not None and month is not None:
        title = f"{year}-{month:02d}"
    else:
        title = f"{stats.range_start} .. {stats.range_end}"
    lines.append(f"  Walk ledger {title} (as of {stats.reference_date})")
    lines.append("=" * width)

    header = " ".join(f"{name:^9}" for name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"))
    lines.append(f"{header}  {'Week':>7} {'OFF':>4} {'SUP':>4}")
    lines.append("-" * width)

    for week in stats.weeks:
        cells = " ".join(_cell(d, year, month) for d in week.days)
        off = f"{week.off_days_used}!" if week.off_days_over_limit else str(week.off_days_used)
        lines.append(f"{cells}  {week.week_earnings:>+7} {off:>4} {'yes' if week.super_used else 'no':>4}")

    lines.append("-" * width)
    lines.append(f"Total earnings: {stats.total_earnings:+,}")
    if balance is not None:
        lines.append(f"Balance:        {balance:+,}")
    lines.append("Legend: S super  W walk  O off  X penalty  - upcoming")
    return "\n".join(lines)
