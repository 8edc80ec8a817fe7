"""
Walk ledger data models.

Raw walk records come in from a store; day, week and month results come out
of the aggregator.  Results are plain dataclasses so a renderer can consume
them without knowing anything about the rules that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from walkwage.core.config_schema import RulesConfig


class WalkKind(StrEnum):
    """Tag stored with a raw record.  Only OFF changes classification."""

    STANDARD = "STANDARD"
    SUPER = "SUPER"
    OFF = "OFF"


class DayCategory(StrEnum):
    """Outcome of classifying one calendar day."""

    STANDARD = "STANDARD"
    SUPER = "SUPER"
    OFF = "OFF"
    PENALTY = "PENALTY"
    NONE = "NONE"


# ── Rules ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RuleSet:
    """Thresholds and payouts for day classification.

    Attributes:
        super_minutes: Minimum minutes for the weekly SUPER walk.
        standard_minutes: Minimum minutes for a paid STANDARD walk.
        super_earnings: Payout for the week's first SUPER walk.
        standard_earnings: Payout for a STANDARD walk.
        penalty: Delta for a past day without a paid walk or OFF entry.
        max_off_days_per_week: OFF days allowed per calendar week at entry time.
    """

    super_minutes: int = 60
    standard_minutes: int = 45
    super_earnings: int = 150
    standard_earnings: int = 100
    penalty: int = -200
    max_off_days_per_week: int = 2

    @classmethod
    def from_config(cls, rules: RulesConfig) -> RuleSet:
        return cls(**rules.model_dump())


DEFAULT_RULES = RuleSet()


# ── Input ────────────────────────────────────────────────────────────


@dataclass
class WalkRecord:
    """One stored walk (or rest-day) entry for an owner and day.

    ``day`` may arrive as a ``date``, a ``datetime`` or an ISO string; the
    aggregator normalizes it to a calendar date before use.
    """

    owner_id: str
    day: date | datetime | str
    duration_minutes: int = 0
    explicit_kind: WalkKind | None = None

    def __post_init__(self):
        if self.explicit_kind is not None and not isinstance(self.explicit_kind, WalkKind):
            self.explicit_kind = WalkKind(str(self.explicit_kind).upper())

    @property
    def is_off(self) -> bool:
        return self.explicit_kind == WalkKind.OFF


# ── Output ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WeekState:
    """Counters carried across the seven days of one calendar week."""

    off_days_used: int = 0
    super_used: bool = False


@dataclass(frozen=True)
class DayResult:
    """Classification of a single calendar day."""

    day: date
    category: DayCategory
    earnings_delta: int = 0
    duration_minutes: int = 0

    @property
    def has_qualifying_activity(self) -> bool:
        """True only for paid walking tiers."""
        return self.category in (DayCategory.SUPER, DayCategory.STANDARD)


@dataclass
class WeekResult:
    """Seven classified days, Monday through Sunday."""

    days: list[DayResult]
    week_earnings: int = 0
    off_days_used: int = 0
    super_used: bool = False
    max_off_days: int = DEFAULT_RULES.max_off_days_per_week

    @property
    def week_start(self) -> date:
        return self.days[0].day

    @property
    def week_end(self) -> date:
        return self.days[-1].day

    @property
    def off_days_over_limit(self) -> bool:
        """More OFF records than the weekly allowance (possible with old or duplicated data)."""
        return self.off_days_used > self.max_off_days

    def find(self, day: date) -> DayResult | None:
        for result in self.days:
            if result.day == day:
                return result
        return None


@dataclass
class MonthResult:
    """Week-aligned results for a requested range.

    ``weeks`` covers every calendar week touching ``[range_start, range_end]``,
    so the first and last week can spill into neighbouring months.
    """

    range_start: date
    range_end: date
    reference_date: date
    weeks: list[WeekResult] = field(default_factory=list)
    total_earnings: int = 0

    def week_containing(self, day: date) -> WeekResult | None:
        for week in self.weeks:
            if week.week_start <= day <= week.week_end:
                return week
        return None

    def days_in_month(self, year: int, month: int) -> list[DayResult]:
        """Flattened day results restricted to one calendar month."""
        return [d for week in self.weeks for d in week.days if d.day.year == year and d.day.month == month]


@dataclass
class UserProfile:
    """The person whose walks are tracked.

    Attributes:
        id: Owner id used as the store key.
        name: Display name.
        balance: Opening balance added to computed earnings.
    """

    id: str
    name: str = "Walker"
    balance: int = 0

    def __post_init__(self):
        if not self.id:
            raise ValueError("User id cannot be empty")
