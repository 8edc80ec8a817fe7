"""Tests for activity.models — records, results and rules."""

from datetime import date, timedelta

import pytest

from walkwage.activity.models import (
    DEFAULT_RULES,
    DayCategory,
    DayResult,
    MonthResult,
    RuleSet,
    UserProfile,
    WalkKind,
    WalkRecord,
    WeekResult,
    WeekState,
)
from walkwage.core.config_schema import RulesConfig


class TestEnums:
    def test_values(self):
        assert WalkKind.OFF == "OFF"
        assert DayCategory.PENALTY == "PENALTY"
        assert DayCategory.NONE == "NONE"

    def test_is_string_enum(self):
        assert isinstance(DayCategory.SUPER, str)


class TestWalkRecord:
    def test_defaults(self):
        rec = WalkRecord(owner_id="u1", day=date(2025, 3, 3))
        assert rec.duration_minutes == 0
        assert rec.explicit_kind is None
        assert rec.is_off is False

    def test_kind_from_string(self):
        rec = WalkRecord(owner_id="u1", day=date(2025, 3, 3), explicit_kind="off")
        assert rec.explicit_kind is WalkKind.OFF
        assert rec.is_off is True

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            WalkRecord(owner_id="u1", day=date(2025, 3, 3), explicit_kind="NAP")


class TestDayResult:
    @pytest.mark.parametrize(
        ("category", "qualifying"),
        [
            (DayCategory.SUPER, True),
            (DayCategory.STANDARD, True),
            (DayCategory.OFF, False),
            (DayCategory.PENALTY, False),
            (DayCategory.NONE, False),
        ],
    )
    def test_qualifying_activity(self, category, qualifying):
        assert DayResult(day=date(2025, 3, 3), category=category).has_qualifying_activity is qualifying


class TestWeekState:
    def test_defaults(self):
        state = WeekState()
        assert state.off_days_used == 0
        assert state.super_used is False

    def test_frozen(self):
        with pytest.raises(AttributeError):
            WeekState().super_used = True  # type: ignore[misc]


class TestWeekResult:
    def _week(self, offs: int) -> WeekResult:
        days = [DayResult(day=date(2025, 3, 3 + i), category=DayCategory.NONE) for i in range(7)]
        return WeekResult(days=days, off_days_used=offs)

    def test_bounds(self):
        week = self._week(0)
        assert week.week_start == date(2025, 3, 3)
        assert week.week_end == date(2025, 3, 9)

    def test_off_days_over_limit(self):
        assert self._week(2).off_days_over_limit is False
        assert self._week(3).off_days_over_limit is True

    def test_find(self):
        week = self._week(0)
        assert week.find(date(2025, 3, 5)).day == date(2025, 3, 5)
        assert week.find(date(2025, 3, 10)) is None


class TestMonthResult:
    def test_days_in_month_and_week_containing(self):
        days = [DayResult(day=date(2025, 2, 24) + timedelta(days=i), category=DayCategory.NONE) for i in range(7)]
        stats = MonthResult(
            range_start=date(2025, 3, 1),
            range_end=date(2025, 3, 31),
            reference_date=date(2025, 3, 1),
            weeks=[WeekResult(days=days)],
        )
        assert [d.day for d in stats.days_in_month(2025, 3)] == [date(2025, 3, 1), date(2025, 3, 2)]
        assert stats.week_containing(date(2025, 2, 26)) is stats.weeks[0]
        assert stats.week_containing(date(2025, 3, 3)) is None


class TestRuleSet:
    def test_defaults(self):
        assert DEFAULT_RULES.super_earnings == 150
        assert DEFAULT_RULES.standard_earnings == 100
        assert DEFAULT_RULES.penalty == -200
        assert DEFAULT_RULES.max_off_days_per_week == 2

    def test_from_config(self):
        rules = RuleSet.from_config(RulesConfig(penalty=-300, standard_minutes=30))
        assert rules.penalty == -300
        assert rules.standard_minutes == 30
        assert rules.super_minutes == 60


class TestUserProfile:
    def test_defaults(self):
        user = UserProfile(id="abc")
        assert user.name == "Walker"
        assert user.balance == 0

    def test_empty_id_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            UserProfile(id="")
