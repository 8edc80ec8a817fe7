"""Tests for WalkService — stores + aggregator + OFF allowance."""

from datetime import date

import pytest

from walkwage.activity.models import DayCategory, RuleSet, UserProfile, WalkKind
from walkwage.activity.service import WalkService
from walkwage.activity.store import YamlUserStore, YamlWalkLogStore
from walkwage.core.exceptions import InvalidRangeError, InvalidRecordError, OffDayLimitError, StoreError

TODAY = date(2025, 3, 20)


@pytest.fixture
def service(tmp_path):
    return WalkService(YamlWalkLogStore(tmp_path), YamlUserStore(tmp_path))


class TestLogWalk:
    @pytest.mark.parametrize(
        ("minutes", "kind"),
        [(75, WalkKind.SUPER), (60, WalkKind.SUPER), (45, WalkKind.STANDARD), (30, None)],
    )
    def test_kind_inferred(self, service, minutes, kind):
        assert service.log_walk("u1", date(2025, 3, 3), minutes).explicit_kind == kind

    def test_replaces_existing(self, service):
        service.log_walk("u1", date(2025, 3, 3), 30)
        service.log_walk("u1", date(2025, 3, 3), 50)
        records = service.walk_store.list_records("u1", date(2025, 3, 3), date(2025, 3, 3))
        assert [r.duration_minutes for r in records] == [50]

    def test_negative_duration(self, service):
        with pytest.raises(InvalidRecordError):
            service.log_walk("u1", date(2025, 3, 3), -1)

    def test_accepts_iso_string(self, service):
        assert service.log_walk("u1", "2025-03-03", 45).day == date(2025, 3, 3)

    @pytest.mark.parametrize("kind", ["NAP", 7])
    def test_unknown_kind(self, service, kind):
        with pytest.raises(InvalidRecordError, match="Unknown walk kind"):
            service.log_walk("u1", date(2025, 3, 3), 30, kind=kind)
        assert service.walk_store.list_records("u1", date(2025, 3, 3), date(2025, 3, 3)) == []

    def test_kind_name_any_case(self, service):
        assert service.log_walk("u1", date(2025, 3, 3), 0, kind="off").is_off


class TestOffAllowance:
    def test_two_off_days_allowed(self, service):
        service.log_off_day("u1", date(2025, 3, 3), TODAY)
        service.log_off_day("u1", date(2025, 3, 4), TODAY)
        stats = service.month_stats("u1", 2025, 3, TODAY)
        assert stats.week_containing(date(2025, 3, 3)).off_days_used == 2

    def test_third_off_day_rejected(self, service):
        service.log_off_day("u1", date(2025, 3, 3), TODAY)
        service.log_off_day("u1", date(2025, 3, 4), TODAY)
        with pytest.raises(OffDayLimitError, match="allowance is 2"):
            service.log_off_day("u1", date(2025, 3, 5), TODAY)

    def test_reconfirming_off_day_allowed(self, service):
        service.log_off_day("u1", date(2025, 3, 3), TODAY)
        service.log_off_day("u1", date(2025, 3, 4), TODAY)
        service.log_off_day("u1", date(2025, 3, 4), TODAY)

    def test_allowance_is_per_week(self, service):
        service.log_off_day("u1", date(2025, 3, 8), TODAY)
        service.log_off_day("u1", date(2025, 3, 9), TODAY)
        service.log_off_day("u1", date(2025, 3, 10), TODAY)

    def test_custom_allowance(self, tmp_path):
        service = WalkService(YamlWalkLogStore(tmp_path), YamlUserStore(tmp_path), RuleSet(max_off_days_per_week=0))
        with pytest.raises(OffDayLimitError):
            service.log_off_day("u1", date(2025, 3, 3), TODAY)


class TestStats:
    def test_month_stats_uses_neighbouring_weeks(self, service):
        # 2025-02-26 belongs to the first week shown for March
        service.log_walk("u1", date(2025, 2, 26), 60)
        stats = service.month_stats("u1", 2025, 3, TODAY)
        assert stats.weeks[0].week_start == date(2025, 2, 24)
        assert stats.weeks[0].days[2].category == DayCategory.SUPER
        assert len(stats.weeks) == 6

    def test_range_stats(self, service):
        service.log_walk("u1", date(2025, 3, 3), 65)
        service.log_walk("u1", date(2025, 3, 4), 70)
        stats = service.range_stats("u1", date(2025, 3, 3), date(2025, 3, 9), date(2025, 3, 9))
        assert stats.total_earnings == -750

    def test_delete_walk(self, service):
        service.log_walk("u1", date(2025, 3, 3), 65)
        assert service.delete_walk("u1", date(2025, 3, 3)) is True
        stats = service.range_stats("u1", date(2025, 3, 3), date(2025, 3, 3), TODAY)
        assert stats.weeks[0].days[0].category == DayCategory.PENALTY

    def test_bad_month(self, service):
        with pytest.raises(InvalidRangeError):
            service.month_stats("u1", 2025, 0, TODAY)


class TestUsers:
    def test_balance_adds_opening_balance(self, service):
        service.user_store.save(UserProfile(id="u1", balance=1000))
        service.log_walk("u1", date(2025, 3, 3), 65)
        stats = service.range_stats("u1", date(2025, 3, 3), date(2025, 3, 3), date(2025, 3, 3))
        assert service.balance("u1", stats) == 1150

    def test_current_user_fallback(self, service):
        default = service.current_user()
        assert service.current_user("missing").id == default.id

    def test_current_user_by_id(self, service):
        service.user_store.save(UserProfile(id="alice", name="Alice"))
        assert service.current_user("alice").name == "Alice"

    def test_require_user_known(self, service):
        service.user_store.save(UserProfile(id="alice", name="Alice"))
        assert service.require_user("alice").name == "Alice"

    def test_require_user_empty_is_default(self, service):
        assert service.require_user().id == service.current_user().id

    def test_require_user_unknown(self, service):
        with pytest.raises(StoreError, match="Unknown user 'bob'"):
            service.require_user("bob")
        assert service.user_store.get("bob") is None
