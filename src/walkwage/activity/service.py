"""Walk service — glue between the stores and the aggregator.

Widens month requests to whole weeks before fetching so that week-boundary
days are present, and enforces the OFF-day allowance when an OFF day is
entered (the aggregator itself only counts them).
"""

from __future__ import annotations

from datetime import date

from loguru import logger

from walkwage.core.exceptions import InvalidRecordError, OffDayLimitError, StoreError

from .aggregator import aggregate, classify_week, index_records
from .dates import aligned_range, month_bounds, to_day, week_end_for, week_start_for
from .models import DEFAULT_RULES, DayCategory, MonthResult, RuleSet, UserProfile, WalkKind, WalkRecord
from .store import UserStore, WalkLogStore


class WalkService:
    """Log walks and compute ledgers for an owner.

    Example::

        service = WalkService(YamlWalkLogStore(data_dir), YamlUserStore(data_dir))
        user = service.current_user()
        service.log_walk(user.id, date(2025, 3, 3), 50)
        stats = service.month_stats(user.id, 2025, 3)
    """

    def __init__(self, walk_store: WalkLogStore, user_store: UserStore, rules: RuleSet = DEFAULT_RULES):
        self.walk_store = walk_store
        self.user_store = user_store
        self.rules = rules

    def current_user(self, owner_id: str = "") -> UserProfile:
        """Return ``owner_id``'s profile, or the default user when empty or unknown."""
        if owner_id:
            user = self.user_store.get(owner_id)
            if user is not None:
                return user
            logger.warning(f"Unknown user {owner_id!r}; falling back to the default user")
        return self.user_store.get_current_user()

    def require_user(self, owner_id: str = "") -> UserProfile:
        """Like ``current_user`` but an unknown ``owner_id`` is an error, not a fallback.

        Write paths use this so an entry never lands in another owner's log.
        """
        if not owner_id:
            return self.user_store.get_current_user()
        user = self.user_store.get(owner_id)
        if user is None:
            raise StoreError(f"Unknown user {owner_id!r}")
        return user

    # -- Stats ----------------------------------------------------------------

    def range_stats(
        self,
        owner_id: str,
        start: date,
        end: date,
        reference_date: date | None = None,
    ) -> MonthResult:
        """Aggregate ``[start, end]`` for one owner, fetching whole weeks."""
        fetch_start, fetch_end = aligned_range(to_day(start), to_day(end))
        records = self.walk_store.list_records(owner_id, fetch_start, fetch_end)
        today = reference_date or date.today()
        return aggregate(records, start, end, today, self.rules)

    def month_stats(
        self,
        owner_id: str,
        year: int,
        month: int,
        reference_date: date | None = None,
    ) -> MonthResult:
        """Aggregate the calendar month ``year``-``month`` (1-12)."""
        start, end = month_bounds(year, month)
        return self.range_stats(owner_id, start, end, reference_date)

    def balance(self, owner_id: str, stats: MonthResult) -> int:
        """Opening balance plus the computed earnings."""
        return self.current_user(owner_id).balance + stats.total_earnings

    # -- Writes ---------------------------------------------------------------

    def log_walk(
        self,
        owner_id: str,
        day: date,
        duration_minutes: int,
        kind: WalkKind | str | None = None,
        reference_date: date | None = None,
    ) -> WalkRecord:
        """Create or replace the walk for ``day``.

        Raises:
            InvalidRecordError: Negative duration or unknown kind.
            OffDayLimitError: An OFF day would exceed the weekly allowance.
        """
        day = to_day(day)
        duration_minutes = int(duration_minutes)
        if duration_minutes < 0:
            raise InvalidRecordError(f"Duration must be non-negative, got {duration_minutes}")

        try:
            kind = WalkKind(str(kind).upper()) if kind else None
        except ValueError as e:
            raise InvalidRecordError(f"Unknown walk kind {kind!r}") from e
        if kind == WalkKind.OFF:
            self._check_off_allowance(owner_id, day, reference_date)
        elif kind is None:
            kind = self._infer_kind(duration_minutes)

        record = WalkRecord(owner_id=owner_id, day=day, duration_minutes=duration_minutes, explicit_kind=kind)
        return self.walk_store.put_record(record)

    def log_off_day(self, owner_id: str, day: date, reference_date: date | None = None) -> WalkRecord:
        return self.log_walk(owner_id, day, 0, WalkKind.OFF, reference_date)

    def delete_walk(self, owner_id: str, day: date) -> bool:
        return self.walk_store.delete_record(owner_id, to_day(day))

    # -- Helpers --------------------------------------------------------------

    def _infer_kind(self, duration_minutes: int) -> WalkKind | None:
        if duration_minutes >= self.rules.super_minutes:
            return WalkKind.SUPER
        if duration_minutes >= self.rules.standard_minutes:
            return WalkKind.STANDARD
        return None

    def _check_off_allowance(self, owner_id: str, day: date, reference_date: date | None) -> None:
        week_start = week_start_for(day)
        records = self.walk_store.list_records(owner_id, week_start, week_end_for(day))
        week = classify_week(week_start, index_records(records), reference_date or date.today(), self.rules)

        current = week.find(day)
        if current is not None and current.category == DayCategory.OFF:
            return
        if week.off_days_used >= self.rules.max_off_days_per_week:
            raise OffDayLimitError(
                f"Week of {week_start} already has {week.off_days_used} OFF day(s); "
                f"the weekly allowance is {self.rules.max_off_days_per_week}"
            )
