"""
Walking activity ledger.

Pure core (no I/O): ``classify`` and ``aggregate``.  Collaborators:
YAML-backed stores, ``WalkService`` and text/JSON reports.
"""

from .aggregator import aggregate, classify_week, index_records
from .classifier import classify
from .models import (
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
from .service import WalkService
from .store import UserStore, WalkLogStore, YamlUserStore, YamlWalkLogStore

__all__ = [
    "DEFAULT_RULES",
    "DayCategory",
    "DayResult",
    "MonthResult",
    "RuleSet",
    "UserProfile",
    "UserStore",
    "WalkKind",
    "WalkLogStore",
    "WalkRecord",
    "WalkService",
    "WeekResult",
    "WeekState",
    "YamlUserStore",
    "YamlWalkLogStore",
    "aggregate",
    "classify",
    "classify_week",
    "index_records",
]
