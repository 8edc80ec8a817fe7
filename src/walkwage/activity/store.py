"""Walk log and user stores — the persistence side of the ledger.

``WalkLogStore`` and ``UserStore`` are the contracts the service depends on.
The YAML implementations keep one file per owner under
``<data_dir>/walks/<owner_id>.yaml`` and all users in ``<data_dir>/users.yaml``.
Every call re-reads the file, so readers always see a complete snapshot.
"""

from __future__ import annotations

import re
import threading
import uuid
from datetime import date
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from loguru import logger

from walkwage.core.exceptions import StoreError

from .dates import to_day
from .models import UserProfile, WalkKind, WalkRecord

_OWNER_ID_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class WalkLogStore(Protocol):
    """Protocol for reading and writing raw walk records."""

    def list_records(self, owner_id: str, start: date, end: date) -> list[WalkRecord]:
        """Return the owner's records with ``start <= day <= end``, sorted by day."""
        ...

    def put_record(self, record: WalkRecord) -> WalkRecord:
        """Create or replace the owner's record for ``record.day``."""
        ...

    def delete_record(self, owner_id: str, day: date) -> bool:
        """Remove the owner's record(s) for ``day``. Returns True if any existed."""
        ...


@runtime_checkable
class UserStore(Protocol):
    """Protocol for user profiles."""

    def get_current_user(self) -> UserProfile:
        """Return the first stored user, creating a default one if none exist."""
        ...

    def get(self, user_id: str) -> UserProfile | None: ...

    def save(self, profile: UserProfile) -> UserProfile: ...


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_yaml_list(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except yaml.YAMLError as e:
        raise StoreError(f"Corrupt store file {path}: {e}") from e
    if not isinstance(data, list):
        raise StoreError(f"Store file {path} must contain a list, got {type(data).__name__}")
    return data


def _dump_yaml_list(path: Path, entries: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(yaml.safe_dump(entries, default_flow_style=False, sort_keys=False), encoding="utf-8")
    tmp.replace(path)


def _record_from_entry(owner_id: str, entry: dict[str, Any]) -> WalkRecord:
    kind = entry.get("kind")
    return WalkRecord(
        owner_id=owner_id,
        day=to_day(entry["day"]),
        duration_minutes=int(entry.get("duration_minutes", 0)),
        explicit_kind=WalkKind(kind) if kind else None,
    )


def _entry_from_record(record: WalkRecord) -> dict[str, Any]:
    return {
        "day": to_day(record.day).isoformat(),
        "duration_minutes": int(record.duration_minutes),
        "kind": record.explicit_kind.value if record.explicit_kind else None,
    }


# ---------------------------------------------------------------------------
# YAML walk log
# ---------------------------------------------------------------------------


class YamlWalkLogStore:
    """File-backed walk log, one YAML list per owner."""

    def __init__(self, data_dir: str | Path) -> None:
        self.walks_dir = Path(data_dir).expanduser() / "walks"
        self._lock = threading.Lock()

    def _owner_path(self, owner_id: str) -> Path:
        if not owner_id or not _OWNER_ID_RE.match(owner_id) or owner_id in (".", ".."):
            raise StoreError(f"Unsafe owner id {owner_id!r}")
        return self.walks_dir / f"{owner_id}.yaml"

    def _read(self, owner_id: str) -> list[WalkRecord]:
        path = self._owner_path(owner_id)
        try:
            return [_record_from_entry(owner_id, e) for e in _load_yaml_list(path)]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed entry in {path}: {e}") from e

    def _write(self, owner_id: str, records: list[WalkRecord]) -> None:
        records = sorted(records, key=lambda r: to_day(r.day))
        _dump_yaml_list(self._owner_path(owner_id), [_entry_from_record(r) for r in records])

    def list_records(self, owner_id: str, start: date, end: date) -> list[WalkRecord]:
        with self._lock:
            records = self._read(owner_id)
        return sorted(
            (r for r in records if start <= r.day <= end),
            key=lambda r: r.day,
        )

    def put_record(self, record: WalkRecord) -> WalkRecord:
        day = to_day(record.day)
        stored = WalkRecord(
            owner_id=record.owner_id,
            day=day,
            duration_minutes=int(record.duration_minutes),
            explicit_kind=record.explicit_kind,
        )
        with self._lock:
            existing = self._read(record.owner_id)
            records = [r for r in existing if r.day != day]
            replaced = len(records) != len(existing)
            records.append(stored)
            self._write(record.owner_id, records)
        logger.debug(f"{'Replaced' if replaced else 'Created'} walk for {record.owner_id} on {day}")
        return stored

    def delete_record(self, owner_id: str, day: date) -> bool:
        day = to_day(day)
        with self._lock:
            records = self._read(owner_id)
            kept = [r for r in records if r.day != day]
            if len(kept) == len(records):
                return False
            self._write(owner_id, kept)
        logger.debug(f"Deleted walk for {owner_id} on {day}")
        return True


# ---------------------------------------------------------------------------
# YAML users
# ---------------------------------------------------------------------------


class YamlUserStore:
    """All user profiles in a single YAML list."""

    def __init__(self, data_dir: str | Path) -> None:
        self.path = Path(data_dir).expanduser() / "users.yaml"
        self._lock = threading.Lock()

    def _read(self) -> list[UserProfile]:
        try:
            return [
                UserProfile(id=str(e["id"]), name=e.get("name", "Walker"), balance=int(e.get("balance", 0)))
                for e in _load_yaml_list(self.path)
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Malformed user entry in {self.path}: {e}") from e

    def _write(self, users: list[UserProfile]) -> None:
        _dump_yaml_list(self.path, [{"id": u.id, "name": u.name, "balance": u.balance} for u in users])

    def get_current_user(self) -> UserProfile:
        with self._lock:
            users = self._read()
            if users:
                return users[0]
            user = UserProfile(id=uuid.uuid4().hex[:12])
            self._write([user])
        logger.info(f"Created default user {user.name} ({user.id})")
        return user

    def get(self, user_id: str) -> UserProfile | None:
        with self._lock:
            users = self._read()
        return next((u for u in users if u.id == user_id), None)

    def save(self, profile: UserProfile) -> UserProfile:
        with self._lock:
            users = self._read()
            ids = [u.id for u in users]
            if profile.id in ids:
                users[ids.index(profile.id)] = profile
            else:
                users.append(profile)
            self._write(users)
        return profile
