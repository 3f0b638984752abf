from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import ATTENDANCE_KEY, SESSION_KEY, TIMEOFF_KEY, USERS_KEY
from ..core.exceptions import StoreCorruptedError
from ..storage.base import KeyValueStore
from ..attendance.model import AttendanceRecord
from ..timeoff.model import TimeOffRequest
from ..users.model import User
from .seed import default_time_off, default_users

logger = logging.getLogger(__name__)


class RecordRepository:
    """Typed CRUD over the users, attendance and time-off collections.

    Every write is a full read-modify-write of one collection key. This is the
    only component that writes to the store; services compute new values and
    hand them here.
    """

    def __init__(self, store: KeyValueStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    # Raw collection access
    def _load(self, key: str, seed: Optional[Callable[[], list[dict]]] = None) -> list[dict]:
        raw = self._store.get(key)
        if raw is None:
            items = seed() if seed else []
            if seed:
                self._store.set(key, items)
                logger.info("seeded collection key=%s items=%d", key, len(items))
            return items
        if not isinstance(raw, list):
            raise StoreCorruptedError(f"Collection {key!r} must be a JSON array, got {type(raw).__name__}")
        return raw

    def _upsert(self, key: str, item: dict, matches: Callable[[dict], bool], seed=None) -> None:
        items = self._load(key, seed)
        for i, existing in enumerate(items):
            if matches(existing):
                items[i] = item
                break
        else:
            items.append(item)
        self._store.set(key, items)

    def _upsert_many(self, key: str, items_in: list[dict], identity: Callable[[dict], Any], seed=None) -> None:
        items = self._load(key, seed)
        index = {identity(d): i for i, d in enumerate(items)}
        for item in items_in:
            pos = index.get(identity(item))
            if pos is None:
                index[identity(item)] = len(items)
                items.append(item)
            else:
                items[pos] = item
        self._store.set(key, items)

    def _seed_users(self) -> list[dict]:
        return default_users()

    def _seed_time_off(self) -> list[dict]:
        return default_time_off(self._clock())

    # Users
    def list_users(self) -> list[User]:
        return [User.from_dict(d) for d in self._load(USERS_KEY, self._seed_users)]

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.id == user_id), None)

    def find_user_by_login_id(self, login_id: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.login_id == login_id), None)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.list_users() if u.email == email), None)

    def upsert_user(self, user: User) -> None:
        """Update in place when `id` or `login_id` matches, else append."""
        self._upsert(
            USERS_KEY,
            user.to_dict(),
            lambda d: d.get("id") == user.id or d.get("loginId") == user.login_id,
            self._seed_users,
        )

    # Attendance
    def list_attendance(self) -> list[AttendanceRecord]:
        return [AttendanceRecord.from_dict(d) for d in self._load(ATTENDANCE_KEY)]

    def get_attendance(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.list_attendance() if r.user_id == user_id and r.work_date == work_date),
            None,
        )

    def upsert_attendance(self, record: AttendanceRecord) -> None:
        """Update in place when (user_id, date) matches, else append."""
        work_date = record.to_dict()["date"]
        self._upsert(
            ATTENDANCE_KEY,
            record.to_dict(),
            lambda d: d.get("userId") == record.user_id and d.get("date") == work_date,
        )

    def upsert_attendance_many(self, records: list[AttendanceRecord]) -> None:
        """Upsert several records by (user_id, date) with one collection write."""
        if not records:
            return
        self._upsert_many(
            ATTENDANCE_KEY,
            [r.to_dict() for r in records],
            lambda d: (d.get("userId"), d.get("date")),
        )

    # Time off
    def list_time_off(self) -> list[TimeOffRequest]:
        return [TimeOffRequest.from_dict(d) for d in self._load(TIMEOFF_KEY, self._seed_time_off)]

    def get_time_off(self, request_id: str) -> Optional[TimeOffRequest]:
        return next((r for r in self.list_time_off() if r.id == request_id), None)

    def upsert_time_off(self, request: TimeOffRequest) -> None:
        self._upsert(
            TIMEOFF_KEY,
            request.to_dict(),
            lambda d: d.get("id") == request.id,
            self._seed_time_off,
        )

    # Current session snapshot (cached copy, not authoritative)
    def get_session(self) -> Optional[User]:
        raw: Any = self._store.get(SESSION_KEY)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise StoreCorruptedError("Session snapshot must be a JSON object")
        return User.from_dict(raw)

    def set_session(self, user: User) -> None:
        self._store.set(SESSION_KEY, user.to_dict())

    def clear_session(self) -> None:
        self._store.delete(SESSION_KEY)
