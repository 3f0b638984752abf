from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..core.policy import PolicyConfig
from ..records.repository import RecordRepository
from .model import AttendanceRecord, DailySheetRow, MonthlyStats
from .worktime import hours_worked, overtime_hours

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily presence state machine per user, plus read-only monthly/daily views."""

    def __init__(
        self,
        records: RecordRepository,
        *,
        policy: Optional[PolicyConfig] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._policy = policy or PolicyConfig()
        self._clock = clock

    def mark_attendance(self, user_id: str, status: AttendanceStatus, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        status = AttendanceStatus(status)

        user = self._records.get_user(user_id)
        if user:
            # last_check_in is kept when leaving PRESENT: it marks the last check-in instant.
            self._records.upsert_user(
                replace(
                    user,
                    attendance_status=status,
                    last_check_in=now if status == AttendanceStatus.PRESENT else user.last_check_in,
                )
            )
        else:
            logger.warning("attendance marked for unknown user_id=%s", user_id)

        record = self._records.get_attendance(user_id, today)
        if record is None:
            record = AttendanceRecord(
                id=AttendanceRecord.make_id(user_id, today),
                user_id=user_id,
                work_date=today,
                status=status,
                check_in=now if status == AttendanceStatus.PRESENT else None,
            )
        else:
            check_in = record.check_in
            check_out = record.check_out
            if status == AttendanceStatus.PRESENT and not check_in:
                check_in = now
            if status == AttendanceStatus.ABSENT and check_in:
                check_out = now
            record = replace(record, status=status, check_in=check_in, check_out=check_out)

        self._records.upsert_attendance(record)
        logger.info("attendance user_id=%s date=%s status=%s", user_id, today, status.value)
        return record

    def check_in(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        return self.mark_attendance(user_id, AttendanceStatus.PRESENT, now=now)

    def check_out(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        return self.mark_attendance(user_id, AttendanceStatus.ABSENT, now=now)

    def mark_leave(self, user_id: str, days: Iterable[date]) -> list[AttendanceRecord]:
        """Set LEAVE on each given day. Check-in/out already captured on a day are kept."""
        return self._restate_days(user_id, days, lambda record: AttendanceStatus.LEAVE)

    def revert_leave(self, user_id: str, days: Iterable[date]) -> list[AttendanceRecord]:
        """Undo LEAVE on the given days: PRESENT where a check-in exists, else ABSENT.

        Days whose status is no longer LEAVE are left alone.
        """

        def reverted(record: Optional[AttendanceRecord]) -> Optional[AttendanceStatus]:
            if record is None or record.status != AttendanceStatus.LEAVE:
                return None
            return AttendanceStatus.PRESENT if record.check_in else AttendanceStatus.ABSENT

        return self._restate_days(user_id, days, reverted)

    def _restate_days(
        self,
        user_id: str,
        days: Iterable[date],
        new_status: Callable[[Optional[AttendanceRecord]], Optional[AttendanceStatus]],
    ) -> list[AttendanceRecord]:
        # One collection read and one write for the whole range.
        existing = {r.work_date: r for r in self._records.list_attendance() if r.user_id == user_id}
        today = self._clock().date()
        written: list[AttendanceRecord] = []
        today_status: Optional[AttendanceStatus] = None

        for day in days:
            record = existing.get(day)
            status = new_status(record)
            if status is None:
                continue
            if record is None:
                record = AttendanceRecord(
                    id=AttendanceRecord.make_id(user_id, day),
                    user_id=user_id,
                    work_date=day,
                    status=status,
                )
            else:
                record = replace(record, status=status)
            written.append(record)
            if day == today:
                today_status = status

        self._records.upsert_attendance_many(written)

        if today_status is not None:
            user = self._records.get_user(user_id)
            if user:
                self._records.upsert_user(replace(user, attendance_status=today_status))
        logger.info("attendance restated user_id=%s days=%d", user_id, len(written))
        return written

    def get_attendance_by_date(self, work_date: date) -> list[AttendanceRecord]:
        return [r for r in self._records.list_attendance() if r.work_date == work_date]

    def get_attendance_by_month(self, year: int, month: int, user_id: Optional[str] = None) -> list[AttendanceRecord]:
        """Records in a calendar month (month is 1..12), optionally for one user."""
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        return [
            r
            for r in self._records.list_attendance()
            if r.work_date.year == int(year)
            and r.work_date.month == int(month)
            and (user_id is None or r.user_id == user_id)
        ]

    def monthly_stats(self, year: int, month: int, user_id: Optional[str] = None) -> MonthlyStats:
        """Present vs other days. An empty month falls back to the default working-day count."""
        rows = self.get_attendance_by_month(year, month, user_id)
        present = sum(1 for r in rows if r.status == AttendanceStatus.PRESENT)
        total = len(rows) or self._policy.default_working_days
        return MonthlyStats(present=present, leave=total - present, total=total)

    def hours_for(self, record: Optional[AttendanceRecord]) -> float:
        if not record:
            return 0.0
        return hours_worked(record.check_in, record.check_out)

    def overtime_for(self, record: Optional[AttendanceRecord]) -> float:
        return overtime_hours(self.hours_for(record), self._policy.standard_shift_hours)

    def daily_sheet(self, work_date: date, search: str = "") -> list[DailySheetRow]:
        """Admin view: one row per employee matching the search, with that day's record."""
        needle = (search or "").strip().lower()
        by_user = {r.user_id: r for r in self.get_attendance_by_date(work_date)}

        rows: list[DailySheetRow] = []
        for user in self._records.list_users():
            if needle and needle not in user.full_name.lower() and needle not in user.login_id.lower():
                continue
            record = by_user.get(user.id)
            rows.append(
                DailySheetRow(
                    user_id=user.id,
                    login_id=user.login_id,
                    full_name=user.full_name,
                    record=record,
                    hours_worked=self.hours_for(record),
                    overtime_hours=self.overtime_for(record),
                )
            )
        return rows
