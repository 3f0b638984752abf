from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime, to_iso_date
from ..core.enums import AttendanceStatus
from .worktime import format_hours


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user_id, work_date)."""

    id: str
    user_id: str
    work_date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None

    @staticmethod
    def make_id(user_id: str, work_date: date) -> str:
        return f"{user_id}-{to_iso_date(work_date)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "date": to_iso_date(self.work_date),
            "checkIn": self.check_in.isoformat() if self.check_in else None,
            "checkOut": self.check_out.isoformat() if self.check_out else None,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        work_date = parse_iso_date(str(data["date"]))
        user_id = str(data["userId"])
        return cls(
            id=str(data.get("id") or cls.make_id(user_id, work_date)),
            user_id=user_id,
            work_date=work_date,
            status=AttendanceStatus(data["status"]),
            check_in=parse_iso_datetime(data.get("checkIn")),
            check_out=parse_iso_datetime(data.get("checkOut")),
        )


@dataclass(frozen=True)
class MonthlyStats:
    """Read-model: presence summary for a calendar month."""

    present: int
    leave: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return {"present": self.present, "leave": self.leave, "total": self.total}


@dataclass(frozen=True)
class DailySheetRow:
    """Read-model for the admin daily attendance view."""

    user_id: str
    login_id: str
    full_name: str
    record: Optional[AttendanceRecord]
    hours_worked: float
    overtime_hours: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "loginId": self.login_id,
            "fullName": self.full_name,
            "status": self.record.status.value if self.record else None,
            "checkIn": self.record.check_in.isoformat() if self.record and self.record.check_in else None,
            "checkOut": self.record.check_out.isoformat() if self.record and self.record.check_out else None,
            "workHours": format_hours(self.hours_worked),
            "overtime": format_hours(self.overtime_hours),
        }
