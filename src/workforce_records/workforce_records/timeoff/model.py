from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import inclusive_day_count, parse_iso_date, parse_iso_datetime, to_iso_date
from ..core.enums import TimeOffStatus, TimeOffType


@dataclass(frozen=True)
class TimeOffRequest:
    """Domain entity: time-off request.

    `employee_name` is a snapshot taken at submission. It is not updated when
    the owner is renamed later.
    """

    id: str
    user_id: str
    employee_name: str
    type: TimeOffType
    start_date: date
    end_date: date
    status: TimeOffStatus
    reason: str
    submitted_at: datetime
    attachment: Optional[str] = None

    @property
    def day_count(self) -> int:
        return inclusive_day_count(self.start_date, self.end_date)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "employeeName": self.employee_name,
            "type": self.type.value,
            "startDate": to_iso_date(self.start_date),
            "endDate": to_iso_date(self.end_date),
            "status": self.status.value,
            "reason": self.reason,
            "submittedAt": self.submitted_at.isoformat(),
        }
        if self.attachment:
            data["attachment"] = self.attachment
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TimeOffRequest":
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            employee_name=str(data.get("employeeName", "")),
            type=TimeOffType(data["type"]),
            start_date=parse_iso_date(str(data["startDate"])),
            end_date=parse_iso_date(str(data["endDate"])),
            status=TimeOffStatus(data.get("status", TimeOffStatus.PENDING.value)),
            reason=str(data.get("reason", "")),
            submitted_at=parse_iso_datetime(data.get("submittedAt")) or datetime.min,
            attachment=data.get("attachment") or None,
        )


@dataclass(frozen=True)
class NewTimeOffRequest:
    """Input for a submission, before id/status/timestamps are assigned."""

    type: TimeOffType
    start_date: date
    end_date: date
    reason: str
    attachment: Optional[str] = None


@dataclass(frozen=True)
class LeaveBalance:
    type: TimeOffType
    allocation: int
    used: int
    remaining: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "allocation": self.allocation,
            "used": self.used,
            "remaining": self.remaining,
        }
