from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..attendance.service import AttendanceService
from ..attendance.worktime import format_hours
from ..common.validators import require_wage
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..records.repository import RecordRepository
from ..users.model import User
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import SalaryInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class PayrollService:
    def __init__(
        self,
        records: RecordRepository,
        attendance: AttendanceService,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._records = records
        self._attendance = attendance
        self._calculator = calculator or StandardSalaryCalculator()

    def preview(self, wage: float) -> SalaryInfo:
        return self._calculator.compute(require_wage(wage))

    def set_wage(self, *, current_role: Role, user_id: str, wage: float) -> User:
        """Store a new wage on the user by recomputing the embedded salary breakdown."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change wages")

        user = self._records.get_user(user_id)
        if not user:
            raise ValidationError("User does not exist")

        updated = replace(user, salary=self.preview(wage))
        self._records.upsert_user(updated)
        logger.info("wage updated login_id=%s wage=%s", user.login_id, wage)
        return updated

    def build_attendance_report(self, *, year: int, month: int, user_id: Optional[str] = None) -> ReportData:
        users = {u.id: u for u in self._records.list_users()}
        records = sorted(
            self._attendance.get_attendance_by_month(year, month, user_id),
            key=lambda r: (r.work_date, r.user_id),
        )

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            user = users.get(r.user_id)
            worked = self._attendance.hours_for(r)
            overtime = self._attendance.overtime_for(r)

            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "user_id": r.user_id,
                    "login_id": user.login_id if user else "-",
                    "full_name": user.full_name if user else "-",
                    "check_in": r.check_in.strftime("%H:%M") if r.check_in else "-",
                    "check_out": r.check_out.strftime("%H:%M") if r.check_out else "-",
                    "status": r.status.value,
                    "worked_hours": format_hours(worked),
                    "overtime": format_hours(overtime),
                }
            )

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "user_id": r.user_id,
                    "full_name": user.full_name if user else "-",
                    "total_hours": 0.0,
                    "overtime_hours": 0.0,
                }
                summary_map[r.user_id] = s
            s["total_hours"] += worked
            s["overtime_hours"] += overtime

        summary = sorted(summary_map.values(), key=lambda x: x["total_hours"], reverse=True)
        for s in summary:
            s["total_hours"] = format_hours(s["total_hours"])
            s["overtime_hours"] = format_hours(s["overtime_hours"])
        return ReportData(rows=out_rows, summary=summary)
