from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from ..attendance.service import AttendanceService
from ..common.datetime_utils import iter_days, now_local
from ..common.validators import require_non_empty
from ..core.enums import Role, TimeOffStatus, TimeOffType
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.policy import PolicyConfig
from ..records.repository import RecordRepository
from ..users.model import User
from .model import LeaveBalance, NewTimeOffRequest, TimeOffRequest

logger = logging.getLogger(__name__)


class TimeOffService:
    def __init__(
        self,
        records: RecordRepository,
        attendance: Optional[AttendanceService] = None,
        *,
        policy: Optional[PolicyConfig] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._attendance = attendance
        self._policy = policy or PolicyConfig()
        self._clock = clock

    @staticmethod
    def _new_id() -> str:
        return f"to-{uuid4().hex}"

    def submit_request(self, *, owner: User, new_request: NewTimeOffRequest) -> TimeOffRequest:
        """Create a PENDING request for `owner`.

        Sick leave without an attachment is rejected here, before anything is
        built. The repository itself accepts whatever it is given.
        """
        request_type = TimeOffType(new_request.type)
        if request_type == TimeOffType.SICK and not (new_request.attachment or "").strip():
            raise ValidationError("Medical certificate attachment is mandatory for sick leave.")
        if new_request.end_date < new_request.start_date:
            raise ValidationError("End date must be on or after start date")
        reason = require_non_empty(new_request.reason, "Reason")

        request = TimeOffRequest(
            id=self._new_id(),
            user_id=owner.id,
            employee_name=owner.full_name,
            type=request_type,
            start_date=new_request.start_date,
            end_date=new_request.end_date,
            status=TimeOffStatus.PENDING,
            reason=reason,
            submitted_at=self._clock(),
            attachment=(new_request.attachment or "").strip() or None,
        )
        self._records.upsert_time_off(request)
        logger.info("time off submitted id=%s user_id=%s type=%s days=%d", request.id, owner.id, request_type.value, request.day_count)
        return request

    def decide(self, request_id: str, status: TimeOffStatus, *, current_role: Role) -> TimeOffRequest:
        """Overwrite the decision on a request.

        Repeating a decision stores the same value again; the service does not
        refuse a second decision.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can decide time-off requests")

        status = TimeOffStatus(status)
        if status not in {TimeOffStatus.APPROVED, TimeOffStatus.REJECTED}:
            raise ValidationError("Decision must be APPROVED or REJECTED")

        request = self._records.get_time_off(request_id)
        if not request:
            raise ValidationError("Request does not exist")

        decided = replace(request, status=status)
        self._records.upsert_time_off(decided)
        logger.info("time off decided id=%s status=%s", request_id, status.value)

        if self._attendance is not None:
            days = iter_days(decided.start_date, decided.end_date)
            if status == TimeOffStatus.APPROVED:
                self._attendance.mark_leave(decided.user_id, days)
            elif request.status == TimeOffStatus.APPROVED:
                self._attendance.revert_leave(decided.user_id, days)
        return decided

    def allocation(self, request_type: TimeOffType) -> int:
        if TimeOffType(request_type) == TimeOffType.PAID:
            return self._policy.paid_allocation_days
        return self._policy.sick_allocation_days

    def used_days(self, user_id: str, request_type: TimeOffType) -> int:
        request_type = TimeOffType(request_type)
        return sum(
            r.day_count
            for r in self._records.list_time_off()
            if r.user_id == user_id and r.type == request_type and r.status == TimeOffStatus.APPROVED
        )

    def remaining(self, user_id: str, request_type: TimeOffType) -> int:
        return max(0, self.allocation(request_type) - self.used_days(user_id, request_type))

    def balances(self, user: User) -> list[LeaveBalance]:
        """Per-type balance for display. Admins are shown the flat allocation."""
        out: list[LeaveBalance] = []
        for request_type in TimeOffType:
            allocation = self.allocation(request_type)
            if user.is_admin:
                out.append(LeaveBalance(type=request_type, allocation=allocation, used=0, remaining=allocation))
                continue
            used = self.used_days(user.id, request_type)
            out.append(
                LeaveBalance(
                    type=request_type,
                    allocation=allocation,
                    used=used,
                    remaining=max(0, allocation - used),
                )
            )
        return out

    def list_requests(
        self,
        *,
        viewer: User,
        search: str = "",
        request_type: Optional[TimeOffType] = None,
    ) -> list[TimeOffRequest]:
        requests = self._records.list_time_off()
        if not viewer.is_admin:
            requests = [r for r in requests if r.user_id == viewer.id]

        needle = (search or "").strip().lower()
        if needle:
            requests = [r for r in requests if needle in r.employee_name.lower() or needle in r.reason.lower()]
        if request_type is not None:
            requests = [r for r in requests if r.type == TimeOffType(request_type)]
        return requests
