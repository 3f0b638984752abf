from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.workforce_records.workforce_records.core.enums import AttendanceStatus, Role, TimeOffStatus, TimeOffType
from src.workforce_records.workforce_records.core.exceptions import AuthorizationError, ValidationError
from src.workforce_records.workforce_records.core.policy import PolicyConfig
from src.workforce_records.workforce_records.timeoff.model import NewTimeOffRequest
from src.workforce_records.workforce_records.timeoff.service import TimeOffService


def _new(request_type=TimeOffType.PAID, start=date(2024, 7, 1), end=date(2024, 7, 3), reason="Trip", attachment=None):
    return NewTimeOffRequest(type=request_type, start_date=start, end_date=end, reason=reason, attachment=attachment)


def test_submit_creates_pending_request(time_off_service, records, clock):
    john = records.get_user("2")
    created = time_off_service.submit_request(owner=john, new_request=_new())

    assert created.status == TimeOffStatus.PENDING
    assert created.employee_name == "John Doe"
    assert created.submitted_at == clock.now
    assert created.id.startswith("to-")
    assert records.get_time_off(created.id) == created


def test_submitted_ids_are_unique(time_off_service, records):
    john = records.get_user("2")
    ids = {time_off_service.submit_request(owner=john, new_request=_new()).id for _ in range(5)}

    assert len(ids) == 5


def test_sick_leave_requires_attachment(time_off_service, records):
    john = records.get_user("2")
    before = len(records.list_time_off())

    with pytest.raises(ValidationError, match="attachment"):
        time_off_service.submit_request(owner=john, new_request=_new(TimeOffType.SICK))
    assert len(records.list_time_off()) == before

    created = time_off_service.submit_request(owner=john, new_request=_new(TimeOffType.SICK, attachment="cert.pdf"))
    assert created.attachment == "cert.pdf"


def test_invalid_range_and_empty_reason(time_off_service, records):
    john = records.get_user("2")

    with pytest.raises(ValidationError):
        time_off_service.submit_request(owner=john, new_request=_new(start=date(2024, 7, 3), end=date(2024, 7, 1)))
    with pytest.raises(ValidationError):
        time_off_service.submit_request(owner=john, new_request=_new(reason="   "))


def test_employee_name_is_a_snapshot(time_off_service, records):
    john = records.get_user("2")
    created = time_off_service.submit_request(owner=john, new_request=_new())
    records.upsert_user(replace(john, full_name="Johnny Doe"))

    assert records.get_time_off(created.id).employee_name == "John Doe"


def test_seeded_balance(time_off_service, records):
    # seeded: one APPROVED PAID request 2024-06-10..2024-06-12 for John
    assert time_off_service.used_days("2", TimeOffType.PAID) == 3
    assert time_off_service.remaining("2", TimeOffType.PAID) == 21
    assert time_off_service.remaining("2", TimeOffType.SICK) == 7
    # Smith's sick request is still pending
    assert time_off_service.used_days("3", TimeOffType.SICK) == 0


def test_remaining_floors_at_zero(records, attendance_service, clock):
    service = TimeOffService(records, attendance_service, policy=PolicyConfig(paid_allocation_days=2), clock=clock)

    assert service.used_days("2", TimeOffType.PAID) == 3
    assert service.remaining("2", TimeOffType.PAID) == 0


def test_admin_balances_show_flat_allocation(time_off_service, records):
    admin = records.get_user("1")
    john = records.get_user("2")

    admin_balances = {b.type: b for b in time_off_service.balances(admin)}
    john_balances = {b.type: b for b in time_off_service.balances(john)}

    assert admin_balances[TimeOffType.PAID].remaining == 24
    assert admin_balances[TimeOffType.SICK].remaining == 7
    assert john_balances[TimeOffType.PAID].used == 3
    assert john_balances[TimeOffType.PAID].remaining == 21


def test_decide_requires_admin_and_valid_status(time_off_service):
    with pytest.raises(AuthorizationError):
        time_off_service.decide("to-2", TimeOffStatus.APPROVED, current_role=Role.EMPLOYEE)
    with pytest.raises(ValidationError):
        time_off_service.decide("to-2", TimeOffStatus.PENDING, current_role=Role.ADMIN)
    with pytest.raises(ValidationError):
        time_off_service.decide("to-404", TimeOffStatus.APPROVED, current_role=Role.ADMIN)


def test_decide_twice_is_idempotent(time_off_service, records, store):
    time_off_service.decide("to-2", TimeOffStatus.APPROVED, current_role=Role.ADMIN)
    after_first = records.get_time_off("to-2")
    snapshot = store.snapshot()

    time_off_service.decide("to-2", TimeOffStatus.APPROVED, current_role=Role.ADMIN)

    assert records.get_time_off("to-2") == after_first
    assert store.snapshot() == snapshot


def test_decision_can_be_overwritten(time_off_service, records):
    time_off_service.decide("to-2", TimeOffStatus.REJECTED, current_role=Role.ADMIN)
    time_off_service.decide("to-2", TimeOffStatus.APPROVED, current_role=Role.ADMIN)

    assert records.get_time_off("to-2").status == TimeOffStatus.APPROVED


def test_overturned_approval_reverts_leave_days(time_off_service, records):
    time_off_service.decide("to-2", TimeOffStatus.APPROVED, current_role=Role.ADMIN)
    assert records.get_attendance("3", date(2024, 6, 15)).status == AttendanceStatus.LEAVE

    time_off_service.decide("to-2", TimeOffStatus.REJECTED, current_role=Role.ADMIN)

    assert records.get_time_off("to-2").status == TimeOffStatus.REJECTED
    assert records.get_attendance("3", date(2024, 6, 15)).status == AttendanceStatus.ABSENT
    assert time_off_service.used_days("3", TimeOffType.SICK) == 0


def test_overturned_approval_restores_checked_in_today(time_off_service, attendance_service, records):
    attendance_service.check_in("2")
    john = records.get_user("2")
    created = time_off_service.submit_request(
        owner=john, new_request=_new(start=date(2024, 6, 19), end=date(2024, 6, 21))
    )
    time_off_service.decide(created.id, TimeOffStatus.APPROVED, current_role=Role.ADMIN)
    assert records.get_user("2").attendance_status == AttendanceStatus.LEAVE

    time_off_service.decide(created.id, TimeOffStatus.REJECTED, current_role=Role.ADMIN)

    assert records.get_attendance("2", date(2024, 6, 20)).status == AttendanceStatus.PRESENT
    assert records.get_attendance("2", date(2024, 6, 20)).check_in is not None
    assert records.get_attendance("2", date(2024, 6, 19)).status == AttendanceStatus.ABSENT
    assert records.get_user("2").attendance_status == AttendanceStatus.PRESENT


def test_approval_marks_leave_days(time_off_service, records):
    john = records.get_user("2")
    created = time_off_service.submit_request(
        owner=john, new_request=_new(start=date(2024, 6, 19), end=date(2024, 6, 21))
    )

    time_off_service.decide(created.id, TimeOffStatus.APPROVED, current_role=Role.ADMIN)

    for day in (19, 20, 21):
        assert records.get_attendance("2", date(2024, 6, day)).status == AttendanceStatus.LEAVE
    assert records.get_user("2").attendance_status == AttendanceStatus.LEAVE
    assert time_off_service.used_days("2", TimeOffType.PAID) == 6


def test_rejection_does_not_touch_attendance(time_off_service, records):
    time_off_service.decide("to-2", TimeOffStatus.REJECTED, current_role=Role.ADMIN)

    assert records.list_attendance() == []


def test_list_requests_scope_and_search(time_off_service, records):
    admin = records.get_user("1")
    john = records.get_user("2")

    assert {r.id for r in time_off_service.list_requests(viewer=admin)} == {"to-1", "to-2"}
    assert [r.id for r in time_off_service.list_requests(viewer=john)] == ["to-1"]
    assert [r.id for r in time_off_service.list_requests(viewer=admin, search="FEVER")] == ["to-2"]
    assert [r.id for r in time_off_service.list_requests(viewer=admin, search="smith")] == ["to-2"]
    assert time_off_service.list_requests(viewer=john, search="fever") == []
    assert [r.id for r in time_off_service.list_requests(viewer=admin, request_type=TimeOffType.PAID)] == ["to-1"]
