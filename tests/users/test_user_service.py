from __future__ import annotations

import pytest

from src.workforce_records.workforce_records.core.enums import AccountStatus, AttendanceStatus, Role
from src.workforce_records.workforce_records.core.exceptions import AuthorizationError, ValidationError
from src.workforce_records.workforce_records.users.service import AuthService, UserService


@pytest.fixture
def users(records, clock):
    return UserService(records, clock=clock)


def test_admin_creates_employee_with_generated_login_id(users, records):
    user = users.create_employee(
        current_role=Role.ADMIN,
        full_name="Jane Mary Smith",
        email="jane@odoo.com",
        wage=30000,
    )

    assert user.login_id == "OIJASM20240004"
    assert user.joining_year == 2024
    assert user.attendance_status == AttendanceStatus.ABSENT
    assert user.is_first_login is True
    assert user.salary.wage == 30000
    assert records.find_user_by_login_id("OIJASM20240004") == user


def test_new_employee_can_log_in_with_default_password(users, records, clock):
    users.create_employee(current_role=Role.ADMIN, full_name="Jane Smith", email="jane@odoo.com", wage=30000)

    auth = AuthService(records, clock=clock)
    assert auth.login("OIJASM20240004", "Odoo@123").full_name == "Jane Smith"


def test_login_id_serial_skips_taken_ids(users):
    first = users.create_employee(current_role=Role.ADMIN, full_name="Jane Smith", email="a@odoo.com", wage=1)
    second = users.create_employee(current_role=Role.ADMIN, full_name="Jane Smith", email="b@odoo.com", wage=1)

    assert first.login_id == "OIJASM20240004"
    assert second.login_id == "OIJASM20240005"


def test_only_admin_creates_employees(users):
    with pytest.raises(AuthorizationError):
        users.create_employee(current_role=Role.EMPLOYEE, full_name="X Y", email="x@odoo.com", wage=1)


def test_duplicate_email_and_weak_password_rejected(users):
    with pytest.raises(ValidationError):
        users.create_employee(current_role=Role.ADMIN, full_name="X Y", email="john.doe@odoo.com", wage=1)
    with pytest.raises(ValidationError):
        users.create_employee(current_role=Role.ADMIN, full_name="X Y", email="x@odoo.com", wage=1, password="weak")


@pytest.mark.parametrize("wage", [None, -1, float("nan"), float("inf"), [1], "abc"])
def test_bad_wage_rejected_on_create(users, records, wage):
    with pytest.raises(ValidationError):
        users.create_employee(current_role=Role.ADMIN, full_name="X Y", email="x@odoo.com", wage=wage)

    assert records.find_user_by_email("x@odoo.com") is None


def test_search_by_name_or_login_id(users):
    assert [u.id for u in users.list_employees("walker")] == ["3"]
    assert [u.id for u in users.list_employees("oijodo")] == ["2"]
    assert len(users.list_employees("")) == 3


def test_profile_update_and_resume_sets(users, records):
    john = records.get_user("2")

    updated = users.update_profile(
        current_user=john,
        user_id="2",
        changes={"phone": " 555 ", "skills": ["Python", "Python", "SQL"], "location": "Pune"},
    )

    assert updated.phone == "555"
    assert updated.skills == frozenset({"Python", "SQL"})
    assert records.get_user("2").location == "Pune"


def test_profile_update_rejects_login_id_change_and_foreign_edit(users, records):
    john = records.get_user("2")

    with pytest.raises(ValidationError):
        users.update_profile(current_user=john, user_id="2", changes={"loginId": "OIXXXX20240001"})
    with pytest.raises(AuthorizationError):
        users.update_profile(current_user=john, user_id="3", changes={"phone": "1"})


def test_set_status(users, records):
    users.set_status(current_role=Role.ADMIN, user_id="3", status=AccountStatus.INACTIVE)

    assert records.get_user("3").status == AccountStatus.INACTIVE
    with pytest.raises(AuthorizationError):
        users.set_status(current_role=Role.EMPLOYEE, user_id="3", status=AccountStatus.ACTIVE)
