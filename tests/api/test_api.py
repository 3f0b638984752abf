from __future__ import annotations

import pytest

from src.workforce_records.workforce_records.container import build_container
from src.workforce_records.workforce_records.main import create_app
from src.workforce_records.workforce_records.notifications.notifier import RecordingNotifier
from src.workforce_records.workforce_records.storage.memory_store import MemoryStore


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(notifier):
    return build_container(store=MemoryStore(), notifier=notifier)


@pytest.fixture
def client(container):
    app = create_app("config.testing", container=container)
    return app.test_client()


def _login(client, login_id, password):
    return client.post("/api/login", json={"loginId": login_id, "password": password})


def test_login_and_me(client):
    resp = _login(client, "OIJODO20240002", "TempPass123!")
    assert resp.status_code == 200
    assert "password" not in resp.get_json()["data"]["user"]

    me = client.get("/api/me")
    assert me.get_json()["data"]["loginId"] == "OIJODO20240002"


def test_invalid_credentials_are_401(client):
    resp = _login(client, "OIJODO20240002", "nope")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid credentials"}


def test_endpoints_require_login(client):
    assert client.get("/api/me").status_code == 401
    assert client.post("/api/attendance/checkin").status_code == 401


def test_employee_cannot_use_admin_endpoints(client):
    _login(client, "OIJODO20240002", "TempPass123!")

    assert client.get("/api/employees").status_code == 403
    assert client.post("/api/timeoff/to-2/decision", json={"status": "APPROVED"}).status_code == 403


def test_check_in_and_out(client):
    _login(client, "OIJODO20240002", "TempPass123!")

    assert client.post("/api/attendance/checkin").get_json()["data"]["status"] == "PRESENT"
    out = client.post("/api/attendance/checkout").get_json()["data"]
    assert out["status"] == "ABSENT"
    assert out["checkOut"] is not None

    me = client.get("/api/me").get_json()["data"]
    assert me["attendanceStatus"] == "ABSENT"
    assert me["lastCheckIn"] is not None


def test_monthly_attendance_and_csv(client):
    _login(client, "OIJODO20240002", "TempPass123!")
    client.post("/api/attendance/checkin")

    monthly = client.get("/api/attendance/monthly").get_json()["data"]
    assert monthly["stats"] == {"present": 1, "leave": 0, "total": 1}

    assert client.get("/api/attendance/monthly?userId=3").status_code == 403

    export = client.get("/api/attendance/monthly.csv")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    assert "OIJODO20240002" in export.get_data(as_text=True)


def test_sick_request_without_attachment_is_400(client):
    _login(client, "OIJODO20240002", "TempPass123!")

    resp = client.post(
        "/api/timeoff",
        json={"type": "SICK", "startDate": "2024-07-01", "endDate": "2024-07-01", "reason": "Flu"},
    )
    assert resp.status_code == 400


def test_time_off_submit_and_admin_decision(client):
    _login(client, "OIJODO20240002", "TempPass123!")
    created = client.post(
        "/api/timeoff",
        json={"type": "PAID", "startDate": "2024-07-01", "endDate": "2024-07-02", "reason": "Wedding"},
    )
    assert created.status_code == 201
    request_id = created.get_json()["data"]["id"]
    client.post("/api/logout")

    _login(client, "OIADMI20240001", "AdminPassword123!")
    decided = client.post(f"/api/timeoff/{request_id}/decision", json={"status": "APPROVED"})
    assert decided.get_json()["data"]["status"] == "APPROVED"
    client.post("/api/logout")

    _login(client, "OIJODO20240002", "TempPass123!")
    balances = {b["type"]: b for b in client.get("/api/timeoff/balances").get_json()["data"]}
    assert balances["PAID"]["used"] == 5
    assert balances["PAID"]["remaining"] == 19


def test_admin_creates_employee_and_sets_wage(client):
    _login(client, "OIADMI20240001", "AdminPassword123!")

    created = client.post(
        "/api/employees",
        json={"fullName": "Ana Lopez", "email": "ana@odoo.com", "wage": 40000},
    )
    assert created.status_code == 201
    user = created.get_json()["data"]
    assert user["loginId"].startswith("OIANLO")

    wage = client.put(f"/api/employees/{user['id']}/wage", json={"wage": 60000}).get_json()["data"]
    assert wage["basic"] == 30000
    assert wage["netPay"] == pytest.approx(60000 - 3600 - 200)

    deactivated = client.post(f"/api/employees/{user['id']}/status", json={"status": "INACTIVE"})
    assert deactivated.get_json()["data"]["status"] == "INACTIVE"
    client.post("/api/logout")

    assert _login(client, user["loginId"], "Odoo@123").status_code == 401


def test_password_reset_over_api(client, notifier):
    assert client.post("/api/password/forgot", json={"email": "john.doe@odoo.com"}).status_code == 200
    code = notifier.last_code_for("john.doe@odoo.com")

    assert client.post("/api/password/verify", json={"email": "john.doe@odoo.com", "otp": code}).status_code == 200
    reset = client.post(
        "/api/password/reset",
        json={"email": "john.doe@odoo.com", "newPassword": "Fresh123!", "confirmPassword": "Fresh123!"},
    )
    assert reset.status_code == 200
    assert _login(client, "OIJODO20240002", "Fresh123!").status_code == 200


def test_payroll_preview(client):
    _login(client, "OIJODO20240002", "TempPass123!")

    data = client.get("/api/payroll/preview?wage=50000").get_json()["data"]
    assert data["basic"] == 25000
    assert data["totalDeductions"] == pytest.approx(3200)
    assert data["netPay"] == pytest.approx(50000 - 3200)
    assert client.get("/api/payroll/preview?wage=abc").status_code == 400
    assert client.get("/api/payroll/preview?wage=nan").status_code == 400
    assert client.get("/api/payroll/preview?wage=inf").status_code == 400


@pytest.mark.parametrize("wage", [None, [1], {"amount": 1}, "inf", "nan"])
def test_bad_wage_payloads_are_400(client, wage):
    _login(client, "OIADMI20240001", "AdminPassword123!")

    created = client.post("/api/employees", json={"fullName": "Ann Lee", "email": "a@x.com", "wage": wage})
    assert created.status_code == 400
    assert created.get_json()["success"] is False

    updated = client.put("/api/employees/2/wage", json={"wage": wage})
    assert updated.status_code == 400
    assert client.get("/api/employees/2").get_json()["data"]["salary"]["wage"] == 85000


def test_unknown_route_is_404_json(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
