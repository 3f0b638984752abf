from __future__ import annotations

from flask import Flask, request, session

from ..common.validators import require_wage
from ..common.web import admin_required, fail, json_body, login_required, ok, session_user
from ..container import Container
from ..core.enums import Role
from .model import SalaryInfo


def _salary_payload(salary: SalaryInfo) -> dict:
    data = salary.to_dict()
    data["totalDeductions"] = salary.total_deductions
    data["netPay"] = salary.net_pay
    return data


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/preview", methods=["GET"], endpoint="payroll_preview")
    @login_required
    def payroll_preview():
        return ok(_salary_payload(payroll.preview(require_wage(request.args.get("wage")))))

    @app.route("/api/payroll/me", methods=["GET"], endpoint="payroll_me")
    @login_required
    def payroll_me():
        user = session_user(container.records)
        if not user.salary:
            return fail("No salary information on file", 404)
        return ok(_salary_payload(user.salary))

    @app.route("/api/employees/<user_id>/wage", methods=["PUT"], endpoint="set_employee_wage")
    @admin_required
    def set_employee_wage(user_id: str):
        user = payroll.set_wage(
            current_role=Role(session["role"]),
            user_id=user_id,
            wage=require_wage(json_body().get("wage")),
        )
        return ok(_salary_payload(user.salary))
