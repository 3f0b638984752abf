from __future__ import annotations

from flask import Flask, request, session

from ..common.validators import require_wage
from ..common.web import admin_required, fail, json_body, login_required, ok, session_user
from ..container import Container
from ..core.enums import AccountStatus, Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    users = container.user_service

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = auth.login(str(data.get("loginId", "")), str(data.get("password", "")))

        session.clear()
        session["user_id"] = user.id
        session["login_id"] = user.login_id
        session["role"] = user.role.value
        return ok({"user": user.to_dict(include_password=False), "mustChangePassword": user.is_first_login})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        auth.logout()
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        auth.refresh_session()
        user = session_user(container.records)
        return ok(user.to_dict(include_password=False))

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        user = auth.change_password(
            user_id=str(session["user_id"]),
            new_password=str(data.get("newPassword", "")),
            confirm_password=str(data.get("confirmPassword", "")),
        )
        return ok(user.to_dict(include_password=False))

    @app.route("/api/password/forgot", methods=["POST"], endpoint="forgot_password")
    def forgot_password():
        auth.request_password_reset(str(json_body().get("email", "")))
        return ok()

    @app.route("/api/password/verify", methods=["POST"], endpoint="verify_reset_code")
    def verify_reset_code():
        data = json_body()
        auth.verify_reset_code(str(data.get("email", "")), str(data.get("otp", "")))
        return ok()

    @app.route("/api/password/reset", methods=["POST"], endpoint="reset_password")
    def reset_password():
        data = json_body()
        auth.reset_password(
            email=str(data.get("email", "")),
            new_password=str(data.get("newPassword", "")),
            confirm_password=str(data.get("confirmPassword", "")),
        )
        return ok()

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        found = users.list_employees(request.args.get("search", ""))
        return ok([u.to_dict(include_password=False) for u in found])

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        data = json_body()
        try:
            role = Role(str(data.get("role", Role.EMPLOYEE.value)).upper())
        except ValueError:
            raise ValidationError("Invalid role")
        wage = require_wage(data.get("wage", 0))

        user = users.create_employee(
            current_role=Role(session["role"]),
            full_name=str(data.get("fullName", "")),
            email=str(data.get("email", "")),
            phone=str(data.get("phone", "")),
            role=role,
            wage=wage,
            password=data.get("password") or None,
        )
        return ok(user.to_dict(include_password=False), 201)

    @app.route("/api/employees/<user_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(user_id: str):
        current = session_user(container.records)
        if not current.is_admin and current.id != user_id:
            return fail("You do not have permission", 403)
        user = users.get_employee(user_id)
        if not user:
            return fail("Employee not found", 404)
        return ok(user.to_dict(include_password=False))

    @app.route("/api/employees/<user_id>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(user_id: str):
        user = users.update_profile(
            current_user=session_user(container.records),
            user_id=user_id,
            changes=json_body(),
        )
        if str(session["user_id"]) == user_id:
            auth.refresh_session()
        return ok(user.to_dict(include_password=False))

    @app.route("/api/employees/<user_id>/status", methods=["POST"], endpoint="set_employee_status")
    @admin_required
    def set_employee_status(user_id: str):
        try:
            status = AccountStatus(str(json_body().get("status", "")).upper())
        except ValueError:
            raise ValidationError("Status must be ACTIVE or INACTIVE")
        user = users.set_status(current_role=Role(session["role"]), user_id=user_id, status=status)
        return ok(user.to_dict(include_password=False))
