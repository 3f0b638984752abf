from __future__ import annotations

from flask import Flask, request, session

from ..common.web import admin_required, date_arg, json_body, login_required, ok, session_user
from ..container import Container
from ..core.enums import Role, TimeOffStatus, TimeOffType
from ..core.exceptions import ValidationError
from .model import NewTimeOffRequest


def register(app: Flask, container: Container) -> None:
    time_off = container.time_off_service

    def _parse_type(value) -> TimeOffType:
        try:
            return TimeOffType(str(value).upper())
        except ValueError:
            raise ValidationError("Type must be PAID or SICK")

    @app.route("/api/timeoff", methods=["GET"], endpoint="list_time_off")
    @login_required
    def list_time_off():
        viewer = session_user(container.records)
        type_arg = request.args.get("type")
        requests = time_off.list_requests(
            viewer=viewer,
            search=request.args.get("search", ""),
            request_type=_parse_type(type_arg) if type_arg else None,
        )
        return ok([r.to_dict() for r in requests])

    @app.route("/api/timeoff", methods=["POST"], endpoint="submit_time_off")
    @login_required
    def submit_time_off():
        data = json_body()
        if not data.get("startDate") or not data.get("endDate"):
            raise ValidationError("Start and end dates are required")

        new_request = NewTimeOffRequest(
            type=_parse_type(data.get("type", TimeOffType.PAID.value)),
            start_date=date_arg(str(data["startDate"]), default=None),
            end_date=date_arg(str(data["endDate"]), default=None),
            reason=str(data.get("reason", "")),
            attachment=data.get("attachment") or None,
        )
        created = time_off.submit_request(owner=session_user(container.records), new_request=new_request)
        return ok(created.to_dict(), 201)

    @app.route("/api/timeoff/<request_id>/decision", methods=["POST"], endpoint="decide_time_off")
    @admin_required
    def decide_time_off(request_id: str):
        try:
            status = TimeOffStatus(str(json_body().get("status", "")).upper())
        except ValueError:
            raise ValidationError("Decision must be APPROVED or REJECTED")
        decided = time_off.decide(request_id, status, current_role=Role(session["role"]))
        return ok(decided.to_dict())

    @app.route("/api/timeoff/balances", methods=["GET"], endpoint="time_off_balances")
    @login_required
    def time_off_balances():
        user = session_user(container.records)
        return ok([b.to_dict() for b in time_off.balances(user)])
