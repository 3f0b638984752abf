from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, request, session

from ..common.web import date_arg, int_arg, login_required, ok, session_user
from ..container import Container
from ..core.exceptions import AuthorizationError
from .model import AttendanceRecord
from .worktime import format_hours


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    def _record_row(r: AttendanceRecord) -> dict:
        row = r.to_dict()
        row["workHours"] = format_hours(attendance.hours_for(r))
        row["overtime"] = format_hours(attendance.overtime_for(r))
        return row

    def _month_scope() -> tuple[int, int, str | None]:
        today = date.today()
        year = int_arg(request.args.get("year"), "year", default=today.year)
        month = int_arg(request.args.get("month"), "month", default=today.month)

        current = session_user(container.records)
        user_id = request.args.get("userId") or None
        if not current.is_admin:
            if user_id and user_id != current.id:
                raise AuthorizationError("You can only view your own attendance")
            user_id = current.id
        return year, month, user_id

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        record = attendance.check_in(str(session["user_id"]))
        container.auth_service.refresh_session()
        return ok(_record_row(record))

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required
    def checkout():
        record = attendance.check_out(str(session["user_id"]))
        container.auth_service.refresh_session()
        return ok(_record_row(record))

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="attendance_daily")
    @login_required
    def attendance_daily():
        work_date = date_arg(request.args.get("date"), default=date.today())
        current = session_user(container.records)
        if current.is_admin:
            rows = attendance.daily_sheet(work_date, request.args.get("search", ""))
            return ok([r.to_dict() for r in rows])

        own = [r for r in attendance.get_attendance_by_date(work_date) if r.user_id == current.id]
        return ok([_record_row(r) for r in own])

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    @login_required
    def attendance_monthly():
        year, month, user_id = _month_scope()
        records = attendance.get_attendance_by_month(year, month, user_id)
        stats = attendance.monthly_stats(year, month, user_id)
        return ok({"records": [_record_row(r) for r in records], "stats": stats.to_dict()})

    @app.route("/api/attendance/monthly.csv", methods=["GET"], endpoint="attendance_monthly_csv")
    @login_required
    def attendance_monthly_csv():
        year, month, user_id = _month_scope()
        data = container.payroll_service.build_attendance_report(year=year, month=month, user_id=user_id)

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=[
                "work_date",
                "user_id",
                "login_id",
                "full_name",
                "check_in",
                "check_out",
                "status",
                "worked_hours",
                "overtime",
            ],
        )
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        filename = f"attendance_{year}_{month:02d}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
