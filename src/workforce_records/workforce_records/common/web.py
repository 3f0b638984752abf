from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.exceptions import ValidationError
from ..records.repository import RecordRepository
from ..users.model import User
from .datetime_utils import parse_iso_date


def ok(payload: Any = None, status: int = 200):
    body = {"success": True}
    if payload is not None:
        body["data"] = payload
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Please log in to continue", 401)
        if session.get("role") != "ADMIN":
            return fail("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def session_user(records: RecordRepository) -> User:
    """The logged-in user as currently stored (not the cached snapshot)."""
    user = records.get_user(str(session["user_id"]))
    if not user:
        session.clear()
        raise ValidationError("Session user no longer exists")
    return user


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(value: str | None, *, default: date) -> date:
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")


def int_arg(value: str | None, field_name: str, *, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number")
