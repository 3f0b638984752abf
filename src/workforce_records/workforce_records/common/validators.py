from __future__ import annotations

import math
import re

from ..core.constants import PASSWORD_MIN_LENGTH, PASSWORD_SPECIAL_CHARS
from ..core.exceptions import ValidationError

_SPECIAL_RE = re.compile("[" + re.escape(PASSWORD_SPECIAL_CHARS) + "]")

PASSWORD_POLICY_MESSAGE = (
    "Password must be 8+ characters long and include an uppercase letter, "
    "a lowercase letter, a number, and a special character."
)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def validate_password(password: str) -> bool:
    """Password policy predicate: length, upper, lower, digit and special character."""
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        return False
    return bool(
        re.search(r"[A-Z]", password)
        and re.search(r"[a-z]", password)
        and re.search(r"[0-9]", password)
        and _SPECIAL_RE.search(password)
    )


def require_valid_password(password: str, confirm: str) -> str:
    if password != confirm:
        raise ValidationError("Passwords do not match")
    if not validate_password(password):
        raise ValidationError(PASSWORD_POLICY_MESSAGE)
    return password


def require_wage(value) -> float:
    """Parse a wage: a finite, non-negative number."""
    try:
        wage = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Wage must be a number")
    if not math.isfinite(wage):
        raise ValidationError("Wage must be a finite number")
    if wage < 0:
        raise ValidationError("Wage cannot be negative")
    return wage
