from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_STANDARD_SHIFT_HOURS


def hours_worked(check_in: Optional[datetime], check_out: Optional[datetime]) -> float:
    """Hours between check-in and check-out, not below 0. Missing either side counts as 0."""
    if not check_in or not check_out:
        return 0.0
    return max(0.0, (check_out - check_in).total_seconds() / 3600)


def overtime_hours(worked: float, standard_shift_hours: float = DEFAULT_STANDARD_SHIFT_HOURS) -> float:
    return max(0.0, worked - standard_shift_hours)


def format_hours(hours: float) -> str:
    whole = int(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{whole}h {minutes}m"
