from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class AttendanceStatus(str, Enum):
    """Daily presence state stored on records and mirrored on the user."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LEAVE = "LEAVE"


class TimeOffType(str, Enum):
    PAID = "PAID"
    SICK = "SICK"


class TimeOffStatus(str, Enum):
    """Approval workflow state. APPROVED and REJECTED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
