from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Callable, Mapping, Optional
from uuid import uuid4

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import (
    PASSWORD_POLICY_MESSAGE,
    require_non_empty,
    require_valid_password,
    require_wage,
    validate_password,
)
from ..core.constants import DEFAULT_EMPLOYEE_PASSWORD, DEFAULT_OTP_TTL_MINUTES, OTP_LENGTH
from ..core.enums import AccountStatus, AttendanceStatus, Role
from ..core.exceptions import AccountDeactivatedError, AuthenticationError, AuthorizationError, ValidationError
from ..notifications.notifier import LoggingNotifier, VerificationNotifier
from ..payroll.calculator.base import SalaryCalculator
from ..payroll.calculator.standard_calculator import StandardSalaryCalculator
from ..records.repository import RecordRepository
from .identity import generate_login_id, split_full_name
from .model import BankDetails, User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _password_matches(stored: Optional[str], candidate: str) -> bool:
    if not stored:
        return False
    try:
        return check_password_hash(stored, candidate)
    except (ValueError, TypeError):
        # e.g. a plaintext or corrupted value in the store
        return False


@dataclass
class _PendingReset:
    code: str
    expires_at: datetime
    verified: bool = False


class AuthService:
    """Use case: login/logout, session snapshot, password change and reset."""

    def __init__(
        self,
        records: RecordRepository,
        notifier: Optional[VerificationNotifier] = None,
        *,
        clock: Callable[[], datetime] = now_local,
        otp_ttl_minutes: int = DEFAULT_OTP_TTL_MINUTES,
    ):
        self._records = records
        self._notifier = notifier or LoggingNotifier()
        self._clock = clock
        self._otp_ttl = timedelta(minutes=int(otp_ttl_minutes))
        self._pending_resets: dict[str, _PendingReset] = {}

    def login(self, login_id: str, password: str) -> User:
        user = self._records.find_user_by_login_id((login_id or "").strip())
        if not user or not _password_matches(user.password, password or ""):
            logger.warning("login rejected login_id=%s", login_id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.warning("login for deactivated account login_id=%s", login_id)
            raise AccountDeactivatedError("Account is deactivated. Contact HR.")

        self._records.set_session(user)
        logger.info("login ok login_id=%s role=%s", user.login_id, user.role.value)
        return user

    def logout(self) -> None:
        self._records.clear_session()

    def current_user(self) -> Optional[User]:
        return self._records.get_session()

    def refresh_session(self) -> Optional[User]:
        """Re-sync the cached session snapshot from the users collection."""
        session_user = self._records.get_session()
        if not session_user:
            return None
        fresh = self._records.find_user_by_login_id(session_user.login_id)
        if fresh:
            self._records.set_session(fresh)
        return fresh

    def _save_password(self, user: User, new_password: str) -> User:
        updated = replace(user, password=generate_password_hash(new_password), is_first_login=False)
        self._records.upsert_user(updated)
        session_user = self._records.get_session()
        if session_user and session_user.id == updated.id:
            self._records.set_session(updated)
        return updated

    def change_password(self, *, user_id: str, new_password: str, confirm_password: str) -> User:
        user = self._records.get_user(user_id)
        if not user:
            raise ValidationError("User does not exist")

        require_valid_password(new_password, confirm_password)
        if _password_matches(user.password, new_password):
            raise ValidationError("New password cannot be the same as the current password.")

        updated = self._save_password(user, new_password)
        logger.info("password changed login_id=%s", user.login_id)
        return updated

    def request_password_reset(self, email: str) -> None:
        email = (email or "").strip()
        if not self._records.find_user_by_email(email):
            raise ValidationError("This email address doesn't exist in our records.")

        code = "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))
        self._pending_resets[email] = _PendingReset(code=code, expires_at=self._clock() + self._otp_ttl)
        self._notifier.send_code(email=email, code=code)
        logger.info("password reset code issued email=%s", email)

    def verify_reset_code(self, email: str, code: str) -> None:
        pending = self._pending_resets.get((email or "").strip())
        if not pending or pending.expires_at < self._clock() or not secrets.compare_digest(pending.code, code or ""):
            raise ValidationError("Invalid OTP. Please try again.")
        pending.verified = True

    def reset_password(self, *, email: str, new_password: str, confirm_password: str) -> User:
        email = (email or "").strip()
        pending = self._pending_resets.get(email)
        if not pending or not pending.verified or pending.expires_at < self._clock():
            raise ValidationError("Verification required before resetting the password.")

        require_valid_password(new_password, confirm_password)
        user = self._records.find_user_by_email(email)
        if not user:
            raise ValidationError("This email address doesn't exist in our records.")

        updated = self._save_password(user, new_password)
        del self._pending_resets[email]
        logger.info("password reset login_id=%s", user.login_id)
        return updated


_PROFILE_FIELDS = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "department": "department",
    "manager": "manager",
    "location": "location",
    "dob": "dob",
    "gender": "gender",
    "maritalStatus": "marital_status",
    "address": "address",
    "nationality": "nationality",
}
_RESUME_FIELDS = {"skills": "skills", "certifications": "certifications", "hobbies": "hobbies"}
_IMMUTABLE_FIELDS = {"id", "loginId"}


class UserService:
    """Use case: manage employees (admin) and profiles."""

    def __init__(
        self,
        records: RecordRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._records = records
        self._calculator = calculator or StandardSalaryCalculator()
        self._clock = clock

    def _next_login_id(self, full_name: str, year: int) -> str:
        first, last = split_full_name(full_name)
        taken = {u.login_id for u in self._records.list_users()}
        serial = len(taken) + 1
        login_id = generate_login_id(first, last, year, serial)
        while login_id in taken:
            serial += 1
            login_id = generate_login_id(first, last, year, serial)
        return login_id

    def create_employee(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        phone: str = "",
        role: Role = Role.EMPLOYEE,
        wage: float = 0,
        password: Optional[str] = None,
    ) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add employees")

        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email")
        if self._records.find_user_by_email(email):
            raise ValidationError("Email is already registered")
        wage = require_wage(wage)
        if password and not validate_password(password):
            raise ValidationError(PASSWORD_POLICY_MESSAGE)

        year = self._clock().year
        user = User(
            id=uuid4().hex,
            login_id=self._next_login_id(full_name, year),
            full_name=full_name,
            email=email,
            phone=(phone or "").strip(),
            role=Role(role),
            joining_year=year,
            is_first_login=not password,
            password=generate_password_hash(password or DEFAULT_EMPLOYEE_PASSWORD),
            status=AccountStatus.ACTIVE,
            attendance_status=AttendanceStatus.ABSENT,
            salary=self._calculator.compute(wage),
        )
        self._records.upsert_user(user)
        logger.info("employee created login_id=%s role=%s", user.login_id, user.role.value)
        return user

    def get_employee(self, user_id: str) -> Optional[User]:
        return self._records.get_user(user_id)

    def list_employees(self, search: str = "") -> list[User]:
        needle = (search or "").strip().lower()
        users = self._records.list_users()
        if not needle:
            return users
        return [u for u in users if needle in u.full_name.lower() or needle in u.login_id.lower()]

    def update_profile(self, *, current_user: User, user_id: str, changes: Mapping[str, Any]) -> User:
        if not current_user.is_admin and current_user.id != user_id:
            raise AuthorizationError("You can only edit your own profile")

        user = self._records.get_user(user_id)
        if not user:
            raise ValidationError("User does not exist")

        updates: dict[str, Any] = {}
        for key, value in changes.items():
            if key in _IMMUTABLE_FIELDS:
                raise ValidationError(f"{key} cannot be changed")
            if key in _PROFILE_FIELDS:
                updates[_PROFILE_FIELDS[key]] = value.strip() if isinstance(value, str) else value
            elif key in _RESUME_FIELDS:
                if not isinstance(value, (list, tuple, set, frozenset)):
                    raise ValidationError(f"{key} must be a list")
                updates[_RESUME_FIELDS[key]] = frozenset(str(v).strip() for v in value if str(v).strip())
            elif key == "bankDetails":
                updates["bank_details"] = BankDetails.from_dict(value) if value else None
            else:
                raise ValidationError(f"Unknown profile field: {key}")

        if "full_name" in updates:
            updates["full_name"] = require_non_empty(updates["full_name"], "Full name")
        if "email" in updates:
            updates["email"] = require_non_empty(updates["email"], "Email")
            other = self._records.find_user_by_email(updates["email"])
            if other and other.id != user.id:
                raise ValidationError("Email is already registered")

        updated = replace(user, **updates)
        self._records.upsert_user(updated)
        return updated

    def set_status(self, *, current_role: Role, user_id: str, status: AccountStatus) -> User:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change account status")

        user = self._records.get_user(user_id)
        if not user:
            raise ValidationError("User does not exist")

        updated = replace(user, status=AccountStatus(status))
        self._records.upsert_user(updated)
        logger.info("account status login_id=%s status=%s", user.login_id, updated.status.value)
        return updated
