from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, FrozenSet, Mapping, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import AccountStatus, AttendanceStatus, Role
from ..payroll.model import SalaryInfo


@dataclass(frozen=True)
class BankDetails:
    account_number: str = ""
    bank_name: str = ""
    ifsc: str = ""
    pan: str = ""
    uan: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "accountNumber": self.account_number,
            "bankName": self.bank_name,
            "ifsc": self.ifsc,
            "pan": self.pan,
            "uan": self.uan,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BankDetails":
        return cls(
            account_number=str(data.get("accountNumber", "")),
            bank_name=str(data.get("bankName", "")),
            ifsc=str(data.get("ifsc", "")),
            pan=str(data.get("pan", "")),
            uan=str(data.get("uan", "")),
        )


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object (no store access). `login_id` never changes once
    assigned; `attendance_status`/`last_check_in` are a live projection of
    the attendance records.
    """

    id: str
    login_id: str
    full_name: str
    email: str
    phone: str = ""
    role: Role = Role.EMPLOYEE
    joining_year: Optional[int] = None
    is_first_login: bool = False
    password: Optional[str] = None
    status: AccountStatus = AccountStatus.ACTIVE
    attendance_status: AttendanceStatus = AttendanceStatus.ABSENT
    last_check_in: Optional[datetime] = None

    department: Optional[str] = None
    manager: Optional[str] = None
    location: Optional[str] = None
    skills: FrozenSet[str] = field(default_factory=frozenset)
    certifications: FrozenSet[str] = field(default_factory=frozenset)
    hobbies: FrozenSet[str] = field(default_factory=frozenset)
    dob: Optional[str] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    address: Optional[str] = None
    nationality: Optional[str] = None
    bank_details: Optional[BankDetails] = None
    salary: Optional[SalaryInfo] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def to_dict(self, *, include_password: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "loginId": self.login_id,
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "joiningYear": self.joining_year,
            "isFirstLogin": self.is_first_login,
            "status": self.status.value,
            "attendanceStatus": self.attendance_status.value,
            "lastCheckIn": self.last_check_in.isoformat() if self.last_check_in else None,
            "department": self.department,
            "manager": self.manager,
            "location": self.location,
            "skills": sorted(self.skills),
            "certifications": sorted(self.certifications),
            "hobbies": sorted(self.hobbies),
            "dob": self.dob,
            "gender": self.gender,
            "maritalStatus": self.marital_status,
            "address": self.address,
            "nationality": self.nationality,
            "bankDetails": self.bank_details.to_dict() if self.bank_details else None,
            "salary": self.salary.to_dict() if self.salary else None,
        }
        if include_password:
            data["password"] = self.password
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        bank = data.get("bankDetails")
        salary = data.get("salary")
        joining_year = data.get("joiningYear")
        return cls(
            id=str(data["id"]),
            login_id=str(data["loginId"]),
            full_name=str(data.get("fullName", "")),
            email=str(data.get("email", "")),
            phone=str(data.get("phone") or ""),
            role=Role(data.get("role", Role.EMPLOYEE.value)),
            joining_year=int(joining_year) if joining_year is not None else None,
            is_first_login=bool(data.get("isFirstLogin", False)),
            password=data.get("password"),
            status=AccountStatus(data.get("status", AccountStatus.ACTIVE.value)),
            attendance_status=AttendanceStatus(data.get("attendanceStatus", AttendanceStatus.ABSENT.value)),
            last_check_in=parse_iso_datetime(data.get("lastCheckIn")),
            department=data.get("department"),
            manager=data.get("manager"),
            location=data.get("location"),
            skills=frozenset(data.get("skills") or ()),
            certifications=frozenset(data.get("certifications") or ()),
            hobbies=frozenset(data.get("hobbies") or ()),
            dob=data.get("dob"),
            gender=data.get("gender"),
            marital_status=data.get("maritalStatus"),
            address=data.get("address"),
            nationality=data.get("nationality"),
            bank_details=BankDetails.from_dict(bank) if bank else None,
            salary=SalaryInfo.from_dict(salary) if salary else None,
        )
