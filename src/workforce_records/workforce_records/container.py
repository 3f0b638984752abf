from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .attendance.service import AttendanceService
from .core.constants import DEFAULT_OTP_TTL_MINUTES
from .core.policy import PolicyConfig
from .database.bootstrap import apply_schema
from .database.connection import DBConfig, DatabaseConnection
from .notifications.notifier import VerificationNotifier
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.service import PayrollService
from .records.repository import RecordRepository
from .storage.base import KeyValueStore
from .storage.json_file_store import JsonFileStore
from .storage.memory_store import MemoryStore
from .storage.mysql_store import MySQLStore
from .timeoff.service import TimeOffService
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    records: RecordRepository
    policy: PolicyConfig

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    time_off_service: TimeOffService
    payroll_service: PayrollService


def build_store(
    backend: str,
    *,
    store_path: Optional[str | Path] = None,
    db_config: Optional[Mapping[str, Any]] = None,
    auto_init_db: bool = False,
) -> KeyValueStore:
    backend = (backend or "json").lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "json":
        if not store_path:
            raise ValueError("STORE_PATH is required for the json store backend")
        return JsonFileStore(store_path)
    if backend == "mysql":
        config = DBConfig.from_dict(dict(db_config or {}))
        if auto_init_db:
            apply_schema(config)
        return MySQLStore(DatabaseConnection.get_instance(config))
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    store: KeyValueStore,
    policy: Optional[Mapping[str, Any] | PolicyConfig] = None,
    notifier: Optional[VerificationNotifier] = None,
    otp_ttl_minutes: int = DEFAULT_OTP_TTL_MINUTES,
) -> Container:
    if not isinstance(policy, PolicyConfig):
        policy = PolicyConfig.from_mapping(policy)

    records = RecordRepository(store)
    calculator = StandardSalaryCalculator(standard_allowance=policy.standard_allowance_amount)

    auth_service = AuthService(records, notifier, otp_ttl_minutes=otp_ttl_minutes)
    user_service = UserService(records, calculator=calculator)
    attendance_service = AttendanceService(records, policy=policy)
    time_off_service = TimeOffService(records, attendance_service, policy=policy)
    payroll_service = PayrollService(records, attendance_service, calculator=calculator)

    logger.debug("container ready store=%s policy=%s", type(store).__name__, policy)
    return Container(
        store=store,
        records=records,
        policy=policy,
        auth_service=auth_service,
        user_service=user_service,
        attendance_service=attendance_service,
        time_off_service=time_off_service,
        payroll_service=payroll_service,
    )
