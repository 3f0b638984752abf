from __future__ import annotations

from datetime import datetime

import pytest

from src.workforce_records.workforce_records.attendance.service import AttendanceService
from src.workforce_records.workforce_records.core.policy import PolicyConfig
from src.workforce_records.workforce_records.records.repository import RecordRepository
from src.workforce_records.workforce_records.storage.memory_store import MemoryStore
from src.workforce_records.workforce_records.timeoff.service import TimeOffService


class FakeClock:
    """Settable clock passed to services instead of datetime.now."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 20, 9, 0, 0))


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def records(store, clock) -> RecordRepository:
    return RecordRepository(store, clock=clock)


@pytest.fixture
def attendance_service(records, clock) -> AttendanceService:
    return AttendanceService(records, policy=PolicyConfig(), clock=clock)


@pytest.fixture
def time_off_service(records, attendance_service, clock) -> TimeOffService:
    return TimeOffService(records, attendance_service, policy=PolicyConfig(), clock=clock)
