from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # Stored timestamps may carry a trailing "Z" from older clients.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar date from start to end inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1
