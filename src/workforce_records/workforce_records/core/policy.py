from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from . import constants


@dataclass(frozen=True)
class PolicyConfig:
    """Company policy figures that are configured rather than derived."""

    paid_allocation_days: int = constants.DEFAULT_PAID_ALLOCATION_DAYS
    sick_allocation_days: int = constants.DEFAULT_SICK_ALLOCATION_DAYS
    standard_shift_hours: float = constants.DEFAULT_STANDARD_SHIFT_HOURS
    standard_allowance_amount: float = constants.DEFAULT_STANDARD_ALLOWANCE
    default_working_days: int = constants.DEFAULT_WORKING_DAYS

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PolicyConfig":
        """Build from a settings dict using camelCase or snake_case option names."""
        data = dict(data or {})
        aliases = {
            "paidAllocationDays": "paid_allocation_days",
            "sickAllocationDays": "sick_allocation_days",
            "standardShiftHours": "standard_shift_hours",
            "standardAllowanceAmount": "standard_allowance_amount",
            "defaultWorkingDays": "default_working_days",
        }
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown policy option: {key!r}")
            if value is None:
                continue
            kwargs[name] = value

        return cls(
            paid_allocation_days=int(kwargs.get("paid_allocation_days", cls.paid_allocation_days)),
            sick_allocation_days=int(kwargs.get("sick_allocation_days", cls.sick_allocation_days)),
            standard_shift_hours=float(kwargs.get("standard_shift_hours", cls.standard_shift_hours)),
            standard_allowance_amount=float(kwargs.get("standard_allowance_amount", cls.standard_allowance_amount)),
            default_working_days=int(kwargs.get("default_working_days", cls.default_working_days)),
        )
