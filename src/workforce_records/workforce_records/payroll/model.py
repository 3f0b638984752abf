from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class SalaryInfo:
    """Salary breakdown derived from a monthly wage. Embedded in User, never stored alone."""

    wage: float
    basic: float
    hra: float
    standard_allowance: float
    performance_bonus: float
    lta: float
    fixed_allowance: float
    pf: float
    pt: float

    @property
    def gross_components(self) -> float:
        return (
            self.basic
            + self.hra
            + self.standard_allowance
            + self.performance_bonus
            + self.lta
            + self.fixed_allowance
        )

    @property
    def total_deductions(self) -> float:
        return self.pf + self.pt

    @property
    def net_pay(self) -> float:
        return self.wage - self.total_deductions

    def to_dict(self) -> dict[str, Any]:
        return {
            "wage": self.wage,
            "basic": self.basic,
            "hra": self.hra,
            "standardAllowance": self.standard_allowance,
            "performanceBonus": self.performance_bonus,
            "lta": self.lta,
            "fixedAllowance": self.fixed_allowance,
            "pf": self.pf,
            "pt": self.pt,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalaryInfo":
        return cls(
            wage=float(data["wage"]),
            basic=float(data["basic"]),
            hra=float(data["hra"]),
            standard_allowance=float(data["standardAllowance"]),
            performance_bonus=float(data["performanceBonus"]),
            lta=float(data["lta"]),
            fixed_allowance=float(data["fixedAllowance"]),
            pf=float(data["pf"]),
            pt=float(data["pt"]),
        )
