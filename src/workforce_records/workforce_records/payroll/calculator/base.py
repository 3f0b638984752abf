from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import SalaryInfo


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, wage: float) -> SalaryInfo:
        raise NotImplementedError
