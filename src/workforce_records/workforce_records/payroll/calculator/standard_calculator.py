from __future__ import annotations

from ...core.constants import DEFAULT_STANDARD_ALLOWANCE, PROFESSIONAL_TAX
from ..model import SalaryInfo
from .base import SalaryCalculator

BASIC_RATE = 0.5
HRA_RATE = 0.5  # of basic
PERFORMANCE_BONUS_RATE = 0.0833
LTA_RATE = 0.08333
PF_RATE = 0.12  # of basic


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: fixed-rate components, fixed allowance absorbs the remainder.

    When the wage is too small to cover the other components the fixed allowance
    floors at 0 and the components may add up to more than the wage.
    """

    def __init__(self, *, standard_allowance: float = DEFAULT_STANDARD_ALLOWANCE, professional_tax: float = PROFESSIONAL_TAX):
        self._standard_allowance = standard_allowance
        self._professional_tax = professional_tax

    def compute(self, wage: float) -> SalaryInfo:
        basic = wage * BASIC_RATE
        hra = basic * HRA_RATE
        standard_allowance = self._standard_allowance
        performance_bonus = wage * PERFORMANCE_BONUS_RATE
        lta = wage * LTA_RATE

        other_sum = basic + hra + standard_allowance + performance_bonus + lta
        fixed_allowance = max(0, wage - other_sum)

        return SalaryInfo(
            wage=wage,
            basic=basic,
            hra=hra,
            standard_allowance=standard_allowance,
            performance_bonus=performance_bonus,
            lta=lta,
            fixed_allowance=fixed_allowance,
            pf=basic * PF_RATE,
            pt=self._professional_tax,
        )


def compute_salary(wage: float) -> SalaryInfo:
    """Salary breakdown with the default policy figures."""
    return StandardSalaryCalculator().compute(wage)
