"""Statutory deductions: pension, study fund, national and health insurance."""

from __future__ import annotations

from decimal import Decimal

from shift_payroll.calculators.money import ZERO, Number, round_to_cents, to_decimal
from shift_payroll.calculators.tables import DeductionConstants, resolve_tax_year
from shift_payroll.calculators.types import (
    DeductionResult,
    DeductionToggles,
    EmployeeDeductions,
    EmployerContributions,
)


class DeductionCalculator:
    """Calculates monthly deductions for employee and employer.

    National and health insurance are two-tier: a reduced rate up to the
    lower ceiling and a full rate between the lower and upper ceilings.
    Nothing above the upper ceiling is insured. Pension is uncapped; the
    study fund is capped at its ceiling unless full-salary mode is on.

    Rounding is applied to output fields only, so ``employee.total`` is the
    rounded sum of unrounded parts. ``net`` is ``gross - employee.total``
    rounded once, exact whenever gross is given in whole cents.
    """

    def __init__(self, toggles: DeductionToggles | None = None):
        self.toggles = toggles or DeductionToggles()
        self.constants: DeductionConstants = resolve_tax_year(self.toggles.tax_year_2025).deductions

    def calculate(self, gross_monthly: Number) -> DeductionResult:
        gross = to_decimal(gross_monthly)
        c = self.constants
        t = self.toggles

        pension = employer_pension = ZERO
        study = employer_study = ZERO
        ni_tier1 = ni_tier2 = health_tier1 = health_tier2 = ZERO

        if t.pension:
            pension = gross * c.pension_employee_rate
            employer_pension = gross * c.pension_employer_rate

        if t.study:
            study_base = gross if t.study_full_salary else min(gross, c.study_ceiling)
            study = study_base * c.study_employee_rate
            employer_study = study_base * c.study_employer_rate

        if t.ni:
            tier1_base, tier2_base = self._insured_tiers(gross)
            ni_tier1 = tier1_base * c.ni_lower_rate
            health_tier1 = tier1_base * c.health_lower_rate
            ni_tier2 = tier2_base * c.ni_upper_rate
            health_tier2 = tier2_base * c.health_upper_rate

        national_insurance = ni_tier1 + ni_tier2
        health_insurance = health_tier1 + health_tier2
        ni = national_insurance + health_insurance

        employee_total = round_to_cents(pension + study + ni)

        return DeductionResult(
            employee=EmployeeDeductions(
                pension=round_to_cents(pension),
                study=round_to_cents(study),
                ni=round_to_cents(ni),
                national_insurance=round_to_cents(national_insurance),
                health_insurance=round_to_cents(health_insurance),
                ni_tier1=round_to_cents(ni_tier1),
                ni_tier2=round_to_cents(ni_tier2),
                health_tier1=round_to_cents(health_tier1),
                health_tier2=round_to_cents(health_tier2),
                total=employee_total,
            ),
            employer=EmployerContributions(
                pension=round_to_cents(employer_pension),
                study=round_to_cents(employer_study),
                total=round_to_cents(employer_pension + employer_study),
            ),
            net=round_to_cents(gross - employee_total),
        )

    def _insured_tiers(self, gross: Decimal) -> tuple[Decimal, Decimal]:
        """Split gross into the reduced-rate and full-rate insured bases."""
        c = self.constants
        tier1 = max(ZERO, min(gross, c.ni_lower_ceiling))
        tier2 = max(ZERO, min(gross, c.ni_upper_ceiling) - c.ni_lower_ceiling)
        return tier1, tier2
