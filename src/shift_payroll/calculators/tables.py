"""Year-keyed constant tables for Israeli payroll.

Each tax year is one ``TaxYearTable``. Adding a year means adding an entry
to ``TAX_YEARS``; calculators never branch on the year themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shift_payroll.calculators.types import RateConfig

LATEST_TAX_YEAR = "2026"
PREVIOUS_TAX_YEAR = "2025"

MEAL_ALLOWANCE_PER_SIX_HOURS = Decimal("30")
MONTHS_PER_YEAR = 12

DEFAULT_RATES = RateConfig(
    base_rate=Decimal("75"),
    weekend_multiplier=Decimal("1.5"),
    rest_multiplier=Decimal("0.5"),
    vacation_day_rate=Decimal("1750"),
    bonus_quarterly=Decimal("3500"),
)

# Paid every month that has at least one shift
FIXED_MONTHLY_ADDITIONS = {
    "clothing": Decimal("148.08"),
    "convalescence": Decimal("313"),
    "telephone": Decimal("48.60"),
}


class UnknownTaxYearError(KeyError):
    """Raised when no constant table exists for a tax year."""

    def __init__(self, tax_year: str):
        self.tax_year = tax_year
        super().__init__(f"No payroll tables for tax year '{tax_year}'")


@dataclass(frozen=True)
class DeductionConstants:
    """Statutory deduction rates and ceilings (monthly)."""

    ni_lower_ceiling: Decimal
    ni_upper_ceiling: Decimal
    ni_lower_rate: Decimal
    ni_upper_rate: Decimal
    health_lower_rate: Decimal
    health_upper_rate: Decimal
    pension_employee_rate: Decimal
    pension_employer_rate: Decimal
    study_employee_rate: Decimal
    study_employer_rate: Decimal
    study_ceiling: Decimal


@dataclass(frozen=True)
class TaxBracket:
    """Progressive bracket; ``ceiling=None`` means no upper limit."""

    ceiling: Decimal | None
    rate: Decimal

    @property
    def is_open(self) -> bool:
        return self.ceiling is None


@dataclass(frozen=True)
class TaxYearTable:
    """All constants that change from one tax year to the next."""

    tax_year: str
    deductions: DeductionConstants
    monthly_brackets: tuple[TaxBracket, ...]
    credit_point_value: Decimal

    @property
    def annual_brackets(self) -> tuple[TaxBracket, ...]:
        """Monthly brackets scaled to a full year (ceilings x 12, same rates)."""
        return tuple(
            TaxBracket(
                ceiling=None if b.is_open else b.ceiling * MONTHS_PER_YEAR,
                rate=b.rate,
            )
            for b in self.monthly_brackets
        )


def _brackets(*rows: tuple[int | None, str]) -> tuple[TaxBracket, ...]:
    return tuple(
        TaxBracket(
            ceiling=Decimal(ceiling) if ceiling is not None else None,
            rate=Decimal(rate),
        )
        for ceiling, rate in rows
    )


_DEDUCTIONS_2026 = DeductionConstants(
    ni_lower_ceiling=Decimal("7703"),
    ni_upper_ceiling=Decimal("51910"),
    ni_lower_rate=Decimal("0.004"),
    ni_upper_rate=Decimal("0.07"),
    health_lower_rate=Decimal("0.031"),
    health_upper_rate=Decimal("0.05"),
    pension_employee_rate=Decimal("0.06"),
    pension_employer_rate=Decimal("0.125"),
    study_employee_rate=Decimal("0.025"),
    study_employer_rate=Decimal("0.075"),
    study_ceiling=Decimal("15712"),
)

_DEDUCTIONS_2025 = DeductionConstants(
    ni_lower_ceiling=Decimal("7522"),
    ni_upper_ceiling=Decimal("50695"),
    ni_lower_rate=Decimal("0.004"),
    ni_upper_rate=Decimal("0.07"),
    health_lower_rate=Decimal("0.031"),
    health_upper_rate=Decimal("0.05"),
    pension_employee_rate=Decimal("0.06"),
    pension_employer_rate=Decimal("0.125"),
    study_employee_rate=Decimal("0.025"),
    study_employer_rate=Decimal("0.075"),
    study_ceiling=Decimal("15712"),
)

TAX_YEARS: dict[str, TaxYearTable] = {
    "2026": TaxYearTable(
        tax_year="2026",
        deductions=_DEDUCTIONS_2026,
        monthly_brackets=_brackets(
            (7010, "0.10"),
            (10060, "0.14"),
            (16150, "0.20"),
            (22440, "0.31"),
            (46690, "0.35"),
            (60130, "0.47"),
            (None, "0.50"),
        ),
        credit_point_value=Decimal("242"),
    ),
    "2025": TaxYearTable(
        tax_year="2025",
        deductions=_DEDUCTIONS_2025,
        monthly_brackets=_brackets(
            (6860, "0.10"),
            (9850, "0.14"),
            (15820, "0.20"),
            (21990, "0.31"),
            (45780, "0.35"),
            (58920, "0.47"),
            (None, "0.50"),
        ),
        credit_point_value=Decimal("242"),
    ),
}


def get_tax_year(tax_year: str | int) -> TaxYearTable:
    """Look up the constant table for a tax year.

    Raises:
        UnknownTaxYearError: If no table is registered for the year
    """
    key = str(tax_year)
    try:
        return TAX_YEARS[key]
    except KeyError:
        raise UnknownTaxYearError(key) from None


def resolve_tax_year(use_2025: bool = False) -> TaxYearTable:
    """Select the 2025 table when requested, otherwise the latest one."""
    return get_tax_year(PREVIOUS_TAX_YEAR if use_2025 else LATEST_TAX_YEAR)
