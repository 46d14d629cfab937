"""Type definitions for the calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Union

from shift_payroll.calculators.money import ZERO, Number, to_decimal


class ShiftType(str, Enum):
    """Shift kinds with their own pay policy."""

    PLUS = "plus"  # 06:00 -> 06:00 next day
    TRAINING = "training"  # 06:00 -> 20:00
    MINUS = "minus"  # caller-supplied start/end
    VACATION = "vacation"
    SICK = "sick"

    @property
    def is_flat_rate(self) -> bool:
        return self in (ShiftType.VACATION, ShiftType.SICK)


class MonthSource(str, Enum):
    """Where a month's figures came from."""

    AUTO = "auto"  # derived from shift results
    MANUAL = "manual"  # entered from an actual payslip
    EMPTY = "empty"


@dataclass(frozen=True)
class RateConfig:
    """Hourly rate configuration for one calculation call."""

    base_rate: Decimal
    weekend_multiplier: Decimal
    rest_multiplier: Decimal
    vacation_day_rate: Decimal
    bonus_quarterly: Decimal

    @property
    def weekend_rate(self) -> Decimal:
        return self.base_rate * self.weekend_multiplier

    def with_overrides(self, overrides: Mapping[str, Number | None] | None) -> RateConfig:
        """Overlay overrides field by field; ``None`` values keep the current value.

        Raises:
            TypeError: If an override names a field RateConfig does not have
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown rate fields: {', '.join(sorted(unknown))}")
        changes = {k: to_decimal(v) for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


@dataclass(frozen=True)
class Shift:
    """A request to price one shift.

    ``type`` is kept as given so unknown values reach the calculator, which
    answers them with an ``InvalidShiftResult``.
    """

    type: ShiftType | str
    date: date
    start_time: time | None = None
    end_time: time | None = None
    has_bonus: bool = False


@dataclass(frozen=True)
class RateInfo:
    """Rate in effect at one instant."""

    rate: Decimal
    is_weekend: bool
    is_rest: bool


@dataclass(frozen=True)
class PayBreakdown:
    """Pay split by rate window."""

    regular: Decimal = ZERO
    weekend: Decimal = ZERO
    rest: Decimal = ZERO
    weekend_rest: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.regular + self.weekend + self.rest + self.weekend_rest


@dataclass(frozen=True)
class RangeResult:
    """Pay for a continuous time interval."""

    total_pay: Decimal
    total_minutes: int
    total_hours: Decimal
    breakdown: PayBreakdown


@dataclass(frozen=True)
class TimedShiftResult:
    """Result for shifts priced over a time interval."""

    shift_type: ShiftType
    total_pay: Decimal
    total_hours: Decimal
    total_minutes: int
    breakdown: PayBreakdown
    bonus_applied: Decimal
    meal_allowance: Decimal

    flat_rate = False
    error = False

    @property
    def base_pay(self) -> Decimal:
        """Pay before bonus and meal allowance."""
        return self.breakdown.total


@dataclass(frozen=True)
class FlatRateShiftResult:
    """Result for vacation and sick days, paid as a flat day rate."""

    shift_type: ShiftType
    total_pay: Decimal

    flat_rate = True
    error = False
    total_hours = ZERO
    meal_allowance = ZERO
    bonus_applied = ZERO


@dataclass(frozen=True)
class InvalidShiftResult:
    """Result for shifts that cannot be priced."""

    shift_type: Any
    reason: str

    flat_rate = False
    error = True
    total_pay = ZERO
    total_hours = ZERO
    meal_allowance = ZERO
    bonus_applied = ZERO


ShiftResult = Union[TimedShiftResult, FlatRateShiftResult, InvalidShiftResult]


@dataclass(frozen=True)
class DeductionToggles:
    """Which deductions apply and which tax year's constants to use.

    ``tax_year_2025`` selects the previous year's table; the year itself is
    resolved by ``tables.resolve_tax_year``.
    """

    pension: bool = True
    study: bool = True
    ni: bool = True
    income_tax: bool = True
    study_full_salary: bool = False
    tax_year_2025: bool = False


@dataclass(frozen=True)
class EmployeeDeductions:
    pension: Decimal = ZERO
    study: Decimal = ZERO
    ni: Decimal = ZERO  # national_insurance + health_insurance
    national_insurance: Decimal = ZERO
    health_insurance: Decimal = ZERO
    ni_tier1: Decimal = ZERO
    ni_tier2: Decimal = ZERO
    health_tier1: Decimal = ZERO
    health_tier2: Decimal = ZERO
    total: Decimal = ZERO


@dataclass(frozen=True)
class EmployerContributions:
    pension: Decimal = ZERO
    study: Decimal = ZERO
    total: Decimal = ZERO


@dataclass(frozen=True)
class DeductionResult:
    """Monthly statutory deductions for employee and employer."""

    employee: EmployeeDeductions
    employer: EmployerContributions
    net: Decimal


@dataclass(frozen=True)
class TaxTier:
    """Portion of income taxed inside one bracket."""

    from_amount: Decimal
    to_amount: Decimal
    rate: Decimal
    taxable: Decimal
    tax: Decimal


@dataclass(frozen=True)
class TaxResult:
    """Progressive income tax on a monthly gross."""

    gross_tax: Decimal
    credit_amount: Decimal
    final_tax: Decimal
    effective_rate: Decimal  # percent
    tiers: tuple[TaxTier, ...] = ()


@dataclass(frozen=True)
class YtdOverride:
    """Year-to-date baseline taken from an actual payslip."""

    ytd_gross: Decimal
    months_with_data: int


@dataclass(frozen=True)
class ForecastResult:
    """Annual gross and tax extrapolated from partial-year data."""

    estimated_annual_gross: Decimal
    predicted_annual_tax: Decimal
    months_with_data: int


@dataclass(frozen=True)
class MonthlyRecord:
    """One month's figures as fed to the annual aggregator."""

    month: int
    gross: Decimal = ZERO
    income_tax: Decimal = ZERO
    ni: Decimal = ZERO
    pension: Decimal = ZERO
    study: Decimal = ZERO
    emp_pension: Decimal = ZERO
    emp_study: Decimal = ZERO
    source: MonthSource = MonthSource.EMPTY
    cumulative_gross_tax: Decimal = ZERO

    _AMOUNT_FIELDS = (
        "gross",
        "income_tax",
        "ni",
        "pension",
        "study",
        "emp_pension",
        "emp_study",
        "cumulative_gross_tax",
    )

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"Month index must be 0-11, got {self.month}")
        for name in self._AMOUNT_FIELDS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        object.__setattr__(self, "source", MonthSource(self.source))


@dataclass(frozen=True)
class AnnualSummary:
    """Yearly totals over twelve monthly records."""

    total_gross: Decimal
    total_income_tax: Decimal
    total_ni: Decimal
    total_pension: Decimal
    total_study: Decimal
    total_deductions: Decimal
    total_net: Decimal
    total_emp_pension: Decimal
    total_emp_study: Decimal
    total_emp_contributions: Decimal
    months: tuple[MonthlyRecord, ...]
    reported_months: int
    manual_months: int
    effective_tax_rate: Decimal


@dataclass(frozen=True)
class FixedAdditions:
    """Fixed monthly payments added on top of shift pay."""

    clothing: Decimal
    convalescence: Decimal
    telephone: Decimal

    @property
    def total(self) -> Decimal:
        return self.clothing + self.convalescence + self.telephone


@dataclass(frozen=True)
class TypeTotal:
    count: int
    pay: Decimal


@dataclass(frozen=True)
class MonthlySummary:
    """A month of shifts carried through deductions and tax."""

    shift_count: int
    total_hours: Decimal
    shifts_pay: Decimal
    meal_allowance: Decimal
    fixed_additions: Decimal
    gross: Decimal
    deductions: DeductionResult
    tax: TaxResult
    income_tax_amount: Decimal
    total_deductions: Decimal
    net: Decimal
    net_ratio: Decimal  # percent of gross
    average_pay_per_shift: Decimal
    type_totals: dict[str, TypeTotal] = field(default_factory=dict)


@dataclass(frozen=True)
class PayslipEntry:
    """Actual figures copied from a payslip."""

    gross: Decimal = ZERO
    income_tax: Decimal = ZERO
    ni: Decimal = ZERO
    health_insurance: Decimal = ZERO
    pension: Decimal = ZERO
    study: Decimal = ZERO
    emp_pension: Decimal = ZERO
    emp_study: Decimal = ZERO
    cumulative_gross_tax: Decimal = ZERO
    actual_net: Decimal = ZERO

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, to_decimal(getattr(self, f.name)))

    @property
    def has_data(self) -> bool:
        return self.gross > 0 or self.income_tax > 0 or self.ni > 0


@dataclass(frozen=True)
class PayslipComparisonRow:
    """Calculated vs actual value for one payslip line."""

    name: str
    calculated: Decimal
    actual: Decimal
    difference: Decimal  # actual - calculated
    matches: bool

