"""Salary calculation engine - main orchestrator and function entry points."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence, Union

from shift_payroll.calculators.aggregator import (
    AnnualAggregator,
    latest_ytd_override,
    projected_monthly_gross,
)
from shift_payroll.calculators.deduction_calculator import DeductionCalculator
from shift_payroll.calculators.money import ZERO, Number, percent_of, round_to_cents, to_decimal
from shift_payroll.calculators.rate_resolver import RateResolver, build_rates
from shift_payroll.calculators.shift_calculator import ShiftPayCalculator
from shift_payroll.calculators.tables import FIXED_MONTHLY_ADDITIONS, get_tax_year
from shift_payroll.calculators.tax_calculator import TaxCalculator
from shift_payroll.calculators.types import (
    AnnualSummary,
    DeductionResult,
    DeductionToggles,
    FixedAdditions,
    ForecastResult,
    MonthlyRecord,
    MonthlySummary,
    PayslipEntry,
    RangeResult,
    RateConfig,
    RateInfo,
    Shift,
    ShiftResult,
    TaxResult,
    TypeTotal,
    YtdOverride,
)
from shift_payroll.config import Settings, get_settings

logger = logging.getLogger(__name__)

RateOverrides = Union[RateConfig, Mapping[str, Optional[Number]], None]


def rate_at(moment: datetime, rates: RateOverrides = None) -> RateInfo:
    """Hourly rate in effect at a moment, with weekend and rest flags."""
    return RateResolver(rates).rate_at(moment)


def pay_for_range(start: datetime, end: datetime, rates: RateOverrides = None) -> RangeResult:
    """Pay for the interval [start, end), billed minute by minute."""
    return RateResolver(rates).pay_for_range(start, end)


def shift_pay(shift: Shift, rates: RateOverrides = None) -> ShiftResult:
    """Price one shift by its type's policy."""
    return ShiftPayCalculator(rates).calculate(shift)


def deductions(gross_monthly: Number, toggles: DeductionToggles | None = None) -> DeductionResult:
    """Employee deductions, employer contributions and net for a monthly gross."""
    return DeductionCalculator(toggles).calculate(gross_monthly)


def income_tax(monthly_gross: Number, credit_points: Number, use_2025: bool = False) -> TaxResult:
    """Progressive monthly income tax after credit points."""
    return TaxCalculator(use_2025).calculate_monthly(monthly_gross, credit_points)


def predict_annual_tax(
    monthly_records: Iterable[MonthlyRecord],
    projected_monthly_gross: Number,
    credit_points: Number,
    use_2025: bool = False,
    ytd_override: YtdOverride | None = None,
) -> ForecastResult:
    """Annual tax predicted from year-to-date records and a projected monthly gross."""
    return TaxCalculator(use_2025).predict_annual(
        monthly_records, projected_monthly_gross, credit_points, ytd_override
    )


def annual_summary(
    monthly_records: Iterable[MonthlyRecord],
    credit_points: Number,
    toggles: DeductionToggles | None = None,
) -> AnnualSummary:
    """Yearly totals over monthly records."""
    return AnnualAggregator(credit_points, toggles).summarize(monthly_records)


def build_monthly_records(
    shift_gross_by_month: Mapping[int, Number],
    manual_history: Mapping[int, PayslipEntry] | None,
    toggles: DeductionToggles | None,
    credit_points: Number,
) -> list[MonthlyRecord]:
    """Twelve monthly records from shift gross and payslip history."""
    return AnnualAggregator(credit_points, toggles).build_monthly_records(
        shift_gross_by_month, manual_history
    )


def fixed_monthly_additions() -> FixedAdditions:
    """Clothing, convalescence and telephone payments for a worked month."""
    return FixedAdditions(**FIXED_MONTHLY_ADDITIONS)


def monthly_summary(
    shift_results: Sequence[ShiftResult],
    toggles: DeductionToggles | None = None,
    credit_points: Number | None = None,
) -> MonthlySummary:
    """A month of shift results carried through deductions and tax."""
    return SalaryEngine(toggles=toggles, credit_points=credit_points).summarize_month(
        shift_results
    )


class SalaryEngine:
    """Bundles one employee's rates, toggles and credit points.

    Month pipeline (stable order):
    1) Price each shift
    2) Sum shift pay, hours and meal allowances
    3) Add fixed monthly additions when the month has shifts
    4) Compute deductions on the gross
    5) Compute income tax (applied only when enabled)
    6) Net = gross - deductions - income tax

    Year pipeline: month grosses and payslip history become monthly records,
    which feed the annual aggregator and the tax forecast.
    """

    def __init__(
        self,
        rates: RateOverrides = None,
        toggles: DeductionToggles | None = None,
        credit_points: Number | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.rates = build_rates(rates)
        if toggles is None:
            # Fail fast on a configured year without tables
            get_tax_year(self.settings.default_tax_year)
            toggles = DeductionToggles(tax_year_2025=self.settings.use_2025)
        self.toggles = toggles
        self.credit_points = (
            to_decimal(credit_points)
            if credit_points is not None
            else self.settings.default_credit_points
        )
        self.shift_calculator = ShiftPayCalculator(self.rates)
        self.deduction_calculator = DeductionCalculator(self.toggles)
        self.tax_calculator = TaxCalculator(use_2025=self.toggles.tax_year_2025)
        self.aggregator = AnnualAggregator(self.credit_points, self.toggles)

    def price_shift(self, shift: Shift) -> ShiftResult:
        """Price one shift with this engine's rates."""
        return self.shift_calculator.calculate(shift)

    def price_shifts(self, shifts: Iterable[Shift]) -> list[ShiftResult]:
        """Price shifts in the order given."""
        return [self.shift_calculator.calculate(shift) for shift in shifts]

    def month_gross(self, shift_results: Sequence[ShiftResult]) -> Decimal:
        """Shift pay plus fixed additions, which apply only to worked months."""
        if not shift_results:
            return ZERO
        shifts_pay = sum((r.total_pay for r in shift_results), ZERO)
        return round_to_cents(shifts_pay + fixed_monthly_additions().total)

    def summarize_month(self, shift_results: Sequence[ShiftResult]) -> MonthlySummary:
        """Carry a month of shift results through deductions and tax."""
        shift_count = len(shift_results)
        total_hours = sum((r.total_hours for r in shift_results), ZERO)
        shifts_pay = sum((r.total_pay for r in shift_results), ZERO)
        meal_allowance = sum((r.meal_allowance for r in shift_results), ZERO)
        fixed = fixed_monthly_additions().total if shift_count else ZERO
        gross = round_to_cents(shifts_pay + fixed)

        type_counts: dict[str, int] = defaultdict(int)
        type_pay: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for r in shift_results:
            key = getattr(r.shift_type, "value", str(r.shift_type))
            type_counts[key] += 1
            type_pay[key] += r.total_pay

        ded = self.deduction_calculator.calculate(gross)
        tax = self.tax_calculator.calculate_monthly(gross, self.credit_points)
        income_tax_amount = tax.final_tax if self.toggles.income_tax else ZERO
        total_deductions = ded.employee.total + income_tax_amount
        net = gross - total_deductions

        logger.debug(
            "Month summary: %d shifts, gross %s, deductions %s, net %s",
            shift_count,
            gross,
            total_deductions,
            net,
        )

        return MonthlySummary(
            shift_count=shift_count,
            total_hours=total_hours,
            shifts_pay=shifts_pay,
            meal_allowance=meal_allowance,
            fixed_additions=fixed,
            gross=gross,
            deductions=ded,
            tax=tax,
            income_tax_amount=income_tax_amount,
            total_deductions=total_deductions,
            net=net,
            net_ratio=percent_of(net, gross),
            average_pay_per_shift=(
                round_to_cents(shifts_pay / shift_count) if shift_count else ZERO
            ),
            type_totals={
                key: TypeTotal(count=type_counts[key], pay=type_pay[key]) for key in type_counts
            },
        )

    def year_records(
        self,
        shifts: Iterable[Shift],
        year: int,
        manual_history: Mapping[int, PayslipEntry] | None = None,
    ) -> list[MonthlyRecord]:
        """Price a year's shifts and merge them with payslip history."""
        by_month: dict[int, list[ShiftResult]] = defaultdict(list)
        for shift in shifts:
            if shift.date.year != year:
                continue
            by_month[shift.date.month - 1].append(self.price_shift(shift))

        shift_gross = {month: self.month_gross(results) for month, results in by_month.items()}
        return self.aggregator.build_monthly_records(shift_gross, manual_history)

    def annual_summary(self, monthly_records: Iterable[MonthlyRecord]) -> AnnualSummary:
        """Yearly totals over this engine's monthly records."""
        return self.aggregator.summarize(monthly_records)

    def forecast(
        self, monthly_records: Sequence[MonthlyRecord], current_month_gross: Number = ZERO
    ) -> ForecastResult:
        """Annual tax forecast using the latest payslip's year-to-date when present."""
        return self.tax_calculator.predict_annual(
            monthly_records,
            projected_monthly_gross(current_month_gross, monthly_records),
            self.credit_points,
            latest_ytd_override(monthly_records),
        )
