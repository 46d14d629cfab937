"""Annual aggregation of monthly records, and the records' construction."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from shift_payroll.calculators.deduction_calculator import DeductionCalculator
from shift_payroll.calculators.money import (
    ZERO,
    Number,
    percent_of,
    round_to_cents,
    to_decimal,
)
from shift_payroll.calculators.tables import MONTHS_PER_YEAR
from shift_payroll.calculators.tax_calculator import TaxCalculator
from shift_payroll.calculators.types import (
    AnnualSummary,
    DeductionToggles,
    MonthlyRecord,
    MonthlySummary,
    MonthSource,
    PayslipComparisonRow,
    PayslipEntry,
    YtdOverride,
)

# Differences below half a unit are treated as matching
COMPARISON_TOLERANCE = Decimal("0.5")


def normalize_months(records: Iterable[MonthlyRecord]) -> tuple[MonthlyRecord, ...]:
    """Return every record ordered by month, padding absent months with empty ones.

    Records sharing a month index are all kept, in the order given, so
    totals over the result sum everything the caller supplied.
    """
    records = list(records)
    present = {record.month for record in records}
    padding = [
        MonthlyRecord(month=month) for month in range(MONTHS_PER_YEAR) if month not in present
    ]
    return tuple(sorted(records + padding, key=lambda r: r.month))


class AnnualAggregator:
    """Sums monthly records into yearly totals.

    The aggregator never recomputes tax or deductions for records it is
    given; ``build_monthly_records`` is where auto months get their derived
    figures. Empty months add zero to the sums and are left out of the
    reported-month count and the effective rate.
    """

    def __init__(self, credit_points: Number, toggles: DeductionToggles | None = None):
        self.credit_points = to_decimal(credit_points)
        self.toggles = toggles or DeductionToggles()

    def summarize(self, monthly_records: Iterable[MonthlyRecord]) -> AnnualSummary:
        months = normalize_months(monthly_records)

        def total(attr: str) -> Decimal:
            return sum((getattr(m, attr) for m in months), ZERO)

        total_gross = total("gross")
        total_income_tax = total("income_tax")
        total_ni = total("ni")
        total_pension = total("pension")
        total_study = total("study")
        total_emp_pension = total("emp_pension")
        total_emp_study = total("emp_study")
        total_deductions = total_income_tax + total_ni + total_pension + total_study

        return AnnualSummary(
            total_gross=round_to_cents(total_gross),
            total_income_tax=round_to_cents(total_income_tax),
            total_ni=round_to_cents(total_ni),
            total_pension=round_to_cents(total_pension),
            total_study=round_to_cents(total_study),
            total_deductions=round_to_cents(total_deductions),
            total_net=round_to_cents(total_gross - total_deductions),
            total_emp_pension=round_to_cents(total_emp_pension),
            total_emp_study=round_to_cents(total_emp_study),
            total_emp_contributions=round_to_cents(total_emp_pension + total_emp_study),
            months=months,
            reported_months=len({m.month for m in months if m.source is not MonthSource.EMPTY}),
            manual_months=len({m.month for m in months if m.source is MonthSource.MANUAL}),
            effective_tax_rate=percent_of(total_income_tax, total_gross),
        )

    def build_monthly_records(
        self,
        shift_gross_by_month: Mapping[int, Number],
        manual_history: Mapping[int, PayslipEntry] | None = None,
    ) -> list[MonthlyRecord]:
        """Merge shift-derived gross with payslip history into twelve records.

        A month with payslip data is ``manual`` and keeps the payslip's
        figures. Otherwise a month with shift gross is ``auto`` and gets
        engine deductions and (when enabled) income tax. Everything else is
        ``empty``.
        """
        history = manual_history or {}
        deduction_calculator = DeductionCalculator(self.toggles)
        tax_calculator = TaxCalculator(use_2025=self.toggles.tax_year_2025)
        records: list[MonthlyRecord] = []

        for month in range(MONTHS_PER_YEAR):
            slip = history.get(month)
            shift_gross = to_decimal(shift_gross_by_month.get(month))

            if slip is not None and slip.has_data:
                records.append(
                    MonthlyRecord(
                        month=month,
                        gross=slip.gross,
                        income_tax=slip.income_tax,
                        ni=slip.ni,
                        pension=slip.pension,
                        study=slip.study,
                        emp_pension=slip.emp_pension,
                        emp_study=slip.emp_study,
                        source=MonthSource.MANUAL,
                        cumulative_gross_tax=slip.cumulative_gross_tax,
                    )
                )
            elif shift_gross > 0:
                ded = deduction_calculator.calculate(shift_gross)
                tax = tax_calculator.calculate_monthly(shift_gross, self.credit_points)
                records.append(
                    MonthlyRecord(
                        month=month,
                        gross=shift_gross,
                        income_tax=tax.final_tax if self.toggles.income_tax else ZERO,
                        ni=ded.employee.ni,
                        pension=ded.employee.pension,
                        study=ded.employee.study,
                        emp_pension=ded.employer.pension,
                        emp_study=ded.employer.study,
                        source=MonthSource.AUTO,
                        # Only a payslip with data may set a year-to-date baseline
                        cumulative_gross_tax=ZERO,
                    )
                )
            else:
                records.append(MonthlyRecord(month=month, source=MonthSource.EMPTY))

        return records


def projected_monthly_gross(
    current_month_gross: Number, monthly_records: Iterable[MonthlyRecord]
) -> Decimal:
    """Gross to assume for each month not yet worked.

    The current month's gross when there is one, otherwise the average over
    months with gross, otherwise zero.
    """
    current = to_decimal(current_month_gross)
    if current > 0:
        return current
    grosses = [r.gross for r in monthly_records if r.gross > 0]
    if not grosses:
        return ZERO
    return round_to_cents(sum(grosses, ZERO) / len(grosses))


def latest_ytd_override(monthly_records: Iterable[MonthlyRecord]) -> YtdOverride | None:
    """Year-to-date baseline from the latest payslip carrying a cumulative gross."""
    for record in sorted(monthly_records, key=lambda r: r.month, reverse=True):
        if record.gross > 0 and record.cumulative_gross_tax > 0:
            return YtdOverride(
                ytd_gross=record.cumulative_gross_tax,
                months_with_data=record.month + 1,
            )
    return None


def compare_payslip(summary: MonthlySummary, payslip: PayslipEntry) -> list[PayslipComparisonRow]:
    """Line-by-line difference between a calculated month and its payslip."""
    employee = summary.deductions.employee
    pairs = [
        ("gross", summary.gross, payslip.gross),
        ("income_tax", summary.income_tax_amount, payslip.income_tax),
        ("national_insurance", employee.national_insurance, payslip.ni),
        ("health_insurance", employee.health_insurance, payslip.health_insurance),
        ("pension", employee.pension, payslip.pension),
        ("study", employee.study, payslip.study),
        ("net", summary.net, payslip.actual_net),
    ]
    rows = []
    for name, calculated, actual in pairs:
        difference = round_to_cents(actual - calculated)
        rows.append(
            PayslipComparisonRow(
                name=name,
                calculated=calculated,
                actual=actual,
                difference=difference,
                matches=abs(difference) < COMPARISON_TOLERANCE,
            )
        )
    return rows
