"""Shift-based wage, deduction and income tax engine.

All entry points are pure functions of their arguments:

    from shift_payroll import Shift, shift_pay, deductions, income_tax

    result = shift_pay(Shift(type="plus", date=date(2026, 3, 4)))
    ded = deductions(result.total_pay)
    tax = income_tax(result.total_pay, credit_points=2.25)
"""

from shift_payroll.calculators.engine import (
    SalaryEngine,
    annual_summary,
    build_monthly_records,
    deductions,
    fixed_monthly_additions,
    income_tax,
    monthly_summary,
    pay_for_range,
    predict_annual_tax,
    rate_at,
    shift_pay,
)
from shift_payroll.calculators.aggregator import (
    compare_payslip,
    latest_ytd_override,
    projected_monthly_gross,
)
from shift_payroll.calculators.tables import (
    DEFAULT_RATES,
    TAX_YEARS,
    UnknownTaxYearError,
    get_tax_year,
)
from shift_payroll.calculators.types import (
    AnnualSummary,
    DeductionResult,
    DeductionToggles,
    FlatRateShiftResult,
    ForecastResult,
    InvalidShiftResult,
    MonthlyRecord,
    MonthlySummary,
    MonthSource,
    PayslipEntry,
    RateConfig,
    Shift,
    ShiftType,
    TaxResult,
    TimedShiftResult,
    YtdOverride,
)

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_RATES",
    "TAX_YEARS",
    "AnnualSummary",
    "DeductionResult",
    "DeductionToggles",
    "FlatRateShiftResult",
    "ForecastResult",
    "InvalidShiftResult",
    "MonthSource",
    "MonthlyRecord",
    "MonthlySummary",
    "PayslipEntry",
    "RateConfig",
    "SalaryEngine",
    "Shift",
    "ShiftType",
    "TaxResult",
    "TimedShiftResult",
    "UnknownTaxYearError",
    "YtdOverride",
    "annual_summary",
    "build_monthly_records",
    "compare_payslip",
    "deductions",
    "fixed_monthly_additions",
    "get_tax_year",
    "income_tax",
    "latest_ytd_override",
    "monthly_summary",
    "pay_for_range",
    "predict_annual_tax",
    "projected_monthly_gross",
    "rate_at",
    "shift_pay",
]
