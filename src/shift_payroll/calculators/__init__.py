"""Shift pay, deduction and income tax calculators."""

from shift_payroll.calculators.aggregator import AnnualAggregator
from shift_payroll.calculators.deduction_calculator import DeductionCalculator
from shift_payroll.calculators.engine import SalaryEngine
from shift_payroll.calculators.rate_resolver import RateResolver
from shift_payroll.calculators.shift_calculator import ShiftPayCalculator
from shift_payroll.calculators.tax_calculator import TaxCalculator

__all__ = [
    "AnnualAggregator",
    "DeductionCalculator",
    "RateResolver",
    "SalaryEngine",
    "ShiftPayCalculator",
    "TaxCalculator",
]
