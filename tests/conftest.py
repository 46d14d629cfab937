"""Pytest fixtures for shift payroll tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from shift_payroll.calculators.engine import SalaryEngine
from shift_payroll.calculators.types import DeductionToggles, Shift
from shift_payroll.config import Settings

# A Wednesday in March 2026
WEDNESDAY = date(2026, 3, 4)


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the process environment."""
    return Settings(
        default_credit_points=Decimal("2.25"),
        default_tax_year="2026",
    )


@pytest.fixture
def all_toggles() -> DeductionToggles:
    """Every deduction enabled, 2026 tables."""
    return DeductionToggles(
        pension=True,
        study=True,
        ni=True,
        income_tax=True,
        study_full_salary=False,
        tax_year_2025=False,
    )


@pytest.fixture
def engine(test_settings, all_toggles) -> SalaryEngine:
    """Engine with default rates and 2.25 credit points."""
    return SalaryEngine(toggles=all_toggles, settings=test_settings)


@pytest.fixture
def weekday_plus() -> Shift:
    return Shift(type="plus", date=WEDNESDAY)


@pytest.fixture
def vacation_day() -> Shift:
    return Shift(type="vacation", date=WEDNESDAY)
