"""Configuration management for the shift payroll engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from dotenv import load_dotenv

from shift_payroll.calculators.tables import LATEST_TAX_YEAR, PREVIOUS_TAX_YEAR


@dataclass(frozen=True)
class Settings:
    """Caller defaults loaded from environment.

    Calculators never read these; only ``SalaryEngine`` falls back to them
    when a caller leaves credit points or the tax year unspecified.
    """

    default_credit_points: Decimal
    default_tax_year: str

    @property
    def use_2025(self) -> bool:
        return self.default_tax_year == PREVIOUS_TAX_YEAR

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            default_credit_points=Decimal(os.getenv("SHIFT_PAYROLL_CREDIT_POINTS", "2.25")),
            default_tax_year=os.getenv("SHIFT_PAYROLL_TAX_YEAR", LATEST_TAX_YEAR),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
