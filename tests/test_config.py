"""Tests for environment-driven settings."""

import dataclasses
from decimal import Decimal

import pytest

from shift_payroll.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SHIFT_PAYROLL_CREDIT_POINTS", "SHIFT_PAYROLL_TAX_YEAR"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("shift_payroll.config.load_dotenv", lambda: False)

        settings = Settings.from_env()

        assert settings.default_credit_points == Decimal("2.25")
        assert settings.default_tax_year == "2026"
        assert settings.use_2025 is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SHIFT_PAYROLL_CREDIT_POINTS", "3.5")
        monkeypatch.setenv("SHIFT_PAYROLL_TAX_YEAR", "2025")

        settings = Settings.from_env()

        assert settings.default_credit_points == Decimal("3.5")
        assert settings.use_2025 is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_only_consumed_settings_exist(self):
        """Every setting is read by the engine; the version lives in ``__version__``."""
        names = {f.name for f in dataclasses.fields(Settings)}

        assert names == {"default_credit_points", "default_tax_year"}
