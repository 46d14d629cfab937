"""Tests for stored-record schemas."""

from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from shift_payroll.calculators.types import MonthSource, ShiftType
from shift_payroll.schemas import (
    DeductionSettings,
    MonthlyRecordSchema,
    PayslipRecord,
    RateSettings,
    ShiftRecord,
    parse_history,
)


class TestShiftRecord:
    def test_camel_case_aliases(self):
        record = ShiftRecord.model_validate(
            {
                "type": "minus",
                "date": "2026-03-04",
                "startTime": "08:00",
                "endTime": "16:00",
                "hasBonus": True,
            }
        )

        shift = record.to_shift()
        assert shift.date == date(2026, 3, 4)
        assert shift.start_time == time(8, 0)
        assert shift.end_time == time(16, 0)
        assert shift.has_bonus is True

    def test_minus_without_times_rejected(self):
        with pytest.raises(ValidationError):
            ShiftRecord.model_validate({"type": "minus", "date": "2026-03-04", "startTime": "08:00"})

    def test_malformed_time_rejected(self):
        with pytest.raises(ValidationError):
            ShiftRecord.model_validate(
                {"type": "minus", "date": "2026-03-04", "startTime": "25:99", "endTime": "16:00"}
            )

    def test_plus_needs_no_times(self):
        shift = ShiftRecord.model_validate({"type": "plus", "date": "2026-03-04"}).to_shift()

        assert ShiftType(shift.type) is ShiftType.PLUS
        assert shift.start_time is None

    def test_unknown_type_passes_through(self):
        """Unknown types are left for the calculator to flag."""
        shift = ShiftRecord.model_validate({"type": "overtime", "date": "2026-03-04"}).to_shift()

        assert shift.type == "overtime"


class TestRateSettings:
    def test_only_set_fields_become_overrides(self):
        settings = RateSettings.model_validate({"baseRate": "80", "bonusQuarterly": 0})

        assert settings.to_overrides() == {
            "base_rate": Decimal("80"),
            "bonus_quarterly": Decimal("0"),
        }

    def test_field_names_accepted(self):
        settings = RateSettings(weekend_multiplier=Decimal("2"))

        assert settings.to_overrides() == {"weekend_multiplier": Decimal("2")}

    def test_non_positive_base_rate_rejected(self):
        with pytest.raises(ValidationError):
            RateSettings.model_validate({"baseRate": 0})


class TestDeductionSettings:
    def test_defaults(self):
        toggles = DeductionSettings().to_toggles()

        assert toggles.pension is True
        assert toggles.income_tax is True
        assert toggles.study_full_salary is False
        assert toggles.tax_year_2025 is False

    def test_aliases(self):
        toggles = DeductionSettings.model_validate(
            {"incomeTax": False, "studyFullSalary": True, "taxYear2025": True}
        ).to_toggles()

        assert toggles.income_tax is False
        assert toggles.study_full_salary is True
        assert toggles.tax_year_2025 is True


class TestHistory:
    def test_payslip_aliases(self):
        entry = PayslipRecord.model_validate(
            {
                "gross": 10000,
                "incomeTax": 500,
                "ni": 200,
                "health": 350,
                "empPension": 1250,
                "cumulativeGrossTax": 30000,
                "actualNet": 8000,
            }
        ).to_entry()

        assert entry.income_tax == Decimal("500")
        assert entry.health_insurance == Decimal("350")
        assert entry.emp_pension == Decimal("1250")
        assert entry.cumulative_gross_tax == Decimal("30000")
        assert entry.actual_net == Decimal("8000")
        assert entry.has_data

    def test_parse_history_keys_by_month(self):
        history = parse_history({"0": {"gross": 9000}, "3": {"incomeTax": 100}})

        assert set(history) == {0, 3}
        assert history[0].gross == Decimal("9000")
        assert history[3].has_data

    def test_empty_payslip_has_no_data(self):
        assert not PayslipRecord.model_validate({"actualNet": 100}).to_entry().has_data


class TestMonthlyRecordSchema:
    def test_to_record(self):
        record = MonthlyRecordSchema.model_validate(
            {"month": 2, "gross": "10000", "incomeTax": "575.10", "source": "auto"}
        ).to_record()

        assert record.month == 2
        assert record.income_tax == Decimal("575.10")
        assert record.source is MonthSource.AUTO

    @pytest.mark.parametrize("month", [-1, 12])
    def test_month_range(self, month):
        with pytest.raises(ValidationError):
            MonthlyRecordSchema.model_validate({"month": month})
