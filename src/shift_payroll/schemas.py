"""Pydantic schemas for stored records handed to the engine.

The storage layer keeps camelCase JSON; these models validate it and
convert to calculator types.
"""

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shift_payroll.calculators.types import (
    DeductionToggles,
    MonthlyRecord,
    MonthSource,
    PayslipEntry,
    Shift,
)


class StoredModel(BaseModel):
    """Base schema accepting camelCase aliases or field names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ============================================================================
# Shift schemas
# ============================================================================


class ShiftRecord(StoredModel):
    """Schema for a stored shift."""

    type: str
    date: date
    start_time: time | None = Field(default=None, alias="startTime")
    end_time: time | None = Field(default=None, alias="endTime")
    has_bonus: bool = Field(default=False, alias="hasBonus")

    @model_validator(mode="after")
    def _minus_requires_times(self) -> "ShiftRecord":
        if self.type == "minus" and (self.start_time is None or self.end_time is None):
            raise ValueError("minus shift requires startTime and endTime")
        return self

    def to_shift(self) -> Shift:
        return Shift(
            type=self.type,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            has_bonus=self.has_bonus,
        )


# ============================================================================
# Settings schemas
# ============================================================================


class RateSettings(StoredModel):
    """Schema for user rate overrides; unset fields keep the defaults."""

    base_rate: Decimal | None = Field(default=None, alias="baseRate", gt=0)
    weekend_multiplier: Decimal | None = Field(default=None, alias="weekendMultiplier", gt=0)
    rest_multiplier: Decimal | None = Field(default=None, alias="restMultiplier", ge=0)
    vacation_day_rate: Decimal | None = Field(default=None, alias="vacationDayRate", ge=0)
    bonus_quarterly: Decimal | None = Field(default=None, alias="bonusQuarterly", ge=0)

    def to_overrides(self) -> dict[str, Decimal]:
        return self.model_dump(exclude_none=True)


class DeductionSettings(StoredModel):
    """Schema for deduction toggles."""

    pension: bool = True
    study: bool = True
    ni: bool = True
    income_tax: bool = Field(default=True, alias="incomeTax")
    study_full_salary: bool = Field(default=False, alias="studyFullSalary")
    tax_year_2025: bool = Field(default=False, alias="taxYear2025")

    def to_toggles(self) -> DeductionToggles:
        return DeductionToggles(**self.model_dump())


# ============================================================================
# History schemas
# ============================================================================


class PayslipRecord(StoredModel):
    """Schema for one month of stored payslip history."""

    gross: Decimal = Decimal("0")
    income_tax: Decimal = Field(default=Decimal("0"), alias="incomeTax")
    ni: Decimal = Decimal("0")
    health_insurance: Decimal = Field(default=Decimal("0"), alias="health")
    pension: Decimal = Decimal("0")
    study: Decimal = Decimal("0")
    emp_pension: Decimal = Field(default=Decimal("0"), alias="empPension")
    emp_study: Decimal = Field(default=Decimal("0"), alias="empStudy")
    cumulative_gross_tax: Decimal = Field(default=Decimal("0"), alias="cumulativeGrossTax")
    actual_net: Decimal = Field(default=Decimal("0"), alias="actualNet")

    def to_entry(self) -> PayslipEntry:
        return PayslipEntry(**self.model_dump())


class MonthlyRecordSchema(StoredModel):
    """Schema for a monthly record supplied by the caller."""

    month: int = Field(ge=0, le=11)
    gross: Decimal = Decimal("0")
    income_tax: Decimal = Field(default=Decimal("0"), alias="incomeTax")
    ni: Decimal = Decimal("0")
    pension: Decimal = Decimal("0")
    study: Decimal = Decimal("0")
    emp_pension: Decimal = Field(default=Decimal("0"), alias="empPension")
    emp_study: Decimal = Field(default=Decimal("0"), alias="empStudy")
    source: MonthSource = MonthSource.EMPTY
    cumulative_gross_tax: Decimal = Field(default=Decimal("0"), alias="cumulativeGrossTax")

    def to_record(self) -> MonthlyRecord:
        return MonthlyRecord(**self.model_dump())


def parse_history(raw: dict[str, dict]) -> dict[int, PayslipEntry]:
    """Parse a stored year of history keyed by month index strings."""
    return {int(month): PayslipRecord.model_validate(data).to_entry() for month, data in raw.items()}
