"""Shift pay calculation by shift type."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from decimal import ROUND_FLOOR, Decimal
from typing import Mapping

from shift_payroll.calculators.money import ZERO, Number, round_to_cents
from shift_payroll.calculators.rate_resolver import RateResolver
from shift_payroll.calculators.tables import MEAL_ALLOWANCE_PER_SIX_HOURS
from shift_payroll.calculators.types import (
    FlatRateShiftResult,
    InvalidShiftResult,
    RateConfig,
    Shift,
    ShiftResult,
    ShiftType,
    TimedShiftResult,
)

logger = logging.getLogger(__name__)

SHIFT_START = time(6, 0)
TRAINING_END = time(20, 0)
MEAL_BLOCK_HOURS = Decimal("6")


def meal_allowance_for(total_hours: Decimal) -> Decimal:
    """One meal allowance per full six hours worked."""
    blocks = (total_hours / MEAL_BLOCK_HOURS).to_integral_value(rounding=ROUND_FLOOR)
    return blocks * MEAL_ALLOWANCE_PER_SIX_HOURS


class ShiftPayCalculator:
    """Prices a single shift.

    Policy by type:
    - vacation, sick: flat ``vacation_day_rate``, no hours
    - plus: 06:00 to 06:00 next day
    - training: 06:00 to 20:00
    - minus: caller-supplied start/end, rolled to next day when end <= start
    - anything else: ``InvalidShiftResult``

    Timed shifts then add the bonus (when flagged) and meal allowance, which
    are reported separately but folded into ``total_pay``. The base part of
    ``total_pay`` is the sum of the rounded breakdown buckets, so the
    breakdown always reconciles with the total.
    """

    def __init__(self, rates: RateConfig | Mapping[str, Number | None] | None = None):
        self.rate_resolver = RateResolver(rates)
        self.rates = self.rate_resolver.rates

    def calculate(self, shift: Shift) -> ShiftResult:
        """Calculate pay for a single shift."""
        try:
            shift_type = ShiftType(shift.type)
        except ValueError:
            logger.warning("Unknown shift type %r on %s", shift.type, shift.date)
            return InvalidShiftResult(
                shift_type=shift.type,
                reason=f"Unknown shift type: {shift.type!r}",
            )

        if shift_type.is_flat_rate:
            return FlatRateShiftResult(
                shift_type=shift_type,
                total_pay=round_to_cents(self.rates.vacation_day_rate),
            )

        interval = self._interval(shift_type, shift)
        if interval is None:
            logger.warning("Minus shift on %s is missing start or end time", shift.date)
            return InvalidShiftResult(
                shift_type=shift_type,
                reason="Minus shift requires start_time and end_time",
            )

        start, end = interval
        result = self.rate_resolver.pay_for_range(start, end)
        bonus = self.rates.bonus_quarterly if shift.has_bonus else ZERO
        meal_allowance = meal_allowance_for(result.total_hours)

        logger.debug(
            "Priced %s shift on %s: %s minutes, base %s",
            shift_type.value,
            shift.date,
            result.total_minutes,
            result.total_pay,
        )

        return TimedShiftResult(
            shift_type=shift_type,
            total_pay=round_to_cents(result.breakdown.total + bonus + meal_allowance),
            total_hours=result.total_hours,
            total_minutes=result.total_minutes,
            breakdown=result.breakdown,
            bonus_applied=bonus,
            meal_allowance=meal_allowance,
        )

    def _interval(
        self, shift_type: ShiftType, shift: Shift
    ) -> tuple[datetime, datetime] | None:
        """Map a timed shift to its ``[start, end)`` interval in local time."""
        day: date = shift.date

        if shift_type is ShiftType.PLUS:
            start = datetime.combine(day, SHIFT_START)
            return start, start + timedelta(days=1)

        if shift_type is ShiftType.TRAINING:
            return datetime.combine(day, SHIFT_START), datetime.combine(day, TRAINING_END)

        # MINUS
        if shift.start_time is None or shift.end_time is None:
            return None
        start = datetime.combine(day, shift.start_time)
        end = datetime.combine(day, shift.end_time)
        if end <= start:
            end += timedelta(days=1)
        return start, end
