"""Pay rate resolution by weekday and time-of-day windows."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Mapping

from shift_payroll.calculators.money import ZERO, Number, round_to_cents
from shift_payroll.calculators.tables import DEFAULT_RATES
from shift_payroll.calculators.types import PayBreakdown, RangeResult, RateConfig, RateInfo

ONE_MINUTE = timedelta(minutes=1)
MINUTES_PER_HOUR = Decimal("60")

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6

WEEKEND_START_HOUR = 16  # Friday
REST_END_HOUR = 6  # rest window is [00:00, 06:00); weekend ends Sunday 06:00


class RateWindow(str, Enum):
    """Breakdown bucket a minute is billed into."""

    REGULAR = "regular"
    WEEKEND = "weekend"
    REST = "rest"
    WEEKEND_REST = "weekend_rest"

    @classmethod
    def classify(cls, is_weekend: bool, is_rest: bool) -> RateWindow:
        if is_weekend and is_rest:
            return cls.WEEKEND_REST
        if is_rest:
            return cls.REST
        if is_weekend:
            return cls.WEEKEND
        return cls.REGULAR


def build_rates(overrides: RateConfig | Mapping[str, Number | None] | None = None) -> RateConfig:
    """Overlay caller overrides on the default rate table."""
    if isinstance(overrides, RateConfig):
        return overrides
    return DEFAULT_RATES.with_overrides(overrides)


def is_weekend(moment: datetime) -> bool:
    """Friday 16:00 through Sunday 06:00, in the moment's own wall-clock time."""
    day = moment.weekday()
    hour = moment.hour
    return (
        (day == FRIDAY and hour >= WEEKEND_START_HOUR)
        or day == SATURDAY
        or (day == SUNDAY and hour < REST_END_HOUR)
    )


def is_rest(moment: datetime) -> bool:
    """00:00 through 06:00 on any day."""
    return moment.hour < REST_END_HOUR


class RateResolver:
    """Resolves hourly rates and integrates them over time ranges.

    Rate selection:
    1. Weekend window pays ``base_rate * weekend_multiplier``
    2. Rest window multiplies whichever rate applies by ``rest_multiplier``
    3. Weekend and rest combine multiplicatively, never additively

    Ranges are billed minute by minute: each tick pays the rate in effect at
    its start instant, so a boundary crossed mid-minute moves the whole
    minute, not a fraction of it.
    """

    def __init__(self, rates: RateConfig | Mapping[str, Number | None] | None = None):
        self.rates = build_rates(rates)

    def window_rate(self, window: RateWindow) -> Decimal:
        """Hourly rate paid inside a window."""
        weekend = window in (RateWindow.WEEKEND, RateWindow.WEEKEND_REST)
        rest = window in (RateWindow.REST, RateWindow.WEEKEND_REST)
        rate = self.rates.weekend_rate if weekend else self.rates.base_rate
        if rest:
            rate *= self.rates.rest_multiplier
        return rate

    def rate_at(self, moment: datetime) -> RateInfo:
        """Resolve the hourly rate at a given moment."""
        weekend = is_weekend(moment)
        rest = is_rest(moment)
        return RateInfo(
            rate=self.window_rate(RateWindow.classify(weekend, rest)),
            is_weekend=weekend,
            is_rest=rest,
        )

    def pay_for_range(self, start: datetime, end: datetime) -> RangeResult:
        """Sum pay minute by minute over ``[start, end)``.

        Returns a zero result without iterating when ``end <= start``.
        """
        minutes = {window: 0 for window in RateWindow}

        tick = start
        while tick < end:
            minutes[RateWindow.classify(is_weekend(tick), is_rest(tick))] += 1
            tick += ONE_MINUTE

        # Unrounded until the end; each bucket is minutes * (rate / 60)
        pay = {
            window: count * self.window_rate(window) / MINUTES_PER_HOUR
            for window, count in minutes.items()
        }
        total_minutes = sum(minutes.values())

        return RangeResult(
            total_pay=round_to_cents(sum(pay.values(), ZERO)),
            total_minutes=total_minutes,
            total_hours=round_to_cents(Decimal(total_minutes) / MINUTES_PER_HOUR),
            breakdown=PayBreakdown(
                regular=round_to_cents(pay[RateWindow.REGULAR]),
                weekend=round_to_cents(pay[RateWindow.WEEKEND]),
                rest=round_to_cents(pay[RateWindow.REST]),
                weekend_rest=round_to_cents(pay[RateWindow.WEEKEND_REST]),
            ),
        )
