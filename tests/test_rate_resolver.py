"""Tests for rate resolution and range pay."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from shift_payroll.calculators.rate_resolver import RateResolver, RateWindow, build_rates
from shift_payroll.calculators.tables import DEFAULT_RATES
from shift_payroll.calculators.types import RateConfig


class TestRateAt:
    """Test rate windows at single instants."""

    @pytest.mark.parametrize(
        "moment, rate, is_weekend, is_rest",
        [
            (datetime(2026, 3, 4, 10, 0), "75", False, False),  # Wed day
            (datetime(2026, 3, 4, 3, 0), "37.5", False, True),  # Wed night
            (datetime(2026, 3, 6, 15, 59), "75", False, False),  # Fri before 16:00
            (datetime(2026, 3, 6, 16, 0), "112.5", True, False),  # Fri from 16:00
            (datetime(2026, 3, 7, 2, 0), "56.25", True, True),  # Sat night
            (datetime(2026, 3, 7, 12, 0), "112.5", True, False),  # Sat day
            (datetime(2026, 3, 8, 5, 59), "56.25", True, True),  # Sun before 06:00
            (datetime(2026, 3, 8, 6, 0), "75", False, False),  # Sun from 06:00
            (datetime(2026, 3, 6, 3, 0), "37.5", False, True),  # Fri night is not weekend
        ],
    )
    def test_windows(self, moment, rate, is_weekend, is_rest):
        """Weekend is Fri 16:00 to Sun 06:00; rest is 00:00 to 06:00."""
        info = RateResolver().rate_at(moment)

        assert info.rate == Decimal(rate)
        assert info.is_weekend is is_weekend
        assert info.is_rest is is_rest

    def test_weekend_and_rest_multiply(self):
        """Weekend-rest rate is base x weekend x rest, not a sum."""
        resolver = RateResolver({"base_rate": 100, "weekend_multiplier": 2, "rest_multiplier": "0.25"})

        info = resolver.rate_at(datetime(2026, 3, 7, 1, 0))

        assert info.rate == Decimal("50")

    def test_overrides_merge_per_field(self):
        """Overriding one field keeps the other defaults."""
        resolver = RateResolver({"base_rate": 100})

        assert resolver.rates.base_rate == Decimal("100")
        assert resolver.rates.weekend_multiplier == DEFAULT_RATES.weekend_multiplier
        assert resolver.rate_at(datetime(2026, 3, 7, 1, 0)).rate == Decimal("75")

    def test_none_override_keeps_default(self):
        rates = build_rates({"base_rate": None, "bonus_quarterly": 1000})

        assert rates.base_rate == DEFAULT_RATES.base_rate
        assert rates.bonus_quarterly == Decimal("1000")

    def test_no_overrides_is_default_table(self):
        assert build_rates() == DEFAULT_RATES
        assert build_rates({}) == DEFAULT_RATES

    def test_rate_config_passes_through(self):
        custom = RateConfig(
            base_rate=Decimal("50"),
            weekend_multiplier=Decimal("2"),
            rest_multiplier=Decimal("1"),
            vacation_day_rate=Decimal("1000"),
            bonus_quarterly=Decimal("0"),
        )

        assert build_rates(custom) is custom

    def test_unknown_override_rejected(self):
        with pytest.raises(TypeError):
            build_rates({"holiday_multiplier": 2})


class TestWindowClassification:
    def test_classify(self):
        assert RateWindow.classify(False, False) is RateWindow.REGULAR
        assert RateWindow.classify(True, False) is RateWindow.WEEKEND
        assert RateWindow.classify(False, True) is RateWindow.REST
        assert RateWindow.classify(True, True) is RateWindow.WEEKEND_REST


class TestPayForRange:
    """Test minute-granularity integration over ranges."""

    def test_zero_length_range(self):
        """Zero-length range pays nothing."""
        moment = datetime(2026, 3, 4, 10, 0)

        result = RateResolver().pay_for_range(moment, moment)

        assert result.total_pay == Decimal("0")
        assert result.total_minutes == 0
        assert result.total_hours == Decimal("0")
        assert result.breakdown.total == Decimal("0")

    def test_negative_range(self):
        """End before start pays nothing."""
        start = datetime(2026, 3, 4, 10, 0)

        result = RateResolver().pay_for_range(start, start - timedelta(hours=3))

        assert result.total_pay == Decimal("0")
        assert result.total_minutes == 0

    def test_crossing_weekend_start(self):
        """Fri 15:00-17:00: one hour regular, one hour weekend."""
        result = RateResolver().pay_for_range(
            datetime(2026, 3, 6, 15, 0), datetime(2026, 3, 6, 17, 0)
        )

        assert result.breakdown.regular == Decimal("75.00")
        assert result.breakdown.weekend == Decimal("112.50")
        assert result.total_pay == Decimal("187.50")
        assert result.total_hours == Decimal("2.00")

    def test_crossing_weekend_end(self):
        """Sun 04:00-08:00: two hours weekend-rest, two hours regular."""
        result = RateResolver().pay_for_range(
            datetime(2026, 3, 8, 4, 0), datetime(2026, 3, 8, 8, 0)
        )

        assert result.breakdown.weekend_rest == Decimal("112.50")
        assert result.breakdown.regular == Decimal("150.00")
        assert result.total_pay == Decimal("262.50")

    def test_tick_billed_at_start_instant(self):
        """A minute straddling 16:00 is billed at the rate of its start."""
        result = RateResolver().pay_for_range(
            datetime(2026, 3, 6, 15, 59, 30), datetime(2026, 3, 6, 16, 0, 30)
        )

        assert result.total_minutes == 1
        assert result.breakdown.regular == Decimal("1.25")
        assert result.breakdown.weekend == Decimal("0")
        assert result.total_pay == Decimal("1.25")

    def test_partial_minute_billed_in_full(self):
        """Ticks start at the range start; a trailing partial tick counts."""
        start = datetime(2026, 3, 4, 10, 0)

        result = RateResolver().pay_for_range(start, start + timedelta(seconds=90))

        assert result.total_minutes == 2
        assert result.total_pay == Decimal("2.50")

    def test_hours_rounded_to_cents(self):
        start = datetime(2026, 3, 4, 10, 0)

        result = RateResolver().pay_for_range(start, start + timedelta(minutes=50))

        assert result.total_hours == Decimal("0.83")

    def test_rounding_half_away_from_zero(self):
        """One minute at 10/hour is 0.1666... and rounds to 0.17."""
        start = datetime(2026, 3, 4, 10, 0)

        result = RateResolver({"base_rate": 10}).pay_for_range(
            start, start + timedelta(minutes=1)
        )

        assert result.total_pay == Decimal("0.17")

    def test_accrual_not_rounded_per_minute(self):
        """Three minutes at 10/hour is 0.50, not 3 x 0.17."""
        start = datetime(2026, 3, 4, 10, 0)

        result = RateResolver({"base_rate": 10}).pay_for_range(
            start, start + timedelta(minutes=3)
        )

        assert result.total_pay == Decimal("0.50")
