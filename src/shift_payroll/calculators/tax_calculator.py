"""Progressive income tax with credit points, and annual forecasting."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from shift_payroll.calculators.money import (
    ZERO,
    Number,
    percent_of,
    round_to_cents,
    to_decimal,
)
from shift_payroll.calculators.tables import (
    MONTHS_PER_YEAR,
    TaxBracket,
    TaxYearTable,
    resolve_tax_year,
)
from shift_payroll.calculators.types import (
    ForecastResult,
    MonthlyRecord,
    TaxResult,
    TaxTier,
    YtdOverride,
)


def walk_brackets(income: Decimal, brackets: Sequence[TaxBracket]) -> list[TaxTier]:
    """Split income across ordered brackets.

    Brackets must have strictly increasing ceilings, the last one open.
    Only brackets the income actually reaches produce a tier, and tiers
    cover ``[0, income]`` without gaps.
    """
    tiers: list[TaxTier] = []
    remaining = income
    prev = ZERO

    for bracket in brackets:
        if remaining <= 0:
            break
        width = remaining if bracket.is_open else min(remaining, bracket.ceiling - prev)
        tiers.append(
            TaxTier(
                from_amount=prev,
                to_amount=prev + width,
                rate=bracket.rate,
                taxable=round_to_cents(width),
                tax=round_to_cents(width * bracket.rate),
            )
        )
        remaining -= width
        if bracket.is_open:
            break
        prev = bracket.ceiling

    return tiers


class TaxCalculator:
    """Calculates income tax from a year's bracket table.

    Tax rules per year (see ``tables.TAX_YEARS``):
    {
        "monthly_brackets": [(ceiling, rate), ..., (None, rate)],
        "credit_point_value": 242,
    }

    Final tax is gross bracket tax minus ``credit_points * credit_point_value``,
    never below zero.
    """

    def __init__(self, use_2025: bool = False, table: TaxYearTable | None = None):
        self.table = table or resolve_tax_year(use_2025)

    def calculate_monthly(self, monthly_gross: Number, credit_points: Number) -> TaxResult:
        """Progressive income tax on a monthly gross."""
        gross = to_decimal(monthly_gross)
        tiers = walk_brackets(gross, self.table.monthly_brackets)

        gross_tax = sum((tier.tax for tier in tiers), ZERO)
        credit_amount = round_to_cents(to_decimal(credit_points) * self.table.credit_point_value)
        final_tax = max(ZERO, gross_tax - credit_amount)

        return TaxResult(
            gross_tax=gross_tax,
            credit_amount=credit_amount,
            final_tax=final_tax,
            effective_rate=percent_of(final_tax, gross),
            tiers=tuple(tiers),
        )

    def predict_annual(
        self,
        monthly_records: Iterable[MonthlyRecord],
        projected_monthly_gross: Number,
        credit_points: Number,
        ytd_override: YtdOverride | None = None,
    ) -> ForecastResult:
        """Predict annual tax from year-to-date gross plus projected months.

        Args:
            monthly_records: Months of the year; those with positive gross
                count as months with data
            projected_monthly_gross: Gross assumed for each remaining month
            credit_points: Monthly credit points (scaled by 12 for the year)
            ytd_override: Payslip year-to-date baseline; used instead of the
                records when its gross is positive

        Returns:
            Estimated annual gross, predicted annual tax and months counted
        """
        if ytd_override is not None and to_decimal(ytd_override.ytd_gross) > 0:
            ytd_total = to_decimal(ytd_override.ytd_gross)
            months_with_data = ytd_override.months_with_data
        else:
            grosses = [r.gross for r in monthly_records if r.gross > 0]
            ytd_total = sum(grosses, ZERO)
            months_with_data = len(grosses)

        remaining_months = max(0, MONTHS_PER_YEAR - months_with_data)
        estimated = ytd_total + to_decimal(projected_monthly_gross) * remaining_months

        tiers = walk_brackets(estimated, self.table.annual_brackets)
        gross_tax = sum((tier.tax for tier in tiers), ZERO)
        annual_credit = (
            to_decimal(credit_points) * MONTHS_PER_YEAR * self.table.credit_point_value
        )

        return ForecastResult(
            estimated_annual_gross=round_to_cents(estimated),
            predicted_annual_tax=round_to_cents(max(ZERO, gross_tax - annual_credit)),
            months_with_data=months_with_data,
        )
