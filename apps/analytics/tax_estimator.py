"""
Tax Estimator
=============

Estimates federal income tax on a year of trucking income. This is an
estimate for planning quarterly payments, not a tax computation: the
bracket table is fixed to one filing status and year.

Deductions use either the standard mileage rate (``estimated_miles`` times
``settings.STANDARD_MILEAGE_RATE``) or the year's actual expenses, where
actual expenses follow the same rule as the summaries: ledger amounts plus
each trip's fuel and other costs.

Example:
    Estimating 2024 with the mileage method::

        from apps.analytics.tax_estimator import estimate_taxes

        estimate = estimate_taxes(
            trips=store.trips.all(),
            expenses=store.expenses.all(),
            year=2024,
            estimated_miles=Decimal('60000'),
            use_standard_deduction=True,
        )
        print(estimate['estimated_tax'], estimate['quarterly_estimate'])
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings

from apps.records.types import ZERO, get_category_label


MONEY_PRECISION = Decimal('0.01')
QUARTERS = ('Q1', 'Q2', 'Q3', 'Q4')


@dataclass(frozen=True)
class TaxBracket:
    """Whole dollars ``min`` through ``max`` taxed at ``rate``; ``max=None`` is unbounded."""

    min: int
    max: Optional[int]
    rate: Decimal

    @property
    def width(self) -> Optional[int]:
        """Dollars in the bracket, counting from $1 for the first bracket."""
        if self.max is None:
            return None
        return self.max - max(self.min, 1) + 1


# 2024 single filer
TAX_BRACKETS = (
    TaxBracket(0, 11000, Decimal('0.10')),
    TaxBracket(11001, 44725, Decimal('0.12')),
    TaxBracket(44726, 95375, Decimal('0.22')),
    TaxBracket(95376, 182100, Decimal('0.24')),
    TaxBracket(182101, 231250, Decimal('0.32')),
    TaxBracket(231251, 578125, Decimal('0.35')),
    TaxBracket(578126, None, Decimal('0.37')),
)


def calculate_bracket_tax(net_income, brackets=TAX_BRACKETS) -> Decimal:
    """
    Marginal tax on ``net_income``.

    Brackets are filled lowest first; each dollar is taxed only at the rate
    of the bracket it falls in.

    Example:
        With the first two brackets, 15000 is taxed
        11000 * 0.10 + 4000 * 0.12 = 1580.
    """
    tax = ZERO
    remaining = Decimal(net_income)
    for bracket in brackets:
        if remaining <= 0:
            break
        width = bracket.width
        taxable = remaining if width is None else min(remaining, Decimal(width))
        tax += taxable * bracket.rate
        remaining -= taxable
    return tax


def get_category_breakdown(expenses) -> list:
    """Ledger expense totals per category, largest first."""
    by_category = {}
    for expense in expenses:
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount

    breakdown = [
        {'category': category, 'label': get_category_label(category), 'amount': amount}
        for category, amount in by_category.items()
    ]
    breakdown.sort(key=lambda item: item['amount'], reverse=True)
    return breakdown


def estimate_taxes(
    *,
    trips,
    expenses,
    year: int,
    estimated_miles=ZERO,
    use_standard_deduction: bool = True,
    mileage_rate=None,
) -> dict:
    """
    Estimate income tax for ``year``.

    Args:
        trips: All trips; only those dated in ``year`` count
        expenses: All expenses; only those dated in ``year`` count
        year: Tax year
        estimated_miles: Business miles driven in the year
        use_standard_deduction: Deduct the mileage allowance instead of
            actual expenses
        mileage_rate: Dollars per mile; defaults to
            ``settings.STANDARD_MILEAGE_RATE``

    Returns:
        dict with keys:
            - year, estimated_miles, mileage_rate, use_standard_deduction
            - total_income: Trip earnings for the year
            - total_expenses: Ledger amounts plus trip fuel/other costs
            - standard_mileage_deduction: estimated_miles * mileage_rate
            - deductible_expenses: The deduction actually applied
            - net_income: Income minus deduction, never below 0
            - estimated_tax: Marginal bracket tax on net_income
            - quarterly_estimate: estimated_tax / 4
            - quarterly_estimates: The four equal quarterly payments
            - effective_rate: Percent of net_income, 0 when net_income is 0
            - expenses_by_category: Ledger expenses per category, largest first
    """
    if mileage_rate is None:
        mileage_rate = settings.STANDARD_MILEAGE_RATE
    mileage_rate = Decimal(str(mileage_rate))
    estimated_miles = Decimal(str(estimated_miles or 0))

    prefix = f"{year:04d}"
    year_trips = [trip for trip in trips if trip.date.startswith(prefix)]
    year_expenses = [expense for expense in expenses if expense.date.startswith(prefix)]

    total_income = sum((trip.earnings for trip in year_trips), ZERO)
    total_expenses = (
        sum((expense.amount for expense in year_expenses), ZERO)
        + sum((trip.trip_costs for trip in year_trips), ZERO)
    )

    standard_deduction = estimated_miles * mileage_rate
    deductible = standard_deduction if use_standard_deduction else total_expenses
    net_income = max(ZERO, total_income - deductible)

    estimated_tax = calculate_bracket_tax(net_income)
    quarterly = (estimated_tax / 4).quantize(MONEY_PRECISION)

    if net_income > 0:
        effective_rate = round(float(estimated_tax / net_income * 100), 2)
    else:
        effective_rate = 0.0

    return {
        'year': year,
        'estimated_miles': estimated_miles,
        'mileage_rate': mileage_rate,
        'use_standard_deduction': use_standard_deduction,
        'total_income': total_income,
        'total_expenses': total_expenses,
        'standard_mileage_deduction': standard_deduction.quantize(MONEY_PRECISION),
        'deductible_expenses': deductible.quantize(MONEY_PRECISION),
        'net_income': net_income.quantize(MONEY_PRECISION),
        'estimated_tax': estimated_tax.quantize(MONEY_PRECISION),
        'quarterly_estimate': quarterly,
        'quarterly_estimates': [
            {'quarter': quarter, 'amount': quarterly} for quarter in QUARTERS
        ],
        'effective_rate': effective_rate,
        'expenses_by_category': get_category_breakdown(year_expenses),
    }


def available_tax_years(today: Optional[date] = None) -> list:
    """The current year and the two before it, newest first."""
    year = (today or date.today()).year
    return [year, year - 1, year - 2]
