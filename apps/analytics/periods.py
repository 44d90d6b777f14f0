"""
Period navigation and period-over-period comparison for reports.

A period is identified by its type and any day inside it. Stepping moves
that day by whole calendar units, so the step from Jan 31 lands in
February rather than spilling into March.
"""

import calendar
from datetime import date, timedelta

from django.db import models

from .exceptions import InvalidPeriodError
from .summaries import (
    get_monthly_summary,
    get_week_range,
    get_weekly_summary,
    get_yearly_summary,
)


class PeriodType(models.TextChoices):
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'
    YEARLY = 'yearly', 'Yearly'


PREVIOUS_PERIOD_LABELS = {
    PeriodType.WEEKLY: 'last week',
    PeriodType.MONTHLY: 'last month',
    PeriodType.YEARLY: 'last year',
}


def add_months(day: date, months: int) -> date:
    """Shift by calendar months, clamping the day to the target month's length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def shift_period(day: date, period: str, steps: int = 1) -> date:
    """
    Move ``day`` by ``steps`` periods (negative steps go back).

    Weekly steps are 7 days, monthly steps one calendar month, yearly steps
    one year with Feb 29 falling back to Feb 28.
    """
    if period == PeriodType.WEEKLY:
        return day + timedelta(days=7 * steps)
    if period == PeriodType.MONTHLY:
        return add_months(day, steps)
    if period == PeriodType.YEARLY:
        return add_months(day, 12 * steps)
    raise InvalidPeriodError(
        f"Invalid period: '{period}'. Valid options: weekly, monthly, yearly"
    )


def percent_change(current, previous) -> float:
    """Change from ``previous`` to ``current`` in percent; 0 when previous is not positive."""
    if previous <= 0:
        return 0.0
    return round(float((current - previous) / previous * 100), 2)


def get_period_summary(*, trips, expenses, day: date, period: str) -> dict:
    """Summary of the weekly, monthly or yearly period containing ``day``."""
    if period == PeriodType.WEEKLY:
        return get_weekly_summary(trips=trips, expenses=expenses, day=day)
    if period == PeriodType.MONTHLY:
        return get_monthly_summary(trips=trips, expenses=expenses, year=day.year, month=day.month)
    if period == PeriodType.YEARLY:
        return get_yearly_summary(trips=trips, expenses=expenses, year=day.year)
    raise InvalidPeriodError(
        f"Invalid period: '{period}'. Valid options: weekly, monthly, yearly"
    )


def period_label(day: date, period: str) -> str:
    """
    Human label for a period.

    Examples:
        weekly:  'Mar 3 - Mar 9, 2024'
        monthly: 'March 2024'
        yearly:  '2024'
    """
    if period == PeriodType.WEEKLY:
        start, end = (date.fromisoformat(value) for value in get_week_range(day))
        return (
            f"{start.strftime('%b')} {start.day} - "
            f"{end.strftime('%b')} {end.day}, {end.year}"
        )
    if period == PeriodType.YEARLY:
        return str(day.year)
    return f"{day.strftime('%B')} {day.year}"


def compare_with_previous(*, trips, expenses, day: date, period: str) -> dict:
    """
    Compare the period containing ``day`` with the one before it.

    Returns:
        dict with keys:
            - period, label, previous_label
            - current: Summary of the selected period
            - previous: Summary of the period before
            - earnings_change: Percent change in total earnings
            - expenses_change: Percent change in total expenses
            - net_profit_change: Percent change in net profit
    """
    current = get_period_summary(trips=trips, expenses=expenses, day=day, period=period)
    previous_day = shift_period(day, period, -1)
    previous = get_period_summary(trips=trips, expenses=expenses, day=previous_day, period=period)

    return {
        'period': period,
        'label': period_label(day, period),
        'previous_label': PREVIOUS_PERIOD_LABELS[period],
        'current': current,
        'previous': previous,
        'earnings_change': percent_change(current['total_earnings'], previous['total_earnings']),
        'expenses_change': percent_change(current['total_expenses'], previous['total_expenses']),
        'net_profit_change': percent_change(current['net_profit'], previous['net_profit']),
    }
