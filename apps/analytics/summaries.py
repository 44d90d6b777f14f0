"""
Summaries Module
================

Daily, weekly, monthly and yearly summaries over trips and expenses, plus
fleet-wide totals and the transaction ledger.

Every function here is pure: it takes the record lists it works on and
returns plain dictionaries, recomputing everything on each call. Nothing
is cached between calls, so the same inputs always give the same result.

Key Rules:
    - Dates are zero-padded ``YYYY-MM-DD`` strings; months and years are
      matched by string prefix, weeks by inclusive string range.
    - Total expenses are the ledger expense amounts PLUS every trip's own
      ``fuel_cost`` and ``other_expenses``. Both sources are always summed.
    - ``expenses_by_category`` groups ledger amounts by category and adds
      trip fuel costs under ``fuel`` when any trip in the period has one.

Example:
    Summarizing March 2024::

        from apps.analytics.summaries import get_monthly_summary

        summary = get_monthly_summary(
            trips=store.trips.all(),
            expenses=store.expenses.all(),
            year=2024,
            month=3,
        )
        print(summary['net_profit'], summary['expenses_by_category'])
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from apps.records.types import ZERO, ExpenseCategory, get_category_label


def _sum(values) -> Decimal:
    return sum(values, ZERO)


def _totals(trips, expenses) -> dict:
    """Earnings, expenses (ledger plus trip costs) and net profit."""
    total_earnings = _sum(trip.earnings for trip in trips)
    total_expenses = (
        _sum(expense.amount for expense in expenses)
        + _sum(trip.trip_costs for trip in trips)
    )
    return {
        'total_earnings': total_earnings,
        'total_expenses': total_expenses,
        'net_profit': total_earnings - total_expenses,
    }


def get_expenses_by_category(*, trips, expenses) -> dict:
    """
    Group expense amounts by category.

    Ledger expenses are summed per category. If any trip carries a non-zero
    ``fuel_cost``, the trips' fuel costs are added under ``fuel``. Trip
    ``other_expenses`` never appear here.
    """
    by_category = {}
    for expense in expenses:
        by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount

    if any(trip.fuel_cost for trip in trips):
        fuel = ExpenseCategory.FUEL.value
        by_category[fuel] = by_category.get(fuel, ZERO) + _sum(
            trip.fuel_cost or ZERO for trip in trips
        )

    return by_category


def _period_summary(trips, expenses) -> dict:
    summary = _totals(trips, expenses)
    summary['trip_count'] = len(trips)
    summary['expenses_by_category'] = get_expenses_by_category(trips=trips, expenses=expenses)
    summary['trips'] = trips
    summary['expenses'] = expenses
    return summary


def get_daily_summary(*, trips, expenses, day: str) -> dict:
    """
    Summarize one day.

    Args:
        trips: All trips
        expenses: All expenses
        day: Date string ``YYYY-MM-DD``, matched exactly

    Returns:
        dict with keys:
            - date: The requested day
            - total_earnings: Sum of trip earnings
            - total_expenses: Ledger amounts plus trip fuel/other costs
            - net_profit: Earnings minus expenses
            - trips: Trips on that day
            - expenses: Expenses on that day

    Example:
        A trip earning 500 with fuel_cost 100 and a 30 food expense on the
        same day give total_expenses 130 and net_profit 370.
    """
    day_trips = [trip for trip in trips if trip.date == day]
    day_expenses = [expense for expense in expenses if expense.date == day]

    summary = {'date': day}
    summary.update(_totals(day_trips, day_expenses))
    summary['trips'] = day_trips
    summary['expenses'] = day_expenses
    return summary


def get_monthly_summary(*, trips, expenses, year: int, month: int) -> dict:
    """
    Summarize one calendar month by ``YYYY-MM`` prefix.

    Returns:
        dict with the daily totals plus:
            - year, month: month is zero-padded, e.g. ``'03'``
            - trip_count: Number of trips in the month
            - expenses_by_category: See get_expenses_by_category
            - trailer_numbers: Distinct non-empty trailer numbers, first seen first
            - trips, expenses: The records in the month
    """
    month_str = f"{month:02d}"
    prefix = f"{year}-{month_str}"
    month_trips = [trip for trip in trips if trip.date.startswith(prefix)]
    month_expenses = [expense for expense in expenses if expense.date.startswith(prefix)]

    summary = {'year': year, 'month': month_str}
    summary.update(_period_summary(month_trips, month_expenses))
    summary['trailer_numbers'] = list(dict.fromkeys(
        trip.trailer_number for trip in month_trips if trip.trailer_number
    ))
    return summary


def get_week_range(day: date) -> Tuple[str, str]:
    """Sunday and Saturday of the week containing ``day``, as date strings."""
    offset = (day.weekday() + 1) % 7
    start = day - timedelta(days=offset)
    end = start + timedelta(days=6)
    return start.isoformat(), end.isoformat()


def get_weekly_summary(*, trips, expenses, day: date) -> dict:
    """Summarize the Sunday-to-Saturday week containing ``day``."""
    start, end = get_week_range(day)
    week_trips = [trip for trip in trips if start <= trip.date <= end]
    week_expenses = [expense for expense in expenses if start <= expense.date <= end]

    summary = {'start_date': start, 'end_date': end}
    summary.update(_period_summary(week_trips, week_expenses))
    return summary


def get_yearly_summary(*, trips, expenses, year: int) -> dict:
    """Summarize one year by 4-digit prefix."""
    prefix = f"{year:04d}"
    year_trips = [trip for trip in trips if trip.date.startswith(prefix)]
    year_expenses = [expense for expense in expenses if expense.date.startswith(prefix)]

    summary = {'year': year}
    summary.update(_period_summary(year_trips, year_expenses))
    return summary


def get_transactions(*, trips, expenses, category: Optional[str] = None) -> list:
    """
    Build the transaction ledger, newest first.

    Trips are earnings and expenses are outflows. When ``category`` is set
    only expenses of that category are listed and trips are left out.
    Rows with the same date keep trips before expenses.

    Returns:
        List of dicts with keys: id, kind ('trip' or 'expense'), date,
        description, category, amount, is_earning
    """
    rows = []
    if not category:
        for trip in trips:
            rows.append({
                'id': trip.id,
                'kind': 'trip',
                'date': trip.date,
                'description': trip.route_name,
                'category': None,
                'amount': trip.earnings,
                'is_earning': True,
            })

    for expense in expenses:
        if category and expense.category != category:
            continue
        rows.append({
            'id': expense.id,
            'kind': 'expense',
            'date': expense.date,
            'description': expense.description,
            'category': expense.category,
            'amount': expense.amount,
            'is_earning': False,
        })

    rows.sort(key=lambda row: row['date'], reverse=True)
    return rows


def get_fleet_totals(*, trips, expenses, routes) -> dict:
    """All-time totals for the dashboard, regardless of date."""
    totals = _totals(trips, expenses)
    return {
        'earnings': totals['total_earnings'],
        'expenses': totals['total_expenses'],
        'net_profit': totals['net_profit'],
        'trip_count': len(trips),
        'route_count': len(routes),
    }


def get_activity_dates(
    *,
    trips,
    expenses,
    month: Optional[str] = None,
    search: Optional[str] = None
) -> list:
    """
    Distinct dates with any trip or expense, newest first.

    Args:
        month: Optional ``YYYY-MM`` prefix to restrict to
        search: Optional term; keeps days where a trip's route name or an
            expense's description contains it (case-insensitive)
    """
    dates = sorted({trip.date for trip in trips} | {e.date for e in expenses}, reverse=True)
    if month:
        dates = [day for day in dates if day.startswith(month)]
    if not search:
        return dates

    term = search.lower()
    matching = {trip.date for trip in trips if term in trip.route_name.lower()}
    matching |= {e.date for e in expenses if term in e.description.lower()}
    return [day for day in dates if day in matching]


def get_top_categories(expenses_by_category: dict, limit: int = 5) -> list:
    """Categories with a positive total, largest first, at most ``limit``."""
    top = [
        {'category': category, 'label': get_category_label(category), 'amount': amount}
        for category, amount in expenses_by_category.items()
        if amount > 0
    ]
    top.sort(key=lambda item: item['amount'], reverse=True)
    return top[:limit]
