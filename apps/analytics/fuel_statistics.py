"""
Fuel statistics over a window of fuel entries.

Mileage is the odometer difference between the first and the last entry of
the window, sorted by date. It is not a sum of per-fill-up deltas, so gaps
in the log or odometer readings out of date order skew it. Per-entry
``mpg`` values stored on entries are left as they are.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from apps.records.types import ZERO

from .periods import add_months


PRICE_PRECISION = Decimal('0.001')
MONEY_PRECISION = Decimal('0.01')


def filter_fuel_entries(entries, *, truck_id=None, start_date=None, end_date=None) -> list:
    """Entries matching the optional truck and inclusive date range, oldest first."""
    if truck_id:
        entries = [e for e in entries if e.truck_id == truck_id]
    if start_date:
        entries = [e for e in entries if e.date >= start_date]
    if end_date:
        entries = [e for e in entries if e.date <= end_date]
    return sorted(entries, key=lambda e: e.date)


def get_fuel_stats(
    entries,
    truck_id: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    today: Optional[date] = None
) -> dict:
    """
    Compute fuel statistics for a truck and/or date range.

    Args:
        entries: All fuel entries
        truck_id: Only entries for this truck
        start_date: Only entries on or after this ``YYYY-MM-DD`` date
        end_date: Only entries on or before this ``YYYY-MM-DD`` date
        today: Reference day for ``monthly_average`` (defaults to today)

    Returns:
        dict with keys:
            - entry_count: Number of entries in the window
            - total_gallons: Sum of gallons
            - total_cost: Sum of entry total_cost
            - average_price_per_gallon: total_cost / total_gallons, 0 without gallons
            - total_miles_driven: Last odometer minus first; 0 with fewer than 2 entries
            - average_mpg: Miles per gallon over all gallons in the window
            - cost_per_mile: total_cost / miles, 0 without positive miles
            - monthly_average: Mean total_cost of window entries dated on or
              after one calendar month before ``today``
            - last_fill_up: Latest entry in the window or None

    Example:
        Two entries at odometer 1000 and 1400 with 10 gallons each give
        total_miles_driven 400 and average_mpg 20.
    """
    window = filter_fuel_entries(
        entries, truck_id=truck_id, start_date=start_date, end_date=end_date
    )

    total_gallons = sum((e.gallons for e in window), ZERO)
    total_cost = sum((e.total_cost for e in window), ZERO)

    if total_gallons > 0:
        average_price = (total_cost / total_gallons).quantize(PRICE_PRECISION)
    else:
        average_price = ZERO

    total_miles = ZERO
    average_mpg = 0.0
    if len(window) >= 2:
        total_miles = window[-1].odometer - window[0].odometer
        if total_gallons > 0:
            average_mpg = round(float(total_miles / total_gallons), 2)

    if total_miles > 0:
        cost_per_mile = (total_cost / total_miles).quantize(PRICE_PRECISION)
    else:
        cost_per_mile = ZERO

    cutoff = add_months(today or date.today(), -1).isoformat()
    recent = [e for e in window if e.date >= cutoff]
    if recent:
        monthly_average = (
            sum((e.total_cost for e in recent), ZERO) / len(recent)
        ).quantize(MONEY_PRECISION)
    else:
        monthly_average = ZERO

    return {
        'entry_count': len(window),
        'total_gallons': total_gallons,
        'total_cost': total_cost,
        'average_price_per_gallon': average_price,
        'total_miles_driven': total_miles,
        'average_mpg': average_mpg,
        'cost_per_mile': cost_per_mile,
        'monthly_average': monthly_average,
        'last_fill_up': window[-1] if window else None,
    }
