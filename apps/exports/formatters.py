"""
Export Formatter
================

Serializes trips, expenses and fuel entries to CSV or JSON text, and
renders the plain-text summary report.

CSV Rules:
    - Fixed column order per record type (see the ``*_HEADERS`` constants)
    - Fields containing a comma, quote or newline are quoted, with embedded
      quotes doubled
    - Dates render en-US style (``3/5/2024``), not ISO
    - Money renders with exactly two decimals and no grouping separators

Example:
    Exporting March trips::

        from apps.exports.formatters import DataExporter, ExportFormat, ExportType

        result = DataExporter().export(
            ExportFormat.CSV,
            ExportType.TRIPS,
            {'trips': store.trips.all()},
            start_date='2024-03-01',
            end_date='2024-03-31',
        )
        result.filename  # 'rork_trips_2024-03-01_to_2024-03-31.csv'
"""

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models
from django.utils import timezone

from apps.records.types import ZERO

from .exceptions import InvalidExportError


logger = logging.getLogger(__name__)


TRIP_HEADERS = [
    'Date', 'Route Name', 'Trailer Number', 'Earnings', 'Fuel Cost',
    'Other Expenses', 'Net Profit', 'Notes',
]
EXPENSE_HEADERS = ['Date', 'Category', 'Description', 'Amount', 'Receipt', 'Notes']
FUEL_HEADERS = [
    'Date', 'Truck ID', 'Gallons', 'Price Per Gallon', 'Total Cost', 'Odometer',
    'MPG', 'Location', 'Fill-Up', 'Notes',
]

FILENAME_PREFIX = 'rork'
REPORT_RULE = '=' * 37


class ExportFormat(models.TextChoices):
    CSV = 'csv', 'CSV'
    JSON = 'json', 'JSON'


class ExportType(models.TextChoices):
    TRIPS = 'trips', 'Trips'
    EXPENSES = 'expenses', 'Expenses'
    FUEL = 'fuel', 'Fuel'
    ALL = 'all', 'All'


CONTENT_TYPES = {
    ExportFormat.CSV: 'text/csv',
    ExportFormat.JSON: 'application/json',
}


@dataclass(frozen=True)
class ExportResult:
    content: str
    filename: str
    content_type: str


def format_currency(amount) -> str:
    """Two decimals, no grouping: 1234.5 -> '1234.50'."""
    return f"{Decimal(amount or 0):.2f}"


def format_date(value: str) -> str:
    """``2024-03-05`` -> ``3/5/2024``."""
    day = date.fromisoformat(value)
    return f"{day.month}/{day.day}/{day.year}"


def format_datetime(value: datetime) -> str:
    """en-US date and time, e.g. ``3/5/2024, 2:07:09 PM``."""
    clock = value.strftime('%I:%M:%S %p').lstrip('0')
    return f"{value.month}/{value.day}/{value.year}, {clock}"


def format_number(value) -> str:
    """Plain number without trailing zeros: 120500.0 -> '120500'."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal('1')))
    return str(value.normalize())


def date_range_suffix(start_date: Optional[str], end_date: Optional[str]) -> str:
    if start_date and end_date:
        return f"_{start_date}_to_{end_date}"
    return ''


def filter_records_for_export(
    *,
    trips=(),
    expenses=(),
    fuel_entries=(),
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    truck_id: Optional[str] = None
) -> dict:
    """
    Limit records to an inclusive date range; the truck filter applies to
    fuel entries only.
    """
    def in_range(record):
        if start_date and record.date < start_date:
            return False
        if end_date and record.date > end_date:
            return False
        return True

    fuel = [e for e in fuel_entries if in_range(e)]
    if truck_id:
        fuel = [e for e in fuel if e.truck_id == truck_id]

    return {
        'trips': [t for t in trips if in_range(t)],
        'expenses': [e for e in expenses if in_range(e)],
        'fuel_entries': fuel,
    }


def to_json(data) -> str:
    """Pretty-print records (or dicts/lists of them) as JSON."""
    return json.dumps(_plain(data), indent=2, cls=DjangoJSONEncoder)


def _plain(value):
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class DataExporter:
    """Builds CSV and JSON exports of record lists."""

    def _to_csv(self, headers, rows) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
        writer.writerow(headers)
        writer.writerows(rows)
        return buffer.getvalue().rstrip('\n')

    def trips_to_csv(self, trips) -> str:
        rows = [
            [
                format_date(trip.date),
                trip.route_name,
                trip.trailer_number or '',
                format_currency(trip.earnings),
                format_currency(trip.fuel_cost),
                format_currency(trip.other_expenses),
                format_currency(trip.net_profit),
                trip.notes or '',
            ]
            for trip in trips
        ]
        return self._to_csv(TRIP_HEADERS, rows)

    def expenses_to_csv(self, expenses) -> str:
        rows = [
            [
                format_date(expense.date),
                expense.category,
                expense.description,
                format_currency(expense.amount),
                'Yes' if expense.receipt_image else 'No',
                expense.notes or '',
            ]
            for expense in expenses
        ]
        return self._to_csv(EXPENSE_HEADERS, rows)

    def fuel_to_csv(self, fuel_entries) -> str:
        rows = [
            [
                format_date(entry.date),
                entry.truck_id or '',
                format_currency(entry.gallons),
                format_currency(entry.price_per_gallon),
                format_currency(entry.total_cost),
                format_number(entry.odometer),
                format_currency(entry.mpg) if entry.mpg else '',
                entry.location or '',
                'Yes' if entry.is_fill_up else 'No',
                entry.notes or '',
            ]
            for entry in fuel_entries
        ]
        return self._to_csv(FUEL_HEADERS, rows)

    def export(
        self,
        export_format: str,
        export_type: str,
        data: dict,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ) -> ExportResult:
        """
        Build an export file.

        Args:
            export_format: 'csv' or 'json'
            export_type: 'trips', 'expenses', 'fuel' or 'all'
            data: dict with any of 'trips', 'expenses', 'fuel_entries'
            start_date, end_date: Only used to name the file

        Returns:
            ExportResult with content, filename and content type

        Raises:
            InvalidExportError: Unknown format or type
        """
        if export_format not in ExportFormat.values:
            raise InvalidExportError(f"Invalid export format: '{export_format}'")
        if export_type not in ExportType.values:
            raise InvalidExportError(f"Invalid export type: '{export_type}'")

        suffix = date_range_suffix(start_date, end_date)
        trips = data.get('trips') or []
        expenses = data.get('expenses') or []
        fuel_entries = data.get('fuel_entries') or []

        if export_format == ExportFormat.JSON:
            content = to_json(data)
            filename = f"{FILENAME_PREFIX}_export{suffix}.json"
        elif export_type == ExportType.TRIPS:
            content = self.trips_to_csv(trips)
            filename = f"{FILENAME_PREFIX}_trips{suffix}.csv"
        elif export_type == ExportType.EXPENSES:
            content = self.expenses_to_csv(expenses)
            filename = f"{FILENAME_PREFIX}_expenses{suffix}.csv"
        elif export_type == ExportType.FUEL:
            content = self.fuel_to_csv(fuel_entries)
            filename = f"{FILENAME_PREFIX}_fuel{suffix}.csv"
        else:
            content = ''.join([
                '=== TRIPS ===\n',
                self.trips_to_csv(trips),
                '\n\n=== EXPENSES ===\n',
                self.expenses_to_csv(expenses),
                '\n\n=== FUEL ===\n',
                self.fuel_to_csv(fuel_entries),
            ])
            filename = f"{FILENAME_PREFIX}_complete_export{suffix}.csv"

        logger.info("Exported %s as %s (%s)", export_type, export_format, filename)
        return ExportResult(
            content=content,
            filename=filename,
            content_type=CONTENT_TYPES[export_format],
        )

    def generate_summary_report(
        self,
        trips,
        expenses,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> str:
        """
        Plain-text report of earnings, expenses, trips and ledger expenses
        by category.

        Total expenses include trip fuel/other costs; the category breakdown
        lists ledger expenses only.
        """
        total_earnings = sum((trip.earnings for trip in trips), ZERO)
        total_expenses = (
            sum((expense.amount for expense in expenses), ZERO)
            + sum((trip.trip_costs for trip in trips), ZERO)
        )
        net_profit = total_earnings - total_expenses

        by_category = {}
        for expense in expenses:
            by_category[expense.category] = by_category.get(expense.category, ZERO) + expense.amount
        breakdown = sorted(by_category.items(), key=lambda item: item[1], reverse=True)

        if start_date and end_date:
            period = f"{format_date(start_date)} to {format_date(end_date)}"
        else:
            period = 'All Time'

        if total_earnings > 0:
            margin = f"{net_profit / total_earnings * 100:.1f}"
        else:
            margin = '0'

        if trips:
            average = format_currency(total_earnings / len(trips))
        else:
            average = '0.00'

        lines = [
            'RORK TRUCK BUSINESS SUMMARY REPORT',
            f"Period: {period}",
            f"Generated: {format_datetime(now or timezone.localtime())}",
            '',
            REPORT_RULE,
            'FINANCIAL SUMMARY',
            REPORT_RULE,
            f"Total Earnings:     ${format_currency(total_earnings)}",
            f"Total Expenses:     ${format_currency(total_expenses)}",
            f"Net Profit:         ${format_currency(net_profit)}",
            f"Profit Margin:      {margin}%",
            '',
            REPORT_RULE,
            'TRIP STATISTICS',
            REPORT_RULE,
            f"Total Trips:        {len(trips)}",
            f"Average Per Trip:   ${average}",
            '',
            REPORT_RULE,
            'EXPENSE BREAKDOWN',
            REPORT_RULE,
            '\n'.join(
                f"{category.ljust(20)} ${format_currency(amount)}"
                for category, amount in breakdown
            ),
            '',
            REPORT_RULE,
            'This report is for informational purposes only.',
            'Consult with a tax professional for tax advice.',
        ]
        return '\n'.join(lines).strip()
