import csv
import io
import json
import pytest
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from apps.exports.exceptions import InvalidExportError
from apps.exports.formatters import (
    EXPENSE_HEADERS,
    FUEL_HEADERS,
    TRIP_HEADERS,
    DataExporter,
    ExportFormat,
    ExportType,
    filter_records_for_export,
    format_currency,
    format_date,
    format_datetime,
    format_number,
)


def parse_csv(content):
    return list(csv.reader(io.StringIO(content)))


class TestFieldFormatting:
    def test_currency_has_two_decimals(self):
        """Money always renders with two decimals and no separators."""
        assert format_currency(Decimal('1234.5')) == '1234.50'
        assert format_currency(None) == '0.00'

    def test_date_is_us_style(self):
        """ISO dates render as M/D/YYYY without padding."""
        assert format_date('2024-03-05') == '3/5/2024'
        assert format_date('2024-12-25') == '12/25/2024'

    def test_datetime_is_us_style(self):
        """Timestamps render with a 12-hour clock."""
        assert format_datetime(datetime(2024, 3, 5, 14, 7, 9)) == '3/5/2024, 2:07:09 PM'

    def test_number_drops_trailing_zeros(self):
        """Integral odometer readings print without decimals."""
        assert format_number(Decimal('120500.0')) == '120500'
        assert format_number(Decimal('12.50')) == '12.5'


class TestCsvExport:
    def test_trips_csv_round_trips_through_csv_reader(self, trip):
        """Quoted notes survive parsing with a standard CSV reader."""
        content = DataExporter().trips_to_csv([trip])

        rows = parse_csv(content)

        assert rows[0] == TRIP_HEADERS
        assert rows[1] == [
            '3/5/2024', 'Dallas - Houston', 'TR-101', '500.00', '100.50',
            '0.00', '399.50', 'Late, "heavy" load',
        ]

    def test_embedded_quotes_are_doubled(self, trip):
        """Fields with quotes are wrapped and their quotes doubled."""
        content = DataExporter().trips_to_csv([trip])

        assert '"Late, ""heavy"" load"' in content

    def test_no_trailing_newline(self, trip):
        """Rows are joined by newlines with none at the end."""
        content = DataExporter().trips_to_csv([trip])

        assert not content.endswith('\n')
        assert content.count('\n') == 1

    def test_expenses_csv(self, expense):
        """Receipt column reads Yes when an image is attached."""
        rows = parse_csv(DataExporter().expenses_to_csv([expense]))

        assert rows[0] == EXPENSE_HEADERS
        assert rows[1] == ['3/6/2024', 'food', 'Lunch', '30.00', 'Yes', '']

    def test_fuel_csv(self, fuel):
        """Fuel rows print odometer plainly and leave missing MPG blank."""
        rows = parse_csv(DataExporter().fuel_to_csv([fuel]))

        assert rows[0] == FUEL_HEADERS
        assert rows[1] == [
            '3/4/2024', 'truck-1', '100.00', '3.90', '389.90', '120500',
            '', 'Waco, TX', 'No', '',
        ]

    def test_empty_list_is_header_only(self):
        """An empty export still has its header row."""
        assert DataExporter().expenses_to_csv([]) == ','.join(EXPENSE_HEADERS)


class TestExport:
    def test_trips_filename_with_range(self, trip):
        """A full date range is appended to the filename."""
        result = DataExporter().export(
            ExportFormat.CSV,
            ExportType.TRIPS,
            {'trips': [trip]},
            start_date='2024-03-01',
            end_date='2024-03-31',
        )

        assert result.filename == 'rork_trips_2024-03-01_to_2024-03-31.csv'
        assert result.content_type == 'text/csv'

    def test_half_range_is_not_in_filename(self, expense):
        """A range with only one end leaves the filename plain."""
        result = DataExporter().export(
            ExportFormat.CSV,
            ExportType.EXPENSES,
            {'expenses': [expense]},
            start_date='2024-03-01',
        )

        assert result.filename == 'rork_expenses.csv'

    def test_all_sections(self, trip, expense, fuel):
        """The complete export has one titled section per record type."""
        result = DataExporter().export(
            ExportFormat.CSV,
            ExportType.ALL,
            {'trips': [trip], 'expenses': [expense], 'fuel_entries': [fuel]},
        )

        assert result.filename == 'rork_complete_export.csv'
        assert result.content.startswith('=== TRIPS ===\n')
        assert '\n\n=== EXPENSES ===\n' in result.content
        assert '\n\n=== FUEL ===\n' in result.content

    def test_json_export(self, trip):
        """JSON exports keep the record fields with decimals as strings."""
        result = DataExporter().export(ExportFormat.JSON, ExportType.TRIPS, {'trips': [trip]})

        payload = json.loads(result.content)
        assert result.filename == 'rork_export.json'
        assert result.content_type == 'application/json'
        assert payload['trips'][0]['route_name'] == 'Dallas - Houston'
        assert payload['trips'][0]['earnings'] == '500'

    def test_unknown_format_raises(self, trip):
        """Unknown formats are rejected."""
        with pytest.raises(InvalidExportError, match='Invalid export format'):
            DataExporter().export('xml', ExportType.TRIPS, {'trips': [trip]})

    def test_unknown_type_raises(self):
        """Unknown record types are rejected."""
        with pytest.raises(InvalidExportError, match='Invalid export type'):
            DataExporter().export(ExportFormat.CSV, 'routes', {})


class TestFilterRecordsForExport:
    def test_date_range_is_inclusive(self, trip, expense, fuel):
        """Records on either boundary date are kept."""
        result = filter_records_for_export(
            trips=[trip],
            expenses=[expense],
            fuel_entries=[fuel],
            start_date='2024-03-05',
            end_date='2024-03-06',
        )

        assert result['trips'] == [trip]
        assert result['expenses'] == [expense]
        assert result['fuel_entries'] == []

    def test_truck_filter_applies_to_fuel_only(self, trip, fuel):
        """Filtering by truck leaves trips alone."""
        result = filter_records_for_export(
            trips=[trip], fuel_entries=[fuel], truck_id='truck-2'
        )

        assert result['trips'] == [trip]
        assert result['fuel_entries'] == []


class TestSummaryReport:
    def test_report_totals(self, trip, expense):
        """Trip costs count toward total expenses; categories list ledger expenses."""
        report = DataExporter().generate_summary_report(
            [trip],
            [expense],
            start_date='2024-03-01',
            end_date='2024-03-31',
            now=datetime(2024, 4, 1, 9, 30),
        )

        lines = report.split('\n')
        assert lines[0] == 'RORK TRUCK BUSINESS SUMMARY REPORT'
        assert lines[1] == 'Period: 3/1/2024 to 3/31/2024'
        assert lines[2] == 'Generated: 4/1/2024, 9:30:00 AM'
        assert 'Total Earnings:     $500.00' in lines
        assert 'Total Expenses:     $130.50' in lines
        assert 'Net Profit:         $369.50' in lines
        assert 'Profit Margin:      73.9%' in lines
        assert 'Total Trips:        1' in lines
        assert 'Average Per Trip:   $500.00' in lines
        assert f"{'food'.ljust(20)} $30.00" in lines
        assert lines[-1] == 'Consult with a tax professional for tax advice.'

    def test_empty_report(self):
        """No records means all-time zero totals without dividing by zero."""
        report = DataExporter().generate_summary_report([], [], now=datetime(2024, 4, 1, 9, 30))

        assert 'Period: All Time' in report
        assert 'Profit Margin:      0%' in report
        assert 'Average Per Trip:   $0.00' in report


def test_comma_in_notes_survives_csv(trip):
    """A note with a comma is quoted and reads back unchanged."""
    content = DataExporter().trips_to_csv([replace(trip, notes='stop, then go')])

    assert content.split('\n')[1].endswith(',"stop, then go"')
    assert parse_csv(content)[1][-1] == 'stop, then go'
