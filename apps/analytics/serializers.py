"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DayQuerySerializer - A single day (daily, weekly summaries)
    MonthQuerySerializer - A YYYY-MM period
    YearQuerySerializer - A year
    ReportQuerySerializer - Period type and day for period comparison
    TransactionQuerySerializer - Year and category for the ledger
    HistoryQuerySerializer - Month and search term for activity history
    FuelStatsQuerySerializer - Truck and date range for fuel statistics
    TaxQuerySerializer - Year, miles and deduction method

Response Serializers:
    DailySummarySerializer, WeeklySummarySerializer,
    MonthlySummarySerializer, YearlySummarySerializer - Period summaries
    PeriodReportSerializer - Period vs previous period
    TransactionsResponseSerializer - Transaction ledger
    DashboardResponseSerializer - All-time totals and today
    HistoryResponseSerializer - Days with activity
    FuelStatsSerializer - Fuel statistics
    TaxEstimateSerializer - Tax estimate
"""

from datetime import date
from decimal import Decimal

from rest_framework import serializers

from apps.records.serializers import (
    ExpenseSerializer,
    FuelEntrySerializer,
    TripSerializer,
    money_field,
)
from apps.records.types import ExpenseCategory

from .periods import PeriodType


MONTH_REGEX = r'^\d{4}-(0[1-9]|1[0-2])$'


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DayQuerySerializer(serializers.Serializer):
    """
    Used by: daily_summary, weekly_summary

    Query Parameters:
        date (date): Day to summarize (defaults to today)
    """

    date = serializers.DateField(required=False)

    def validate(self, attrs):
        attrs.setdefault('date', date.today())
        return attrs


class MonthQuerySerializer(serializers.Serializer):
    """
    Validate the month period.

    Used by: monthly_summary

    Query Parameters:
        period (str): Month in YYYY-MM format (defaults to the current month)

    Note:
        The period is split into integer ``year`` and ``month``.
    """

    period = serializers.RegexField(
        regex=MONTH_REGEX,
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )

    def validate(self, attrs):
        period = attrs.get('period')
        if period:
            year, month = period.split('-')
            attrs['year'], attrs['month'] = int(year), int(month)
        else:
            today = date.today()
            attrs['year'], attrs['month'] = today.year, today.month
        return attrs


class YearQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        year (int): Year to summarize (defaults to the current year)
    """

    year = serializers.IntegerField(min_value=1900, max_value=9999, required=False)

    def validate(self, attrs):
        attrs.setdefault('year', date.today().year)
        return attrs


class ReportQuerySerializer(DayQuerySerializer):
    """
    Used by: period_report

    Query Parameters:
        period (str): 'weekly', 'monthly' or 'yearly'
        date (date): Any day inside the period (defaults to today)
    """

    period = serializers.ChoiceField(
        choices=PeriodType.choices,
        default=PeriodType.MONTHLY,
        help_text="Period type: 'weekly', 'monthly' or 'yearly'"
    )


class TransactionQuerySerializer(YearQuerySerializer):
    """
    Used by: transactions

    Query Parameters:
        year (int): Year of the ledger (defaults to the current year)
        category (str): Only expenses in this category; trips are left out
    """

    category = serializers.ChoiceField(
        choices=ExpenseCategory.choices,
        required=False,
        allow_blank=True,
    )


class HistoryQuerySerializer(serializers.Serializer):
    """
    Used by: history

    Query Parameters:
        month (str): Only days in this YYYY-MM month
        search (str): Route name or expense description contains this
    """

    month = serializers.RegexField(regex=MONTH_REGEX, required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)


class FuelStatsQuerySerializer(serializers.Serializer):
    """
    Used by: fuel_stats

    Query Parameters:
        truck (str): Truck id
        start_date (date): Entries on or after this date
        end_date (date): Entries on or before this date
    """

    truck = serializers.CharField(required=False, allow_blank=True)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })
        return attrs


class TaxQuerySerializer(YearQuerySerializer):
    """
    Used by: tax_estimate

    Query Parameters:
        year (int): Tax year (defaults to the current year)
        estimated_miles (decimal): Business miles driven in the year
        use_standard_deduction (bool): Mileage method (true) or actual expenses (false)
    """

    estimated_miles = serializers.DecimalField(
        max_digits=10,
        decimal_places=1,
        min_value=Decimal('0'),
        default=Decimal('0'),
    )
    use_standard_deduction = serializers.BooleanField(default=True)


# =============================================================================
# Response Serializers
# =============================================================================

class SummaryTotalsSerializer(serializers.Serializer):
    total_earnings = money_field()
    total_expenses = money_field()
    net_profit = money_field()


class DailySummarySerializer(SummaryTotalsSerializer):
    """Response serializer for one day."""
    date = serializers.CharField()
    trips = TripSerializer(many=True)
    expenses = ExpenseSerializer(many=True)


class PeriodSummarySerializer(SummaryTotalsSerializer):
    """Fields shared by weekly, monthly and yearly summaries."""
    trip_count = serializers.IntegerField()
    expenses_by_category = serializers.DictField(child=money_field())
    trips = TripSerializer(many=True)
    expenses = ExpenseSerializer(many=True)


class WeeklySummarySerializer(PeriodSummarySerializer):
    start_date = serializers.CharField()
    end_date = serializers.CharField()


class MonthlySummarySerializer(PeriodSummarySerializer):
    year = serializers.IntegerField()
    month = serializers.CharField()
    trailer_numbers = serializers.ListField(child=serializers.CharField())


class YearlySummarySerializer(PeriodSummarySerializer):
    year = serializers.IntegerField()


class CategoryAmountSerializer(serializers.Serializer):
    """Nested serializer for an expense category total."""
    category = serializers.CharField()
    label = serializers.CharField()
    amount = money_field()


class PeriodReportSerializer(serializers.Serializer):
    """Response serializer for a period compared with the one before."""
    period = serializers.CharField()
    date = serializers.DateField()
    label = serializers.CharField()
    previous_label = serializers.CharField()
    current = PeriodSummarySerializer()
    previous = PeriodSummarySerializer()
    earnings_change = serializers.FloatField()
    expenses_change = serializers.FloatField()
    net_profit_change = serializers.FloatField()
    top_categories = CategoryAmountSerializer(many=True)


class TransactionSerializer(serializers.Serializer):
    """Nested serializer for a ledger row."""
    id = serializers.CharField()
    kind = serializers.CharField()
    date = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField(allow_null=True)
    amount = money_field()
    is_earning = serializers.BooleanField()


class TransactionsResponseSerializer(serializers.Serializer):
    """Response serializer for the transaction ledger."""
    year = serializers.IntegerField()
    category = serializers.CharField(allow_null=True)
    count = serializers.IntegerField()
    results = TransactionSerializer(many=True)


class FleetTotalsSerializer(serializers.Serializer):
    """Response serializer for all-time totals."""
    earnings = money_field()
    expenses = money_field()
    net_profit = money_field()
    trip_count = serializers.IntegerField()
    route_count = serializers.IntegerField()


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for the dashboard."""
    totals = FleetTotalsSerializer()
    today = DailySummarySerializer()
    recent_trips = TripSerializer(many=True)


class HistoryDaySerializer(SummaryTotalsSerializer):
    """Nested serializer for one day with activity."""
    date = serializers.CharField()
    trip_count = serializers.IntegerField()
    expense_count = serializers.IntegerField()


class HistoryResponseSerializer(serializers.Serializer):
    """Response serializer for activity history."""
    month = serializers.CharField(allow_null=True)
    search = serializers.CharField(allow_null=True)
    days = HistoryDaySerializer(many=True)


class FuelStatsSerializer(serializers.Serializer):
    """Response serializer for fuel statistics."""
    entry_count = serializers.IntegerField()
    total_gallons = serializers.DecimalField(max_digits=14, decimal_places=3)
    total_cost = money_field(max_digits=14)
    average_price_per_gallon = serializers.DecimalField(max_digits=10, decimal_places=3)
    total_miles_driven = serializers.DecimalField(max_digits=14, decimal_places=1)
    average_mpg = serializers.FloatField()
    cost_per_mile = serializers.DecimalField(max_digits=10, decimal_places=3)
    monthly_average = money_field()
    last_fill_up = FuelEntrySerializer(allow_null=True)


class QuarterlyEstimateSerializer(serializers.Serializer):
    quarter = serializers.CharField()
    amount = money_field()


class TaxEstimateSerializer(serializers.Serializer):
    """Response serializer for a tax estimate."""
    year = serializers.IntegerField()
    available_years = serializers.ListField(child=serializers.IntegerField())
    estimated_miles = serializers.DecimalField(max_digits=10, decimal_places=1)
    mileage_rate = serializers.DecimalField(max_digits=6, decimal_places=3)
    use_standard_deduction = serializers.BooleanField()
    total_income = money_field(max_digits=14)
    total_expenses = money_field(max_digits=14)
    standard_mileage_deduction = money_field(max_digits=14)
    deductible_expenses = money_field(max_digits=14)
    net_income = money_field(max_digits=14)
    estimated_tax = money_field(max_digits=14)
    quarterly_estimate = money_field(max_digits=14)
    quarterly_estimates = QuarterlyEstimateSerializer(many=True)
    effective_rate = serializers.FloatField()
    expenses_by_category = CategoryAmountSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
