from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from datetime import date
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.records.services import get_record_store
from .fuel_statistics import get_fuel_stats
from .periods import compare_with_previous
from .summaries import (
    get_activity_dates,
    get_daily_summary,
    get_fleet_totals,
    get_monthly_summary,
    get_top_categories,
    get_transactions,
    get_weekly_summary,
    get_yearly_summary,
)
from .tax_estimator import available_tax_years, estimate_taxes
from .serializers import (
    # Input serializers
    DayQuerySerializer,
    MonthQuerySerializer,
    YearQuerySerializer,
    ReportQuerySerializer,
    TransactionQuerySerializer,
    HistoryQuerySerializer,
    FuelStatsQuerySerializer,
    TaxQuerySerializer,
    # Response serializers
    DailySummarySerializer,
    WeeklySummarySerializer,
    MonthlySummarySerializer,
    YearlySummarySerializer,
    PeriodReportSerializer,
    TransactionsResponseSerializer,
    DashboardResponseSerializer,
    HistoryResponseSerializer,
    FuelStatsSerializer,
    TaxEstimateSerializer,
    ErrorSerializer,
)
from .exceptions import AnalyticsServiceError


RECENT_TRIPS_LIMIT = 3


def _validated(serializer_class, request):
    query_serializer = serializer_class(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    return query_serializer.validated_data


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, description='Day (YYYY-MM-DD), defaults to today'),
    ],
    responses={200: DailySummarySerializer},
    description="Earnings, expenses and net profit for one day.",
    tags=['analytics'],
)
@api_view(['GET'])
def daily_summary(request):
    """Get one day's summary - thin HTTP handler."""
    params = _validated(DayQuerySerializer, request)
    store = get_record_store()

    data = get_daily_summary(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        day=params['date'].isoformat(),
    )

    return Response(DailySummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, description='Any day in the week, defaults to today'),
    ],
    responses={200: WeeklySummarySerializer},
    description="Summary of the Sunday-to-Saturday week containing the date.",
    tags=['analytics'],
)
@api_view(['GET'])
def weekly_summary(request):
    """Get one week's summary - thin HTTP handler."""
    params = _validated(DayQuerySerializer, request)
    store = get_record_store()

    data = get_weekly_summary(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        day=params['date'],
    )

    return Response(WeeklySummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to this month'),
    ],
    responses={
        200: MonthlySummarySerializer,
        400: ErrorSerializer,
    },
    description="Summary of one month with category breakdown and trailers used.",
    tags=['analytics'],
)
@api_view(['GET'])
def monthly_summary(request):
    """Get one month's summary - thin HTTP handler."""
    params = _validated(MonthQuerySerializer, request)
    store = get_record_store()

    data = get_monthly_summary(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        year=params['year'],
        month=params['month'],
    )

    return Response(MonthlySummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Year, defaults to this year'),
    ],
    responses={200: YearlySummarySerializer},
    description="Summary of one year with category breakdown.",
    tags=['analytics'],
)
@api_view(['GET'])
def yearly_summary(request):
    """Get one year's summary - thin HTTP handler."""
    params = _validated(YearQuerySerializer, request)
    store = get_record_store()

    data = get_yearly_summary(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        year=params['year'],
    )

    return Response(YearlySummarySerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description="'weekly', 'monthly' or 'yearly'", default='monthly'),
        OpenApiParameter('date', OpenApiTypes.DATE, description='Any day in the period, defaults to today'),
    ],
    responses={
        200: PeriodReportSerializer,
        400: ErrorSerializer,
    },
    description="Compare a period with the one before it and list the top expense categories.",
    tags=['analytics'],
)
@api_view(['GET'])
def period_report(request):
    """Get a period-over-period report - thin HTTP handler."""
    params = _validated(ReportQuerySerializer, request)
    store = get_record_store()

    try:
        data = compare_with_previous(
            trips=store.trips.all(),
            expenses=store.expenses.all(),
            day=params['date'],
            period=params['period'],
        )
    except AnalyticsServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    data['date'] = params['date']
    data['top_categories'] = get_top_categories(data['current']['expenses_by_category'])

    return Response(PeriodReportSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Year, defaults to this year'),
        OpenApiParameter('category', OpenApiTypes.STR, description='Only expenses in this category'),
    ],
    responses={200: TransactionsResponseSerializer},
    description="Transaction ledger for a year, newest first.",
    tags=['analytics'],
)
@api_view(['GET'])
def transactions(request):
    """Get the transaction ledger - thin HTTP handler."""
    params = _validated(TransactionQuerySerializer, request)
    store = get_record_store()

    year_summary = get_yearly_summary(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        year=params['year'],
    )
    category = params.get('category') or None
    rows = get_transactions(
        trips=year_summary['trips'],
        expenses=year_summary['expenses'],
        category=category,
    )

    return Response(TransactionsResponseSerializer({
        'year': params['year'],
        'category': category,
        'count': len(rows),
        'results': rows,
    }).data)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="All-time totals, today's summary and the latest trips.",
    tags=['analytics'],
)
@api_view(['GET'])
def dashboard(request):
    """Get dashboard data - thin HTTP handler."""
    store = get_record_store()
    trips = store.trips.all()
    expenses = store.expenses.all()

    recent_trips = sorted(trips, key=lambda trip: trip.date, reverse=True)[:RECENT_TRIPS_LIMIT]

    return Response(DashboardResponseSerializer({
        'totals': get_fleet_totals(trips=trips, expenses=expenses, routes=store.routes.all()),
        'today': get_daily_summary(
            trips=trips, expenses=expenses, day=date.today().isoformat()
        ),
        'recent_trips': recent_trips,
    }).data)


@extend_schema(
    parameters=[
        OpenApiParameter('month', OpenApiTypes.STR, description='Month (YYYY-MM)'),
        OpenApiParameter('search', OpenApiTypes.STR, description='Route name or expense description'),
    ],
    responses={200: HistoryResponseSerializer},
    description="Days with any activity, newest first, with each day's totals.",
    tags=['analytics'],
)
@api_view(['GET'])
def history(request):
    """Get activity history - thin HTTP handler."""
    params = _validated(HistoryQuerySerializer, request)
    store = get_record_store()
    trips = store.trips.all()
    expenses = store.expenses.all()

    month = params.get('month') or None
    search = params.get('search') or None
    days = []
    for day in get_activity_dates(trips=trips, expenses=expenses, month=month, search=search):
        summary = get_daily_summary(trips=trips, expenses=expenses, day=day)
        summary['trip_count'] = len(summary['trips'])
        summary['expense_count'] = len(summary['expenses'])
        days.append(summary)

    return Response(HistoryResponseSerializer({
        'month': month,
        'search': search,
        'days': days,
    }).data)


@extend_schema(
    parameters=[
        OpenApiParameter('truck', OpenApiTypes.STR, description='Truck id'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={
        200: FuelStatsSerializer,
        400: ErrorSerializer,
    },
    description="Fuel totals, MPG and cost per mile for a truck and date range.",
    tags=['analytics'],
)
@api_view(['GET'])
def fuel_stats(request):
    """Get fuel statistics - thin HTTP handler."""
    params = _validated(FuelStatsQuerySerializer, request)
    store = get_record_store()

    start_date = params.get('start_date')
    end_date = params.get('end_date')
    data = get_fuel_stats(
        store.fuel_entries.all(),
        truck_id=params.get('truck') or None,
        start_date=start_date.isoformat() if start_date else None,
        end_date=end_date.isoformat() if end_date else None,
    )

    return Response(FuelStatsSerializer(data).data)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Tax year, defaults to this year'),
        OpenApiParameter('estimated_miles', OpenApiTypes.NUMBER, description='Business miles driven', default=0),
        OpenApiParameter('use_standard_deduction', OpenApiTypes.BOOL, description='Mileage method instead of actual expenses', default=True),
    ],
    responses={200: TaxEstimateSerializer},
    description="Estimated income tax and quarterly payments for a year.",
    tags=['analytics'],
)
@api_view(['GET'])
def tax_estimate(request):
    """Get a tax estimate - thin HTTP handler."""
    params = _validated(TaxQuerySerializer, request)
    store = get_record_store()

    data = estimate_taxes(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        year=params['year'],
        estimated_miles=params['estimated_miles'],
        use_standard_deduction=params['use_standard_deduction'],
    )
    data['available_years'] = available_tax_years()

    return Response(TaxEstimateSerializer(data).data)
