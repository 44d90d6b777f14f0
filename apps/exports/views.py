from django.http import HttpResponse
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from apps.records.services import get_record_store
from .backup import backup_filename, backup_stats as get_backup_stats, backup_to_json, create_backup
from .exceptions import ExportServiceError
from .formatters import DataExporter, ExportType, filter_records_for_export
from .serializers import (
    ExportQuerySerializer,
    SummaryReportQuerySerializer,
    BackupStatsSerializer,
)


EXPORT_SECTIONS = {
    ExportType.TRIPS: ('trips',),
    ExportType.EXPENSES: ('expenses',),
    ExportType.FUEL: ('fuel_entries',),
    ExportType.ALL: ('trips', 'expenses', 'fuel_entries'),
}


def attachment(content, filename, content_type):
    response = HttpResponse(content, content_type=f'{content_type}; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@extend_schema(
    parameters=[
        OpenApiParameter('export_format', OpenApiTypes.STR, description="'csv' or 'json'", default='csv'),
        OpenApiParameter('type', OpenApiTypes.STR, description="'trips', 'expenses', 'fuel' or 'all'", default='all'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
        OpenApiParameter('truck', OpenApiTypes.STR, description='Only fuel entries for this truck'),
    ],
    responses={(200, 'text/csv'): OpenApiTypes.STR},
    description="Download trips, expenses and/or fuel entries as CSV or JSON.",
    tags=['exports'],
)
@api_view(['GET'])
def export_data(request):
    """Download an export file - thin HTTP handler."""
    query_serializer = ExportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    store = get_record_store()

    filtered = filter_records_for_export(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        fuel_entries=store.fuel_entries.all(),
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
        truck_id=params.get('truck') or None,
    )
    data = {name: filtered[name] for name in EXPORT_SECTIONS[params['type']]}

    try:
        result = DataExporter().export(
            params['export_format'],
            params['type'],
            data,
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except ExportServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return attachment(result.content, result.filename, result.content_type)


@extend_schema(
    parameters=[
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
    ],
    responses={(200, 'text/plain'): OpenApiTypes.STR},
    description="Plain-text business summary report for a period (or all time).",
    tags=['exports'],
)
@api_view(['GET'])
def summary_report(request):
    """Get the summary report as text - thin HTTP handler."""
    query_serializer = SummaryReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    store = get_record_store()

    filtered = filter_records_for_export(
        trips=store.trips.all(),
        expenses=store.expenses.all(),
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )
    report = DataExporter().generate_summary_report(
        filtered['trips'],
        filtered['expenses'],
        start_date=params.get('start_date'),
        end_date=params.get('end_date'),
    )

    return HttpResponse(report, content_type='text/plain; charset=utf-8')


@extend_schema(
    responses={(200, 'application/json'): OpenApiTypes.OBJECT},
    description="Download a full backup of every collection.",
    tags=['exports'],
)
@api_view(['GET'])
def backup(request):
    """Download a backup snapshot - thin HTTP handler."""
    snapshot = create_backup(get_record_store())
    return attachment(backup_to_json(snapshot), backup_filename(snapshot), 'application/json')


@extend_schema(
    responses={200: BackupStatsSerializer},
    description="Record counts per collection.",
    tags=['exports'],
)
@api_view(['GET'])
def backup_stats(request):
    """Get record counts - thin HTTP handler."""
    stats = get_backup_stats(get_record_store())
    return Response(BackupStatsSerializer(stats).data)
