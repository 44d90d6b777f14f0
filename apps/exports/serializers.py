"""
Serializers for exports app.

Input Serializers:
    ExportQuerySerializer - Format, type, date range and truck
    SummaryReportQuerySerializer - Date range for the text report

Response Serializers:
    BackupStatsSerializer - Record counts per collection
"""

from rest_framework import serializers

from .formatters import ExportFormat, ExportType


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Check the range and convert dates to YYYY-MM-DD strings."""
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })
        for name in ('start_date', 'end_date'):
            if attrs.get(name):
                attrs[name] = attrs[name].isoformat()
        return attrs


class ExportQuerySerializer(DateRangeQuerySerializer):
    """
    Used by: export_data

    Query Parameters:
        export_format (str): 'csv' or 'json'
        type (str): 'trips', 'expenses', 'fuel' or 'all'
        start_date (date): Records on or after this date
        end_date (date): Records on or before this date
        truck (str): Only fuel entries for this truck
    """

    export_format = serializers.ChoiceField(
        choices=ExportFormat.choices,
        default=ExportFormat.CSV,
    )
    type = serializers.ChoiceField(choices=ExportType.choices, default=ExportType.ALL)
    truck = serializers.CharField(required=False, allow_blank=True)


class SummaryReportQuerySerializer(DateRangeQuerySerializer):
    """
    Used by: summary_report

    Query Parameters:
        start_date (date): Start of the report period
        end_date (date): End of the report period
    """


# =============================================================================
# Response Serializers
# =============================================================================

class BackupStatsSerializer(serializers.Serializer):
    """Response serializer for backup statistics."""
    routes = serializers.IntegerField()
    trips = serializers.IntegerField()
    expenses = serializers.IntegerField()
    trucks = serializers.IntegerField()
    fuel_entries = serializers.IntegerField()
    total_records = serializers.IntegerField()
