import csv
import io
import json
import pytest
from django.urls import reverse
from apps.exports.formatters import FUEL_HEADERS, TRIP_HEADERS


@pytest.mark.django_db
class TestExportEndpoint:
    def test_default_is_complete_csv(self, api_client, stored_records):
        """Without parameters every record type is exported as CSV."""
        url = reverse('exports:export')

        response = api_client.get(url)

        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/csv')
        assert response['Content-Disposition'] == 'attachment; filename="rork_complete_export.csv"'
        assert response.content.decode().startswith('=== TRIPS ===')

    def test_trips_in_range(self, api_client, stored_records):
        """Only trips inside the range are exported."""
        url = reverse('exports:export')

        response = api_client.get(url, {
            'type': 'trips',
            'start_date': '2024-03-01',
            'end_date': '2024-03-31',
        })

        rows = list(csv.reader(io.StringIO(response.content.decode())))
        assert response.status_code == 200
        assert 'rork_trips_2024-03-01_to_2024-03-31.csv' in response['Content-Disposition']
        assert rows[0] == TRIP_HEADERS
        assert len(rows) == 2
        assert rows[1][1] == 'Dallas - Houston'

    def test_fuel_for_truck(self, api_client, stored_records):
        """The truck filter narrows the fuel export."""
        url = reverse('exports:export')

        response = api_client.get(url, {'type': 'fuel', 'truck': 'truck-2'})

        rows = list(csv.reader(io.StringIO(response.content.decode())))
        assert rows[0] == FUEL_HEADERS
        assert [row[1] for row in rows[1:]] == ['truck-2']

    def test_json_export(self, api_client, stored_records):
        """JSON exports carry the requested collections."""
        url = reverse('exports:export')

        response = api_client.get(url, {'export_format': 'json', 'type': 'expenses'})

        payload = json.loads(response.content)
        assert response['Content-Type'].startswith('application/json')
        assert list(payload) == ['expenses']
        assert payload['expenses'][0]['category'] == 'tolls'

    def test_invalid_type(self, api_client, record_store):
        """Unknown types fail validation."""
        url = reverse('exports:export')

        response = api_client.get(url, {'type': 'routes'})

        assert response.status_code == 400
        assert 'type' in response.data

    def test_reversed_range(self, api_client, record_store):
        """A start date after the end date is rejected."""
        url = reverse('exports:export')

        response = api_client.get(url, {'start_date': '2024-04-01', 'end_date': '2024-03-01'})

        assert response.status_code == 400
        assert 'start_date' in response.data


@pytest.mark.django_db
class TestSummaryReportEndpoint:
    def test_report_for_period(self, api_client, stored_records):
        """The report covers only the requested period."""
        url = reverse('exports:summary-report')

        response = api_client.get(url, {'start_date': '2024-03-01', 'end_date': '2024-03-31'})

        text = response.content.decode()
        assert response.status_code == 200
        assert response['Content-Type'].startswith('text/plain')
        assert 'Period: 3/1/2024 to 3/31/2024' in text
        assert 'Total Earnings:     $500.00' in text
        assert 'Total Expenses:     $125.00' in text


@pytest.mark.django_db
class TestBackupEndpoints:
    def test_backup_download(self, api_client, stored_records):
        """The backup downloads as a JSON attachment."""
        url = reverse('exports:backup')

        response = api_client.get(url)

        payload = json.loads(response.content)
        assert response.status_code == 200
        assert 'truckbiz-backup-' in response['Content-Disposition']
        assert len(payload['data']['trips']) == 2
        assert len(payload['data']['fuelEntries']) == 2
        assert 'fuel_entries' not in payload['data']

    def test_backup_stats(self, api_client, stored_records):
        """Stats report counts per collection."""
        url = reverse('exports:backup-stats')

        response = api_client.get(url)

        assert response.status_code == 200
        assert response.data['total_records'] == 5
        assert response.data['fuel_entries'] == 2
