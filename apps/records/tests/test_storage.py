import pytest
from decimal import Decimal
from apps.records.models import StoredCollection
from apps.records.services import RecordStore
from apps.records.storage import (
    CollectionRepository,
    DatabaseStorage,
    StorageErrorKind,
    ROUTES_KEY,
    TRIPS_KEY,
)
from apps.records.types import Route, Trip


@pytest.mark.django_db
class TestDatabaseStorage:
    """Tests for the StoredCollection-backed key-value storage."""

    def test_missing_key_returns_none(self):
        """Nothing stored reads as None."""
        assert DatabaseStorage().get_item(TRIPS_KEY) is None

    def test_set_and_get(self):
        """A stored array is read back unchanged."""
        storage = DatabaseStorage()
        storage.set_item(TRIPS_KEY, [{'id': '1'}])
        storage.set_item(TRIPS_KEY, [{'id': '1'}, {'id': '2'}])

        assert storage.get_item(TRIPS_KEY) == [{'id': '1'}, {'id': '2'}]
        assert StoredCollection.objects.filter(key=TRIPS_KEY).count() == 1


@pytest.mark.django_db
class TestCollectionRepository:
    """Tests for loading and saving whole collections."""

    def test_decimals_survive_round_trip(self):
        """Money is stored as JSON and rebuilt as Decimal."""
        store = RecordStore()
        trip = store.trips.add(
            route_name='Dallas - Houston',
            date='2024-03-05',
            earnings=Decimal('500.10'),
            fuel_cost=Decimal('100.05'),
        )

        reloaded = RecordStore().trips.get(trip.id)

        assert reloaded == trip
        assert reloaded.earnings == Decimal('500.10')

    def test_save_reports_success(self):
        repository = CollectionRepository(ROUTES_KEY, Route)

        result = repository.save([])

        assert result.ok is True
        assert result.error is None

    def test_unserializable_payload_reported(self):
        """A value JSON cannot encode fails the write without raising."""
        repository = CollectionRepository(ROUTES_KEY, Route)
        route = Route(
            id='r1', name='Bad', payment=Decimal('1'),
            created_at='x', updated_at='x', notes=object(),
        )

        result = repository.save([route])

        assert result.ok is False
        assert result.error == StorageErrorKind.NOT_SERIALIZABLE

    def test_non_array_payload_loads_empty(self, caplog):
        """A stored object instead of an array reads as no data and is logged."""
        StoredCollection.objects.create(key=TRIPS_KEY, payload={'id': '1'})

        records = CollectionRepository(TRIPS_KEY, Trip).load()

        assert records == []
        assert 'expected a JSON array' in caplog.text

    def test_corrupt_records_load_empty(self):
        """Records missing required fields read as no data."""
        StoredCollection.objects.create(key=TRIPS_KEY, payload=[{'id': '1'}])

        assert CollectionRepository(TRIPS_KEY, Trip).load() == []

    def test_bad_decimal_loads_empty(self):
        """Non-numeric money reads as no data."""
        StoredCollection.objects.create(key=TRIPS_KEY, payload=[{
            'id': '1', 'route_name': 'A', 'date': '2024-01-01',
            'earnings': 'lots', 'created_at': 'x',
        }])

        assert CollectionRepository(TRIPS_KEY, Trip).load() == []
