import pytest
from decimal import Decimal
from django.apps import apps as django_apps
from django.db import DatabaseError
from rest_framework.test import APIClient
from apps.records.services import RecordStore


class MemoryStorage:
    """Dict-backed key-value storage."""

    def __init__(self, items=None):
        self.items = dict(items or {})
        self.writes = 0

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.writes += 1
        self.items[key] = value


class FailingStorage(MemoryStorage):
    """Storage whose reads and writes raise database errors."""

    def get_item(self, key):
        raise DatabaseError('disk I/O error')

    def set_item(self, key, value):
        raise DatabaseError('disk I/O error')


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Stores
# =============================================================================

@pytest.fixture
def memory_storage():
    """Return an empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def memory_store(memory_storage):
    """Return a record store that never touches the database."""
    return RecordStore(storage=memory_storage)


@pytest.fixture
def failing_store():
    """Return a record store whose storage always fails."""
    return RecordStore(storage=FailingStorage())


@pytest.fixture
def record_store(db):
    """Install a fresh database-backed store on the records app for API tests."""
    config = django_apps.get_app_config('records')
    original = config.store
    config.store = RecordStore()
    yield config.store
    config.store = original


# =============================================================================
# Records
# =============================================================================

@pytest.fixture
def dallas_route(record_store):
    """Create a route template."""
    return record_store.routes.add(
        name='Dallas - Houston',
        payment=Decimal('650.00'),
        distance=Decimal('239.0'),
    )


@pytest.fixture
def march_trip(record_store):
    """Create a trip on 2024-03-05 with fuel cost."""
    return record_store.trips.add(
        route_name='Dallas - Houston',
        date='2024-03-05',
        earnings=Decimal('500.00'),
        fuel_cost=Decimal('100.00'),
        trailer_number='TR-101',
    )


@pytest.fixture
def food_expense(record_store):
    """Create a food expense on 2024-03-05."""
    return record_store.expenses.add(
        date='2024-03-05',
        category='food',
        amount=Decimal('30.00'),
        description='Lunch at truck stop',
    )


@pytest.fixture
def active_truck(record_store):
    """Create an active truck."""
    return record_store.trucks.add(
        name='Big Blue',
        make='Freightliner',
        model='Cascadia',
        year=2020,
        plate_number='TX1234',
    )


@pytest.fixture
def fuel_entry(record_store, active_truck):
    """Create a fuel entry for the active truck."""
    return record_store.fuel_entries.add(
        truck_id=active_truck.id,
        date='2024-03-04',
        gallons=Decimal('100.000'),
        price_per_gallon=Decimal('3.899'),
        total_cost=Decimal('389.90'),
        odometer=Decimal('120500.0'),
    )
