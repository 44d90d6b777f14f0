import pytest
from decimal import Decimal
from django.apps import apps as django_apps
from rest_framework.test import APIClient
from apps.records.services import RecordStore
from apps.records.types import Expense, FuelEntry, Trip


CREATED = '2024-03-01T08:00:00+00:00'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def record_store(db):
    """Install a fresh database-backed store on the records app."""
    config = django_apps.get_app_config('records')
    original = config.store
    config.store = RecordStore()
    yield config.store
    config.store = original


# =============================================================================
# Plain records (no store)
# =============================================================================

@pytest.fixture
def trip():
    """A trip whose notes need CSV quoting."""
    return Trip(
        id='t1',
        route_name='Dallas - Houston',
        date='2024-03-05',
        earnings=Decimal('500'),
        created_at=CREATED,
        trailer_number='TR-101',
        fuel_cost=Decimal('100.5'),
        notes='Late, "heavy" load',
    )


@pytest.fixture
def expense():
    return Expense(
        id='e1',
        date='2024-03-06',
        category='food',
        amount=Decimal('30'),
        description='Lunch',
        created_at=CREATED,
        receipt_image='receipt.jpg',
    )


@pytest.fixture
def fuel():
    return FuelEntry(
        id='f1',
        date='2024-03-04',
        gallons=Decimal('100.000'),
        price_per_gallon=Decimal('3.899'),
        total_cost=Decimal('389.90'),
        odometer=Decimal('120500.0'),
        created_at=CREATED,
        truck_id='truck-1',
        location='Waco, TX',
        is_fill_up=False,
    )


# =============================================================================
# Stored records
# =============================================================================

@pytest.fixture
def stored_records(record_store):
    """Two trips, one expense and two fuel entries in the store."""
    record_store.trips.add(
        route_name='Dallas - Houston',
        date='2024-03-05',
        earnings=Decimal('500.00'),
        fuel_cost=Decimal('100.00'),
    )
    record_store.trips.add(
        route_name='Austin - El Paso',
        date='2024-04-10',
        earnings=Decimal('900.00'),
    )
    record_store.expenses.add(
        date='2024-03-06',
        category='tolls',
        amount=Decimal('25.00'),
        description='Turnpike',
    )
    record_store.fuel_entries.add(
        truck_id='truck-1',
        date='2024-03-04',
        gallons=Decimal('50'),
        price_per_gallon=Decimal('4.00'),
        total_cost=Decimal('200.00'),
        odometer=Decimal('1000'),
    )
    record_store.fuel_entries.add(
        truck_id='truck-2',
        date='2024-03-08',
        gallons=Decimal('40'),
        price_per_gallon=Decimal('4.00'),
        total_cost=Decimal('160.00'),
        odometer=Decimal('5000'),
    )
    return record_store
