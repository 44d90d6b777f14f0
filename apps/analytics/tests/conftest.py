import pytest
from decimal import Decimal
from django.apps import apps as django_apps
from rest_framework.test import APIClient
from apps.records.services import RecordStore
from apps.records.types import Expense, FuelEntry, Route, Trip


CREATED = '2024-01-01T08:00:00+00:00'


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
# Record factories
# =============================================================================

@pytest.fixture
def make_trip():
    """Build trips without a store; ids count up."""
    counter = iter(range(1, 1000))

    def factory(date, earnings, fuel_cost=None, other_expenses=None, **extra):
        extra.setdefault('route_name', 'Dallas - Houston')
        return Trip(
            id=f"trip-{next(counter)}",
            date=date,
            earnings=Decimal(earnings),
            fuel_cost=Decimal(fuel_cost) if fuel_cost is not None else None,
            other_expenses=Decimal(other_expenses) if other_expenses is not None else None,
            created_at=CREATED,
            **extra
        )
    return factory


@pytest.fixture
def make_expense():
    """Build ledger expenses without a store."""
    counter = iter(range(1, 1000))

    def factory(date, amount, category='other', description='Expense', **extra):
        return Expense(
            id=f"expense-{next(counter)}",
            date=date,
            category=category,
            amount=Decimal(amount),
            description=description,
            created_at=CREATED,
            **extra
        )
    return factory


@pytest.fixture
def make_fuel():
    """Build fuel entries without a store."""
    counter = iter(range(1, 1000))

    def factory(date, gallons, odometer, total_cost='0', truck_id='truck-1', **extra):
        return FuelEntry(
            id=f"fuel-{next(counter)}",
            date=date,
            gallons=Decimal(gallons),
            price_per_gallon=Decimal('4.00'),
            total_cost=Decimal(total_cost),
            odometer=Decimal(odometer),
            created_at=CREATED,
            truck_id=truck_id,
            **extra
        )
    return factory


@pytest.fixture
def route():
    return Route(
        id='route-1',
        name='Dallas - Houston',
        payment=Decimal('650.00'),
        created_at=CREATED,
        updated_at=CREATED,
    )


# =============================================================================
# Stored records
# =============================================================================

@pytest.fixture
def march_records(record_store):
    """A trip and a food expense on 2024-03-05, and an April trip."""
    record_store.trips.add(
        route_name='Dallas - Houston',
        date='2024-03-05',
        earnings=Decimal('500.00'),
        fuel_cost=Decimal('100.00'),
        trailer_number='TR-101',
    )
    record_store.expenses.add(
        date='2024-03-05',
        category='food',
        amount=Decimal('30.00'),
        description='Lunch at truck stop',
    )
    record_store.trips.add(
        route_name='Austin - El Paso',
        date='2024-04-10',
        earnings=Decimal('900.00'),
    )
    return record_store
