"""The record store: one service per collection, built once and injected."""

from ..storage import (
    EXPENSES_KEY,
    FUEL_ENTRIES_KEY,
    ROUTES_KEY,
    TRIPS_KEY,
    TRUCKS_KEY,
    CollectionRepository,
    DatabaseStorage,
)
from ..types import Expense, FuelEntry, Route, Trip, Truck
from .business import ExpenseService, RouteService, TripService
from .fleet import FuelEntryService, TruckService


class RecordStore:
    """
    Holds the five collection services.

    All services share one storage backend. Collections are loaded lazily
    on first access.

    Example:
        Recording a trip and reading it back::

            store = RecordStore()
            trip = store.trips.add(
                route_name='Dallas - Houston',
                date='2024-03-05',
                earnings=Decimal('500.00'),
                fuel_cost=Decimal('100.00'),
            )
            assert store.trips.get(trip.id) == trip
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else DatabaseStorage()
        self.routes = RouteService(CollectionRepository(ROUTES_KEY, Route, self.storage))
        self.trips = TripService(CollectionRepository(TRIPS_KEY, Trip, self.storage))
        self.expenses = ExpenseService(CollectionRepository(EXPENSES_KEY, Expense, self.storage))
        self.trucks = TruckService(CollectionRepository(TRUCKS_KEY, Truck, self.storage))
        self.fuel_entries = FuelEntryService(
            CollectionRepository(FUEL_ENTRIES_KEY, FuelEntry, self.storage)
        )

    @property
    def services(self) -> dict:
        return {
            'routes': self.routes,
            'trips': self.trips,
            'expenses': self.expenses,
            'trucks': self.trucks,
            'fuel_entries': self.fuel_entries,
        }
