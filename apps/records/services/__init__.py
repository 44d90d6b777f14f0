"""
Records services - Business logic layer.

This package contains the record store and its collection services:
- Generic collection CRUD (RecordService)
- Routes, trips and expenses
- Trucks and fuel entries
- Fuzzy route-name matching
"""

from .base import RecordService, generate_id

from .business import (
    RouteService,
    TripService,
    ExpenseService,
)

from .fleet import (
    TruckService,
    FuelEntryService,
)

from .route_matching import (
    normalize_route_name,
    find_similar_routes,
)

from .store import RecordStore


def get_record_store() -> RecordStore:
    """Return the store built by the records app at startup."""
    from django.apps import apps

    return apps.get_app_config('records').store


__all__ = [
    'RecordService',
    'generate_id',
    'RouteService',
    'TripService',
    'ExpenseService',
    'TruckService',
    'FuelEntryService',
    'normalize_route_name',
    'find_similar_routes',
    'RecordStore',
    'get_record_store',
]
