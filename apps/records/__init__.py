"""
Records App - Local Record Store

This app owns every collection the driver records: routes, trips, expenses,
trucks and fuel entries. Each collection is kept in memory by a dedicated
service object and mirrored to a key-value table as one JSON array per key.

Key Features:
- Route templates with case-insensitive lookup and fuzzy duplicate detection
- Trip log with route-name snapshots and trip-scoped fuel/other costs
- Expense ledger with 11 fixed categories
- Truck registry with active/default truck selection
- Fuel log with optional soft reference to a truck

Architecture:
- Models: StoredCollection (key -> JSON array)
- Storage: DatabaseStorage, CollectionRepository, StorageResult
- Services: RouteService, TripService, ExpenseService, TruckService,
  FuelEntryService, bundled in RecordStore
- Views: RESTful API with ViewSets
- Signals: collection_changed, sent after every mutation
"""

__version__ = '1.0.0'
