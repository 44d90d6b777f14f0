"""Route, trip and expense services."""

from typing import Optional

from ..types import Expense, Route, Trip
from .base import RecordService
from .route_matching import MEDIUM_SIMILARITY_THRESHOLD, find_similar_routes


class RouteService(RecordService):
    record_type = Route
    entity = 'route'
    tracks_updates = True

    def get_by_name(self, name: str) -> Optional[Route]:
        """First route whose name matches ``name`` ignoring case."""
        wanted = name.lower()
        for route in self.all():
            if route.name.lower() == wanted:
                return route
        return None

    def search(self, term: str = '') -> list:
        """Routes whose name contains ``term`` (case-insensitive)."""
        if not term:
            return self.all()
        term = term.lower()
        return [route for route in self.all() if term in route.name.lower()]

    def find_similar(self, name: str, threshold: int = MEDIUM_SIMILARITY_THRESHOLD):
        return find_similar_routes(name=name, routes=self.all(), threshold=threshold)


class TripService(RecordService):
    """
    Trips keep ``route_name`` as a copied string. Renaming or deleting a
    route never touches existing trips.
    """

    record_type = Trip
    entity = 'trip'

    def by_date_range(self, start_date: str, end_date: str) -> list:
        """Trips dated within [start_date, end_date], newest first."""
        trips = [t for t in self.all() if start_date <= t.date <= end_date]
        return sorted(trips, key=lambda t: t.date, reverse=True)

    def for_route(self, route_name: str) -> list:
        wanted = route_name.lower()
        trips = [t for t in self.all() if t.route_name.lower() == wanted]
        return sorted(trips, key=lambda t: t.date, reverse=True)


class ExpenseService(RecordService):
    record_type = Expense
    entity = 'expense'

    def by_category(self, category: Optional[str] = None) -> list:
        if not category:
            return self.all()
        return [e for e in self.all() if e.category == category]
