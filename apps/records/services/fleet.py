"""Truck and fuel entry services."""

from typing import Optional

from ..types import FuelEntry, Truck
from .base import RecordService


class TruckService(RecordService):
    """
    Deleting a truck does not touch fuel entries that reference it; those
    keep the dangling ``truck_id``.
    """

    record_type = Truck
    entity = 'truck'
    tracks_updates = True

    def active(self) -> list:
        return [truck for truck in self.all() if truck.is_active]

    def default(self) -> Optional[Truck]:
        """The truck selected when none is chosen: first active, else first."""
        trucks = self.all()
        for truck in trucks:
            if truck.is_active:
                return truck
        return trucks[0] if trucks else None


class FuelEntryService(RecordService):
    record_type = FuelEntry
    entity = 'fuel_entry'

    def by_truck(self, truck_id: str) -> list:
        return [entry for entry in self.all() if entry.truck_id == truck_id]
