"""
Key-value persistence for record collections.

Each collection is stored as one JSON array under a fixed key. Reads and
writes always move the whole array; there is no per-record storage.

Failures never raise to the caller. ``CollectionRepository.load`` logs and
returns an empty list, ``CollectionRepository.save`` logs and returns a
``StorageResult`` carrying the error kind.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.db import DatabaseError, models

from .models import StoredCollection


logger = logging.getLogger(__name__)


ROUTES_KEY = 'trucking_routes'
TRIPS_KEY = 'trucking_trips'
EXPENSES_KEY = 'trucking_expenses'
TRUCKS_KEY = 'trucks_data'
FUEL_ENTRIES_KEY = 'fuel_entries'


class StorageErrorKind(models.TextChoices):
    WRITE_FAILED = 'write_failed', 'Write failed'
    NOT_SERIALIZABLE = 'not_serializable', 'Not serializable'


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a storage operation."""

    ok: bool
    error: Optional[str] = None
    detail: str = ''

    @classmethod
    def success(cls):
        return cls(ok=True)

    @classmethod
    def failure(cls, error, detail=''):
        return cls(ok=False, error=error, detail=detail)


class DatabaseStorage:
    """Key-value storage backed by the StoredCollection table."""

    def get_item(self, key):
        """Return the stored value for ``key`` or None if nothing is stored."""
        row = StoredCollection.objects.filter(key=key).only('payload').first()
        return None if row is None else row.payload

    def set_item(self, key, value):
        StoredCollection.objects.update_or_create(
            key=key,
            defaults={'payload': value},
        )


class CollectionRepository:
    """
    Loads and saves one collection of records under a storage key.

    Args:
        key: Storage key, e.g. ``trucking_trips``.
        record_type: Record dataclass used to rebuild stored dicts.
        storage: Object with ``get_item``/``set_item``. Defaults to
            DatabaseStorage.
    """

    def __init__(self, key, record_type, storage=None):
        self.key = key
        self.record_type = record_type
        self.storage = storage if storage is not None else DatabaseStorage()

    def load(self) -> list:
        try:
            payload = self.storage.get_item(self.key)
        except DatabaseError:
            logger.error("Error loading %s", self.key, exc_info=True)
            return []

        if payload is None:
            return []

        if not isinstance(payload, list):
            logger.error(
                "Error loading %s: expected a JSON array, got %s",
                self.key, type(payload).__name__,
            )
            return []

        try:
            return [self.record_type.from_dict(item) for item in payload]
        except (TypeError, ValueError, ArithmeticError, AttributeError):
            logger.error("Error loading %s: corrupt records", self.key, exc_info=True)
            return []

    def save(self, records) -> StorageResult:
        payload = [record.to_dict() for record in records]
        try:
            self.storage.set_item(self.key, payload)
        except DatabaseError as e:
            logger.error("Error saving %s", self.key, exc_info=True)
            return StorageResult.failure(StorageErrorKind.WRITE_FAILED, str(e))
        except (TypeError, ValueError) as e:
            logger.error("Error saving %s: payload not serializable", self.key, exc_info=True)
            return StorageResult.failure(StorageErrorKind.NOT_SERIALIZABLE, str(e))
        return StorageResult.success()
