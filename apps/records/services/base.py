"""Base service owning one in-memory record collection."""

import threading
import uuid
from dataclasses import replace
from typing import Optional

from django.utils import timezone

from ..exceptions import InvalidRecordFieldError
from ..signals import collection_changed


def generate_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return timezone.now().isoformat()


class RecordService:
    """
    Owns one collection of records: the in-memory list is the source of
    truth for reads, and every mutation rewrites the whole collection to
    storage.

    Writes are optimistic. The new list replaces the old one first; if the
    write then fails it is logged by the repository and the in-memory state
    stands until the next successful mutation persists it.

    Mutations hold a per-service lock around the read-modify-write of the
    collection, so concurrent requests in one process do not drop records.
    Separate worker processes each keep their own copy and are not
    coordinated.

    Subclasses set:
        record_type: Record dataclass.
        entity: Event name prefix, e.g. ``trip``.
        tracks_updates: Whether records carry ``updated_at``.
    """

    record_type = None
    entity = ''
    tracks_updates = False

    # Fields a caller may never set or change.
    protected_fields = ('id', 'created_at', 'updated_at')

    def __init__(self, repository):
        self.repository = repository
        self._records = None
        self.last_result = None
        self._lock = threading.Lock()

    @property
    def key(self) -> str:
        return self.repository.key

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> list:
        """(Re)load the collection from storage, replacing memory."""
        self._records = self.repository.load()
        return list(self._records)

    def _ensure_loaded(self):
        if self._records is None:
            self.load()

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> list:
        self._ensure_loaded()
        return list(self._records)

    def get(self, record_id) -> Optional[object]:
        self._ensure_loaded()
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def count(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, **fields):
        """Create a record with a generated id and timestamps."""
        values = self._clean_fields(fields)
        timestamp = now_iso()
        values['id'] = generate_id()
        values['created_at'] = timestamp
        if self.tracks_updates:
            values['updated_at'] = timestamp

        record = self.record_type(**values)

        with self._lock:
            self._ensure_loaded()
            self._commit(self._records + [record], 'added', record)
        return record

    def update(self, record_id, **changes):
        """
        Shallow-merge ``changes`` over the stored record.

        Returns the new record, or None when no record has ``record_id``.
        """
        values = self._clean_fields(changes)
        if self.tracks_updates:
            values['updated_at'] = now_iso()

        with self._lock:
            existing = self.get(record_id)
            if existing is None:
                return None
            updated = replace(existing, **values)
            records = [updated if r.id == record_id else r for r in self._records]
            self._commit(records, 'edited', updated)
        return updated

    def delete(self, record_id) -> bool:
        """Remove a record. Returns False when no record has ``record_id``."""
        with self._lock:
            existing = self.get(record_id)
            if existing is None:
                return False
            records = [r for r in self._records if r.id != record_id]
            self._commit(records, 'deleted', existing)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _clean_fields(self, fields: dict) -> dict:
        allowed = self.record_type.field_names() - set(self.protected_fields)
        unknown = set(fields) - allowed
        if unknown:
            raise InvalidRecordFieldError(
                f"Unknown {self.entity} field(s): {', '.join(sorted(unknown))}"
            )
        return dict(fields)

    def _commit(self, records, action, record):
        self._records = records
        self.last_result = self.repository.save(records)
        collection_changed.send(
            sender=self.__class__,
            key=self.key,
            entity=self.entity,
            action=action,
            record=record,
            persisted=self.last_result.ok,
        )
