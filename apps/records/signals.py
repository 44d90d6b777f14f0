"""
Change notifications for record collections.

``collection_changed`` is sent by every service after a mutation, once the
in-memory collection has been updated and the write attempted.

Arguments sent with the signal:
    key: Storage key of the collection.
    entity: Entity name, e.g. ``trip`` or ``fuel_entry``.
    action: One of ``added``, ``edited``, ``deleted``.
    record: The added/updated record, or the deleted one.
    persisted: Whether the write reached storage.
"""

import logging

from django.dispatch import Signal, receiver


logger = logging.getLogger(__name__)


collection_changed = Signal()


@receiver(collection_changed)
def log_activity_event(sender, entity, action, record, persisted=True, **kwargs):
    """Log an activity event such as ``trip_added`` or ``truck_deleted``."""
    event = f"{entity}_{action}"
    if persisted:
        logger.info("[Activity] %s id=%s", event, record.id)
    else:
        logger.warning("[Activity] %s id=%s (not persisted)", event, record.id)
