"""Full backup snapshots of the record store."""

import logging
from typing import Optional

from django.conf import settings
from django.utils import timezone

from .formatters import to_json


logger = logging.getLogger(__name__)


BACKUP_VERSION = '1.0.0'

# Store collection -> key in the backup file's ``data`` object
BACKUP_DATA_KEYS = {
    'routes': 'routes',
    'trips': 'trips',
    'expenses': 'expenses',
    'trucks': 'trucks',
    'fuel_entries': 'fuelEntries',
}


def get_backup_user() -> dict:
    """The owner written into backups, from settings."""
    return {
        'id': settings.BACKUP_USER_ID,
        'name': settings.BACKUP_USER_NAME,
        'email': settings.BACKUP_USER_EMAIL,
    }


def create_backup(store, user: Optional[dict] = None, now=None) -> dict:
    """
    Snapshot every collection of ``store``.

    Returns:
        dict with keys:
            - version: Backup format version
            - timestamp: ISO-8601 creation time
            - user: dict with id, name, email
            - data: routes, trips, expenses, trucks, fuelEntries as
              lists of plain dicts
    """
    now = now or timezone.now()
    backup = {
        'version': BACKUP_VERSION,
        'timestamp': now.isoformat(),
        'user': user or get_backup_user(),
        'data': {
            BACKUP_DATA_KEYS[name]: [record.to_dict() for record in service.all()]
            for name, service in store.services.items()
        },
    }
    logger.info("Backup created with %d records", sum(len(v) for v in backup['data'].values()))
    return backup


def backup_to_json(backup: dict) -> str:
    return to_json(backup)


def backup_filename(backup: dict) -> str:
    """``truckbiz-backup-YYYY-MM-DD.json`` for the backup's creation day."""
    return f"truckbiz-backup-{backup['timestamp'][:10]}.json"


def backup_stats(store) -> dict:
    """Record count per collection plus ``total_records``."""
    stats = {name: service.count() for name, service in store.services.items()}
    stats['total_records'] = sum(stats.values())
    return stats
