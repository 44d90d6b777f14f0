from django.apps import AppConfig


class RecordsConfig(AppConfig):
    """
    App config for the record store.

    The RecordStore is built once here and shared by every view. It does not
    touch the database until a collection is first read, so building it during
    startup (or during ``migrate``) is safe.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.records'
    label = 'records'
    verbose_name = 'Records'

    store = None

    def ready(self):
        from .services import RecordStore
        from . import signals  # noqa: F401 - connects receivers

        self.store = RecordStore()
