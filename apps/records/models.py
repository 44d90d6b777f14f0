from django.core.serializers.json import DjangoJSONEncoder
from django.db import models


class StoredCollection(models.Model):
    """One persisted collection: the full JSON array stored under a key."""

    key = models.CharField(max_length=64, unique=True)
    payload = models.JSONField(encoder=DjangoJSONEncoder, default=list)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stored_collections'
        ordering = ['key']

    def __str__(self):
        size = len(self.payload) if isinstance(self.payload, list) else 0
        return f"{self.key} ({size} records)"
