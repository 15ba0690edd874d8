from uuid import uuid4
from django.db import models

DEFAULT_CAPACITY = 1196


class Events(models.Model):
    events_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    event_name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    poster_url = models.URLField(max_length=500, null=True, blank=True)
    starts_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)
    capacity = models.PositiveIntegerField(default=DEFAULT_CAPACITY)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "events"
        indexes = [
            models.Index(fields=["starts_at"]),
        ]

    def __str__(self):
        return self.event_name
