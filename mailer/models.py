from uuid import uuid4
from django.db import models
from django_enumfield import enum


SUBJECT_MAX_LENGTH = 500


class EmailQueue(models.Model):
    """An outbound message waiting for delivery. Rows are written here, never sent inline."""

    class EMAIL_STATUS(enum.Enum):
        PENDING = 1
        SENDING = 2
        SENT = 3
        FAILED = 4

    email_queue_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    to_email = models.EmailField()
    to_name = models.CharField(max_length=200, blank=True)
    subject = models.CharField(max_length=SUBJECT_MAX_LENGTH)
    body = models.TextField()
    attachments = models.JSONField(default=list, blank=True)
    status = enum.EnumField(EMAIL_STATUS, default=EMAIL_STATUS.PENDING)
    tries = models.PositiveIntegerField(default=0)
    last_attempt = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "email_queue"
        indexes = [
            models.Index(fields=["status", "created_at"]),
        ]
