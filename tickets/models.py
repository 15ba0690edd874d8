import json
from uuid import uuid4
from django.db import models
from django_enumfield import enum
from events.models import Events
from inventory.models import Seat


class Ticket(models.Model):

    class TICKET_STATUS(enum.Enum):
        ACTIVE = 1
        USED = 2
        CANCELLED = 3

    ticket_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    ticket_code = models.CharField(max_length=40, unique=True)
    event_id = models.ForeignKey(Events, on_delete=models.CASCADE, related_name="tickets")
    seat_id = models.ForeignKey(Seat, on_delete=models.SET_NULL, null=True, blank=True, related_name="tickets")
    user_email = models.EmailField()
    user_name = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    status = enum.EnumField(TICKET_STATUS, default=TICKET_STATUS.ACTIVE)
    # set exactly when status becomes USED
    used_at = models.DateTimeField(null=True, blank=True)
    # exact token text encoded in the QR code; key order is part of the signature
    qr_payload = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "ticket"
        indexes = [
            models.Index(fields=["event_id", "status"]),
            models.Index(fields=["status", "used_at"]),
        ]

    def __str__(self):
        return self.ticket_code

    def signed_token(self):
        return json.loads(self.qr_payload) if self.qr_payload else None
