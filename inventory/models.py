from uuid import uuid4
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django_enumfield import enum
from events.models import Events


class SeatQuerySet(models.QuerySet):

    def claimable(self, now=None):
        """
        Seats an allocation may take: available ones, plus reserved ones whose
        hold has expired. Holds are never swept, they lapse on read.
        """
        now = now or timezone.now()
        return self.filter(
            Q(status=Seat.SEAT_STATUS.AVAILABLE)
            | Q(status=Seat.SEAT_STATUS.RESERVED, reserved_until__lte=now)
        )


class Seat(models.Model):

    class SEAT_STATUS(enum.Enum):
        AVAILABLE = 1
        RESERVED = 2
        SOLD = 3
        BLOCKED = 4

    seat_id = models.UUIDField(primary_key=True, default=uuid4, editable=False)
    event_id = models.ForeignKey(Events, on_delete=models.CASCADE, related_name="seats")
    section = models.CharField(max_length=50, blank=True)
    row_label = models.CharField(max_length=20)
    seat_number = models.PositiveIntegerField(null=True, blank=True)
    row_idx = models.PositiveIntegerField()
    col_idx = models.PositiveIntegerField()
    status = enum.EnumField(SEAT_STATUS, default=SEAT_STATUS.AVAILABLE)
    reserved_token = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    reserved_until = models.DateTimeField(null=True, blank=True)

    objects = SeatQuerySet.as_manager()

    class Meta:
        db_table = "seat"
        unique_together = ("event_id", "section", "row_label", "seat_number")
        indexes = [
            models.Index(fields=["event_id", "row_idx", "col_idx"]),
            models.Index(fields=["event_id", "status"]),
        ]

    def __str__(self):
        return self.label()

    def hold_expired(self, now=None):
        if self.status != Seat.SEAT_STATUS.RESERVED or self.reserved_until is None:
            return False
        return self.reserved_until <= (now or timezone.now())

    def is_claimable(self, now=None):
        return self.status == Seat.SEAT_STATUS.AVAILABLE or self.hold_expired(now)

    def effective_status(self, now=None):
        """Stored status, with a lapsed hold reported as available"""
        if self.hold_expired(now):
            return Seat.SEAT_STATUS.AVAILABLE
        return self.status

    def label(self, separator=" "):
        parts = []
        if self.section:
            parts.append(f"Section {self.section}")
        if self.row_label:
            parts.append(f"Row {self.row_label}")
        if self.seat_number is not None:
            parts.append(f"Seat {self.seat_number}")
        return separator.join(parts)
