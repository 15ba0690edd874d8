"""
Auto-assign allocator.

Finds the first row (in row_idx order) holding a run of ``quantity``
consecutive claimable seats and reserves it under a fresh hold token. The
reservation is a single conditional UPDATE restricted to seats that are still
claimable; when fewer rows than requested are touched another allocator won
the race and the whole transaction is rolled back.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from SeatDesk.cache_utils import invalidate_seat_map_cache
from SeatDesk.exceptions import (
    EventNotFoundError,
    NoContiguousBlockError,
    SeatsTakenError,
    ValidationFailed,
)
from events.models import Events
from inventory.models import Seat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reservation:
    seat_ids: list
    token: str
    reserved_until: datetime


def find_contiguous_block(seats, quantity, now=None):
    """
    First-fit search over ``seats`` (already ordered by row_idx, col_idx).

    Seats are grouped by row label keeping their stored order; within a row the
    first run of ``quantity`` consecutive claimable seats wins. Returns the list
    of seats or None.
    """
    rows = {}
    for seat in seats:
        rows.setdefault(seat.row_label, []).append(seat)

    for row_seats in rows.values():
        run = []
        for seat in row_seats:
            if seat.is_claimable(now):
                run.append(seat)
                if len(run) == quantity:
                    return run
            else:
                run = []
    return None


class SeatAllocator:

    def __init__(self, hold_minutes=None):
        self.hold_minutes = hold_minutes if hold_minutes is not None else settings.SEAT_HOLD_MINUTES

    def load_seats(self, event_id):
        return list(Seat.objects.filter(event_id=event_id).order_by('row_idx', 'col_idx'))

    def auto_assign(self, event_id, quantity):
        """
        Reserve ``quantity`` contiguous seats of one row for a time-boxed hold.

        Raises:
            ValidationFailed: quantity below one.
            EventNotFoundError: unknown event.
            NoContiguousBlockError: no row has a long enough run.
            SeatsTakenError: a competing allocation claimed part of the block first.
        """
        if quantity < 1:
            raise ValidationFailed("Quantity must be greater than zero")

        now = timezone.now()
        with transaction.atomic():
            if not Events.objects.filter(events_id=event_id).exists():
                raise EventNotFoundError()

            block = find_contiguous_block(self.load_seats(event_id), quantity, now)
            if block is None:
                logger.info("No contiguous block of %s seats for event %s", quantity, event_id)
                raise NoContiguousBlockError()

            token = str(uuid4())
            reserved_until = now + timedelta(minutes=self.hold_minutes)
            seat_ids = [seat.seat_id for seat in block]

            updated = Seat.objects.claimable(now).filter(seat_id__in=seat_ids).update(
                status=Seat.SEAT_STATUS.RESERVED,
                reserved_token=token,
                reserved_until=reserved_until,
            )
            if updated != len(seat_ids):
                logger.warning(
                    "Lost allocation race for event %s: %s of %s seats still claimable",
                    event_id, updated, len(seat_ids),
                )
                raise SeatsTakenError()

        invalidate_seat_map_cache(event_id)
        logger.info("Reserved %s seats for event %s under hold %s", len(seat_ids), event_id, token)
        return Reservation(seat_ids=seat_ids, token=token, reserved_until=reserved_until)
