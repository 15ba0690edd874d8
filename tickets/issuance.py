"""
Ticket issuance: turn one seat into a sold seat plus a signed ticket.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from SeatDesk.cache_utils import invalidate_seat_map_cache
from SeatDesk.exceptions import EventNotFoundError, SeatNotFoundError, SeatUnavailableError
from events.models import Events
from inventory.models import Seat
from tickets.models import Ticket
from tickets.qr import qr_data_url, token_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedTicket:
    ticket: Ticket
    seat: Seat
    qr_data_url: str


def generate_ticket_code():
    return f"{settings.TICKET_CODE_PREFIX}-{uuid4().hex[:16].upper()}"


class TicketIssuer:

    def __init__(self, signer):
        self.signer = signer

    def issue(self, event_id, seat_id, user_email, user_name="", price=Decimal("0"), reserved_token=None):
        """
        Sell one seat of an event to ``user_email`` and mint its signed token.

        Raises:
            EventNotFoundError: unknown event.
            SeatNotFoundError: the seat does not exist or belongs to another event.
            SeatUnavailableError: the seat is sold, blocked, or held under another token.
        """
        with transaction.atomic():
            event = Events.objects.filter(events_id=event_id).first()
            if event is None:
                raise EventNotFoundError()
            seat = Seat.objects.filter(seat_id=seat_id, event_id=event).first()
            if seat is None:
                raise SeatNotFoundError()
            issued = self.issue_for_seat(event, seat, user_email, user_name, price, reserved_token)

        invalidate_seat_map_cache(event.events_id)
        return issued

    def issue_for_seat(self, event, seat, user_email, user_name="", price=Decimal("0"), reserved_token=None):
        """Issue against an already loaded seat. Callers provide the transaction."""
        now = timezone.now()
        self._claim_seat(seat, now, reserved_token)

        ticket = Ticket.objects.create(
            ticket_code=generate_ticket_code(),
            event_id=event,
            seat_id=seat,
            user_email=user_email,
            user_name=user_name or "",
            price=price,
        )

        payload = {
            "ticket_id": str(ticket.ticket_id),
            "event_id": str(event.events_id),
            "seat_id": str(seat.seat_id),
            "issued_at": now.isoformat(),
            "nonce": str(uuid4()),
        }
        signed = self.signer.sign(payload)
        ticket.qr_payload = token_text(signed)
        ticket.save(update_fields=["qr_payload"])

        logger.info("Issued ticket %s for seat %s of event %s", ticket.ticket_code, seat.seat_id, event.events_id)
        return IssuedTicket(ticket=ticket, seat=seat, qr_data_url=qr_data_url(ticket.qr_payload))

    def _claim_seat(self, seat, now, reserved_token):
        """
        Conditionally mark the seat sold. Available and reserved seats are
        sellable; with ``reserved_token`` a live hold must carry that token.
        """
        sellable = Q(status=Seat.SEAT_STATUS.AVAILABLE)
        if reserved_token:
            sellable |= Q(status=Seat.SEAT_STATUS.RESERVED, reserved_token=reserved_token)
            sellable |= Q(status=Seat.SEAT_STATUS.RESERVED, reserved_until__lte=now)
        else:
            sellable |= Q(status=Seat.SEAT_STATUS.RESERVED)

        updated = Seat.objects.filter(sellable, seat_id=seat.seat_id).update(
            status=Seat.SEAT_STATUS.SOLD,
            reserved_token=None,
            reserved_until=None,
        )
        if updated != 1:
            logger.warning("Seat %s is not sellable", seat.seat_id)
            raise SeatUnavailableError()

        seat.status = Seat.SEAT_STATUS.SOLD
        seat.reserved_token = None
        seat.reserved_until = None
