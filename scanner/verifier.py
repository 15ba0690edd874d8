"""
Ticket redemption at the door.

A scan is accepted at most once: the ``active -> used`` transition is a single
conditional update and only the caller whose update touched the row wins.
"""
import json
import logging
from uuid import UUID

from django.db import transaction
from django.utils import formats, timezone

from SeatDesk.exceptions import (
    InvalidSignatureError,
    InvalidTicketPayloadError,
    TicketAlreadyUsedError,
    TicketCancelledError,
    TicketNotFoundError,
    TicketNotValidError,
    ValidationFailed,
)
from tickets.models import Ticket

logger = logging.getLogger(__name__)

SEAT_LABEL_SEPARATOR = " · "


def ticket_context(ticket):
    """Attendee, event and seat details shown on the operator's screen"""
    seat_label = ticket.seat_id.label(SEAT_LABEL_SEPARATOR) if ticket.seat_id else ""
    return {
        "ticketId": str(ticket.ticket_id),
        "ticketCode": ticket.ticket_code,
        "attendee": ticket.user_email,
        "attendeeName": ticket.user_name or None,
        "eventName": ticket.event_id.event_name if ticket.event_id else None,
        "seatLabel": seat_label or None,
    }


def already_used_message(used_at):
    if not used_at:
        return TicketAlreadyUsedError.default_message
    return "Ticket already used at " + formats.date_format(timezone.localtime(used_at), "DATETIME_FORMAT")


def parse_ticket_id(payload):
    try:
        return UUID(str(payload["ticket_id"]))
    except (KeyError, TypeError, ValueError):
        raise ValidationFailed("Ticket payload does not reference a ticket")


class ScanVerifier:

    def __init__(self, signer):
        self.signer = signer

    def load_ticket(self, ticket_id):
        ticket = Ticket.objects.select_related('event_id', 'seat_id').filter(ticket_id=ticket_id).first()
        if ticket is None:
            raise TicketNotFoundError()
        return ticket

    def verify(self, qr_text):
        """
        Validate a scanned token and redeem its ticket.

        Returns the success payload. Raises a ServiceError for every rejection;
        used and cancelled rejections carry the ticket context in ``data``.
        """
        try:
            signed = json.loads(qr_text)
        except (TypeError, ValueError):
            raise InvalidTicketPayloadError()

        if not self.signer.verify(signed):
            logger.warning("Rejected scan with invalid signature")
            raise InvalidSignatureError()

        ticket_id = parse_ticket_id(signed["p"])
        ticket = self.load_ticket(ticket_id)

        if ticket.status == Ticket.TICKET_STATUS.USED:
            raise TicketAlreadyUsedError(already_used_message(ticket.used_at), ticket_context(ticket))
        if ticket.status == Ticket.TICKET_STATUS.CANCELLED:
            raise TicketCancelledError(data=ticket_context(ticket))
        if ticket.status != Ticket.TICKET_STATUS.ACTIVE:
            raise TicketNotValidError(data=ticket_context(ticket))

        used_at = timezone.now()
        with transaction.atomic():
            updated = Ticket.objects.filter(
                ticket_id=ticket.ticket_id,
                status=Ticket.TICKET_STATUS.ACTIVE,
            ).update(status=Ticket.TICKET_STATUS.USED, used_at=used_at)

        if updated != 1:
            # another scan redeemed it first; report that scan's timestamp
            winner = self.load_ticket(ticket.ticket_id)
            logger.warning("Concurrent scan lost for ticket %s", winner.ticket_code)
            if winner.status == Ticket.TICKET_STATUS.CANCELLED:
                raise TicketCancelledError(data=ticket_context(winner))
            raise TicketAlreadyUsedError(already_used_message(winner.used_at), ticket_context(winner))

        logger.info("Ticket %s accepted", ticket.ticket_code)
        return {
            "ok": True,
            "message": "Ticket accepted",
            **ticket_context(ticket),
            "usedAt": used_at.isoformat(),
        }
