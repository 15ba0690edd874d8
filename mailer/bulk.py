"""
Bulk ticket issuance with queued delivery.

A batch is all-or-nothing: each recipient claims the next free seat with a
row lock, gets a ticket and a queued message; if seats run out part way the
whole batch is rolled back.
"""
import logging
from dataclasses import dataclass, field

from django.conf import settings
from django.db import transaction
from django.utils import formats, timezone

from SeatDesk.cache_utils import invalidate_seat_map_cache
from SeatDesk.exceptions import EventNotFoundError, NotEnoughSeatsError
from events.models import Events
from inventory.models import Seat
from mailer.models import SUBJECT_MAX_LENGTH, EmailQueue
from mailer.rendering import (
    DEFAULT_EMAIL_TEMPLATE,
    DEFAULT_SUBJECT_TEMPLATE,
    interpolate_template,
    pick_template,
)

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    queued: int = 0
    details: list = field(default_factory=list)


def qr_content_id(ticket_code):
    return f"qr-{ticket_code}@{settings.MAIL_CID_DOMAIN}"


def format_event_start(starts_at):
    if not starts_at:
        return ""
    return formats.date_format(timezone.localtime(starts_at), "DATETIME_FORMAT")


class BulkTicketMailer:

    def __init__(self, issuer):
        self.issuer = issuer

    def next_seat(self, event, now):
        """Lock the first claimable seat in row/column order"""
        seat = (
            Seat.objects.claimable(now)
            .select_for_update()
            .filter(event_id=event)
            .order_by('row_idx', 'col_idx')
            .first()
        )
        if seat is None:
            raise NotEnoughSeatsError()
        return seat

    def issue_and_queue(self, event_id, recipients, subject=None, body_template=None):
        """
        Issue one ticket per recipient and queue its email.

        Raises:
            EventNotFoundError: unknown event.
            NotEnoughSeatsError: fewer free seats than recipients (nothing is kept).
        """
        body_template = pick_template(body_template, DEFAULT_EMAIL_TEMPLATE)
        subject_template = pick_template(subject, DEFAULT_SUBJECT_TEMPLATE)
        result = BulkResult()

        with transaction.atomic():
            event = Events.objects.filter(events_id=event_id).first()
            if event is None:
                raise EventNotFoundError()
            event_starts = format_event_start(event.starts_at)

            for person in recipients:
                seat = self.next_seat(event, timezone.now())
                issued = self.issuer.issue_for_seat(
                    event, seat, person["email"], user_name=person.get("name", ""),
                )
                ticket_code = issued.ticket.ticket_code
                seat_label = seat.label()
                qr_cid = qr_content_id(ticket_code)

                template_data = {
                    "name": person.get("name") or "Guest",
                    "email": person["email"],
                    "event": event.event_name or "",
                    "seat": seat_label,
                    "ticket_code": ticket_code,
                    "qr_data_url": issued.qr_data_url,
                    "qr_cid": qr_cid,
                    "event_starts": event_starts,
                }
                body = interpolate_template(body_template, {
                    **template_data,
                    "ticket": f"{seat_label}\nTicket Code: {ticket_code}",
                })
                # placeholders can push a valid template past the column width
                resolved_subject = interpolate_template(subject_template, template_data)[:SUBJECT_MAX_LENGTH]

                _, base64_png = issued.qr_data_url.split(",", 1)
                EmailQueue.objects.create(
                    to_email=person["email"],
                    to_name=person.get("name", ""),
                    subject=resolved_subject,
                    body=body,
                    attachments=[{
                        "filename": f"{ticket_code}.png",
                        "content": base64_png,
                        "encoding": "base64",
                        "contentType": "image/png",
                        "cid": qr_cid,
                    }],
                )

                result.queued += 1
                result.details.append({
                    "email": person["email"],
                    "seat": seat_label,
                    "ticketCode": ticket_code,
                })

        invalidate_seat_map_cache(event_id)
        logger.info("Queued %s ticket emails for event %s", result.queued, event_id)
        return result
