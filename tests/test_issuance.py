"""Tests for single ticket issuance and the manual create endpoint."""

import re
import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from SeatDesk.exceptions import EventNotFoundError, SeatNotFoundError, SeatUnavailableError
from events.models import Events
from inventory.allocator import SeatAllocator
from inventory.models import Seat
from tickets.issuance import TicketIssuer, generate_ticket_code
from tickets.models import Ticket


def first_seat(event):
    return Seat.objects.filter(event_id=event).order_by('row_idx', 'col_idx').first()


class TestTicketCode:

    def test_format(self, settings):
        settings.TICKET_CODE_PREFIX = "TKT"
        assert re.fullmatch(r"TKT-[0-9A-F]{16}", generate_ticket_code())

    def test_codes_differ(self):
        assert len({generate_ticket_code() for _ in range(50)}) == 50


@pytest.mark.django_db
class TestTicketIssuer:

    def test_issue_sells_seat_and_signs_payload(self, seated_event, signer):
        seat = first_seat(seated_event)

        issued = TicketIssuer(signer).issue(
            seated_event.events_id, seat.seat_id, "ana@example.com", user_name="Ana", price=Decimal("25.50"),
        )

        ticket = Ticket.objects.get(ticket_id=issued.ticket.ticket_id)
        assert ticket.status == Ticket.TICKET_STATUS.ACTIVE
        assert ticket.price == Decimal("25.50")
        assert ticket.used_at is None
        assert signer.verify(ticket.signed_token())
        payload = ticket.signed_token()["p"]
        assert list(payload) == ["ticket_id", "event_id", "seat_id", "issued_at", "nonce"]
        assert payload["ticket_id"] == str(ticket.ticket_id)
        assert payload["event_id"] == str(seated_event.events_id)
        assert payload["seat_id"] == str(seat.seat_id)
        assert payload["nonce"] and payload["issued_at"]
        assert issued.qr_data_url.startswith("data:image/png;base64,")

        seat.refresh_from_db()
        assert seat.status == Seat.SEAT_STATUS.SOLD

    def test_double_issuance_is_rejected(self, seated_event, signer):
        seat = first_seat(seated_event)
        issuer = TicketIssuer(signer)
        issuer.issue(seated_event.events_id, seat.seat_id, "first@example.com")

        with pytest.raises(SeatUnavailableError):
            issuer.issue(seated_event.events_id, seat.seat_id, "second@example.com")

        assert Ticket.objects.filter(seat_id=seat).count() == 1

    def test_blocked_seat_is_rejected(self, seated_event, signer):
        seat = first_seat(seated_event)
        Seat.objects.filter(seat_id=seat.seat_id).update(status=Seat.SEAT_STATUS.BLOCKED)

        with pytest.raises(SeatUnavailableError):
            TicketIssuer(signer).issue(seated_event.events_id, seat.seat_id, "a@example.com")
        assert Ticket.objects.count() == 0

    def test_reserved_seat_sells_to_matching_token(self, seated_event, signer):
        reservation = SeatAllocator().auto_assign(seated_event.events_id, 2)
        seat_id = reservation.seat_ids[0]
        issuer = TicketIssuer(signer)

        with pytest.raises(SeatUnavailableError):
            issuer.issue(seated_event.events_id, seat_id, "a@example.com", reserved_token="someone-else")

        issuer.issue(seated_event.events_id, seat_id, "a@example.com", reserved_token=reservation.token)
        seat = Seat.objects.get(seat_id=seat_id)
        assert seat.status == Seat.SEAT_STATUS.SOLD
        assert seat.reserved_token is None
        assert seat.reserved_until is None

    def test_reserved_seat_sells_without_token(self, seated_event, signer):
        reservation = SeatAllocator().auto_assign(seated_event.events_id, 1)

        TicketIssuer(signer).issue(seated_event.events_id, reservation.seat_ids[0], "a@example.com")

        assert Seat.objects.get(seat_id=reservation.seat_ids[0]).status == Seat.SEAT_STATUS.SOLD

    def test_expired_hold_sells_to_any_token(self, seated_event, signer):
        seat = first_seat(seated_event)
        Seat.objects.filter(seat_id=seat.seat_id).update(
            status=Seat.SEAT_STATUS.RESERVED,
            reserved_token="stale",
            reserved_until=timezone.now() - timedelta(minutes=1),
        )

        TicketIssuer(signer).issue(seated_event.events_id, seat.seat_id, "a@example.com", reserved_token="fresh")
        assert Ticket.objects.filter(seat_id=seat).count() == 1

    def test_unknown_event_and_seat(self, seated_event, signer):
        issuer = TicketIssuer(signer)
        with pytest.raises(EventNotFoundError):
            issuer.issue(uuid.uuid4(), first_seat(seated_event).seat_id, "a@example.com")
        with pytest.raises(SeatNotFoundError):
            issuer.issue(seated_event.events_id, uuid.uuid4(), "a@example.com")

    def test_seat_of_other_event_is_not_found(self, seated_event, signer):
        other = Events.objects.create(event_name="Other", capacity=0)
        with pytest.raises(SeatNotFoundError):
            TicketIssuer(signer).issue(other.events_id, first_seat(seated_event).seat_id, "a@example.com")


@pytest.mark.django_db
class TestTicketCreateApi:

    url = "/api/admin/tickets/create/"

    def test_creates_ticket(self, admin_client: APIClient, seated_event):
        seat = first_seat(seated_event)
        response = admin_client.post(self.url, {
            "event_id": str(seated_event.events_id),
            "seat_id": str(seat.seat_id),
            "user_email": "ana@example.com",
            "price": "10.00",
        }, format="json")

        assert response.status_code == 200
        data = response.json()["data"]
        assert Ticket.objects.filter(ticket_id=data["ticketId"], ticket_code=data["ticketCode"]).exists()
        assert data["qrDataUrl"].startswith("data:image/png;base64,")

    def test_sold_seat_is_conflict(self, admin_client: APIClient, seated_event):
        seat = first_seat(seated_event)
        payload = {
            "event_id": str(seated_event.events_id),
            "seat_id": str(seat.seat_id),
            "user_email": "ana@example.com",
        }
        assert admin_client.post(self.url, payload, format="json").status_code == 200

        response = admin_client.post(self.url, payload, format="json")
        assert response.status_code == 409
        assert response.json()["message"] == "Seat is no longer available"

    def test_missing_fields(self, admin_client: APIClient, seated_event):
        response = admin_client.post(self.url, {"event_id": str(seated_event.events_id)}, format="json")

        assert response.status_code == 400
        assert "seat_id" in response.json()["message"]

    def test_unknown_seat(self, admin_client: APIClient, seated_event):
        response = admin_client.post(self.url, {
            "event_id": str(seated_event.events_id),
            "seat_id": str(uuid.uuid4()),
            "user_email": "ana@example.com",
        }, format="json")
        assert response.status_code == 404
