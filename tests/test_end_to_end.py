"""Reserve, sell, scan and replay against one event."""

import pytest
from rest_framework.test import APIClient

from inventory.models import Seat
from tickets.models import Ticket


@pytest.mark.django_db
class TestDoorFlow:

    def test_reserve_sell_scan_replay(self, admin_client: APIClient, scanner_client: APIClient, seated_event):
        event_id = str(seated_event.events_id)

        reserved = admin_client.post(f"/api/admin/events/{event_id}/auto-assign/", {"qty": 2}, format="json")
        assert reserved.status_code == 200
        hold = reserved.json()["data"]

        created = admin_client.post("/api/admin/tickets/create/", {
            "event_id": event_id,
            "seat_id": hold["reserved"][0],
            "user_email": "ana@example.com",
            "user_name": "Ana",
            "reserved_token": hold["reservedToken"],
        }, format="json")
        assert created.status_code == 200
        ticket_id = created.json()["data"]["ticketId"]

        seat_map = admin_client.get(f"/api/admin/events/{event_id}/seats/").json()["data"]["seats"]
        statuses = {seat["id"]: seat["status"] for seat in seat_map}
        assert statuses[hold["reserved"][0]] == "sold"
        assert statuses[hold["reserved"][1]] == "reserved"

        qr = Ticket.objects.get(ticket_id=ticket_id).qr_payload
        accepted = scanner_client.post("/api/scanner/verify-qr/", {"qr": qr}, format="json")
        assert accepted.status_code == 200
        assert accepted.json()["data"]["attendeeName"] == "Ana"

        replay = scanner_client.post("/api/scanner/verify-qr/", {"qr": qr}, format="json")
        assert replay.status_code == 409

        assert Seat.objects.get(seat_id=hold["reserved"][0]).status == Seat.SEAT_STATUS.SOLD


class TestHealth:

    def test_health_is_public(self, api_client: APIClient):
        response = api_client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
