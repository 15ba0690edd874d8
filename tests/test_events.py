"""Integration tests for the admin event endpoints."""

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from events.models import DEFAULT_CAPACITY, Events


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/admin/events/"""

    url = "/api/admin/events/"

    def test_orders_by_start_descending_with_undated_last(self, admin_client: APIClient):
        now = timezone.now()
        Events.objects.create(event_name="Undated")
        Events.objects.create(event_name="Soon", starts_at=now + timedelta(days=1))
        Events.objects.create(event_name="Later", starts_at=now + timedelta(days=10))

        response = admin_client.get(self.url)

        assert response.status_code == 200
        names = [e["name"] for e in response.json()["data"]["events"]]
        assert names == ["Later", "Soon", "Undated"]

    def test_empty(self, admin_client: APIClient):
        assert admin_client.get(self.url).json()["data"] == {"events": []}

    def test_scanner_is_forbidden(self, scanner_client: APIClient):
        response = scanner_client.get(self.url)

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_anonymous_is_unauthorized(self, api_client: APIClient):
        assert api_client.get(self.url).status_code == 401


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/admin/events/"""

    url = "/api/admin/events/"

    def test_create_with_default_capacity(self, admin_client: APIClient):
        response = admin_client.post(self.url, {"name": "Opening Night"}, format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Opening Night"
        assert data["capacity"] == DEFAULT_CAPACITY
        assert Events.objects.filter(events_id=data["id"]).exists()

    def test_name_is_required(self, admin_client: APIClient):
        response = admin_client.post(self.url, {"description": "no name"}, format="json")

        assert response.status_code == 400
        assert "Event name is required" in response.json()["message"]

    def test_start_must_precede_end(self, admin_client: APIClient):
        now = timezone.now()
        response = admin_client.post(self.url, {
            "name": "Backwards",
            "starts_at": (now + timedelta(hours=2)).isoformat(),
            "ends_at": now.isoformat(),
        }, format="json")

        assert response.status_code == 400
        assert "Start time must be before end time" in response.json()["message"]


@pytest.mark.django_db
class TestEventUpdate:
    """Tests for PUT /api/admin/events/{id}/"""

    def test_partial_update(self, admin_client: APIClient, event):
        response = admin_client.put(
            f"/api/admin/events/{event.events_id}/", {"description": "Black tie"}, format="json",
        )

        assert response.status_code == 200
        event.refresh_from_db()
        assert event.description == "Black tie"
        assert event.event_name == "Spring Gala"

    def test_blank_name_is_rejected(self, admin_client: APIClient, event):
        response = admin_client.put(f"/api/admin/events/{event.events_id}/", {"name": ""}, format="json")

        assert response.status_code == 400
        assert "Event name cannot be empty" in response.json()["message"]

    def test_unknown_event(self, admin_client: APIClient):
        response = admin_client.put(
            "/api/admin/events/00000000-0000-0000-0000-000000000000/", {"name": "x"}, format="json",
        )

        assert response.status_code == 404
        assert response.json()["custom_code"] == 3404
