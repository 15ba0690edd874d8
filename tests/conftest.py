"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from SeatDesk.utils import generate_jwt_token
from accounts.models import User, UserActiveSession
from events.models import Events
from inventory.layout import generate_seat_layout
from tickets.signing import TicketSigner

SMALL_ROWS = (4, 4, 4)


def make_operator(email, user_type, password="correct-horse"):
    user = User(name=email.split("@")[0].title(), email=email, user_type=user_type)
    user.set_password(password)
    user.save()
    return user


def open_session(user):
    token = generate_jwt_token(user.user_id, user.email, user.name)
    UserActiveSession.objects.create(user_id=user, access_token=token)
    return token


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def admin_user(db):
    return make_operator("admin@seatdesk.test", User.USER_TYPE.ADMIN)


@pytest.fixture
def scanner_user(db):
    return make_operator("door@seatdesk.test", User.USER_TYPE.SCANNER)


@pytest.fixture
def admin_client(admin_user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {open_session(admin_user)}")
    return client


@pytest.fixture
def scanner_client(scanner_user) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {open_session(scanner_user)}")
    return client


@pytest.fixture
def event(db):
    return Events.objects.create(event_name="Spring Gala", capacity=12)


@pytest.fixture
def seated_event(event):
    """Three rows (A, B, C) of four seats each"""
    generate_seat_layout(event, total=12, pattern=SMALL_ROWS)
    return event


@pytest.fixture
def signer() -> TicketSigner:
    return TicketSigner("test-qr-secret")
