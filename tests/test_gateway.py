"""Tests for the client HTTP gateway."""

from datetime import date

import httpx
import pytest

import api.routes.ai
from client.gateway import CalendarGateway


@pytest.fixture
def offline_gateway():
    """Gateway whose every request fails at the transport level."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(base_url="http://calendar.invalid/api", transport=httpx.MockTransport(handler))
    yield CalendarGateway(client=client)
    client.close()


@pytest.fixture
def failing_gateway():
    """Gateway whose backend answers every request with a 500."""

    def handler(request):
        return httpx.Response(500, json={"error": "Internal server error"})

    client = httpx.Client(base_url="http://calendar.invalid/api", transport=httpx.MockTransport(handler))
    yield CalendarGateway(client=client)
    client.close()


def test_end_to_end_scenario(gateway):
    user = gateway.register_user("alice", "pw1")
    assert user is not None
    event = {
        "id": "e1",
        "userId": user["id"],
        "title": "Standup",
        "description": "",
        "date": "2025-03-10",
        "time": "09:00",
        "color": "bg-blue-500",
    }

    assert gateway.save_event(event)
    assert gateway.get_events(user["id"]) == [event]

    assert gateway.delete_event("e1")
    assert gateway.get_events(user["id"]) == []


def test_register_and_login(gateway):
    user = gateway.register_user("alice", "pw1")

    assert gateway.login_user("alice", "pw1") == user
    assert gateway.login_user("alice", "wrong") is None
    assert gateway.register_user("alice", "pw2") is None


def test_invalid_event_save_reports_failure(gateway, sample_event):
    assert not gateway.save_event({**sample_event, "time": "25:00"})


def test_smart_add_through_backend(gateway, monkeypatch):
    def fake_parse(text, reference_date):
        return {"title": "meeting", "date": "2025-03-11", "time": "09:00", "description": ""}

    monkeypatch.setattr(api.routes.ai, "parse_natural_language_event", fake_parse)

    parsed = gateway.parse_natural_language_event("meeting tomorrow", date(2025, 3, 10))

    assert parsed == {"title": "meeting", "date": "2025-03-11", "time": "09:00", "description": ""}


@pytest.mark.parametrize("fixture_name", ["offline_gateway", "failing_gateway"])
def test_failures_degrade_to_empty_results(request, fixture_name, sample_event):
    gateway = request.getfixturevalue(fixture_name)

    assert gateway.register_user("alice", "pw1") is None
    assert gateway.login_user("alice", "pw1") is None
    assert gateway.get_events("user-a") == []
    assert gateway.save_event(sample_event) is False
    assert gateway.delete_event("e1") is False
    assert gateway.parse_natural_language_event("lunch", date(2025, 3, 10)) is None
