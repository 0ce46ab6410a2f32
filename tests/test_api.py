"""Tests for the FastAPI routes."""

import pytest

from core.database import get_connection


def register(client, username="alice", password="pw1"):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def login(client, username="alice", password="pw1"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


# =============================================================================
# AUTH
# =============================================================================


def test_register_then_login_returns_same_user(client):
    registered = register(client)
    assert registered.status_code == 200
    user = registered.json()
    assert set(user) == {"id", "username"}

    logged_in = login(client)

    assert logged_in.status_code == 200
    assert logged_in.json() == user


def test_register_duplicate_username_conflicts(client):
    register(client)

    response = register(client, password="different")

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "CONFLICT"


def test_password_is_not_stored_in_plaintext(client, db_path):
    register(client)

    conn = get_connection()
    try:
        stored = conn.execute("SELECT password_hash FROM users").fetchone()[0]
    finally:
        conn.close()

    assert stored != "pw1"
    assert "pw1" not in stored


def test_wrong_password_and_unknown_user_are_indistinguishable(client):
    register(client)

    wrong_password = login(client, password="nope")
    unknown_user = login(client, username="mallory")

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


@pytest.mark.parametrize("body", [{"username": "", "password": "pw"}, {"username": "bob", "password": ""}])
def test_register_requires_credentials(client, body):
    response = client.post("/api/auth/register", json=body)

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_REQUEST"


@pytest.mark.parametrize("username, password", [("", "pw1"), ("alice", "")])
def test_login_with_empty_credentials_is_unauthorized(client, username, password):
    register(client)

    response = login(client, username=username, password=password)

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


def test_login_unknown_user_still_checks_a_password(client, monkeypatch):
    import api.routes.auth

    calls = []

    def counting_verify(password, stored_hash):
        calls.append(stored_hash)
        return False

    monkeypatch.setattr(api.routes.auth, "verify_password", counting_verify)

    response = login(client, username="mallory")

    assert response.status_code == 401
    assert calls == [None]


# =============================================================================
# EVENTS
# =============================================================================


def test_event_lifecycle(client, sample_event):
    user_id = register(client).json()["id"]
    event = {**sample_event, "userId": user_id}

    saved = client.post("/api/events", json=event)
    assert saved.status_code == 200
    assert saved.json() == {"success": True}

    listed = client.get("/api/events", params={"userId": user_id})
    assert listed.json() == [event]

    deleted = client.delete("/api/events/e1")
    assert deleted.json() == {"success": True}
    assert client.get("/api/events", params={"userId": user_id}).json() == []


def test_upsert_twice_keeps_one_row_with_final_values(client, sample_event):
    client.post("/api/events", json=sample_event)
    client.post("/api/events", json={**sample_event, "title": "Renamed", "color": "bg-pink-500"})

    events = client.get("/api/events", params={"userId": "user-a"}).json()

    assert len(events) == 1
    assert events[0]["title"] == "Renamed"
    assert events[0]["color"] == "bg-pink-500"


def test_delete_unknown_event_succeeds(client):
    response = client.delete("/api/events/does-not-exist")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_list_events_requires_user_id(client):
    response = client.get("/api/events")

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Missing userId"


def test_list_events_unknown_user_is_empty(client):
    response = client.get("/api/events", params={"userId": "nobody"})

    assert response.status_code == 200
    assert response.json() == []


def test_missing_description_defaults_to_empty(client, sample_event):
    event = {key: value for key, value in sample_event.items() if key != "description"}
    client.post("/api/events", json=event)

    events = client.get("/api/events", params={"userId": "user-a"}).json()

    assert events[0]["description"] == ""


@pytest.mark.parametrize(
    "override",
    [
        {"date": "2025-02-30"},
        {"time": "9:00"},
        {"color": "bg-teal-500"},
        {"title": "   "},
    ],
)
def test_malformed_event_is_rejected(client, sample_event, override):
    response = client.post("/api/events", json={**sample_event, **override})

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"
    assert client.get("/api/events", params={"userId": "user-a"}).json() == []


# =============================================================================
# HEALTH & REQUEST LOG
# =============================================================================


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database_available"] is True


def test_requests_are_logged(client):
    register(client)
    register(client)

    conn = get_connection()
    try:
        rows = conn.execute(
            "SELECT endpoint, method, status_code, error_code FROM api_requests ORDER BY id"
        ).fetchall()
    finally:
        conn.close()

    assert [tuple(row) for row in rows] == [
        ("/api/auth/register", "POST", 200, None),
        ("/api/auth/register", "POST", 409, "CONFLICT"),
    ]


def test_unexpected_error_uses_standard_body(db_path, monkeypatch):
    import api.routes.events
    from fastapi.testclient import TestClient

    from api.main import app

    def broken_list_events(conn, user_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(api.routes.events, "list_events", broken_list_events)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/events", params={"userId": "user-a"})

    assert response.status_code == 500
    assert response.json() == {
        "detail": {"error": "Internal server error", "code": "INTERNAL_ERROR", "details": []}
    }
