"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("CALENDAR_LOG_LEVEL", "WARNING")
os.environ["CALENDAR_SESSION_FILE"] = str(Path(tempfile.gettempdir()) / "calendar-app-test-session.json")

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastapi.testclient import TestClient

import core.database
from client.gateway import CalendarGateway
from client.session import SessionStore


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the database layer at a fresh file with the schema created."""
    path = tmp_path / "calendar.db"
    monkeypatch.setattr(core.database, "DB_PATH", path)
    conn = core.database.get_connection()
    try:
        core.database.create_tables(conn)
    finally:
        conn.close()
    return path


@pytest.fixture
def conn(db_path):
    """Open connection to the test database."""
    connection = core.database.get_connection()
    yield connection
    connection.close()


@pytest.fixture
def client(db_path):
    """FastAPI test client backed by the test database."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def gateway(db_path):
    """Client gateway talking to the in-process app."""
    from api.main import app

    with TestClient(app, base_url="http://testserver/api") as test_client:
        yield CalendarGateway(client=test_client)


@pytest.fixture
def session_store(tmp_path):
    return SessionStore(tmp_path / "session.json")


@pytest.fixture
def sample_event():
    """Sample event dictionary for testing."""
    return {
        "id": "e1",
        "userId": "user-a",
        "title": "Standup",
        "description": "",
        "date": "2025-03-10",
        "time": "09:00",
        "color": "bg-blue-500",
    }


@pytest.fixture
def sample_events(sample_event):
    """List of sample events for testing."""
    return [
        sample_event,
        {
            **sample_event,
            "id": "e2",
            "title": "Retro",
            "time": "16:30",
            "color": "bg-green-500",
        },
        {
            **sample_event,
            "id": "e3",
            "title": "Dentist",
            "date": "2025-03-31",
            "time": "08:15",
        },
        {
            **sample_event,
            "id": "e4",
            "title": "Next month",
            "date": "2025-04-10",
        },
    ]
