"""
SQLite database operations for users and calendar events.

Each operation is a single statement committed immediately.
"""

import sqlite3
import uuid
from pathlib import Path

from core.config import DB_PATH
from models.events import CalendarEvent, User, UserRecord


class UsernameTakenError(Exception):
    """Raised when registering a username that already exists."""


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection."""
    path = Path(db_path or DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def create_tables(conn: sqlite3.Connection) -> None:
    """Create users, events and request log tables if they don't exist."""
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            username TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            create_date TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # user_id is not a foreign key; the API does not check event ownership
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS events (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            event_date TEXT NOT NULL,
            event_time TEXT NOT NULL,
            color TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS api_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            endpoint TEXT NOT NULL,
            method TEXT NOT NULL,
            client_ip TEXT,
            user_id TEXT,
            status_code INTEGER NOT NULL,
            error_code TEXT,
            error_message TEXT,
            processing_time_ms INTEGER NOT NULL
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_events_user ON events(user_id)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_events_date ON events(event_date)")
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp)"
    )

    conn.commit()


# =============================================================================
# USERS
# =============================================================================


def create_user(conn: sqlite3.Connection, username: str, password_hash: str) -> User:
    """
    Insert a new user row and return its public record.

    Raises:
        UsernameTakenError: if the username is already registered
    """
    user_id = str(uuid.uuid4())
    try:
        conn.execute(
            "INSERT INTO users (id, username, password_hash) VALUES (?, ?, ?)",
            (user_id, username, password_hash),
        )
        conn.commit()
    except sqlite3.IntegrityError as e:
        conn.rollback()
        raise UsernameTakenError(username) from e
    return {"id": user_id, "username": username}


def get_user_by_username(conn: sqlite3.Connection, username: str) -> UserRecord | None:
    """Look up a user by username, including the password hash."""
    row = conn.execute(
        "SELECT id, username, password_hash FROM users WHERE username = ?",
        (username,),
    ).fetchone()
    if row is None:
        return None
    return {"id": row["id"], "username": row["username"], "password_hash": row["password_hash"]}


# =============================================================================
# EVENTS
# =============================================================================


def _row_to_event(row: sqlite3.Row) -> CalendarEvent:
    return {
        "id": row["id"],
        "userId": row["user_id"],
        "title": row["title"],
        "description": row["description"],
        "date": row["event_date"],
        "time": row["event_time"],
        "color": row["color"],
    }


def list_events(conn: sqlite3.Connection, user_id: str) -> list[CalendarEvent]:
    """Return all events owned by user_id (empty for unknown users)."""
    rows = conn.execute(
        """
        SELECT id, user_id, title, description, event_date, event_time, color
        FROM events WHERE user_id = ?
        """,
        (user_id,),
    ).fetchall()
    return [_row_to_event(row) for row in rows]


def get_event(conn: sqlite3.Connection, event_id: str) -> CalendarEvent | None:
    row = conn.execute(
        """
        SELECT id, user_id, title, description, event_date, event_time, color
        FROM events WHERE id = ?
        """,
        (event_id,),
    ).fetchone()
    return _row_to_event(row) if row else None


def upsert_event(conn: sqlite3.Connection, event: CalendarEvent) -> None:
    """
    Insert the event, or overwrite its mutable fields if the id exists.

    The owner (user_id) of an existing event is never changed.
    """
    conn.execute(
        """
        INSERT INTO events (
            id, user_id, title, description, event_date, event_time, color
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            title = excluded.title,
            description = excluded.description,
            event_date = excluded.event_date,
            event_time = excluded.event_time,
            color = excluded.color
        """,
        (
            event["id"],
            event["userId"],
            event["title"],
            event.get("description") or "",
            event["date"],
            event["time"],
            event["color"],
        ),
    )
    conn.commit()


def delete_event(conn: sqlite3.Connection, event_id: str) -> None:
    """Delete an event by id. Unknown ids are ignored."""
    conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
    conn.commit()
