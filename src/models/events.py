"""
Data models for users and calendar events.

Plain TypedDicts shared by the database layer, the client gateway and the
calendar view model. The API layer has its own Pydantic models for the wire.
"""

from typing import TypedDict


class User(TypedDict):
    """Public user record, as returned by the API."""
    id: str
    username: str


class UserRecord(User):
    """Stored user row, including the password hash."""
    password_hash: str


class CalendarEvent(TypedDict):
    """Calendar event in its wire/storage shape."""
    id: str
    userId: str
    title: str
    description: str
    date: str  # YYYY-MM-DD
    time: str  # HH:mm
    color: str


class ParsedEvent(TypedDict):
    """Fields extracted from free text by the smart-add adapter."""
    title: str
    date: str
    time: str
    description: str
