"""Calendar event endpoints."""

import sqlite3

from fastapi import APIRouter, Depends, status

from api.dependencies import api_error, get_db
from api.models.requests import EventPayload
from api.models.responses import ErrorCodes, SuccessResponse
from core.database import delete_event, list_events, upsert_event

router = APIRouter(prefix="/api/events")


@router.get("", response_model=list[EventPayload])
async def get_events(userId: str | None = None, conn: sqlite3.Connection = Depends(get_db)):
    """List all events of a user. Unknown users get an empty list."""
    if not userId:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Missing userId",
            ErrorCodes.INVALID_REQUEST,
        )
    return list_events(conn, userId)


@router.post("", response_model=SuccessResponse)
async def save_event(event: EventPayload, conn: sqlite3.Connection = Depends(get_db)):
    """Create the event, or update it if the id already exists."""
    upsert_event(conn, event.model_dump())
    return SuccessResponse()


@router.delete("/{event_id}", response_model=SuccessResponse)
async def remove_event(event_id: str, conn: sqlite3.Connection = Depends(get_db)):
    """Delete an event. Deleting an unknown id still succeeds."""
    delete_event(conn, event_id)
    return SuccessResponse()
