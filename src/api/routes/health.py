"""Health check endpoint."""

import sqlite3
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.database import get_connection

router = APIRouter()


def database_available() -> bool:
    """Check that the database answers a trivial query."""
    try:
        conn = get_connection()
    except (sqlite3.Error, OSError):
        return False
    try:
        conn.execute("SELECT 1").fetchone()
        return True
    except sqlite3.Error:
        return False
    finally:
        conn.close()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    db_ok = database_available()
    timestamp = datetime.now(timezone.utc).isoformat()

    if db_ok:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            database_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                database_available=False,
                timestamp=timestamp,
                error="Database not reachable",
            ).model_dump(),
        )
