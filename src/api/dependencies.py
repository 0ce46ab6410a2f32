"""FastAPI dependencies and shared error helpers."""

import sqlite3
from collections.abc import AsyncIterator

from fastapi import HTTPException

from core.database import get_connection


async def get_db() -> AsyncIterator[sqlite3.Connection]:
    """Open a database connection for the duration of one request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def api_error(
    status_code: int, error: str, code: str, details: list[str] | None = None
) -> HTTPException:
    """Build an HTTPException carrying the standard error body."""
    return HTTPException(
        status_code=status_code,
        detail={
            "error": error,
            "code": code,
            "details": details or [],
        },
    )
