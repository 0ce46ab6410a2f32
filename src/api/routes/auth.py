"""Registration and login endpoints."""

import asyncio
import sqlite3

from fastapi import APIRouter, Depends, status

from api.dependencies import api_error, get_db
from api.models.requests import CredentialsRequest
from api.models.responses import ErrorCodes, UserResponse
from core.database import UsernameTakenError, create_user, get_user_by_username
from core.security import hash_password, verify_password

router = APIRouter(prefix="/api/auth")

INVALID_CREDENTIALS = "Invalid credentials"


def require_credentials(body: CredentialsRequest) -> None:
    """Reject empty usernames or passwords."""
    missing = []
    if not body.username.strip():
        missing.append("username is required")
    if not body.password:
        missing.append("password is required")
    if missing:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Missing credentials",
            ErrorCodes.INVALID_REQUEST,
            missing,
        )


@router.post("/register", response_model=UserResponse)
async def register(body: CredentialsRequest, conn: sqlite3.Connection = Depends(get_db)):
    """
    Create a new user.

    Returns 409 if the username is already taken.
    """
    require_credentials(body)
    password_hash = await asyncio.to_thread(hash_password, body.password)

    try:
        user = create_user(conn, body.username, password_hash)
    except UsernameTakenError:
        raise api_error(
            status.HTTP_409_CONFLICT,
            "Username already exists",
            ErrorCodes.CONFLICT,
        )

    return UserResponse(**user)


@router.post("/login", response_model=UserResponse)
async def login(body: CredentialsRequest, conn: sqlite3.Connection = Depends(get_db)):
    """
    Verify credentials.

    Unknown usernames, wrong passwords and empty credentials all return
    the same 401, after the same amount of hashing work.
    """
    user = get_user_by_username(conn, body.username)
    stored_hash = user["password_hash"] if user else None
    password_ok = await asyncio.to_thread(verify_password, body.password, stored_hash)

    if user is None or not password_ok:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            INVALID_CREDENTIALS,
            ErrorCodes.UNAUTHORIZED,
        )

    return UserResponse(id=user["id"], username=user["username"])
