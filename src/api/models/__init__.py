"""API Pydantic models."""

from .requests import CredentialsRequest, EventPayload, ParseRequest
from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    ParsedEventResponse,
    SuccessResponse,
    UserResponse,
)

__all__ = [
    "CredentialsRequest",
    "EventPayload",
    "ParseRequest",
    "HealthResponse",
    "UserResponse",
    "SuccessResponse",
    "ParsedEventResponse",
    "ErrorResponse",
    "ErrorCodes",
]
