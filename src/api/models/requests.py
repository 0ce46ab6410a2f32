"""Pydantic request models for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from core.config import DEFAULT_EVENT_COLOR, EVENT_COLORS
from core.validation import is_valid_color, is_valid_date, is_valid_time


class CredentialsRequest(BaseModel):
    """Register/login request body."""

    username: str
    password: str


class EventPayload(BaseModel):
    """Calendar event as sent and returned by the API."""

    id: str = Field(min_length=1)
    userId: str = Field(min_length=1)
    title: str
    description: str = ""
    date: str  # YYYY-MM-DD
    time: str  # HH:mm
    color: str = DEFAULT_EVENT_COLOR

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value):
        return "" if value is None else value

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        if not is_valid_date(value):
            raise ValueError("expected a calendar date in YYYY-MM-DD format")
        return value

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str) -> str:
        if not is_valid_time(value):
            raise ValueError("expected a 24h time in HH:mm format")
        return value

    @field_validator("color")
    @classmethod
    def check_color(cls, value: str) -> str:
        if not is_valid_color(value):
            raise ValueError(f"expected one of: {', '.join(EVENT_COLORS)}")
        return value


class ParseRequest(BaseModel):
    """Smart-add request body."""

    prompt: str
    referenceDate: str | None = None  # YYYY-MM-DD or full ISO timestamp
