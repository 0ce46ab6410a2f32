"""
Event field validation.
"""

from datetime import datetime

from core.config import DATE_FORMAT, EVENT_COLORS, TIME_FORMAT


def is_valid_date(value: str) -> bool:
    """Check for a real calendar date in strict YYYY-MM-DD form."""
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    """Check for a 24h clock time in strict HH:mm form."""
    if not isinstance(value, str) or len(value) != 5:
        return False
    try:
        datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_color(value: str) -> bool:
    return value in EVENT_COLORS


def validate_event(event: dict) -> list[str]:
    """
    Validate an event dict and return a list of error messages.

    Checks:
    1. id, userId and title are present
    2. date is YYYY-MM-DD, time is HH:mm
    3. color is a palette member
    """
    errors = []

    # Check 1: Required identifiers
    if not event.get("id"):
        errors.append("Missing event id")
    if not event.get("userId"):
        errors.append("Missing userId")
    if not (event.get("title") or "").strip():
        errors.append("Missing title")

    # Check 2: Date and time formats
    date_value = event.get("date")
    if not is_valid_date(date_value):
        errors.append(f"Invalid date '{date_value}', expected YYYY-MM-DD")
    time_value = event.get("time")
    if not is_valid_time(time_value):
        errors.append(f"Invalid time '{time_value}', expected HH:mm")

    # Check 3: Palette
    color = event.get("color")
    if not is_valid_color(color):
        errors.append(f"Invalid color '{color}', expected one of: {', '.join(EVENT_COLORS)}")

    return errors
