"""
HTTP gateway to the calendar backend.

Every call is fallible but never raises for transport or server errors:
failures are logged and reported as None / [] / False so callers only
deal with empty results.
"""

import logging
from datetime import date
from urllib.parse import quote

import httpx

from core.config import CLIENT_API_URL, CLIENT_HTTP_TIMEOUT
from models.events import CalendarEvent, ParsedEvent, User

logger = logging.getLogger(__name__)


class CalendarGateway:
    """Thin wrapper around the REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url or CLIENT_API_URL,
            timeout=timeout or CLIENT_HTTP_TIMEOUT,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "CalendarGateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # =========================================================================
    # AUTH
    # =========================================================================

    def register_user(self, username: str, password: str) -> User | None:
        """Register a new user; None if the name is taken or the call failed."""
        try:
            res = self._client.post(
                "/auth/register", json={"username": username, "password": password}
            )
            if res.status_code == 409:
                logger.warning("Username already taken: %s", username)
                return None
            res.raise_for_status()
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("API Error (Register): %s", e)
            return None

    def login_user(self, username: str, password: str) -> User | None:
        try:
            res = self._client.post(
                "/auth/login", json={"username": username, "password": password}
            )
            if res.status_code == 401:
                return None
            res.raise_for_status()
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("API Error (Login): %s", e)
            return None

    # =========================================================================
    # EVENTS
    # =========================================================================

    def get_events(self, user_id: str) -> list[CalendarEvent]:
        try:
            res = self._client.get("/events", params={"userId": user_id})
            res.raise_for_status()
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("API Error (GetEvents): %s", e)
            return []

    def save_event(self, event: CalendarEvent) -> bool:
        """Create or update an event. Returns False if the save failed."""
        try:
            res = self._client.post("/events", json=dict(event))
            res.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error("API Error (SaveEvent): %s", e)
            return False

    def delete_event(self, event_id: str) -> bool:
        try:
            res = self._client.delete(f"/events/{quote(event_id, safe='')}")
            res.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error("API Error (DeleteEvent): %s", e)
            return False

    # =========================================================================
    # SMART ADD
    # =========================================================================

    def parse_natural_language_event(
        self, text: str, reference_date: date
    ) -> ParsedEvent | None:
        """Ask the backend to extract event fields from free text."""
        try:
            res = self._client.post(
                "/ai/parse",
                json={"prompt": text, "referenceDate": reference_date.isoformat()},
            )
            res.raise_for_status()
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("API Error (SmartAdd): %s", e)
            return None

        return {
            "title": data.get("title", ""),
            "date": data.get("date", ""),
            "time": data.get("time", ""),
            "description": data.get("description") or "",
        }
