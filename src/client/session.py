"""
Durable client-side session storage.

The session is two string values (user id and username) kept under fixed
keys in a small JSON key/value file. Both must be present for a session
to exist; the values are trusted as-is and never re-checked with the
backend.
"""

import json
import logging
from pathlib import Path

from core.config import CLIENT_SESSION_FILE
from models.events import User

logger = logging.getLogger(__name__)

SESSION_KEY = "calendar_app_session_uid"
SESSION_NAME_KEY = SESSION_KEY + "_name"


class SessionStore:
    """Key/value file holding the logged-in identity."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path or CLIENT_SESSION_FILE)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def persist_session(self, user: User) -> None:
        data = self._read()
        data[SESSION_KEY] = user["id"]
        data[SESSION_NAME_KEY] = user["username"]
        self._write(data)

    def get_session(self) -> User | None:
        """Return the stored user, or None unless both values are present."""
        data = self._read()
        user_id = data.get(SESSION_KEY)
        username = data.get(SESSION_NAME_KEY)
        if not user_id or not username:
            return None
        return {"id": str(user_id), "username": str(username)}

    def clear_session(self) -> None:
        data = self._read()
        data.pop(SESSION_KEY, None)
        data.pop(SESSION_NAME_KEY, None)
        self._write(data)
