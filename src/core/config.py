"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("CALENDAR_DB_PATH", PROJECT_ROOT / "data" / "db" / "calendar.db")
)

# =============================================================================
# EVENT CONFIGURATION
# =============================================================================

EVENT_COLORS = [
    "bg-blue-500",
    "bg-green-500",
    "bg-red-500",
    "bg-yellow-500",
    "bg-purple-500",
    "bg-pink-500",
]
DEFAULT_EVENT_COLOR = EVENT_COLORS[0]
DEFAULT_EVENT_TIME = "09:00"

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# =============================================================================
# AUTH CONFIGURATION
# =============================================================================

PASSWORD_HASH_METHOD = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")

# =============================================================================
# GEMINI CREDENTIALS (from environment)
# =============================================================================

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", os.environ.get("API_KEY", ""))
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "3000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"

# =============================================================================
# CLIENT CONFIGURATION
# =============================================================================

CLIENT_API_URL = os.environ.get("CALENDAR_API_URL", "http://127.0.0.1:3000/api")
CLIENT_SESSION_FILE = Path(
    os.environ.get(
        "CALENDAR_SESSION_FILE", Path.home() / ".calendar_app" / "session.json"
    )
)
CLIENT_HTTP_TIMEOUT = float(os.environ.get("CALENDAR_HTTP_TIMEOUT", "10"))
CLIENT_LOG_LEVEL = os.environ.get("CALENDAR_LOG_LEVEL", "WARNING").upper()
