"""API route modules."""

from .ai import router as ai_router
from .auth import router as auth_router
from .events import router as events_router
from .health import router as health_router

__all__ = ["health_router", "auth_router", "events_router", "ai_router"]
