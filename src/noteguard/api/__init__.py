"""API routers for NoteGuard."""

from .admin import router as admin_router
from .auth import router as auth_router
from .health import router as health_router
from .notes import router as notes_router

__all__ = ["auth_router", "notes_router", "admin_router", "health_router"]
