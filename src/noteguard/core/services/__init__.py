"""
Service layer interfaces and implementations.

Services raise NoteGuardError subclasses and return pydantic schemas; they
never touch HTTP concerns.
"""

from .interfaces import IAdminService, IAuthService, IHealthService, INoteService

from .access_guard import AccessDecision, AccessGuard, Actor, Capability
from .admin_service import AdminService
from .auth_service import AuthService
from .cleanup import CleanupScheduler, SweepResult
from .health_service import HealthService
from .note_service import NoteService
from .share_tokens import ShareGrant, ShareTokenManager

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "IAdminService",
    "IHealthService",

    # Access control
    "AccessGuard",
    "AccessDecision",
    "Actor",
    "Capability",

    # Implementations
    "AuthService",
    "NoteService",
    "AdminService",
    "HealthService",
    "ShareTokenManager",
    "ShareGrant",
    "CleanupScheduler",
    "SweepResult",
]
