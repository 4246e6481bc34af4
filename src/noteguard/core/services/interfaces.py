"""
Service interfaces for NoteGuard application.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..schemas.admin import DashboardResponse, NoteStatsResponse, UserStatsResponse
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import (
    AdminNoteResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    SharedNoteResponse,
    ShareTokenResponse,
)
from .access_guard import Actor


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT access token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        pass


class INoteService(ABC):
    """Note lifecycle operations."""

    @abstractmethod
    async def create_note(self, actor: Actor, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, actor: Actor, note_id: UUID) -> NoteResponse:
        """Get note by ID."""
        pass

    @abstractmethod
    async def list_user_notes(self, actor: Actor) -> NoteListResponse:
        """List the actor's notes."""
        pass

    @abstractmethod
    async def update_note(self, actor: Actor, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, actor: Actor, note_id: UUID) -> None:
        """Delete note."""
        pass

    @abstractmethod
    async def share_note(
        self, actor: Actor, note_id: UUID, expiration_hours: Optional[int] = None
    ) -> ShareTokenResponse:
        """Issue a share link."""
        pass

    @abstractmethod
    async def revoke_share(self, actor: Actor, note_id: UUID) -> None:
        """Revoke the active share link."""
        pass

    @abstractmethod
    async def get_shared_note(self, token: str) -> SharedNoteResponse:
        """Resolve a share link."""
        pass


class IAdminService(ABC):
    """Admin console operations."""

    @abstractmethod
    async def list_users(self) -> List[UserResponse]:
        pass

    @abstractmethod
    async def list_all_notes(self) -> List[AdminNoteResponse]:
        pass

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> int:
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID) -> None:
        pass

    @abstractmethod
    async def get_user_stats(self) -> UserStatsResponse:
        pass

    @abstractmethod
    async def get_note_stats(self) -> NoteStatsResponse:
        pass

    @abstractmethod
    async def get_dashboard(self) -> DashboardResponse:
        """User and note statistics together."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass
