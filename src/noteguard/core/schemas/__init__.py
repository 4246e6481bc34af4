"""
Pydantic schemas for validating and documenting API requests and responses.

This package exposes the Pydantic models used across the application to
define input/output contracts for authentication, notes, share links, the
admin console and common responses (errors and health).
"""

from .admin import CleanupStatsResponse, DashboardResponse, NoteStatsResponse, SweepResponse, UserStatsResponse
from .auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .common import ErrorResponse, HealthCheckResponse, SuccessResponse
from .notes import (
    AdminNoteResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    SharedNoteResponse,
    ShareTokenResponse,
)

__all__ = [
    # Auth schemas
    "LoginRequest",
    "TokenResponse",
    "RegisterRequest",
    "UserResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "AdminNoteResponse",
    "NoteListResponse",
    "ShareTokenResponse",
    "SharedNoteResponse",
    # Admin schemas
    "UserStatsResponse",
    "NoteStatsResponse",
    "DashboardResponse",
    "SweepResponse",
    "CleanupStatsResponse",
    # Common schemas
    "ErrorResponse",
    "SuccessResponse",
    "HealthCheckResponse",
]
