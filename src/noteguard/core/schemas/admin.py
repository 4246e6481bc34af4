"""Admin console schemas - statistics and cleanup results."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserStatsResponse(BaseModel):
    total_users: int
    admin_users: int
    regular_users: int


class NoteStatsResponse(BaseModel):
    total_notes: int
    notes_with_shares: int = Field(description="Notes currently carrying a share token")
    expired_notes: int = Field(description="Expired notes waiting for the next sweep")


class DashboardResponse(BaseModel):
    """User and note statistics in one response."""

    users: UserStatsResponse
    notes: NoteStatsResponse


class SweepResponse(BaseModel):
    """Outcome of one cleanup run."""

    shares_invalidated: int
    notes_deleted: int
    ran_at: datetime


class CleanupStatsResponse(BaseModel):
    hours: int
    expiring_notes: int = Field(description="Stored notes expiring within the window, overdue ones included")
    checked_at: datetime
