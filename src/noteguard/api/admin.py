"""Admin API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..core.schemas.admin import (
    CleanupStatsResponse,
    DashboardResponse,
    NoteStatsResponse,
    SweepResponse,
    UserStatsResponse,
)
from ..core.schemas.auth import UserResponse
from ..core.schemas.common import SuccessResponse
from ..core.schemas.notes import AdminNoteResponse
from ..core.services import AdminService, CleanupScheduler
from ..core.timeutils import Clock
from ..middleware.auth import require_admin
from .dependencies import get_admin_service, get_cleanup_scheduler, get_clock

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=List[UserResponse])
async def list_users(admin_service: AdminService = Depends(get_admin_service)):
    return await admin_service.list_users()


@router.delete("/users/{user_id}", response_model=SuccessResponse)
async def delete_user(user_id: UUID, admin_service: AdminService = Depends(get_admin_service)):
    """Delete a user together with all of their notes."""
    deleted_notes = await admin_service.delete_user(user_id)
    return SuccessResponse(message="User deleted successfully", data={"notes_deleted": deleted_notes})


@router.get("/notes", response_model=List[AdminNoteResponse])
async def list_all_notes(admin_service: AdminService = Depends(get_admin_service)):
    """Every live note, decrypted."""
    return await admin_service.list_all_notes()


@router.delete("/notes/{note_id}", response_model=SuccessResponse)
async def delete_note(note_id: UUID, admin_service: AdminService = Depends(get_admin_service)):
    await admin_service.delete_note(note_id)
    return SuccessResponse(message="Note deleted successfully")


@router.get("/stats/users", response_model=UserStatsResponse)
async def user_stats(admin_service: AdminService = Depends(get_admin_service)):
    return await admin_service.get_user_stats()


@router.get("/stats/notes", response_model=NoteStatsResponse)
async def note_stats(admin_service: AdminService = Depends(get_admin_service)):
    return await admin_service.get_note_stats()


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(admin_service: AdminService = Depends(get_admin_service)):
    return await admin_service.get_dashboard()


@router.post("/cleanup", response_model=SweepResponse)
async def run_cleanup(scheduler: CleanupScheduler = Depends(get_cleanup_scheduler)):
    """Run one sweep now."""
    result = await scheduler.run_manual()
    return SweepResponse(
        shares_invalidated=result.shares_invalidated,
        notes_deleted=result.notes_deleted,
        ran_at=result.ran_at,
    )


@router.get("/cleanup/stats", response_model=CleanupStatsResponse)
async def cleanup_stats(
    hours: int = Query(24, ge=0),
    scheduler: CleanupScheduler = Depends(get_cleanup_scheduler),
    clock: Clock = Depends(get_clock),
):
    """Notes that will be purged within the next ``hours``."""
    return CleanupStatsResponse(
        hours=hours,
        expiring_notes=await scheduler.count_expiring_within(hours),
        checked_at=clock(),
    )
