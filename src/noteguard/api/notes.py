"""Notes API endpoints, including share links."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ..core.schemas.notes import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    SharedNoteResponse,
    ShareTokenResponse,
)
from ..core.services import Actor, NoteService
from ..middleware.auth import get_current_actor
from .dependencies import get_note_service

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return await note_service.create_note(actor, request)


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """List the caller's live notes, newest first."""
    return await note_service.list_user_notes(actor)


@router.get("/share/{token}", response_model=SharedNoteResponse)
async def get_shared_note(token: str, note_service: NoteService = Depends(get_note_service)):
    """Open a shared note. No authentication required."""
    return await note_service.get_shared_note(token)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return await note_service.get_note(actor, note_id)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note."""
    return await note_service.update_note(actor, note_id, request)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note."""
    await note_service.delete_note(actor, note_id)


@router.post("/{note_id}/share", response_model=ShareTokenResponse)
async def share_note(
    note_id: UUID,
    expiration_hours: Optional[int] = Query(None, ge=1),
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Issue a share link; any earlier link for the note stops working."""
    return await note_service.share_note(actor, note_id, expiration_hours)


@router.delete("/{note_id}/share", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_share(
    note_id: UUID,
    actor: Actor = Depends(get_current_actor),
    note_service: NoteService = Depends(get_note_service),
):
    """Revoke the share link."""
    await note_service.revoke_share(actor, note_id)
