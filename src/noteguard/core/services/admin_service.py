"""Admin console operations. Callers are checked for the admin role upstream."""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...security.cipher import CipherService
from ..exceptions import AccessDeniedError, DecryptionError, NotFoundError
from ..models.user import User, UserRole
from ..repositories.note_repository import NoteRepository
from ..repositories.user_repository import UserRepository
from ..schemas.admin import DashboardResponse, NoteStatsResponse, UserStatsResponse
from ..schemas.auth import UserResponse
from ..schemas.notes import AdminNoteResponse
from ..timeutils import Clock, ensure_utc, utc_now
from .interfaces import IAdminService
from .note_service import decrypt_note_fields

logger = logging.getLogger(__name__)


class AdminService(IAdminService):
    """Admin service implementation."""

    def __init__(self, session: AsyncSession, cipher: CipherService, clock: Clock = utc_now):
        self.session = session
        self.cipher = cipher
        self.clock = clock
        self.user_repo = UserRepository(session)
        self.note_repo = NoteRepository(session)

    async def list_users(self) -> List[UserResponse]:
        users = await self.user_repo.list_users()
        responses = []
        for user in users:
            notes_count = await self.note_repo.count_by_owner(user.id)
            responses.append(self._user_to_response(user, notes_count))
        logger.info("Admin listed users", extra={"count": len(responses)})
        return responses

    async def list_all_notes(self) -> List[AdminNoteResponse]:
        """Every live note, decrypted, newest first; undecryptable ones are skipped."""
        now = self.clock()
        notes = await self.note_repo.list_all(now=now)
        usernames = {user.id: user.username for user in await self.user_repo.list_users()}

        responses = []
        for note in notes:
            if note.is_expired(now):
                continue
            try:
                title, content = decrypt_note_fields(self.cipher, note)
            except DecryptionError:
                continue

            responses.append(
                AdminNoteResponse(
                    id=note.id,
                    title=title,
                    content=content,
                    owner_id=note.owner_id,
                    owner_username=usernames.get(note.owner_id),
                    created_at=ensure_utc(note.created_at),
                    updated_at=ensure_utc(note.updated_at),
                    expiration_time=ensure_utc(note.expiration_time),
                    share_token=note.share_token,
                    share_expiration_time=ensure_utc(note.share_expiration_time),
                )
            )
        return responses

    async def delete_user(self, user_id: UUID) -> int:
        """Delete a regular user and all of their notes in one transaction."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.is_admin:
            raise AccessDeniedError("Admin accounts cannot be deleted")

        deleted_notes = await self.note_repo.delete_by_owner(user.id, commit=False)
        await self.user_repo.delete_user(user)

        logger.info("Admin deleted user", extra={"user_id": str(user_id), "notes_deleted": deleted_notes})
        return deleted_notes

    async def delete_note(self, note_id: UUID) -> None:
        note = await self.note_repo.get_by_id(note_id)
        if note is None or note.is_expired(self.clock()):
            raise NotFoundError()
        await self.note_repo.delete(note)
        logger.info("Admin deleted note", extra={"note_id": str(note_id)})

    async def get_user_stats(self) -> UserStatsResponse:
        total = await self.user_repo.count_users()
        admins = await self.user_repo.count_users(role=UserRole.ADMIN)
        return UserStatsResponse(total_users=total, admin_users=admins, regular_users=total - admins)

    async def get_note_stats(self) -> NoteStatsResponse:
        return NoteStatsResponse(
            total_notes=await self.note_repo.count_all(),
            notes_with_shares=await self.note_repo.count_with_share_token(),
            expired_notes=await self.note_repo.count_expired(self.clock()),
        )

    async def get_dashboard(self) -> DashboardResponse:
        return DashboardResponse(users=await self.get_user_stats(), notes=await self.get_note_stats())

    @staticmethod
    def _user_to_response(user: User, notes_count: int) -> UserResponse:
        return UserResponse(
            id=user.id,
            username=user.username,
            role=user.role,
            is_active=user.is_active,
            created_at=ensure_utc(user.created_at),
            notes_count=notes_count,
        )
