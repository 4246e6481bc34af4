"""Note service implementation."""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security.cipher import CipherService
from ..exceptions import DecryptionError, NotFoundError, ValidationError
from ..models.note import Note
from ..repositories.interfaces import INoteStore
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
    SharedNoteResponse,
    ShareTokenResponse,
)
from ..timeutils import Clock, ensure_utc, utc_now
from .access_guard import AccessDecision, AccessGuard, Actor, Capability
from .interfaces import INoteService
from .share_tokens import ShareTokenManager

logger = logging.getLogger(__name__)

SHARE_PATH = "/api/notes/share/{token}"


def decrypt_note_fields(cipher: CipherService, note: Note) -> tuple[str, str]:
    """Plaintext title and content. Failures are logged by note id only."""
    try:
        return cipher.decrypt(note.title), cipher.decrypt(note.content)
    except DecryptionError:
        logger.warning("Note decryption failed", extra={"note_id": str(note.id)})
        raise


class NoteService(INoteService):
    """Note lifecycle: encrypt on the way in, decrypt on the way out.

    Mapped Note objects only ever hold ciphertext; plaintext lives in the
    response objects this service returns.
    """

    def __init__(
        self,
        session: AsyncSession,
        cipher: CipherService,
        clock: Clock = utc_now,
        store: Optional[INoteStore] = None,
    ):
        self.session = session
        self.cipher = cipher
        self.clock = clock
        self.note_repo = store or NoteRepository(session)
        self.guard = AccessGuard()
        self.shares = ShareTokenManager(self.note_repo, self.guard, clock)
        self.settings = get_settings()

    async def create_note(self, actor: Actor, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        now = self.clock()
        expiration_time = None
        if request.expiration_hours is not None:
            if request.expiration_hours > self.settings.max_note_expiration_hours:
                raise ValidationError(
                    f"Note expiration cannot exceed {self.settings.max_note_expiration_hours} hours"
                )
            expiration_time = now + timedelta(hours=request.expiration_hours)

        note = Note(
            owner_id=actor.id,
            title=self.cipher.encrypt(request.title),
            content=self.cipher.encrypt(request.content),
            created_at=now,
            updated_at=now,
            expiration_time=expiration_time,
        )
        note = await self.note_repo.add(note)

        logger.info("Note created", extra={"note_id": str(note.id), "owner_id": str(actor.id)})
        return self._build_response(note, request.title, request.content)

    async def get_note(self, actor: Actor, note_id: UUID) -> NoteResponse:
        """Get note by ID.

        Non-owners without the admin role get the same NotFoundError as for a
        missing note, so ids cannot be guessed.
        """
        note = await self._get_live_note(note_id)
        if self.guard.authorize(actor, note, Capability.OWNER, Capability.ADMIN) is AccessDecision.DENIED:
            raise NotFoundError()
        return self._decrypt_response(note)

    async def list_user_notes(self, actor: Actor) -> NoteListResponse:
        """List the actor's live notes, newest first.

        A note that fails to decrypt is left out and logged by id; the rest of
        the list is still returned.
        """
        now = self.clock()
        notes = await self.note_repo.list_by_owner(actor.id, now=now)

        items = []
        skipped = 0
        for note in notes:
            if note.is_expired(now):
                continue
            try:
                items.append(self._decrypt_response(note))
            except DecryptionError:
                skipped += 1

        return NoteListResponse(notes=items, total=len(items), skipped=skipped)

    async def update_note(self, actor: Actor, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Replace title and content; share state and expiration stay."""
        note = await self._get_live_note(note_id)
        self.guard.require(actor, note, Capability.OWNER, Capability.ADMIN)

        note.title = self.cipher.encrypt(request.title)
        note.content = self.cipher.encrypt(request.content)
        note.updated_at = self.clock()
        await self.note_repo.save(note)

        logger.info("Note updated", extra={"note_id": str(note.id)})
        return self._build_response(note, request.title, request.content)

    async def delete_note(self, actor: Actor, note_id: UUID) -> None:
        """Delete note."""
        note = await self._get_live_note(note_id)
        self.guard.require(actor, note, Capability.OWNER, Capability.ADMIN)

        await self.note_repo.delete(note)
        logger.info("Note deleted", extra={"note_id": str(note_id), "by_admin": actor.is_admin})

    async def share_note(
        self, actor: Actor, note_id: UUID, expiration_hours: Optional[int] = None
    ) -> ShareTokenResponse:
        """Issue a share link for one of the actor's notes."""
        hours = expiration_hours
        if hours is None:
            hours = self.settings.default_share_expiration_hours
        note = await self._get_live_note(note_id)
        if hours > self.settings.max_share_expiration_hours:
            raise ValidationError(
                f"Share expiration cannot exceed {self.settings.max_share_expiration_hours} hours"
            )

        grant = await self.shares.issue(actor, note, timedelta(hours=hours))
        return ShareTokenResponse(
            share_token=grant.token,
            share_url=SHARE_PATH.format(token=grant.token),
            expiration_time=grant.expires_at,
        )

    async def revoke_share(self, actor: Actor, note_id: UUID) -> None:
        note = await self._get_live_note(note_id)
        await self.shares.revoke(actor, note)

    async def get_shared_note(self, token: str) -> SharedNoteResponse:
        """Resolve a public share link. No authentication involved."""
        note = await self.shares.resolve(token)
        title, content = decrypt_note_fields(self.cipher, note)
        return SharedNoteResponse(
            title=title,
            content=content,
            created_at=ensure_utc(note.created_at),
            expiration_time=ensure_utc(note.expiration_time),
            share_expiration_time=ensure_utc(note.share_expiration_time),
        )

    async def _get_live_note(self, note_id: UUID) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if note is None or note.is_expired(self.clock()):
            raise NotFoundError()
        return note

    def _decrypt_response(self, note: Note) -> NoteResponse:
        title, content = decrypt_note_fields(self.cipher, note)
        return self._build_response(note, title, content)

    def _build_response(self, note: Note, title: str, content: str) -> NoteResponse:
        return NoteResponse(
            id=note.id,
            title=title,
            content=content,
            owner_id=note.owner_id,
            created_at=ensure_utc(note.created_at),
            updated_at=ensure_utc(note.updated_at),
            expiration_time=ensure_utc(note.expiration_time),
            share_token=note.share_token,
            share_expiration_time=ensure_utc(note.share_expiration_time),
        )
