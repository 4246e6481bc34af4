"""Share link issuance, resolution and revocation."""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..exceptions import NotFoundError, ValidationError
from ..models.note import Note
from ..repositories.interfaces import INoteStore
from ..timeutils import Clock, utc_now
from .access_guard import AccessGuard, Actor, Capability

logger = logging.getLogger(__name__)

SHARE_NOT_FOUND = "Share link not found or expired"
TOKEN_BYTES = 32  # 256 bits of entropy


@dataclass(frozen=True)
class ShareGrant:
    token: str
    expires_at: datetime


def generate_share_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


class ShareTokenManager:
    """Owns the share_token / share_expiration_time pair on notes.

    Only the owner may issue or revoke a link. A token is usable until its own
    expiration and never past the note's content expiration.
    """

    def __init__(self, store: INoteStore, guard: AccessGuard | None = None, clock: Clock = utc_now):
        self.store = store
        self.guard = guard or AccessGuard()
        self.clock = clock

    async def issue(self, actor: Actor, note: Note, ttl: timedelta) -> ShareGrant:
        """Attach a fresh token to ``note``, replacing any earlier one."""
        self.guard.require(actor, note, Capability.OWNER)
        if ttl <= timedelta(0):
            raise ValidationError("Share lifetime must be positive")

        grant = ShareGrant(token=generate_share_token(), expires_at=self.clock() + ttl)
        note.set_share(grant.token, grant.expires_at)
        await self.store.save(note)

        logger.info("Share link issued", extra={"note_id": str(note.id), "expires_at": grant.expires_at})
        return grant

    async def resolve(self, token: str) -> Note:
        """Note behind an active token; every failure looks the same."""
        if not token:
            raise NotFoundError(SHARE_NOT_FOUND)

        note = await self.store.get_by_share_token(token)
        now = self.clock()
        if note is None or not note.share_is_active(now) or note.is_expired(now):
            raise NotFoundError(SHARE_NOT_FOUND)
        return note

    async def revoke(self, actor: Actor, note: Note) -> None:
        self.guard.require(actor, note, Capability.OWNER)
        if not note.has_share:
            return

        note.clear_share()
        await self.store.save(note)
        logger.info("Share link revoked", extra={"note_id": str(note.id)})
