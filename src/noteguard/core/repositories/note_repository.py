"""Note repository for database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, desc, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from ..exceptions import InternalError, NotFoundError
from ..models.note import Note
from .base import SQLAlchemyRepository
from .interfaces import INoteStore

logger = logging.getLogger(__name__)


def _expired_clause(column, now: datetime):
    # SQL twin of timeutils.is_expired
    return and_(column.is_not(None), column <= now)


def _live_clause(now: datetime):
    return or_(Note.expiration_time.is_(None), Note.expiration_time > now)


class NoteRepository(SQLAlchemyRepository, INoteStore):
    """SQLAlchemy adapter for INoteStore."""

    def _select(self):
        # rows may have been swept by another session; never trust the identity map
        return select(Note).execution_options(populate_existing=True)

    async def add(self, note: Note) -> Note:
        """Create new note."""
        self.session.add(note)
        await self._commit()
        return note

    async def save(self, note: Note) -> Note:
        """Flush pending changes to a loaded note."""
        try:
            await self.session.commit()
        except StaleDataError as exc:
            # row deleted by another session since it was read
            await self.session.rollback()
            raise NotFoundError() from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Storage commit failed", extra={"error_type": type(exc).__name__})
            raise InternalError("Storage unavailable") from exc
        return note

    async def delete(self, note: Note) -> None:
        await self.session.delete(note)
        await self._commit()

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        result = await self._execute(self._select().where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def get_by_share_token(self, token: str) -> Optional[Note]:
        result = await self._execute(self._select().where(Note.share_token == token))
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID, now: Optional[datetime] = None) -> List[Note]:
        """List a user's notes, newest first."""
        stmt = self._select().where(Note.owner_id == owner_id)
        if now is not None:
            stmt = stmt.where(_live_clause(now))
        result = await self._execute(stmt.order_by(desc(Note.created_at)))
        return list(result.scalars().all())

    async def list_all(self, now: Optional[datetime] = None) -> List[Note]:
        stmt = self._select()
        if now is not None:
            stmt = stmt.where(_live_clause(now))
        result = await self._execute(stmt.order_by(desc(Note.created_at)))
        return list(result.scalars().all())

    async def count_expired(self, now: datetime) -> int:
        stmt = select(func.count(Note.id)).where(_expired_clause(Note.expiration_time, now))
        return await self._scalar_count(stmt)

    async def count_expiring_before(self, instant: datetime) -> int:
        stmt = select(func.count(Note.id)).where(_expired_clause(Note.expiration_time, instant))
        return await self._scalar_count(stmt)

    async def invalidate_expired_shares(self, now: datetime) -> int:
        """Clear lapsed share links without touching updated_at."""
        stmt = (
            update(Note)
            .where(_expired_clause(Note.share_expiration_time, now))
            .values(share_token=None, share_expiration_time=None)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        await self._commit()
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(Note)
            .where(_expired_clause(Note.expiration_time, now))
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        await self._commit()
        return result.rowcount or 0

    async def count_by_owner(self, owner_id: UUID) -> int:
        return await self._scalar_count(
            select(func.count(Note.id)).where(Note.owner_id == owner_id)
        )

    async def count_with_share_token(self) -> int:
        return await self._scalar_count(
            select(func.count(Note.id)).where(Note.share_token.is_not(None))
        )

    async def count_all(self) -> int:
        return await self._scalar_count(select(func.count(Note.id)))

    async def delete_by_owner(self, owner_id: UUID, commit: bool = True) -> int:
        stmt = (
            delete(Note)
            .where(Note.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt)
        if commit:
            await self._commit()
        return result.rowcount or 0
