"""Shared plumbing for SQLAlchemy-backed repositories."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InternalError

logger = logging.getLogger(__name__)


class SQLAlchemyRepository:
    """Base repository; turns driver failures into InternalError."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Storage statement failed", extra={"error_type": type(exc).__name__})
            raise InternalError("Storage unavailable") from exc

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Storage commit failed", extra={"error_type": type(exc).__name__})
            raise InternalError("Storage unavailable") from exc

    async def _scalar_count(self, stmt) -> int:
        result = await self._execute(stmt)
        return result.scalar() or 0
