"""User repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from ..exceptions import ConflictError
from ..models.user import User, UserRole
from .base import SQLAlchemyRepository


class UserRepository(SQLAlchemyRepository):
    """Repository for user database operations."""

    async def create_user(self, user_data: dict) -> User:
        """Create new user."""
        user = User(**user_data)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Username already taken") from exc
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        user = await self.get_by_username(username)
        return user is not None

    async def list_users(self) -> List[User]:
        """All users, oldest account first."""
        result = await self._execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def count_users(self, role: Optional[UserRole] = None) -> int:
        stmt = select(func.count(User.id))
        if role is not None:
            stmt = stmt.where(User.role == role.value)
        return await self._scalar_count(stmt)

    async def delete_user(self, user: User) -> None:
        """Delete user and commit whatever else is pending in the session."""
        await self.session.delete(user)
        await self._commit()

    async def save(self, user: User) -> User:
        await self._commit()
        return user
