"""Authentication middleware."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import AccessDeniedError, AuthenticationError
from ..core.repositories.user_repository import UserRepository
from ..core.services.access_guard import Actor
from ..database import get_db_session
from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication."""

    def __init__(self):
        # missing credentials are reported by us, as 401
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> UUID:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials or credentials.scheme.lower() != "bearer":
            raise AuthenticationError("Not authenticated")

        user_id = await get_user_id_from_token(credentials.credentials)
        if not user_id:
            raise AuthenticationError("Invalid token or expired token")

        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: UUID = Depends(JWTBearer())) -> UUID:
    """Get current authenticated user ID."""
    return user_id


async def get_current_actor(
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
) -> Actor:
    """Load the caller; the role always comes from the database, not the token."""
    user = await UserRepository(session).get_by_id(user_id)
    if user is None or not user.can_login():
        raise AuthenticationError("User not found or inactive")
    return Actor.from_user(user)


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise AccessDeniedError("Admin privileges required")
    return actor
