"""Authentication service implementation."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import DUMMY_HASH, create_access_token, hash_password, needs_update, verify_password
from ..exceptions import AuthenticationError, ConflictError, NotFoundError
from ..models.user import User, UserRole
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..timeutils import ensure_utc
from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> UserResponse:
        """Register new user."""
        if await self.user_repo.is_username_taken(request.username):
            raise ConflictError("Username already taken")

        user = await self.user_repo.create_user(
            {
                "username": request.username,
                "password_hash": hash_password(request.password),
                "role": UserRole.USER.value,
                "is_active": True,
            }
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._user_to_response(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return a JWT access token."""
        user = await self.user_repo.get_by_username(request.username)
        if user is None:
            # same cost as a real check
            verify_password(request.password, DUMMY_HASH)
            raise AuthenticationError()

        if not verify_password(request.password, user.password_hash) or not user.can_login():
            raise AuthenticationError()

        if needs_update(user.password_hash):
            user.password_hash = hash_password(request.password)
            await self.user_repo.save(user)
            logger.info("Password hash upgraded", extra={"user_id": str(user.id)})

        access_token = create_access_token(data={"sub": str(user.id), "role": user.role})
        logger.info("User logged in", extra={"user_id": str(user.id)})

        return TokenResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=self._user_to_response(user),
        )

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return self._user_to_response(user)

    async def ensure_admin(self, username: str, password: str) -> bool:
        """Create the bootstrap admin if missing. True when an account was created."""
        existing = await self.user_repo.get_by_username(username)
        if existing is not None:
            if not existing.is_admin:
                logger.warning("Bootstrap admin name belongs to a regular user", extra={"user_id": str(existing.id)})
            return False

        user = await self.user_repo.create_user(
            {
                "username": username,
                "password_hash": hash_password(password),
                "role": UserRole.ADMIN.value,
                "is_active": True,
            }
        )
        logger.info("Bootstrap admin created", extra={"user_id": str(user.id)})
        return True

    @staticmethod
    def _user_to_response(user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            username=user.username,
            role=user.role,
            is_active=user.is_active,
            created_at=ensure_utc(user.created_at),
        )
