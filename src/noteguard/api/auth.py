"""Authentication API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from ..core.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..core.services import AuthService
from ..middleware.auth import get_current_user_id
from .dependencies import get_auth_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Create a regular user account."""
    return await auth_service.register_user(request)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Exchange username and password for an access token."""
    return await auth_service.authenticate_user(request)


@router.get("/me", response_model=UserResponse)
async def me(
    current_user_id: UUID = Depends(get_current_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.get_current_user(current_user_id)
