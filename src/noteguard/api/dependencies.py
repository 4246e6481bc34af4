"""FastAPI dependencies wiring services to the request session."""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.services import AdminService, AuthService, CleanupScheduler, NoteService
from ..core.timeutils import Clock, utc_now
from ..database import get_db_session
from ..security.cipher import CipherService


@lru_cache
def get_cipher() -> CipherService:
    """One cipher per process, keyed from settings."""
    return CipherService(get_settings().encryption_secret_key)


def get_clock() -> Clock:
    return utc_now


def get_note_service(
    session: AsyncSession = Depends(get_db_session),
    cipher: CipherService = Depends(get_cipher),
    clock: Clock = Depends(get_clock),
) -> NoteService:
    return NoteService(session, cipher, clock=clock)


def get_admin_service(
    session: AsyncSession = Depends(get_db_session),
    cipher: CipherService = Depends(get_cipher),
    clock: Clock = Depends(get_clock),
) -> AdminService:
    return AdminService(session, cipher, clock=clock)


def get_cleanup_scheduler(request: Request) -> CleanupScheduler:
    return request.app.state.cleanup_scheduler


def get_auth_service(session: AsyncSession = Depends(get_db_session)) -> AuthService:
    return AuthService(session)
