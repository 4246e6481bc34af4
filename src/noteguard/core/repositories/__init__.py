"""Repository layer for data access."""

from .interfaces import INoteStore
from .note_repository import NoteRepository
from .user_repository import UserRepository

__all__ = [
    "INoteStore",
    "NoteRepository",
    "UserRepository",
]
