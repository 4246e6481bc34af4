"""
Database models for NoteGuard.

SQLAlchemy ORM models defining the schema. Note title and content columns hold
ciphertext only; decrypted views are built by the service layer.

Models included:
    - User: account with username/password authentication and a role
    - Note: encrypted note with optional content expiration and share link
"""

from .base import BaseModel
from .note import Note
from .user import User, UserRole

__all__ = [
    "BaseModel",
    "User",
    "UserRole",
    "Note",
]
