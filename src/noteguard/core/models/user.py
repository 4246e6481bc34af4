"""
User model for authentication.
"""

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class UserRole(str, Enum):
    """Role options."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """User account model with username/password auth."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(String(20), default=UserRole.USER.value, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        # Enforce max lengths at DB level (SQLite compatible)
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint("role IN ('USER', 'ADMIN')", name="ck_users_role"),
        Index("idx_users_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}', role={self.role})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def can_login(self) -> bool:
        """Check if user can login."""
        return self.is_active
