# Note model for encrypted user content
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..timeutils import is_expired
from .base import BaseModel


class Note(BaseModel):
    """Note whose title and content are stored as ciphertext."""

    __tablename__ = "notes"

    # ciphertext produced by CipherService, never plaintext
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    expiration_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    share_token: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    share_expiration_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        # token and its expiry live and die together
        CheckConstraint(
            "(share_token IS NULL) = (share_expiration_time IS NULL)",
            name="ck_notes_share_pair",
        ),
        Index("idx_notes_owner_created", "owner_id", "created_at"),
        Index("idx_notes_expiration_time", "expiration_time"),
        Index("idx_notes_share_expiration_time", "share_expiration_time"),
    )

    def __repr__(self) -> str:
        # title is ciphertext; keep it out of reprs anyway
        return f"<Note(id={self.id}, owner_id={self.owner_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id == user_id

    def is_expired(self, now: datetime) -> bool:
        """Content expiration; an expired note is invisible to every read."""
        return is_expired(self.expiration_time, now)

    @property
    def has_share(self) -> bool:
        return self.share_token is not None

    def share_is_active(self, now: datetime) -> bool:
        return self.has_share and not is_expired(self.share_expiration_time, now)

    def set_share(self, token: str, expires_at: datetime) -> None:
        """Attach a share link."""
        if not token:
            raise ValueError("Share token cannot be empty")
        self.share_token = token
        self.share_expiration_time = expires_at

    def clear_share(self) -> None:
        """Drop the share link, leaving the note itself alone."""
        self.share_token = None
        self.share_expiration_time = None
