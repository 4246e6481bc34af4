"""
Note management schemas.

These schemas define the API contracts for note CRUD operations and share
links. Response objects always carry decrypted text and are built by the
service layer, never from a mapped Note directly.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=255, description="Note title")
    content: str = Field(min_length=1, description="Note content")
    expiration_hours: Optional[int] = Field(
        default=None, ge=1, description="Hours until the note expires; omit to keep it"
    )

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v):
        if len(v.strip()) == 0:
            raise ValueError("Value cannot be blank")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Door code",
                "content": "4711, valid until Friday",
                "expiration_hours": 48,
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Both fields are re-encrypted."""

    title: str = Field(min_length=1, max_length=255, description="Note title")
    content: str = Field(min_length=1, description="Note content")

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v):
        if len(v.strip()) == 0:
            raise ValueError("Value cannot be blank")
        return v


class NoteResponse(BaseModel):
    """Decrypted note, as seen by its owner or an admin."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    owner_id: uuid.UUID = Field(description="Note owner ID")

    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last content update timestamp")
    expiration_time: Optional[datetime] = Field(
        default=None, description="Instant after which the note is gone"
    )

    share_token: Optional[str] = Field(default=None, description="Active share token")
    share_expiration_time: Optional[datetime] = Field(
        default=None, description="Instant after which the share link stops working"
    )


class AdminNoteResponse(NoteResponse):
    """Note as listed on the admin console."""

    owner_username: Optional[str] = Field(default=None, description="Note owner username")


class NoteListResponse(BaseModel):
    """Owner's notes, newest first."""

    notes: List[NoteResponse]
    total: int = Field(description="Number of notes returned")
    skipped: int = Field(default=0, description="Notes left out because they could not be decrypted")


class ShareTokenResponse(BaseModel):
    """Freshly issued share link."""

    share_token: str = Field(description="Opaque share token")
    share_url: str = Field(description="Public path resolving the token")
    expiration_time: datetime = Field(description="Instant after which the link stops working")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "share_token": "N3Xm4oQ0Qy8b1l8xq8b2C6dVvH1k2yq7Zb7m4bQxJ2E",
                "share_url": "/api/notes/share/N3Xm4oQ0Qy8b1l8xq8b2C6dVvH1k2yq7Zb7m4bQxJ2E",
                "expiration_time": "2026-10-20T10:30:00Z",
            }
        }
    )


class SharedNoteResponse(BaseModel):
    """Note opened through a share link; no owner details."""

    title: str
    content: str
    created_at: datetime
    expiration_time: Optional[datetime] = None
    share_expiration_time: datetime
