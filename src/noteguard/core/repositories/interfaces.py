"""
Storage interfaces.

The note lifecycle services talk to persistence only through INoteStore, so a
different backend only needs a new adapter.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ..models.note import Note


class INoteStore(ABC):
    """Persistence port for notes."""

    @abstractmethod
    async def add(self, note: Note) -> Note:
        """Insert a new note and commit."""
        pass

    @abstractmethod
    async def save(self, note: Note) -> Note:
        """Commit pending changes on a loaded note."""
        pass

    @abstractmethod
    async def delete(self, note: Note) -> None:
        """Hard delete a note and commit."""
        pass

    @abstractmethod
    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        pass

    @abstractmethod
    async def get_by_share_token(self, token: str) -> Optional[Note]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID, now: Optional[datetime] = None) -> List[Note]:
        """Owner's notes, newest first; expired ones dropped when ``now`` is given."""
        pass

    @abstractmethod
    async def list_all(self, now: Optional[datetime] = None) -> List[Note]:
        """Every note, newest first; expired ones dropped when ``now`` is given."""
        pass

    @abstractmethod
    async def count_expired(self, now: datetime) -> int:
        pass

    @abstractmethod
    async def count_expiring_before(self, instant: datetime) -> int:
        """Stored notes whose expiration_time is at or before ``instant``."""
        pass

    @abstractmethod
    async def invalidate_expired_shares(self, now: datetime) -> int:
        """Clear share fields on every lapsed share in one statement."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every content-expired note in one statement."""
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: UUID) -> int:
        pass

    @abstractmethod
    async def count_with_share_token(self) -> int:
        pass

    @abstractmethod
    async def count_all(self) -> int:
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_id: UUID, commit: bool = True) -> int:
        """Delete all notes of one owner; leave the commit to the caller if asked."""
        pass
