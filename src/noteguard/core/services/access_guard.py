"""
Ownership based access control.

The guard only answers "may this actor act on this note". Existence and
expiration are decided by the caller before the guard is consulted, so a
missing or expired note is reported as not found to everyone.
"""

import uuid
from dataclasses import dataclass
from enum import Enum

from ..exceptions import AccessDeniedError
from ..models.note import Note
from ..models.user import User, UserRole


class Capability(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"


class AccessDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller."""

    id: uuid.UUID
    role: str = UserRole.USER.value

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class AccessGuard:
    """Stateless policy object."""

    def holds(self, actor: Actor, note: Note, capability: Capability) -> bool:
        if capability is Capability.OWNER:
            return note.is_owned_by(actor.id)
        if capability is Capability.ADMIN:
            return actor.is_admin
        return False

    def authorize(self, actor: Actor, note: Note, *capabilities: Capability) -> AccessDecision:
        """Allowed when the actor holds any of ``capabilities``."""
        if any(self.holds(actor, note, capability) for capability in capabilities):
            return AccessDecision.ALLOWED
        return AccessDecision.DENIED

    def require(self, actor: Actor, note: Note, *capabilities: Capability) -> None:
        if self.authorize(actor, note, *capabilities) is AccessDecision.DENIED:
            raise AccessDeniedError()
