"""Middleware for authentication and other cross-cutting concerns."""

from .auth import JWTBearer, get_current_actor, get_current_user_id, require_admin

__all__ = ["get_current_user_id", "get_current_actor", "require_admin", "JWTBearer"]
