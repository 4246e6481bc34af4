"""Access tokens (HS256 JWT).

Tokens are stateless: there is no refresh flow and no server-side
revocation, so a token stays valid until ``exp``.
"""

import uuid
from datetime import timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings
from ..core.timeutils import utc_now

ACCESS_TOKEN_TYPE = "access"


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` (normally ``sub`` and ``role``) as an access token."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    claims = dict(data)
    claims["exp"] = utc_now() + lifetime
    claims["type"] = ACCESS_TOKEN_TYPE
    claims["jti"] = str(uuid.uuid4())
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


async def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid access token, else None."""
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    return claims if claims.get("type") == ACCESS_TOKEN_TYPE else None


async def get_user_id_from_token(token: str) -> Optional[UUID]:
    claims = await decode_access_token(token)
    subject = claims.get("sub") if claims else None
    if not subject:
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None
