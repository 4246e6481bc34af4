"""Security utilities."""

from .cipher import CipherService, normalize_key
from .jwt import create_access_token, decode_access_token, get_user_id_from_token
from .password import DUMMY_HASH, hash_password, needs_update, verify_password

__all__ = [
    "CipherService",
    "normalize_key",
    "hash_password",
    "verify_password",
    "needs_update",
    "DUMMY_HASH",
    "create_access_token",
    "decode_access_token",
    "get_user_id_from_token",
]
