"""At-rest encryption for note title and content."""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import DecryptionError

KEY_SIZE = 32  # AES-256
NONCE_SIZE = 12
TAG_SIZE = 16


def normalize_key(secret: str) -> bytes:
    """Pad with "0" or truncate the secret to exactly KEY_SIZE bytes."""
    if not secret:
        raise ValueError("Encryption secret cannot be empty")
    raw = secret.encode("utf-8")
    return raw[:KEY_SIZE].ljust(KEY_SIZE, b"0")


class CipherService:
    """AES-256-GCM with a fresh random nonce per message.

    Stored form is ``urlsafe_b64(nonce || ciphertext || tag)``. Equal plaintexts
    give different ciphertexts, and any tampering is detected on decrypt.
    """

    def __init__(self, secret: str):
        self._aesgcm = AESGCM(normalize_key(secret))

    def __repr__(self) -> str:
        return "CipherService(key=***)"

    def encrypt(self, plaintext: str) -> str:
        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.urlsafe_b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        try:
            blob = base64.urlsafe_b64decode(ciphertext.encode("ascii"))
        except (binascii.Error, ValueError, UnicodeEncodeError) as exc:
            raise DecryptionError() from exc

        if len(blob) < NONCE_SIZE + TAG_SIZE:
            raise DecryptionError()

        nonce, sealed = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            plaintext = self._aesgcm.decrypt(nonce, sealed, None)
        except InvalidTag as exc:
            raise DecryptionError() from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError() from exc
