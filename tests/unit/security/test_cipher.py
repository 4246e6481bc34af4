"""Unit tests for security/cipher.py"""

import base64

import pytest

from noteguard.core.exceptions import DecryptionError, ErrorKind
from noteguard.security.cipher import KEY_SIZE, CipherService, normalize_key


@pytest.mark.parametrize("plaintext", ["", "hello", "zürich ✓ 東京", "x" * 10_000, "line\nbreak\ttab"])
def test_decrypt_reverses_encrypt(plaintext):
    cipher = CipherService("unit-test-secret")
    assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext


def test_same_plaintext_gives_different_ciphertexts():
    cipher = CipherService("unit-test-secret")
    first = cipher.encrypt("same")
    second = cipher.encrypt("same")
    assert first != second
    assert cipher.decrypt(first) == cipher.decrypt(second) == "same"


def test_ciphertext_does_not_contain_plaintext():
    cipher = CipherService("unit-test-secret")
    token = cipher.encrypt("top secret launch codes")
    assert "launch" not in token
    assert "launch" not in base64.urlsafe_b64decode(token).decode("latin-1")


def test_wrong_key_fails():
    token = CipherService("key-one").encrypt("payload")
    with pytest.raises(DecryptionError) as exc_info:
        CipherService("key-two").decrypt(token)
    assert exc_info.value.kind is ErrorKind.DECRYPTION_FAILED


def test_tampered_ciphertext_fails():
    cipher = CipherService("unit-test-secret")
    raw = bytearray(base64.urlsafe_b64decode(cipher.encrypt("payload")))
    raw[-1] ^= 0x01
    with pytest.raises(DecryptionError):
        cipher.decrypt(base64.urlsafe_b64encode(bytes(raw)).decode("ascii"))


@pytest.mark.parametrize("garbage", ["not base64 at all!!", "", "YWJj", "é"])
def test_malformed_input_fails(garbage):
    with pytest.raises(DecryptionError):
        CipherService("unit-test-secret").decrypt(garbage)


def test_error_message_leaks_nothing():
    cipher = CipherService("very-private-secret")
    with pytest.raises(DecryptionError) as exc_info:
        cipher.decrypt(CipherService("other").encrypt("hidden words"))
    message = str(exc_info.value)
    assert "very-private-secret" not in message
    assert "hidden words" not in message


def test_normalize_key_pads_and_truncates():
    assert normalize_key("abc") == b"abc" + b"0" * (KEY_SIZE - 3)
    assert normalize_key("k" * 100) == b"k" * KEY_SIZE
    assert len(normalize_key("ü" * 20)) == KEY_SIZE


def test_short_and_padded_secret_are_the_same_key():
    token = CipherService("abc").encrypt("payload")
    assert CipherService("abc" + "0" * 29).decrypt(token) == "payload"


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        CipherService("")


def test_repr_hides_key():
    assert "secret" not in repr(CipherService("secret"))
