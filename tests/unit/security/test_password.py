"""Unit tests for security/password.py"""

from noteguard.security.password import DUMMY_HASH, hash_password, needs_update, verify_password


def test_hash_and_verify():
    hashed = hash_password("correct horse battery")
    assert hashed != "correct horse battery"
    assert verify_password("correct horse battery", hashed)
    assert not verify_password("wrong", hashed)


def test_long_passwords_are_not_truncated():
    base = "a" * 80
    hashed = hash_password(base + "1")
    assert not verify_password(base + "2", hashed)


def test_dummy_hash_is_a_valid_hash():
    assert not verify_password("anything", DUMMY_HASH)
    assert not needs_update(DUMMY_HASH)
