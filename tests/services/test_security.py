"""Tests for bcrypt password helpers."""

from terminal_terrors.core.security import hash_password, verify_password


def test_hash_and_verify():
    digest = hash_password("secret1", rounds=4)
    assert digest != "secret1"
    assert verify_password("secret1", digest) is True
    assert verify_password("wrong", digest) is False


def test_hashes_are_salted():
    assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)


def test_garbage_digest_does_not_verify():
    assert verify_password("secret1", "not-a-bcrypt-hash") is False
