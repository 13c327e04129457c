"""Unit tests for password hashing."""

import bcrypt

from recordhub.domain.passwords import MAX_PASSWORD_BYTES, hash_password


def test_hash_is_salted_and_verifiable():
    first = hash_password("Secret@123", rounds=4)
    second = hash_password("Secret@123", rounds=4)

    assert first != second
    assert "Secret@123" not in first
    assert first.startswith("$2b$04$")
    assert bcrypt.checkpw(b"Secret@123", first.encode())
    assert not bcrypt.checkpw(b"Secret@124", first.encode())


def test_long_passwords_are_hashed_on_their_first_72_bytes():
    password = "Aa1@" * 30

    hashed = hash_password(password, rounds=4)

    assert bcrypt.checkpw(password.encode()[:MAX_PASSWORD_BYTES], hashed.encode())
