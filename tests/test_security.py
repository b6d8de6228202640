"""
tests/test_security.py — Password hashing & token round trips
==============================================================
"""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from nexus.security import (
    JWT_ALGORITHM,
    Identity,
    decode_token,
    hash_password,
    issue_token,
    verify_password,
)

SECRET = "s" * 48


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert hashed.startswith("$2")

    def test_verify_accepts_correct_password(self):
        assert verify_password("password123", hash_password("password123"))

    def test_verify_rejects_wrong_password(self):
        assert not verify_password("password124", hash_password("password123"))

    def test_verify_rejects_malformed_hash(self):
        assert verify_password("password123", "not-a-bcrypt-hash") is False

    def test_same_password_gets_distinct_salts(self):
        assert hash_password("password123") != hash_password("password123")


class TestTokens:
    def test_round_trip(self):
        token = issue_token(Identity(7, "a@b.io"), SECRET, timedelta(days=7))
        assert decode_token(token, SECRET) == Identity(7, "a@b.io")

    def test_subject_is_a_string_claim(self):
        token = issue_token(Identity(7, "a@b.io"), SECRET, timedelta(days=7))
        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])
        assert payload["sub"] == "7"
        assert abs(payload["exp"] - payload["iat"] - 7 * 24 * 3600) <= 1

    def test_expired_token_rejected(self):
        token = issue_token(Identity(7, "a@b.io"), SECRET, timedelta(seconds=-10))
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_wrong_secret_rejected(self):
        token = issue_token(Identity(7, "a@b.io"), SECRET, timedelta(days=1))
        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token, "t" * 48)

    def test_non_numeric_subject_rejected(self):
        token = jwt.encode({"sub": "abc", "exp": 9999999999}, SECRET, algorithm=JWT_ALGORITHM)
        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token, SECRET)

    def test_missing_expiry_rejected(self):
        token = jwt.encode({"sub": "1"}, SECRET, algorithm=JWT_ALGORITHM)
        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token, SECRET)
