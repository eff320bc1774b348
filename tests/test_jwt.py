"""Tests for session token creation and validation."""

from __future__ import annotations

import time

import jwt as pyjwt
import pytest

from pilotlog.api.auth_config import SESSION_MAX_AGE
from pilotlog.api.jwt_utils import JWT_ALGORITHM, create_token, decode_token, session_user_id

SECRET = "test-secret-key"


class TestCreateToken:
    def test_claims(self):
        token = create_token("user-123", "pilot@example.com", "Test Pilot", SECRET)
        payload = decode_token(token, SECRET)
        assert payload["sub"] == "user-123"
        assert payload["email"] == "pilot@example.com"
        assert payload["name"] == "Test Pilot"
        assert payload["exp"] - payload["iat"] == SESSION_MAX_AGE

    def test_different_secrets_fail(self):
        token = create_token("user-123", "pilot@example.com", "Test", SECRET)
        with pytest.raises(pyjwt.InvalidSignatureError):
            decode_token(token, "wrong-secret")


class TestDecodeToken:
    def test_expired_token(self):
        payload = {
            "sub": "user-123",
            "iat": time.time() - 3600,
            "exp": time.time() - 1,
        }
        token = pyjwt.encode(payload, SECRET, algorithm=JWT_ALGORITHM)
        with pytest.raises(pyjwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_invalid_token_string(self):
        with pytest.raises(pyjwt.InvalidTokenError):
            decode_token("not-a-jwt", SECRET)

    def test_missing_subject_rejected(self):
        token = pyjwt.encode({"exp": time.time() + 60}, SECRET, algorithm=JWT_ALGORITHM)
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            decode_token(token, SECRET)

    def test_missing_expiry_rejected(self):
        token = pyjwt.encode({"sub": "user-123"}, SECRET, algorithm=JWT_ALGORITHM)
        with pytest.raises(pyjwt.InvalidTokenError):
            decode_token(token, SECRET)


class TestSessionUserId:
    def test_returns_subject(self):
        token = create_token("user-123", "pilot@example.com", "Test", SECRET)
        assert session_user_id(token, SECRET) == "user-123"
