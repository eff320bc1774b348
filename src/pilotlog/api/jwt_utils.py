"""Signed session tokens identifying a pilot."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from pilotlog.api.auth_config import SESSION_MAX_AGE

JWT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "exp"]


def create_token(user_id: str, email: str, name: str, secret: str) -> str:
    """Sign a token for the pilot, valid for the session cookie lifetime."""
    issued_at = datetime.now(timezone.utc)
    return jwt.encode(
        {
            "sub": user_id,
            "email": email,
            "name": name,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=SESSION_MAX_AGE),
        },
        secret,
        algorithm=JWT_ALGORITHM,
    )


def decode_token(token: str, secret: str) -> dict:
    """Verify signature and expiry and return the claims.

    Tokens without ``sub`` or ``exp`` are rejected. Raises
    jwt.ExpiredSignatureError or another jwt.InvalidTokenError.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[JWT_ALGORITHM],
        options={"require": REQUIRED_CLAIMS},
    )


def session_user_id(token: str, secret: str) -> str:
    """The pilot ID a valid token was issued to."""
    return str(decode_token(token, secret)["sub"])
