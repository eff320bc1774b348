"""FastAPI dependencies for database sessions and the signed-in pilot."""

from __future__ import annotations

from collections.abc import Generator

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from pilotlog.api.auth_config import COOKIE_NAME, get_jwt_secret, is_dev_mode
from pilotlog.api.jwt_utils import session_user_id
from pilotlog.db.engine import DEV_USER_ID, SessionLocal
from pilotlog.db.models import UserRow


def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session, committing on success or rolling back on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _token_from_request(request: Request) -> str | None:
    """Session token from the cookie, or from an ``Authorization: Bearer`` header."""
    token = request.cookies.get(COOKIE_NAME)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value:
        return value.strip()
    return None


def current_user_id(
    request: Request,
    db: Session = Depends(get_db),
) -> str:
    """Return the ID of the authenticated user.

    Every flight query is scoped by this ID, so one pilot can never read or
    delete another pilot's flights. Dev mode always yields the dev user.
    Raises 401 when the token is missing, expired, invalid, or names an
    unknown user.
    """
    if is_dev_mode():
        return DEV_USER_ID

    token = _token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        user_id = session_user_id(token, get_jwt_secret())
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")

    if db.get(UserRow, user_id) is None:
        raise HTTPException(status_code=401, detail="User not found")
    return user_id
