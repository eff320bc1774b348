"""Authentication endpoints: Google sign-in, sign-out, current pilot."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from pilotlog.api.auth_config import (
    COOKIE_NAME,
    SESSION_MAX_AGE,
    create_oauth,
    get_jwt_secret,
    is_dev_mode,
)
from pilotlog.api.jwt_utils import create_token
from pilotlog.db.deps import current_user_id, get_db
from pilotlog.db.models import UserRow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

oauth = create_oauth()


@router.get("/login/google")
async def login_google(request: Request):
    """Send the browser to Google's consent screen."""
    redirect_uri = request.url_for("callback_google")
    # Behind the production reverse proxy the callback must be https
    if not is_dev_mode():
        redirect_uri = str(redirect_uri).replace("http://", "https://")
    return await oauth.google.authorize_redirect(request, redirect_uri)


@router.get("/callback/google")
async def callback_google(request: Request, db: Session = Depends(get_db)):
    """Finish sign-in: upsert the pilot and set the session cookie."""
    try:
        token = await oauth.google.authorize_access_token(request)
    except Exception as exc:
        logger.warning("OAuth callback failed: %s", exc)
        raise HTTPException(status_code=400, detail="OAuth authentication failed")

    userinfo = token.get("userinfo")
    if not userinfo:
        raise HTTPException(status_code=400, detail="No user info from Google")

    email = userinfo.get("email", "")
    name = userinfo.get("name", email)

    user = db.execute(
        select(UserRow).where(
            UserRow.provider == "google",
            UserRow.provider_sub == userinfo["sub"],
        )
    ).scalar_one_or_none()
    if user is None:
        user = UserRow(
            id=str(uuid.uuid4()),
            provider="google",
            provider_sub=userinfo["sub"],
        )
        db.add(user)
        logger.info("New pilot signed up: %s (%s)", email, user.id)

    user.email = email or user.email
    user.display_name = name or user.display_name
    user.last_login_at = datetime.now(timezone.utc)
    db.flush()

    session_token = create_token(user.id, user.email, user.display_name, get_jwt_secret())
    response = RedirectResponse(url="/dashboard", status_code=302)
    response.set_cookie(
        key=COOKIE_NAME,
        value=session_token,
        httponly=True,
        samesite="lax",
        secure=not is_dev_mode(),
        path="/",
        max_age=SESSION_MAX_AGE,
    )
    return response


@router.post("/logout")
async def logout():
    """Clear the session cookie and return to the landing page."""
    response = RedirectResponse(url="/", status_code=302)
    response.delete_cookie(COOKIE_NAME, path="/")
    return response


@router.get("/me")
def get_me(user_id: str = Depends(current_user_id), db: Session = Depends(get_db)):
    user = db.get(UserRow, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return {"id": user.id, "email": user.email, "name": user.display_name}
