"""Sign-in settings: session cookie, token secret and the Google provider."""

from __future__ import annotations

import os

from authlib.integrations.starlette_client import OAuth

COOKIE_NAME = "pilotlog_session"
SESSION_MAX_AGE = 7 * 24 * 3600  # seconds

GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"
GOOGLE_SCOPES = "openid email profile"

# Only ever used outside production
DEV_JWT_SECRET = "dev-insecure-pilotlog-secret"


def is_dev_mode() -> bool:
    """Anything but ENVIRONMENT=production signs every request in as the dev pilot."""
    return os.environ.get("ENVIRONMENT", "development") != "production"


def get_jwt_secret() -> str:
    """Secret used to sign session tokens. Mandatory in production."""
    secret = os.environ.get("JWT_SECRET")
    if secret:
        return secret
    if not is_dev_mode():
        raise ValueError("JWT_SECRET environment variable must be set in production")
    return DEV_JWT_SECRET


def create_oauth() -> OAuth:
    """OAuth registry with Google as the only identity provider."""
    oauth = OAuth()
    oauth.register(
        name="google",
        client_id=os.environ.get("GOOGLE_CLIENT_ID", ""),
        client_secret=os.environ.get("GOOGLE_CLIENT_SECRET", ""),
        server_metadata_url=GOOGLE_METADATA_URL,
        client_kwargs={"scope": GOOGLE_SCOPES},
    )
    return oauth
