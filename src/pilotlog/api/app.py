"""PilotLog web application."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from pilotlog.api.airports import router as airports_router
from pilotlog.api.auth import router as auth_router
from pilotlog.api.auth_config import get_jwt_secret, is_dev_mode
from pilotlog.api.flights import router as flights_router
from pilotlog.db.engine import SessionLocal, ensure_dev_user, get_engine, init_db

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Production schemas are managed by Alembic
    if is_dev_mode():
        init_db(get_engine())
        with SessionLocal() as session:
            ensure_dev_user(session)
        logger.info("Dev mode: logbook tables and dev pilot ready")
    yield


def _mount_web(app: FastAPI) -> None:
    web_dir = Path(os.environ.get("PILOTLOG_WEB_DIR", "web"))
    if not web_dir.is_dir():
        logger.debug("No web UI at %s, serving the API only", web_dir)
        return
    app.mount("/", StaticFiles(directory=str(web_dir), html=True), name="web")


def create_app() -> FastAPI:
    """Build the logbook app: sign-in, flights and airports APIs, optional web UI."""
    load_dotenv()

    app = FastAPI(
        title="PilotLog API",
        description="Personal flight logbook",
        version="0.1.0",
        lifespan=lifespan,
    )

    # authlib stores the OAuth state parameter in the Starlette session
    app.add_middleware(SessionMiddleware, secret_key=get_jwt_secret())
    if is_dev_mode():
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(auth_router)
    for router in (flights_router, airports_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Last, so the catch-all mount never shadows the API
    _mount_web(app)
    return app


app = create_app()
