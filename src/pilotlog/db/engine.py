"""Engine and session factory for the logbook database."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from pilotlog.db.models import Base, UserRow

logger = logging.getLogger(__name__)

DEV_USER_ID = "dev-user-001"
DB_FILENAME = "pilotlog.db"

SessionLocal: sessionmaker[Session] = sessionmaker()
_engine: Engine | None = None


def database_url() -> str:
    """Resolve the database URL from the environment.

    Production reads DATABASE_URL and refuses to start without it. Anywhere
    else the logbook lives in a SQLite file under DATA_DIR (default ``data``).
    """
    if os.environ.get("ENVIRONMENT", "development") == "production":
        url = os.environ.get("DATABASE_URL")
        if not url:
            raise ValueError("DATABASE_URL environment variable must be set in production")
        return url

    data_dir = Path(os.environ.get("DATA_DIR", "data"))
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / DB_FILENAME}"


def _enable_sqlite_pragmas(engine: Engine) -> None:
    # ON DELETE CASCADE from users to flights needs foreign keys switched on
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_engine(db_url: str | None = None) -> Engine:
    """Create the process-wide engine on first call and bind SessionLocal to it."""
    global _engine
    if _engine is not None:
        return _engine

    url = db_url or database_url()
    is_sqlite = url.startswith("sqlite")

    _engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": 30} if is_sqlite else {},
    )
    if is_sqlite:
        _enable_sqlite_pragmas(_engine)
    SessionLocal.configure(bind=_engine)

    logger.info("Logbook database: %s", url.split("@")[-1])
    return _engine


def reset_engine() -> None:
    """Drop the cached engine so the next get_engine() builds a fresh one."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None
    SessionLocal.configure(bind=None)


def init_db(engine: Engine | None = None) -> None:
    """Create missing tables. Development only; production runs Alembic."""
    Base.metadata.create_all(engine or get_engine())
    logger.info("Logbook tables created")


def ensure_dev_user(session: Session) -> None:
    """Make sure the local pilot that dev mode signs everyone in as exists."""
    if session.get(UserRow, DEV_USER_ID) is not None:
        return
    session.add(UserRow(
        id=DEV_USER_ID,
        provider="local",
        provider_sub="dev",
        email="dev@localhost",
        display_name="Dev Pilot",
    ))
    session.commit()
    logger.info("Dev pilot created: %s", DEV_USER_ID)
