"""Database package: SQLAlchemy models, engine and FastAPI dependencies."""

from pilotlog.db.engine import SessionLocal, get_engine, init_db
from pilotlog.db.models import AirportRow, Base, FlightRow, UserRow

__all__ = [
    "AirportRow",
    "Base",
    "FlightRow",
    "SessionLocal",
    "UserRow",
    "get_engine",
    "init_db",
]
