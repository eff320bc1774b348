"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pilotlog.db.engine import DEV_USER_ID
from pilotlog.db.models import Base, UserRow
from pilotlog.models import Airport, Flight, calculate_duration


@pytest.fixture
def db_engine():
    """In-memory SQLite engine for tests."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, _connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Yield a SQLAlchemy session per test, rolled back after."""
    session = sessionmaker(bind=db_engine)()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def dev_user(db_session):
    """Insert the dev user and return its ID."""
    db_session.add(UserRow(
        id=DEV_USER_ID, provider="local", provider_sub="dev",
        email="dev@localhost", display_name="Dev Pilot",
    ))
    db_session.flush()
    return DEV_USER_ID


@pytest.fixture
def sample_airports():
    return [
        Airport(icao="EGLL", iata="LHR", name="London Heathrow", lat=51.4706, lon=-0.4619),
        Airport(icao="KJFK", iata="JFK", name="John F Kennedy Intl", lat=40.6398, lon=-73.7789),
        Airport(icao="KLAX", iata="LAX", name="Los Angeles Intl", lat=33.9425, lon=-118.4081),
        Airport(icao="LFPG", iata="CDG", name="Paris Charles de Gaulle", lat=49.0097, lon=2.5479),
        Airport(icao="EGTK", iata=None, name="Oxford Kidlington", lat=51.8361, lon=-1.32),
    ]


def make_flight(
    flight_id: str,
    user_id: str = DEV_USER_ID,
    dep: str = "EGLL",
    arr: str = "LFPG",
    created_at: datetime | None = None,
    takeoff: datetime | None = None,
    landing: datetime | None = None,
    **overrides,
) -> Flight:
    """Build a Flight with sensible defaults."""
    fields = dict(
        id=flight_id,
        user_id=user_id,
        aircraft_reg="G-ABCD",
        aircraft_type="C172",
        dep_airport=dep,
        arr_airport=arr,
        takeoff=takeoff,
        landing=landing,
        duration_flight=calculate_duration(takeoff, landing),
        day_landings=1,
        created_at=created_at or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Flight(**fields)
