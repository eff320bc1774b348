"""Database-backed flight storage, scoped by user."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, aliased

from pilotlog.db.models import AirportRow, FlightRow
from pilotlog.models import (
    FilterOptions,
    Flight,
    FlightFilters,
    FlightPath,
    FlightStats,
)


def as_utc(value: datetime | None) -> datetime | None:
    """Normalize to an aware UTC datetime. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def new_flight_id() -> str:
    return str(uuid.uuid4())


# --- Conversion helpers ---


def _row_to_flight(row: FlightRow) -> Flight:
    return Flight(
        id=row.id,
        user_id=row.user_id,
        flight_number=row.flight_number,
        aircraft_reg=row.aircraft_reg,
        aircraft_type=row.aircraft_type,
        dep_airport=row.dep_airport,
        arr_airport=row.arr_airport,
        block_off=as_utc(row.block_off),
        takeoff=as_utc(row.takeoff),
        landing=as_utc(row.landing),
        block_on=as_utc(row.block_on),
        duration_block=row.duration_block,
        duration_flight=row.duration_flight,
        day_landings=row.day_landings,
        night_landings=row.night_landings,
        notes=row.notes,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _location(airport: AirportRow | None) -> tuple[float, float] | None:
    if airport is None or airport.lat is None or airport.lon is None:
        return None
    return (airport.lon, airport.lat)


def _owned_row(session: Session, flight_id: str, user_id: str) -> FlightRow:
    stmt = select(FlightRow).where(FlightRow.id == flight_id, FlightRow.user_id == user_id)
    row = session.execute(stmt).scalar_one_or_none()
    if row is None:
        raise KeyError(f"Flight not found: {flight_id}")
    return row


def _apply_date_range(stmt, start_date: datetime | None, end_date: datetime | None):
    if start_date is not None:
        stmt = stmt.where(FlightRow.created_at >= as_utc(start_date))
    if end_date is not None:
        stmt = stmt.where(FlightRow.created_at <= as_utc(end_date))
    return stmt


# --- Flight CRUD ---


def save_flight(session: Session, flight: Flight) -> None:
    """Insert or update a flight in the database."""
    row = session.get(FlightRow, flight.id)
    if row is None:
        row = FlightRow(id=flight.id, user_id=flight.user_id, created_at=as_utc(flight.created_at))
        session.add(row)

    row.flight_number = flight.flight_number
    row.aircraft_reg = flight.aircraft_reg
    row.aircraft_type = flight.aircraft_type
    row.dep_airport = flight.dep_airport
    row.arr_airport = flight.arr_airport
    row.block_off = as_utc(flight.block_off)
    row.takeoff = as_utc(flight.takeoff)
    row.landing = as_utc(flight.landing)
    row.block_on = as_utc(flight.block_on)
    row.duration_block = flight.duration_block
    row.duration_flight = flight.duration_flight
    row.day_landings = flight.day_landings
    row.night_landings = flight.night_landings
    row.notes = flight.notes
    session.flush()


def load_flight(session: Session, flight_id: str, user_id: str) -> Flight:
    """Load one of the user's flights. Raises KeyError if missing or not theirs."""
    return _row_to_flight(_owned_row(session, flight_id, user_id))


def list_flights(
    session: Session, user_id: str, filters: FlightFilters | None = None
) -> list[Flight]:
    """List a user's flights, newest first, optionally filtered."""
    stmt = select(FlightRow).where(FlightRow.user_id == user_id)

    if filters is not None:
        stmt = _apply_date_range(stmt, filters.start_date, filters.end_date)
        # Exact match ignoring case; % and _ are literal characters here
        if filters.aircraft_type:
            stmt = stmt.where(func.lower(FlightRow.aircraft_type) == filters.aircraft_type.lower())
        if filters.aircraft_reg:
            stmt = stmt.where(func.lower(FlightRow.aircraft_reg) == filters.aircraft_reg.lower())
        if filters.dep_airport:
            stmt = stmt.where(FlightRow.dep_airport == filters.dep_airport.upper())
        if filters.arr_airport:
            stmt = stmt.where(FlightRow.arr_airport == filters.arr_airport.upper())

    stmt = stmt.order_by(FlightRow.created_at.desc())
    return [_row_to_flight(r) for r in session.execute(stmt).scalars().all()]


def delete_flight(session: Session, flight_id: str, user_id: str) -> None:
    """Delete one of the user's flights. Raises KeyError if missing or not theirs."""
    session.delete(_owned_row(session, flight_id, user_id))
    session.flush()


# --- Aggregates ---


def flight_stats(
    session: Session,
    user_id: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
) -> FlightStats:
    """Totals over the user's flights created within the optional date range."""
    stmt = select(
        func.count().label("flights"),
        func.coalesce(func.sum(FlightRow.duration_flight), 0).label("minutes"),
        func.coalesce(func.sum(FlightRow.day_landings), 0).label("day"),
        func.coalesce(func.sum(FlightRow.night_landings), 0).label("night"),
    ).where(FlightRow.user_id == user_id)
    stmt = _apply_date_range(stmt, start_date, end_date)
    row = session.execute(stmt).one()

    day, night = int(row.day), int(row.night)
    return FlightStats(
        total_flights=row.flights,
        total_hours=round(int(row.minutes) / 60, 1),
        total_landings=day + night,
        total_day_landings=day,
        total_night_landings=night,
    )


def filter_options(session: Session, user_id: str) -> FilterOptions:
    """Distinct aircraft types, registrations and airports in the user's log."""
    stmt = select(
        FlightRow.aircraft_type,
        FlightRow.aircraft_reg,
        FlightRow.dep_airport,
        FlightRow.arr_airport,
    ).where(FlightRow.user_id == user_id)
    rows = session.execute(stmt).all()

    return FilterOptions(
        aircraft_types=sorted({r.aircraft_type for r in rows}),
        aircraft_regs=sorted({r.aircraft_reg for r in rows}),
        airports=sorted({r.dep_airport for r in rows} | {r.arr_airport for r in rows}),
    )


# --- Map data ---


def list_flight_paths(session: Session, user_id: str) -> list[FlightPath]:
    """User's flights joined with airport names and coordinates, newest first.

    Locations are None when the airport is unknown or has no coordinates.
    """
    dep = aliased(AirportRow)
    arr = aliased(AirportRow)
    stmt = (
        select(FlightRow, dep, arr)
        .outerjoin(dep, dep.icao == FlightRow.dep_airport)
        .outerjoin(arr, arr.icao == FlightRow.arr_airport)
        .where(FlightRow.user_id == user_id)
        .order_by(FlightRow.created_at.desc())
    )

    paths = []
    for row, dep_row, arr_row in session.execute(stmt).all():
        flight = _row_to_flight(row)
        paths.append(FlightPath(
            **flight.model_dump(),
            dep_airport_name=dep_row.name if dep_row else "",
            dep_location=_location(dep_row),
            arr_airport_name=arr_row.name if arr_row else "",
            arr_location=_location(arr_row),
        ))
    return paths
