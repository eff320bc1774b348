"""API endpoints for the flight log, statistics and map."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from pilotlog.db.deps import current_user_id, get_db
from pilotlog.filters import DateFilter, resolve_date_range
from pilotlog.map.layers import build_flight_map
from pilotlog.models import (
    FilterOptions,
    Flight,
    FlightFilters,
    FlightPath,
    FlightStats,
    calculate_duration,
)
from pilotlog.storage.flights import (
    delete_flight,
    filter_options,
    flight_stats,
    list_flight_paths,
    list_flights,
    load_flight,
    new_flight_id,
    save_flight,
)

router = APIRouter(prefix="/flights", tags=["flights"])


class LogFlightRequest(BaseModel):
    """Request body for logging a flight."""

    flight_number: Optional[str] = None
    aircraft_reg: str = Field(min_length=1)
    aircraft_type: str = Field(min_length=1)
    dep_airport: str
    arr_airport: str
    block_off: Optional[datetime] = None
    takeoff: Optional[datetime] = None
    landing: Optional[datetime] = None
    block_on: Optional[datetime] = None
    day_landings: int = Field(default=0, ge=0)
    night_landings: int = Field(default=0, ge=0)
    notes: Optional[str] = None

    @field_validator("aircraft_reg", "aircraft_type")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("dep_airport", "arr_airport")
    @classmethod
    def validate_icao(cls, v: str) -> str:
        if len(v) != 4:
            raise ValueError("airport must be a 4-character ICAO code")
        return v.upper()


def _date_bounds(
    period: Optional[DateFilter],
    start_date: Optional[datetime],
    end_date: Optional[datetime],
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Explicit bounds win; otherwise expand the ``period`` preset."""
    if start_date is not None or end_date is not None or period is None:
        return start_date, end_date
    return resolve_date_range(period)


@router.post("", response_model=Flight, status_code=201)
def log_flight(
    req: LogFlightRequest,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Log a new flight. Block and flight durations are derived from the times."""
    flight = Flight(
        id=new_flight_id(),
        user_id=user_id,
        flight_number=req.flight_number or None,
        aircraft_reg=req.aircraft_reg,
        aircraft_type=req.aircraft_type,
        dep_airport=req.dep_airport,
        arr_airport=req.arr_airport,
        block_off=req.block_off,
        takeoff=req.takeoff,
        landing=req.landing,
        block_on=req.block_on,
        duration_block=calculate_duration(req.block_off, req.block_on),
        duration_flight=calculate_duration(req.takeoff, req.landing),
        day_landings=req.day_landings,
        night_landings=req.night_landings,
        notes=req.notes or None,
        created_at=datetime.now(tz=timezone.utc),
    )
    save_flight(db, flight)
    return load_flight(db, flight.id, user_id)


@router.get("", response_model=list[Flight])
def list_all_flights(
    period: Optional[DateFilter] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    aircraft_type: Optional[str] = None,
    aircraft_reg: Optional[str] = None,
    dep_airport: Optional[str] = None,
    arr_airport: Optional[str] = None,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """List the pilot's flights, newest first, with optional filters."""
    start, end = _date_bounds(period, start_date, end_date)
    filters = FlightFilters(
        start_date=start,
        end_date=end,
        aircraft_type=aircraft_type,
        aircraft_reg=aircraft_reg,
        dep_airport=dep_airport,
        arr_airport=arr_airport,
    )
    return list_flights(db, user_id, filters)


@router.get("/stats", response_model=FlightStats)
def get_stats(
    period: Optional[DateFilter] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    range_from: Optional[date] = Query(default=None, alias="from"),
    range_to: Optional[date] = Query(default=None, alias="to"),
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Totals for the pilot's flights.

    Accepts explicit ``start_date``/``end_date`` bounds, ``period=month``, or
    ``period=range`` with whole-day ``from``/``to`` dates.
    """
    if period is DateFilter.RANGE:
        start, end = resolve_date_range(period, range_from, range_to)
    else:
        start, end = _date_bounds(period, start_date, end_date)
    return flight_stats(db, user_id, start, end)


@router.get("/paths", response_model=list[FlightPath])
def get_flight_paths(
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Flights with airport names and coordinates for map rendering."""
    return list_flight_paths(db, user_id)


@router.get("/map")
def get_flight_map(
    segments: int = Query(default=50, ge=1, le=500),
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """GeoJSON FeatureCollection of curved routes and airport markers."""
    return build_flight_map(list_flight_paths(db, user_id), segments=segments)


@router.get("/options", response_model=FilterOptions)
def get_filter_options(
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Distinct values for the filter dropdowns."""
    return filter_options(db, user_id)


@router.get("/{flight_id}", response_model=Flight)
def get_flight(
    flight_id: str,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    try:
        return load_flight(db, flight_id, user_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Flight '{flight_id}' not found")


@router.delete("/{flight_id}", status_code=204)
def remove_flight(
    flight_id: str,
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Delete a flight. Flights of other pilots are reported as not found."""
    try:
        delete_flight(db, flight_id, user_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Flight '{flight_id}' not found")
